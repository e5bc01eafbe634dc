from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlmodel import Session

from catalog_service.application.category_service import CategoryService
from catalog_service.config.logger_config import log
from catalog_service.core.exceptions import (
    AlreadyExistsError,
    InvalidInputError,
    InvalidStructureError,
    NotFoundError,
)
from catalog_service.domain.models import Category, SubCategory
from catalog_service.infrastructure.database.session import get_session
from catalog_service.interfaces.http.schemas import (
    CategoryCreate,
    CategoryListResponse,
    CategoryUpdate,
    SubCategoryCreate,
    SubCategoryUpdate,
)

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post("", response_model=Category, status_code=status.HTTP_201_CREATED)
async def create_category(
    category_create: CategoryCreate,
    session: Session = Depends(get_session),
):
    """
    Create a new category.
    - Id is generated when omitted
    - Returns created category
    """
    try:
        log.info("Create category request", name=category_create.name)

        category_service = CategoryService(session=session)
        return category_service.create_category(category_create)

    except AlreadyExistsError as e:
        log.warning("Category creation failed: id already exists", error=str(e))
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e

    except InvalidInputError as e:
        log.warning("Category creation failed: invalid input", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
        ) from e

    except Exception as e:
        log.exception("Unexpected error during category creation")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from e


@router.get("", response_model=CategoryListResponse)
async def list_categories(session: Session = Depends(get_session)):
    """List every category with its full tree."""
    try:
        log.info("List categories request")

        category_service = CategoryService(session=session)
        categories = category_service.list_categories()

        return CategoryListResponse(categories=categories, total=len(categories))

    except Exception as e:
        log.exception("Unexpected error during list categories")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from e


@router.get("/{category_id}", response_model=Category)
async def get_category(
    category_id: str = Path(..., description="The id of the category to retrieve"),
    session: Session = Depends(get_session),
):
    try:
        log.info("Get category request", category_id=category_id)

        category_service = CategoryService(session=session)
        return category_service.get_category_by_id(category_id)

    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    except Exception as e:
        log.exception("Unexpected error during get category")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from e


@router.patch("/{category_id}", response_model=Category)
async def rename_category(
    category_update: CategoryUpdate,
    category_id: str = Path(..., description="The id of the category to rename"),
    session: Session = Depends(get_session),
):
    try:
        log.info(
            "Rename category request", category_id=category_id, name=category_update.name
        )

        category_service = CategoryService(session=session)
        return category_service.rename_category(category_id, category_update.name)

    except NotFoundError as e:
        log.warning("Category not found", category_id=category_id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    except Exception as e:
        log.exception("Unexpected error during category rename")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from e


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: str = Path(..., description="The id of the category to delete"),
    session: Session = Depends(get_session),
):
    """
    Delete a category document and everything inside it.
    - Returns 204 No Content
    """
    try:
        log.info("Delete category request", category_id=category_id)

        category_service = CategoryService(session=session)
        category_service.delete_category(category_id)

    except NotFoundError as e:
        log.warning("Category not found", category_id=category_id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    except Exception as e:
        log.exception("Unexpected error during category deletion")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from e


# ------------------------
# Subcategories
# ------------------------
@router.post(
    "/{category_id}/subcategories",
    response_model=SubCategory,
    status_code=status.HTTP_201_CREATED,
)
async def add_sub_category(
    sub_category_create: SubCategoryCreate,
    category_id: str = Path(..., description="The id of the owning category"),
    has_products: bool = Query(
        False, alias="hasProducts", description="Give the node a products list"
    ),
    has_sub_categories: bool = Query(
        False,
        alias="hasSubCategories",
        description="Give the node a child subcategory list",
    ),
    session: Session = Depends(get_session),
):
    """
    Add a subcategory at the root of a category, or under
    `parentSubCategoryId` when given.
    """
    try:
        log.info(
            "Add subcategory request",
            category_id=category_id,
            parent_sub_category_id=sub_category_create.parent_sub_category_id,
            has_products=has_products,
            has_sub_categories=has_sub_categories,
        )

        category_service = CategoryService(session=session)
        return category_service.add_sub_category(
            category_id, sub_category_create, has_products, has_sub_categories
        )

    except NotFoundError as e:
        log.warning("Add subcategory failed: not found", error=str(e))
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    except AlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e

    except InvalidStructureError as e:
        log.warning("Add subcategory failed: invalid structure", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
        ) from e

    except Exception as e:
        log.exception("Unexpected error during subcategory creation")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from e


@router.get("/{category_id}/subcategories/{sub_category_id}", response_model=SubCategory)
async def get_sub_category(
    category_id: str = Path(..., description="The id of the owning category"),
    sub_category_id: str = Path(..., description="The id of the subcategory"),
    session: Session = Depends(get_session),
):
    try:
        category_service = CategoryService(session=session)
        return category_service.get_sub_category(category_id, sub_category_id)

    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    except Exception as e:
        log.exception("Unexpected error during get subcategory")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from e


@router.patch(
    "/{category_id}/subcategories/{sub_category_id}", response_model=SubCategory
)
async def rename_sub_category(
    sub_category_update: SubCategoryUpdate,
    category_id: str = Path(..., description="The id of the owning category"),
    sub_category_id: str = Path(..., description="The id of the subcategory"),
    session: Session = Depends(get_session),
):
    try:
        log.info(
            "Rename subcategory request",
            category_id=category_id,
            sub_category_id=sub_category_id,
        )

        category_service = CategoryService(session=session)
        return category_service.rename_sub_category(
            category_id, sub_category_id, sub_category_update.name
        )

    except NotFoundError as e:
        log.warning("Rename subcategory failed: not found", error=str(e))
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    except Exception as e:
        log.exception("Unexpected error during subcategory rename")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from e


@router.delete(
    "/{category_id}/subcategories/{sub_category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_sub_category(
    category_id: str = Path(..., description="The id of the owning category"),
    sub_category_id: str = Path(..., description="The id of the subcategory"),
    session: Session = Depends(get_session),
):
    """
    Delete a nested subcategory and all of its descendants.
    - Returns 204 No Content
    - Returns 404 for root-level subcategories
    """
    try:
        log.info(
            "Delete subcategory request",
            category_id=category_id,
            sub_category_id=sub_category_id,
        )

        category_service = CategoryService(session=session)
        category_service.delete_sub_category(category_id, sub_category_id)

    except NotFoundError as e:
        log.warning("Delete subcategory failed: not found", error=str(e))
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    except Exception as e:
        log.exception("Unexpected error during subcategory deletion")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from e
