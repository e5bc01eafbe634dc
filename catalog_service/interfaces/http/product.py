from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlmodel import Session

from catalog_service.application.product_service import ProductService
from catalog_service.config.logger_config import log
from catalog_service.core.exceptions import (
    InvalidInputError,
    InvalidStructureError,
    NotFoundError,
)
from catalog_service.domain.models import Product
from catalog_service.infrastructure.database.session import get_session
from catalog_service.interfaces.http.schemas import (
    ProductCreate,
    ProductLocationResponse,
    ProductUpdate,
)

router = APIRouter(prefix="/categories/{category_id}", tags=["products"])


@router.get("/products/{product_id}", response_model=ProductLocationResponse)
async def get_product(
    category_id: str = Path(..., description="The id of the owning category"),
    product_id: str = Path(..., description="The id of the product to retrieve"),
    session: Session = Depends(get_session),
):
    """
    Retrieve a product from anywhere in a category's tree.
    - Returns the product and the id of the subcategory holding it
    """
    try:
        log.info("Get product request", category_id=category_id, product_id=product_id)

        product_service = ProductService(session=session)
        product, owner = product_service.get_product(category_id, product_id)

        return ProductLocationResponse(
            category_id=category_id, sub_category_id=owner.id, product=product
        )

    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    except Exception as e:
        log.exception("Unexpected error during get product")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from e


@router.post(
    "/subcategories/{sub_category_id}/products",
    response_model=Product,
    status_code=status.HTTP_201_CREATED,
)
async def create_product(
    product_create: ProductCreate,
    category_id: str = Path(..., description="The id of the owning category"),
    sub_category_id: str = Path(..., description="The id of the product container"),
    session: Session = Depends(get_session),
):
    """
    Add a product to a subcategory.
    - The subcategory must have been created with hasProducts
    - Returns created product with its generated id
    """
    try:
        log.info(
            "Create product request",
            category_id=category_id,
            sub_category_id=sub_category_id,
            name=product_create.name,
        )

        product_service = ProductService(session=session)
        return product_service.add_product(category_id, sub_category_id, product_create)

    except NotFoundError as e:
        log.warning("Product creation failed: not found", error=str(e))
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    except InvalidStructureError as e:
        log.warning("Product creation failed: invalid structure", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
        ) from e

    except Exception as e:
        log.exception("Unexpected error during product creation")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from e


@router.patch(
    "/subcategories/{sub_category_id}/products/{product_id}", response_model=Product
)
async def update_product(
    product_update: ProductUpdate,
    category_id: str = Path(..., description="The id of the owning category"),
    sub_category_id: str = Path(..., description="The id of the product container"),
    product_id: str = Path(..., description="The id of the product to update"),
    session: Session = Depends(get_session),
):
    """
    Update a product's name and/or stock.
    - Omitted or null fields are left unchanged
    """
    try:
        log.info(
            "Update product request",
            category_id=category_id,
            sub_category_id=sub_category_id,
            product_id=product_id,
            update_data=product_update.model_dump(exclude_none=True),
        )

        product_service = ProductService(session=session)
        return product_service.update_product(
            category_id, sub_category_id, product_id, product_update
        )

    except NotFoundError as e:
        log.warning("Product update failed: not found", error=str(e))
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    except InvalidInputError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
        ) from e

    except Exception as e:
        log.exception("Unexpected error during product update")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from e


@router.delete(
    "/subcategories/{sub_category_id}/products/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_product(
    category_id: str = Path(..., description="The id of the owning category"),
    sub_category_id: str = Path(..., description="The id of the product container"),
    product_id: str = Path(..., description="The id of the product to delete"),
    session: Session = Depends(get_session),
):
    try:
        log.info(
            "Delete product request",
            category_id=category_id,
            sub_category_id=sub_category_id,
            product_id=product_id,
        )

        product_service = ProductService(session=session)
        product_service.remove_product(category_id, sub_category_id, product_id)

    except NotFoundError as e:
        log.warning("Product deletion failed: not found", error=str(e))
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    except Exception as e:
        log.exception("Unexpected error during product deletion")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from e
