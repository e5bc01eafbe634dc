from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from catalog_service.domain.models import Category, Product, SubCategory


class CatalogSchema(BaseModel):
    """
    Base for request and response bodies: camelCase on the wire,
    snake_case attributes in Python.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


###### Category schemas ############
class CategoryCreate(CatalogSchema):
    """
    Schema for creating a new category.
    `id` is generated when omitted; `sub_categories` may seed a whole subtree.
    """

    id: Optional[str] = Field(default=None, min_length=1, max_length=64)
    name: str = Field(min_length=1, max_length=200)
    sub_categories: List[SubCategory] = Field(default_factory=list)

    @field_validator("name", mode="before")
    @classmethod
    def strip_whitespace(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class CategoryUpdate(CatalogSchema):
    """Schema for renaming a category."""

    name: str = Field(min_length=1, max_length=200)


class CategoryListResponse(CatalogSchema):
    """All category documents, trees included."""

    categories: List[Category]
    total: int


###### Subcategory schemas ############
class SubCategoryCreate(CatalogSchema):
    """
    Schema for adding a subcategory.
    Without `parent_sub_category_id` the node is added at the category root.
    """

    id: Optional[str] = Field(default=None, min_length=1, max_length=64)
    name: str = Field(min_length=1, max_length=200)
    parent_sub_category_id: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_whitespace(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class SubCategoryUpdate(CatalogSchema):
    """Schema for renaming a subcategory."""

    name: str = Field(min_length=1, max_length=200)


###### Product schemas ############
class ProductCreate(CatalogSchema):
    """Schema for adding a product; its id is generated."""

    name: str = Field(min_length=1, max_length=200)
    num_material: str = Field(min_length=1, max_length=64)
    stock: int = Field(default=0, ge=0)


class ProductUpdate(CatalogSchema):
    """
    Schema for updating a product.
    All fields are optional — only provided fields are updated.
    """

    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    stock: Optional[int] = Field(default=None, ge=0)


class ProductLocationResponse(CatalogSchema):
    """A product together with where it sits in the tree."""

    category_id: str
    sub_category_id: str
    product: Product
