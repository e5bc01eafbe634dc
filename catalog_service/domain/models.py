from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def generate_id() -> str:
    """Return a fresh 32-character hex identifier."""
    return uuid4().hex


class CatalogNode(BaseModel):
    """
    Common configuration for every node of a category document.

    Fields are snake_case in Python and camelCase on the wire and in storage,
    so `model_dump(by_alias=True)` yields the persisted document verbatim.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )


class Product(CatalogNode):
    """
    A stock record embedded in a subcategory's `products` list.
    `num_material` is the material/SKU code and is never changed after creation.
    """

    id: str = Field(default_factory=generate_id)
    name: str
    num_material: str
    stock: int = Field(default=0, ge=0)


class SubCategory(CatalogNode):
    """
    An embedded, recursive node of the category tree.

    `child_sub_categories` and `products` are containers: `None` means the node
    cannot hold that kind of item, an empty list means it can but holds none.
    `parent_sub_category_id` only picks the insertion point at creation and is
    never kept in sync afterwards.
    """

    id: str = Field(default_factory=generate_id)
    name: str
    parent_sub_category_id: Optional[str] = None
    child_sub_categories: Optional[List["SubCategory"]] = None
    products: Optional[List[Product]] = None


class Category(CatalogNode):
    """
    The persisted unit: one document per category, owning its whole subtree.
    """

    id: str = Field(default_factory=generate_id)
    name: str
    sub_categories: List[SubCategory] = Field(default_factory=list)


SubCategory.model_rebuild()
