from typing import Any, Dict, List

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class CategoryDocument(SQLModel, table=True):
    """
    One row per category. The nested subcategory/product tree is stored
    verbatim (camelCase keys) in the `sub_categories` JSON column and is only
    ever rewritten as a whole.
    """

    __tablename__ = "categories"

    id: str = Field(
        primary_key=True,
        max_length=64,
        nullable=False,
        description="Caller-assigned or generated category id",
    )

    name: str = Field(max_length=200, nullable=False, description="Category name")

    sub_categories: List[Dict[str, Any]] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
        description="Nested subcategory tree of the category",
    )
