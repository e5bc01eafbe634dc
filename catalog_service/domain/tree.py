"""
Navigation and in-memory mutation of a category tree.

Everything here works on an already-fetched `Category` and never touches
storage. Callers persist the mutated tree afterwards by replacing the whole
`sub_categories` field of the owning category document.

Lookups return `None` when the id is absent; the mutation helpers turn that
into the matching `NotFoundError`.
"""

from typing import Iterator, List, Optional, Tuple, Union

from catalog_service.core.exceptions import (
    AlreadyExistsError,
    InvalidInputError,
    InvalidStructureError,
    ProductNotFoundError,
    SubCategoryNotFoundError,
)
from catalog_service.domain.models import Category, Product, SubCategory, generate_id

Container = Union[Category, SubCategory]


def children_of(container: Container) -> List[SubCategory]:
    """Child list of a container; a subcategory without one has no children."""
    if isinstance(container, Category):
        return container.sub_categories
    return container.child_sub_categories or []


def walk(root: Category) -> Iterator[Tuple[Container, SubCategory]]:
    """
    Yield (container, subcategory) pairs in depth-first pre-order.
    `container` is the node whose child list holds the subcategory: the
    category itself for root-level subcategories.
    """
    stack = [(root, node) for node in reversed(root.sub_categories)]
    while stack:
        container, node = stack.pop()
        yield container, node
        stack.extend((node, child) for child in reversed(children_of(node)))


def find_sub_category(root: Category, sub_category_id: str) -> Optional[SubCategory]:
    for _, node in walk(root):
        if node.id == sub_category_id:
            return node
    return None


def find_parent_of_sub_category(
    root: Category, sub_category_id: str
) -> Optional[Container]:
    for container, node in walk(root):
        if node.id == sub_category_id:
            return container
    return None


def find_product(root: Category, product_id: str) -> Optional[Product]:
    for _, node in walk(root):
        for product in node.products or []:
            if product.id == product_id:
                return product
    return None


def find_sub_category_containing_product(
    root: Category, product_id: str
) -> Optional[SubCategory]:
    for _, node in walk(root):
        if any(product.id == product_id for product in node.products or []):
            return node
    return None


# ------------------------
# Mutations
# ------------------------
def build_sub_category(
    name: str,
    has_products: bool,
    has_sub_categories: bool,
    sub_category_id: Optional[str] = None,
    parent_sub_category_id: Optional[str] = None,
) -> SubCategory:
    """
    Create a detached subcategory. Each flag decides whether the matching
    container starts as an empty list or stays absent. Both flags may be set.
    """
    return SubCategory(
        id=sub_category_id or generate_id(),
        name=name,
        parent_sub_category_id=parent_sub_category_id or None,
        products=[] if has_products else None,
        child_sub_categories=[] if has_sub_categories else None,
    )


def require_sub_category(root: Category, sub_category_id: str) -> SubCategory:
    sub_category = find_sub_category(root, sub_category_id)
    if sub_category is None:
        raise SubCategoryNotFoundError(sub_category_id)
    return sub_category


def add_sub_category(root: Category, sub_category: SubCategory) -> SubCategory:
    """
    Insert `sub_category` under the node named by its `parent_sub_category_id`,
    or at the root of the category when it has none.
    """
    if find_sub_category(root, sub_category.id) is not None:
        raise AlreadyExistsError(
            f"Subcategory '{sub_category.id}' already exists in category '{root.id}'"
        )

    parent_id = sub_category.parent_sub_category_id
    if not parent_id:
        root.sub_categories.append(sub_category)
        return sub_category

    parent = find_sub_category(root, parent_id)
    if parent is None:
        raise SubCategoryNotFoundError(
            parent_id, f"Parent subcategory '{parent_id}' not found"
        )
    if parent.child_sub_categories is None:
        raise InvalidStructureError(
            f"Subcategory '{parent_id}' cannot hold child subcategories"
        )

    parent.child_sub_categories.append(sub_category)
    return sub_category


def rename_sub_category(root: Category, sub_category_id: str, name: str) -> SubCategory:
    sub_category = require_sub_category(root, sub_category_id)
    sub_category.name = name
    return sub_category


def remove_sub_category(root: Category, sub_category_id: str) -> SubCategory:
    """
    Detach a subcategory from its parent subcategory. Its descendants and
    their products go with it.

    Root-level subcategories have the Category itself as parent and are
    reported as not found.
    """
    parent = find_parent_of_sub_category(root, sub_category_id)
    if parent is None or isinstance(parent, Category):
        raise SubCategoryNotFoundError(sub_category_id)

    siblings = parent.child_sub_categories
    removed = next(node for node in siblings if node.id == sub_category_id)
    siblings[:] = [node for node in siblings if node.id != sub_category_id]
    return removed


def _require_product(sub_category: SubCategory, product_id: str) -> Product:
    for product in sub_category.products or []:
        if product.id == product_id:
            return product
    raise ProductNotFoundError(
        product_id,
        f"Product '{product_id}' not found in subcategory '{sub_category.id}'",
    )


def add_product(root: Category, sub_category_id: str, product: Product) -> Product:
    sub_category = require_sub_category(root, sub_category_id)
    if sub_category.products is None:
        raise InvalidStructureError(
            f"Subcategory '{sub_category_id}' cannot hold products"
        )
    sub_category.products.append(product)
    return product


def remove_product(root: Category, sub_category_id: str, product_id: str) -> Product:
    sub_category = require_sub_category(root, sub_category_id)
    product = _require_product(sub_category, product_id)
    sub_category.products.remove(product)
    return product


def update_product(
    root: Category,
    sub_category_id: str,
    product_id: str,
    name: Optional[str] = None,
    stock: Optional[int] = None,
) -> Product:
    """Set `name` and/or `stock`; a `None` argument leaves that field alone."""
    sub_category = require_sub_category(root, sub_category_id)
    product = _require_product(sub_category, product_id)

    if stock is not None and stock < 0:
        raise InvalidInputError("Stock cannot be negative")

    if name is not None:
        product.name = name
    if stock is not None:
        product.stock = stock
    return product
