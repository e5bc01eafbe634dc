from typing import Optional


class CatalogError(Exception):
    """
    Base class for all errors raised by the catalog core.
    Should not be exposed directly to the client — convert to HTTPException.
    """

    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.original_exception = original_exception


# ------------------------
# Lookup errors
# ------------------------
class NotFoundError(CatalogError):
    """
    Raised when a node referenced by id does not exist in the located scope.
    Carries the kind of node ("category", "subcategory", "product") and its id.
    """

    kind = "node"

    def __init__(self, node_id: str, message: Optional[str] = None):
        super().__init__(message or f"{self.kind.capitalize()} '{node_id}' not found")
        self.node_id = node_id


class CategoryNotFoundError(NotFoundError):
    """Raised when no category document has the given id."""

    kind = "category"


class SubCategoryNotFoundError(NotFoundError):
    """Raised when a subcategory id is absent from the category tree."""

    kind = "subcategory"


class ProductNotFoundError(NotFoundError):
    """Raised when a product id is absent from the searched scope."""

    kind = "product"


# ------------------------
# Write errors
# ------------------------
class AlreadyExistsError(CatalogError):
    """
    Raised when an id is already taken, either a category document id
    or a subcategory id inside one tree.
    """

    pass


class InvalidStructureError(CatalogError):
    """
    Raised when a node is asked to hold something it has no container for,
    e.g. a product added to a subcategory whose `products` is null.
    """

    pass


class InvalidInputError(CatalogError):
    """
    Raised when a invalid input is passed.
    """

    pass
