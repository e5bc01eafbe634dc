from collections import Counter
from typing import Callable, Iterable, List, TypeVar

from sqlmodel import Session

from catalog_service.config.logger_config import log
from catalog_service.core.exceptions import (
    CatalogError,
    CategoryNotFoundError,
    InvalidInputError,
)
from catalog_service.domain import tree
from catalog_service.domain.models import Category, SubCategory, generate_id
from catalog_service.infrastructure.database.category_store import CategoryStore
from catalog_service.interfaces.http.schemas import CategoryCreate, SubCategoryCreate
from shared.libs.observability.metrics import TREE_MUTATIONS

T = TypeVar("T")


def _repeated(ids: Iterable[str]) -> List[str]:
    return [node_id for node_id, seen in Counter(ids).items() if seen > 1]


class CategoryService:
    """
    Service class for category documents and the subcategory tree inside them.

    Root-level fields go straight to the store. Nested changes run through
    `apply`: fetch the whole document, mutate it in memory, then replace its
    `sub_categories` field. Concurrent `apply` calls on one category are not
    coordinated, so the last replacement wins.
    """

    def __init__(self, session: Session):
        """
        Initialize the service with a database session.
        Args:
            session: SQLModel session for database operations.
        """
        self.session = session
        self.store = CategoryStore(session)

    def apply(
        self, category_id: str, operation: str, mutation: Callable[[Category], T]
    ) -> T:
        """
        Run one fetch, mutate, replace cycle against a category document.
        Args:
            category_id: Id of the category document to rewrite.
            operation: Name used in logs and metrics.
            mutation: Callable that locates and changes nodes of the fetched tree.
        Returns:
            Whatever `mutation` returns.
        Raises:
            CategoryNotFoundError: If the category does not exist.
            CatalogError: Anything `mutation` raises; the document is left untouched.
        """
        category = self.get_category_by_id(category_id)

        try:
            result = mutation(category)
        except CatalogError as e:
            TREE_MUTATIONS.labels(operation=operation, outcome="rejected").inc()
            log.warning(
                "Tree mutation rejected",
                operation=operation,
                category_id=category_id,
                error=str(e),
            )
            raise

        self.store.replace_sub_categories(category.id, category.sub_categories)
        TREE_MUTATIONS.labels(operation=operation, outcome="applied").inc()
        log.info("Tree mutation applied", operation=operation, category_id=category_id)
        return result

    # ------------------------
    # Categories
    # ------------------------
    def create_category(self, category_create: CategoryCreate) -> Category:
        """
        Create a new category document, optionally with a seeded subtree.
        Raises:
            AlreadyExistsError: If the category id is taken.
            InvalidInputError: If the seeded subtree repeats a subcategory or product id.
        """
        log.debug("Creating category", name=category_create.name)

        category = Category(
            id=category_create.id or generate_id(),
            name=category_create.name,
            sub_categories=category_create.sub_categories,
        )

        nodes = [node for _, node in tree.walk(category)]
        repeated = _repeated(node.id for node in nodes)
        if repeated:
            raise InvalidInputError(f"Repeated subcategory ids: {', '.join(repeated)}")
        repeated = _repeated(p.id for node in nodes for p in node.products or [])
        if repeated:
            raise InvalidInputError(f"Repeated product ids: {', '.join(repeated)}")

        self.store.insert(category)
        log.info("Category created successfully", category_id=category.id)
        return category

    def get_category_by_id(self, category_id: str) -> Category:
        log.debug("Fetching category by ID", category_id=category_id)
        category = self.store.fetch_by_id(category_id)
        if category is None:
            log.warning("Category not found", category_id=category_id)
            raise CategoryNotFoundError(category_id)
        return category

    def list_categories(self) -> List[Category]:
        categories = self.store.fetch_all()
        log.info("Categories listed successfully", count=len(categories))
        return categories

    def rename_category(self, category_id: str, name: str) -> Category:
        log.debug("Renaming category", category_id=category_id, name=name)
        self.store.update_name(category_id, name)
        return self.get_category_by_id(category_id)

    def delete_category(self, category_id: str) -> None:
        log.info("Deleting category", category_id=category_id)
        self.store.delete(category_id)
        log.info("Category deleted", category_id=category_id)

    # ------------------------
    # Subcategories
    # ------------------------
    def add_sub_category(
        self,
        category_id: str,
        sub_category_create: SubCategoryCreate,
        has_products: bool,
        has_sub_categories: bool,
    ) -> SubCategory:
        """
        Add a subcategory at the root of a category or under
        `sub_category_create.parent_sub_category_id`.
        Raises:
            CategoryNotFoundError: If the category does not exist.
            SubCategoryNotFoundError: If the parent subcategory is absent.
            InvalidStructureError: If the parent cannot hold child subcategories.
            AlreadyExistsError: If the id is already used in the tree.
        """
        sub_category = tree.build_sub_category(
            name=sub_category_create.name,
            has_products=has_products,
            has_sub_categories=has_sub_categories,
            sub_category_id=sub_category_create.id,
            parent_sub_category_id=sub_category_create.parent_sub_category_id,
        )
        return self.apply(
            category_id,
            "add_sub_category",
            lambda root: tree.add_sub_category(root, sub_category),
        )

    def get_sub_category(self, category_id: str, sub_category_id: str) -> SubCategory:
        category = self.get_category_by_id(category_id)
        return tree.require_sub_category(category, sub_category_id)

    def rename_sub_category(
        self, category_id: str, sub_category_id: str, name: str
    ) -> SubCategory:
        return self.apply(
            category_id,
            "rename_sub_category",
            lambda root: tree.rename_sub_category(root, sub_category_id, name),
        )

    def delete_sub_category(self, category_id: str, sub_category_id: str) -> None:
        """
        Remove a nested subcategory together with everything below it.
        Root-level subcategories raise SubCategoryNotFoundError.
        """
        self.apply(
            category_id,
            "delete_sub_category",
            lambda root: tree.remove_sub_category(root, sub_category_id),
        )
