from typing import List, Optional

from sqlalchemy import delete, func, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from catalog_service.config.logger_config import log
from catalog_service.core.exceptions import AlreadyExistsError, CategoryNotFoundError
from catalog_service.domain.models import Category, SubCategory
from catalog_service.infrastructure.database.models import CategoryDocument
from shared.libs.observability.metrics import DOCUMENT_WRITES


class CategoryStore:
    """
    Single writer of category documents.

    Every method is one single-row statement followed by a commit. Reads hand
    back freshly built `Category` trees, so callers may mutate them freely;
    nothing is written until `replace_sub_categories` is called. There is no
    revision check: the last replacement of a document wins.
    """

    def __init__(self, session: Session):
        self.session = session

    @staticmethod
    def to_domain(document: CategoryDocument) -> Category:
        return Category.model_validate(
            {
                "id": document.id,
                "name": document.name,
                "subCategories": document.sub_categories or [],
            }
        )

    @staticmethod
    def dump_sub_categories(sub_categories: List[SubCategory]) -> list:
        return [node.model_dump(by_alias=True) for node in sub_categories]

    def fetch_by_id(self, category_id: str) -> Optional[Category]:
        document = self.session.get(
            CategoryDocument, category_id, populate_existing=True
        )
        if document is None:
            return None
        return self.to_domain(document)

    def fetch_all(self) -> List[Category]:
        documents = self.session.exec(
            select(CategoryDocument)
            .order_by(CategoryDocument.id)
            .execution_options(populate_existing=True)
        ).all()
        return [self.to_domain(document) for document in documents]

    def count(self) -> int:
        return self.session.exec(
            select(func.count()).select_from(CategoryDocument)
        ).one()

    def insert(self, category: Category) -> str:
        if self.session.get(CategoryDocument, category.id) is not None:
            raise AlreadyExistsError(f"Category '{category.id}' already exists")

        document = CategoryDocument(
            id=category.id,
            name=category.name,
            sub_categories=self.dump_sub_categories(category.sub_categories),
        )
        try:
            self.session.add(document)
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise AlreadyExistsError(
                f"Category '{category.id}' already exists", original_exception=e
            ) from e

        DOCUMENT_WRITES.labels(operation="insert").inc()
        return category.id

    def replace_sub_categories(
        self, category_id: str, sub_categories: List[SubCategory]
    ) -> None:
        """
        Overwrite the whole `sub_categories` field of one document.
        Raises CategoryNotFoundError when the document no longer exists.
        """
        result = self.session.exec(
            update(CategoryDocument)
            .where(CategoryDocument.id == category_id)
            .values(sub_categories=self.dump_sub_categories(sub_categories))
        )
        self.session.commit()
        if result.rowcount == 0:
            log.warning("Replace matched no category", category_id=category_id)
            raise CategoryNotFoundError(category_id)

        DOCUMENT_WRITES.labels(operation="replace").inc()

    def update_name(self, category_id: str, name: str) -> None:
        result = self.session.exec(
            update(CategoryDocument)
            .where(CategoryDocument.id == category_id)
            .values(name=name)
        )
        self.session.commit()
        if result.rowcount == 0:
            raise CategoryNotFoundError(category_id)

        DOCUMENT_WRITES.labels(operation="rename").inc()

    def delete(self, category_id: str) -> None:
        result = self.session.exec(
            delete(CategoryDocument).where(CategoryDocument.id == category_id)
        )
        self.session.commit()
        if result.rowcount == 0:
            raise CategoryNotFoundError(category_id)

        DOCUMENT_WRITES.labels(operation="delete").inc()
