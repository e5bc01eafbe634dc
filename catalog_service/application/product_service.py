from typing import Tuple

from sqlmodel import Session

from catalog_service.application.category_service import CategoryService
from catalog_service.config.logger_config import log
from catalog_service.core.exceptions import ProductNotFoundError
from catalog_service.domain import tree
from catalog_service.domain.models import Product, SubCategory
from catalog_service.interfaces.http.schemas import ProductCreate, ProductUpdate


class ProductService:
    """
    Products embedded in a category tree. Writes reuse
    `CategoryService.apply`, so each one rewrites the owning category.
    """

    def __init__(self, session: Session):
        self.session = session
        self.categories = CategoryService(session)

    def get_product(self, category_id: str, product_id: str) -> Tuple[Product, SubCategory]:
        """
        Find a product anywhere in a category.
        Returns:
            The product and the subcategory holding it.
        Raises:
            CategoryNotFoundError: If the category does not exist.
            ProductNotFoundError: If no subcategory holds the product.
        """
        log.debug("Fetching product", category_id=category_id, product_id=product_id)
        category = self.categories.get_category_by_id(category_id)

        owner = tree.find_sub_category_containing_product(category, product_id)
        if owner is None:
            log.warning("Product not found", category_id=category_id, product_id=product_id)
            raise ProductNotFoundError(product_id)

        product = next(p for p in owner.products if p.id == product_id)
        return product, owner

    def add_product(
        self, category_id: str, sub_category_id: str, product_create: ProductCreate
    ) -> Product:
        product = Product(
            name=product_create.name,
            num_material=product_create.num_material,
            stock=product_create.stock,
        )
        created = self.categories.apply(
            category_id,
            "add_product",
            lambda root: tree.add_product(root, sub_category_id, product),
        )
        log.info("Product created successfully", product_id=created.id)
        return created

    def remove_product(
        self, category_id: str, sub_category_id: str, product_id: str
    ) -> None:
        self.categories.apply(
            category_id,
            "remove_product",
            lambda root: tree.remove_product(root, sub_category_id, product_id),
        )

    def update_product(
        self,
        category_id: str,
        sub_category_id: str,
        product_id: str,
        product_update: ProductUpdate,
    ) -> Product:
        """
        Partially update a product. Fields left as None keep their value;
        `num_material` cannot be changed.
        """
        log.debug(
            "Updating product",
            product_id=product_id,
            update_data=product_update.model_dump(exclude_none=True),
        )
        return self.categories.apply(
            category_id,
            "update_product",
            lambda root: tree.update_product(
                root,
                sub_category_id,
                product_id,
                name=product_update.name,
                stock=product_update.stock,
            ),
        )
