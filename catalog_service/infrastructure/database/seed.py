from typing import List

from sqlmodel import Session

from catalog_service.config.logger_config import log
from catalog_service.domain.models import Category, Product, SubCategory
from catalog_service.infrastructure.database.category_store import CategoryStore


def _bucket(sub_category_id: str, name: str, parent_id: str, *products: Product) -> SubCategory:
    return SubCategory(
        id=sub_category_id,
        name=name,
        parent_sub_category_id=parent_id,
        child_sub_categories=None,
        products=list(products),
    )


def _group(sub_category_id: str, name: str, *children: SubCategory) -> SubCategory:
    return SubCategory(
        id=sub_category_id,
        name=name,
        parent_sub_category_id=None,
        child_sub_categories=list(children),
        products=None,
    )


def preconfigured_categories() -> List[Category]:
    """Starter catalog. Product ids are generated on every call."""
    return [
        Category(
            id="1.1",
            name="tecnología",
            sub_categories=[
                _group(
                    "1.1.1",
                    "computación",
                    _bucket("1.1.1.1", "computadora de escritorio", "1.1.1"),
                    _bucket(
                        "1.1.1.2",
                        "computadora portátil",
                        "1.1.1",
                        Product(name="Dell 4512", num_material="AX-4342FD", stock=3),
                    ),
                    _bucket("1.1.1.3", "tablets", "1.1.1"),
                ),
                _group(
                    "1.1.2",
                    "telefonía",
                    _bucket(
                        "1.1.2.1",
                        "celular",
                        "1.1.2",
                        Product(name="Iphone X", num_material="AD-4332EE", stock=10),
                    ),
                    _bucket(
                        "1.1.2.2",
                        "accesorios",
                        "1.1.2",
                        Product(name="Correa", num_material="AC-5545Q", stock=0),
                    ),
                ),
            ],
        ),
        Category(
            id="1.2",
            name="farmacia",
            sub_categories=[
                _group(
                    "1.2.1",
                    "medicamentos",
                    _bucket(
                        "1.2.1.1",
                        "analgésicos",
                        "1.2.1",
                        Product(name="Aspirina", num_material="MD-7456AS", stock=22),
                    ),
                    _bucket("1.2.1.2", "estomacal", "1.2.1"),
                ),
            ],
        ),
        Category(
            id="1.3",
            name="hogar",
            sub_categories=[
                _group(
                    "1.3.1",
                    "baño",
                    _bucket("1.3.1.1", "toallas", "1.3.1"),
                    _bucket(
                        "1.3.1.2",
                        "batas",
                        "1.3.1",
                        Product(name="Bata hombre", num_material="BN-18643", stock=1),
                    ),
                ),
            ],
        ),
    ]


def seed_catalog(session: Session) -> int:
    """
    Insert the preconfigured categories when the store is empty.
    Returns the number of categories inserted.
    """
    store = CategoryStore(session)
    if store.count() > 0:
        log.debug("Catalog already populated, skipping seed")
        return 0

    categories = preconfigured_categories()
    for category in categories:
        store.insert(category)

    log.info("Catalog seeded", categories=len(categories))
    return len(categories)
