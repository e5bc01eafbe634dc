import pytest

from catalog_service.application.category_service import CategoryService
from catalog_service.application.product_service import ProductService
from catalog_service.core.exceptions import (
    CategoryNotFoundError,
    InvalidStructureError,
    ProductNotFoundError,
    SubCategoryNotFoundError,
)
from catalog_service.domain import tree
from catalog_service.interfaces.http.schemas import ProductCreate, ProductUpdate


@pytest.fixture
def products(session) -> ProductService:
    return ProductService(session)


@pytest.fixture
def dell_id(session, product_id_by_name) -> str:
    category = CategoryService(session).get_category_by_id("1.1")
    return product_id_by_name(category, "1.1.1.2", "Dell 4512")


def test_get_product_returns_owner(products, dell_id):
    product, owner = products.get_product("1.1", dell_id)

    assert product.name == "Dell 4512"
    assert product.stock == 3
    assert owner.id == "1.1.1.2"


def test_get_product_from_other_category_is_not_found(products, dell_id):
    with pytest.raises(ProductNotFoundError):
        products.get_product("1.2", dell_id)
    with pytest.raises(CategoryNotFoundError):
        products.get_product("nope", dell_id)


def test_add_product_is_persisted(products):
    created = products.add_product(
        "1.2", "1.2.1.2", ProductCreate(name="Omeprazol", num_material="MD-1", stock=7)
    )

    product, owner = products.get_product("1.2", created.id)
    assert owner.id == "1.2.1.2"
    assert product == created


def test_add_product_failures(products):
    with pytest.raises(SubCategoryNotFoundError):
        products.add_product("1.2", "nope", ProductCreate(name="x", num_material="y"))
    with pytest.raises(InvalidStructureError):
        products.add_product("1.2", "1.2.1", ProductCreate(name="x", num_material="y"))


def test_remove_product(products, dell_id):
    products.remove_product("1.1", "1.1.1.2", dell_id)

    with pytest.raises(ProductNotFoundError):
        products.get_product("1.1", dell_id)


def test_remove_product_two_stage_not_found(products, dell_id):
    with pytest.raises(SubCategoryNotFoundError):
        products.remove_product("1.1", "nope", dell_id)
    with pytest.raises(ProductNotFoundError):
        products.remove_product("1.1", "1.1.1.1", dell_id)


def test_update_product_stock_keeps_name(products, dell_id):
    updated = products.update_product(
        "1.1", "1.1.1.2", dell_id, ProductUpdate(stock=5, name=None)
    )

    assert updated.stock == 5
    assert updated.name == "Dell 4512"
    stored, _ = products.get_product("1.1", dell_id)
    assert stored.stock == 5
    assert stored.num_material == "AX-4342FD"


def test_update_product_name_keeps_stock(products, dell_id):
    products.update_product("1.1", "1.1.1.2", dell_id, ProductUpdate(name="Dell 4520"))

    stored, _ = products.get_product("1.1", dell_id)
    assert stored.name == "Dell 4520"
    assert stored.stock == 3


def test_update_then_delete_container_makes_product_unreachable(session, products, dell_id):
    updated = products.update_product("1.1", "1.1.1.2", dell_id, ProductUpdate(stock=5))
    assert (updated.stock, updated.name) == (5, "Dell 4512")

    CategoryService(session).delete_sub_category("1.1", "1.1.1.2")

    category = CategoryService(session).get_category_by_id("1.1")
    assert tree.find_product(category, dell_id) is None
    with pytest.raises(ProductNotFoundError):
        products.get_product("1.1", dell_id)
