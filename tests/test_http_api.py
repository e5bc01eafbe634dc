from fastapi import status


def laptop_product_id(client) -> str:
    body = client.get("/categories/1.1").json()
    computing = body["subCategories"][0]
    laptops = next(n for n in computing["childSubCategories"] if n["id"] == "1.1.1.2")
    return laptops["products"][0]["id"]


def test_list_categories(client):
    response = client.get("/categories")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["total"] == 3
    assert [c["id"] for c in body["categories"]] == ["1.1", "1.2", "1.3"]


def test_category_documents_use_camel_case(client):
    body = client.get("/categories/1.1").json()

    computing = body["subCategories"][0]
    assert computing["products"] is None
    assert computing["childSubCategories"][0]["parentSubCategoryId"] == "1.1.1"
    assert computing["childSubCategories"][1]["products"][0]["numMaterial"] == "AX-4342FD"


def test_category_crud(client):
    created = client.post("/categories", json={"id": "2.1", "name": "deportes"})
    assert created.status_code == status.HTTP_201_CREATED
    assert created.json() == {"id": "2.1", "name": "deportes", "subCategories": []}

    assert client.post("/categories", json={"id": "2.1", "name": "x"}).status_code == 409

    renamed = client.patch("/categories/2.1", json={"name": "sports"})
    assert renamed.status_code == status.HTTP_200_OK
    assert renamed.json()["name"] == "sports"

    assert client.delete("/categories/2.1").status_code == status.HTTP_204_NO_CONTENT
    assert client.get("/categories/2.1").status_code == status.HTTP_404_NOT_FOUND
    assert client.delete("/categories/2.1").status_code == status.HTTP_404_NOT_FOUND


def test_create_category_validates_name(client):
    response = client.post("/categories", json={"name": ""})
    assert response.status_code == 422


def test_add_sub_category_flags(client):
    response = client.post(
        "/categories/1.2/subcategories",
        params={"hasProducts": "true", "hasSubCategories": "false"},
        json={"id": "1.2.1.3", "name": "vitaminas", "parentSubCategoryId": "1.2.1"},
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json() == {
        "id": "1.2.1.3",
        "name": "vitaminas",
        "parentSubCategoryId": "1.2.1",
        "childSubCategories": None,
        "products": [],
    }
    fetched = client.get("/categories/1.2/subcategories/1.2.1.3")
    assert fetched.json()["products"] == []


def test_add_sub_category_errors(client):
    missing_parent = client.post(
        "/categories/1.2/subcategories",
        json={"name": "x", "parentSubCategoryId": "9.9"},
    )
    assert missing_parent.status_code == status.HTTP_404_NOT_FOUND

    leaf_parent = client.post(
        "/categories/1.2/subcategories",
        json={"name": "x", "parentSubCategoryId": "1.2.1.1"},
    )
    assert leaf_parent.status_code == status.HTTP_400_BAD_REQUEST

    duplicate = client.post("/categories/1.2/subcategories", json={"id": "1.2.1", "name": "x"})
    assert duplicate.status_code == status.HTTP_409_CONFLICT

    missing_category = client.post("/categories/nope/subcategories", json={"name": "x"})
    assert missing_category.status_code == status.HTTP_404_NOT_FOUND


def test_rename_and_delete_sub_category(client):
    renamed = client.patch("/categories/1.3/subcategories/1.3.1.1", json={"name": "toallones"})
    assert renamed.status_code == status.HTTP_200_OK
    assert renamed.json()["name"] == "toallones"

    deleted = client.delete("/categories/1.3/subcategories/1.3.1.1")
    assert deleted.status_code == status.HTTP_204_NO_CONTENT
    remaining = client.get("/categories/1.3/subcategories/1.3.1").json()["childSubCategories"]
    assert [n["id"] for n in remaining] == ["1.3.1.2"]
    assert (
        client.get("/categories/1.3/subcategories/1.3.1.1").status_code
        == status.HTTP_404_NOT_FOUND
    )


def test_delete_root_level_sub_category_returns_404(client):
    before = client.get("/categories/1.1").json()

    response = client.delete("/categories/1.1/subcategories/1.1.1")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert client.get("/categories/1.1").json() == before


def test_product_lifecycle(client):
    created = client.post(
        "/categories/1.1/subcategories/1.1.1.3/products",
        json={"name": "iPad", "numMaterial": "AP-1", "stock": 2},
    )
    assert created.status_code == status.HTTP_201_CREATED
    product_id = created.json()["id"]

    located = client.get(f"/categories/1.1/products/{product_id}")
    assert located.status_code == status.HTTP_200_OK
    assert located.json()["subCategoryId"] == "1.1.1.3"
    assert located.json()["product"]["numMaterial"] == "AP-1"

    updated = client.patch(
        f"/categories/1.1/subcategories/1.1.1.3/products/{product_id}",
        json={"stock": 9},
    )
    assert updated.json() == {"id": product_id, "name": "iPad", "numMaterial": "AP-1", "stock": 9}

    deleted = client.delete(f"/categories/1.1/subcategories/1.1.1.3/products/{product_id}")
    assert deleted.status_code == status.HTTP_204_NO_CONTENT
    assert client.get(f"/categories/1.1/products/{product_id}").status_code == 404


def test_product_errors(client):
    product_id = laptop_product_id(client)

    non_container = client.post(
        "/categories/1.1/subcategories/1.1.1/products",
        json={"name": "x", "numMaterial": "y"},
    )
    assert non_container.status_code == status.HTTP_400_BAD_REQUEST

    wrong_bucket = client.patch(
        f"/categories/1.1/subcategories/1.1.1.1/products/{product_id}",
        json={"stock": 1},
    )
    assert wrong_bucket.status_code == status.HTTP_404_NOT_FOUND

    negative = client.patch(
        f"/categories/1.1/subcategories/1.1.1.2/products/{product_id}",
        json={"stock": -1},
    )
    assert negative.status_code == 422


def test_update_stock_then_delete_owner(client):
    product_id = laptop_product_id(client)

    updated = client.patch(
        f"/categories/1.1/subcategories/1.1.1.2/products/{product_id}",
        json={"stock": 5, "name": None},
    )
    assert updated.json()["stock"] == 5
    assert updated.json()["name"] == "Dell 4512"

    client.delete("/categories/1.1/subcategories/1.1.1.2")
    assert client.get(f"/categories/1.1/products/{product_id}").status_code == 404


def test_metrics_endpoint_reports_tree_mutations(client):
    client.patch("/categories/1.1/subcategories/1.1.1", json={"name": "cómputo"})

    body = client.get("/metrics").text
    assert "catalog_tree_mutations_total" in body
    assert 'catalog_document_writes_total{operation="replace"}' in body
