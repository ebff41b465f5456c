import pytest


@pytest.fixture
def headers(register):
    return register()


def test_cart_requires_token(client):
    assert client.get("/cart").status_code == 401
    assert client.post("/cart/add", json={"product_id": 1}).status_code == 401


def test_add_defaults_to_one_and_merges(client, headers, make_product):
    product = make_product("Speaker", price="20.00")

    first = client.post("/cart/add", json={"product_id": product.id}, headers=headers)
    assert first.status_code == 201
    assert first.json()["quantity"] == 1
    assert first.json()["product"]["name"] == "Speaker"

    second = client.post("/cart/add", json={"product_id": product.id, "quantity": 2}, headers=headers)
    assert second.status_code == 201
    assert second.json()["id"] == first.json()["id"]
    assert second.json()["quantity"] == 3

    lines = client.get("/cart", headers=headers).json()
    assert len(lines) == 1


def test_add_unknown_product(client, headers):
    response = client.post("/cart/add", json={"product_id": 555}, headers=headers)
    assert response.status_code == 404
    assert response.json()["code"] == "product_not_found"


def test_add_zero_quantity(client, headers, make_product):
    product = make_product()
    response = client.post("/cart/add", json={"product_id": product.id, "quantity": 0}, headers=headers)
    assert response.status_code == 400
    assert response.json()["code"] == "invalid_quantity"


def test_update_quantity(client, headers, make_product):
    line = client.post("/cart/add", json={"product_id": make_product().id}, headers=headers).json()

    response = client.put(f"/cart/{line['id']}", json={"quantity": 4}, headers=headers)
    assert response.status_code == 200
    assert response.json()["quantity"] == 4

    response = client.put(f"/cart/{line['id']}", json={"quantity": 0}, headers=headers)
    assert response.status_code == 400
    assert response.json()["code"] == "invalid_quantity"


def test_update_unknown_line(client, headers):
    response = client.put("/cart/9999", json={"quantity": 2}, headers=headers)
    assert response.status_code == 404
    assert response.json()["code"] == "cart_item_not_found"


def test_lines_are_private(client, register, make_product):
    owner, stranger = register(), register()
    line = client.post("/cart/add", json={"product_id": make_product().id}, headers=owner).json()

    assert client.get("/cart", headers=stranger).json() == []
    assert client.delete(f"/cart/{line['id']}", headers=stranger).status_code == 404


def test_delete_line(client, headers, make_product):
    line = client.post("/cart/add", json={"product_id": make_product().id}, headers=headers).json()

    response = client.delete(f"/cart/{line['id']}", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Item removed from cart"}
    assert client.get("/cart", headers=headers).json() == []


def test_clear_twice(client, headers, make_product):
    client.post("/cart/add", json={"product_id": make_product("A").id}, headers=headers)
    client.post("/cart/add", json={"product_id": make_product("B").id}, headers=headers)

    assert client.delete("/cart/clear/all", headers=headers).status_code == 200
    assert client.delete("/cart/clear/all", headers=headers).status_code == 200
    assert client.get("/cart", headers=headers).json() == []


def test_total(client, headers, make_product):
    a = make_product("A", price="12.50")
    b = make_product("B", price="3.25")
    client.post("/cart/add", json={"product_id": a.id, "quantity": 2}, headers=headers)
    client.post("/cart/add", json={"product_id": b.id}, headers=headers)

    response = client.get("/cart/total", headers=headers)
    assert response.json() == {"total": 28.25, "items": 2}
