import pytest

CHECKOUT = {"shippingAddress": "12 Harbour Rd", "paymentMethod": "Credit Card"}


@pytest.fixture
def headers(register):
    return register()


def _add(client, headers, product, quantity=1):
    response = client.post("/cart/add", json={"product_id": product.id, "quantity": quantity}, headers=headers)
    assert response.status_code == 201


def test_create_order(client, headers, make_product):
    a = make_product("Product A", price="10.00", stock=5, image_url="http://img/a.png")
    b = make_product("Product B", price="5.00", stock=5)
    _add(client, headers, a, 2)
    _add(client, headers, b, 1)

    response = client.post("/orders/create", json=CHECKOUT, headers=headers)

    assert response.status_code == 201
    body = response.json()
    assert body["total_amount"] == 25.0
    assert body["status"] == "Pending"
    assert body["shippingAddress"] == "12 Harbour Rd"
    assert body["paymentMethod"] == "Credit Card"
    assert body["estimatedDelivery"]
    assert body["items"][0] == {
        "product_id": a.id, "name": "Product A", "quantity": 2, "price": 10.0, "image_url": "http://img/a.png",
    }

    assert client.get("/cart", headers=headers).json() == []
    assert client.get(f"/products/{a.id}").json()["stock"] == 3


def test_empty_cart(client, headers):
    response = client.post("/orders/create", json=CHECKOUT, headers=headers)
    assert response.status_code == 400
    assert response.json()["code"] == "empty_cart"


def test_insufficient_stock(client, headers, make_product):
    product = make_product("Product C", stock=1)
    _add(client, headers, product, 3)

    response = client.post("/orders/create", json=CHECKOUT, headers=headers)

    assert response.status_code == 409
    assert response.json()["code"] == "insufficient_stock"
    assert response.json()["product_ids"] == [product.id]
    assert len(client.get("/cart", headers=headers).json()) == 1
    assert client.get("/orders", headers=headers).json() == []


@pytest.mark.parametrize(
    "payload, field",
    [
        ({"paymentMethod": "PayPal"}, "shippingAddress"),
        ({"shippingAddress": "   ", "paymentMethod": "PayPal"}, "shippingAddress"),
        ({"shippingAddress": "12 Harbour Rd", "paymentMethod": "IOU"}, "paymentMethod"),
    ],
)
def test_validation_errors(client, headers, make_product, payload, field):
    _add(client, headers, make_product())
    response = client.post("/orders/create", json=payload, headers=headers)
    assert response.status_code == 400
    assert response.json()["code"] == "validation_error"
    assert response.json()["field"] == field


def test_failed_checkout_is_audited(client, headers, admin_headers, make_product):
    product = make_product(stock=0)
    _add(client, headers, product)
    client.post("/orders/create", json=CHECKOUT, headers=headers)

    logs = client.get("/logs", params={"action": "ORDER_CREATE", "status": "FAIL"}, headers=admin_headers).json()
    assert logs["total"] == 1
    meta = logs["items"][0]["meta"]
    assert meta["reason"] == "insufficient_stock"
    assert meta["product_ids"] == [product.id]


def test_logs_are_admin_only(client, headers):
    assert client.get("/logs", headers=headers).status_code == 403


def test_list_orders_newest_first(client, headers, make_product):
    product = make_product(stock=10)
    ids = []
    for _ in range(2):
        _add(client, headers, product)
        ids.append(client.post("/orders/create", json=CHECKOUT, headers=headers).json()["id"])

    listed = client.get("/orders", headers=headers).json()
    assert [o["id"] for o in listed] == list(reversed(ids))


def test_get_order(client, register, make_product):
    owner, stranger = register(), register()
    _add(client, owner, make_product())
    order_id = client.post("/orders/create", json=CHECKOUT, headers=owner).json()["id"]

    assert client.get(f"/orders/{order_id}", headers=owner).status_code == 200
    response = client.get(f"/orders/{order_id}", headers=stranger)
    assert response.status_code == 404
    assert response.json()["code"] == "order_not_found"


class TestStatusEndpoint:
    @pytest.fixture
    def order_id(self, client, headers, make_product):
        _add(client, headers, make_product())
        return client.post("/orders/create", json=CHECKOUT, headers=headers).json()["id"]

    def test_advance(self, client, headers, order_id):
        response = client.put(f"/orders/{order_id}/status", json={"status": "Processing"}, headers=headers)
        assert response.status_code == 200
        assert response.json()["status"] == "Processing"

    def test_invalid_transition(self, client, headers, order_id):
        response = client.put(f"/orders/{order_id}/status", json={"status": "Delivered"}, headers=headers)
        assert response.status_code == 409
        body = response.json()
        assert body["code"] == "invalid_transition"
        assert (body["from_status"], body["to_status"]) == ("Pending", "Delivered")

    def test_unknown_status(self, client, headers, order_id):
        response = client.put(f"/orders/{order_id}/status", json={"status": "Teleported"}, headers=headers)
        assert response.status_code == 400
        assert response.json()["field"] == "status"

    def test_cancel_keeps_stock(self, client, headers, make_product):
        product = make_product(stock=4)
        _add(client, headers, product, 2)
        order_id = client.post("/orders/create", json=CHECKOUT, headers=headers).json()["id"]

        response = client.put(f"/orders/{order_id}/status", json={"status": "Cancelled"}, headers=headers)

        assert response.json()["status"] == "Cancelled"
        assert client.get(f"/products/{product.id}").json()["stock"] == 2
