"""Integration tests for the order endpoints via TestClient."""

ALICE = {"X-User-Id": "alice"}
BOB = {"X-User-Id": "bob"}

SHIPPING = {
    "fullName": "Nguyen Van A",
    "phone": "0901234567",
    "address": "12 Ly Thuong Kiet",
    "city": "Ha Noi",
    "district": "Hoan Kiem",
}


def _place(client, items, method="cod", headers=ALICE, **extra):
    body = {"items": items, "paymentMethod": method, "shippingAddress": SHIPPING}
    body.update(extra)
    return client.post("/api/orders", json=body, headers=headers)


class TestPlaceOrder:

    def test_creates_order(self, client, catalog):
        response = _place(client, [{"bookId": "b1", "quantity": 2}])
        assert response.status_code == 201
        data = response.json()
        assert data["orderNumber"].startswith("ORD-")
        assert data["subtotal"] == 500000
        assert data["shippingCost"] == 30000
        assert data["tax"] == 0
        assert data["total"] == 530000
        assert data["paymentMethod"] == "CASH_ON_DELIVERY"
        assert data["paymentStatus"] == "PENDING"
        assert data["status"] == "PENDING"
        assert data["items"][0]["bookId"] == "b1"
        assert data["items"][0]["title"] == "Tắt Đèn"
        assert data["shippingAddress"]["fullName"] == "Nguyen Van A"
        assert data["billingAddress"] == data["shippingAddress"]

    def test_stock_and_cart_updated(self, client, catalog):
        client.post("/api/cart", json={"bookId": "b1", "quantity": 1}, headers=ALICE)
        client.post("/api/cart", json={"bookId": "b2", "quantity": 1}, headers=ALICE)

        assert _place(client, [{"bookId": "b1", "quantity": 3}]).status_code == 201

        assert client.get("/api/books/b1").json()["stock"] == 7
        cart = client.get("/api/cart", headers=ALICE).json()
        assert [line["book"]["id"] for line in cart["items"]] == ["b2"]

    def test_insufficient_stock(self, client, catalog):
        response = _place(client, [{"bookId": "b1", "quantity": 1}, {"bookId": "b2", "quantity": 3}])
        assert response.status_code == 400
        assert "Insufficient stock for book: Số Đỏ" in response.json()["error"]
        assert client.get("/api/books/b1").json()["stock"] == 10

    def test_unknown_book(self, client, catalog):
        response = _place(client, [{"bookId": "ghost", "quantity": 1}])
        assert response.status_code == 400
        assert response.json()["error"] == "Book not found: ghost"

    def test_invalid_payment_method(self, client, catalog):
        response = _place(client, [{"bookId": "b1", "quantity": 1}], method="paypal")
        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid payment method: paypal")

    def test_unauthenticated(self, client, catalog):
        response = _place(client, [{"bookId": "b1", "quantity": 1}], headers={})
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_malformed_body(self, client, catalog):
        response = client.post("/api/orders", json={"items": []}, headers=ALICE)
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"

    def test_blank_address_field(self, client, catalog):
        response = _place(
            client,
            [{"bookId": "b1", "quantity": 1}],
            shippingAddress=dict(SHIPPING, city=" "),
        )
        assert response.status_code == 400
        assert "city" in response.json()["error"]


class TestFetchOrder:

    def test_owner(self, client, catalog):
        order = _place(client, [{"bookId": "b1", "quantity": 1}]).json()
        response = client.get(f"/api/orders/{order['id']}", headers=ALICE)
        assert response.status_code == 200
        assert response.json()["orderNumber"] == order["orderNumber"]

    def test_other_user_forbidden(self, client, catalog):
        order = _place(client, [{"bookId": "b1", "quantity": 1}]).json()
        response = client.get(f"/api/orders/{order['id']}", headers=BOB)
        assert response.status_code == 403

    def test_missing(self, client):
        response = client.get("/api/orders/nope", headers=ALICE)
        assert response.status_code == 404
        assert response.json() == {"error": "Order not found"}


class TestListOrders:

    def test_pagination(self, client, catalog):
        for _ in range(3):
            _place(client, [{"bookId": "b1", "quantity": 1}])
        _place(client, [{"bookId": "b1", "quantity": 1}], headers=BOB)

        data = client.get("/api/orders?page=1&limit=2", headers=ALICE).json()
        assert len(data["orders"]) == 2
        assert data["pagination"] == {"page": 1, "limit": 2, "total": 3, "totalPages": 2}

    def test_status_filter(self, client, catalog):
        _place(client, [{"bookId": "b1", "quantity": 1}])
        data = client.get("/api/orders?status=delivered", headers=ALICE).json()
        assert data["orders"] == []
        assert data["pagination"]["total"] == 0

    def test_bad_page(self, client):
        assert client.get("/api/orders?page=0", headers=ALICE).status_code == 400

    def test_unknown_status(self, client):
        assert client.get("/api/orders?status=LOST", headers=ALICE).status_code == 400
