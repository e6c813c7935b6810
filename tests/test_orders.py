from fastapi.testclient import TestClient

from main import create_app
from .conftest import bearer, make_settings


def _place(client, headers, **body):
    return client.post("/orders", json=body, headers=headers)


def test_order_snapshots_lines_and_leaves_stock_alone(client, auth, create_product):
    widget = create_product(auth, name="Widget", price=10, stock=5)

    resp = _place(
        client, auth,
        lines=[{"product": widget["id"], "quantity": 2, "price": 10}],
        totalAmount=20,
    )
    assert resp.status_code == 201, resp.text
    order = resp.json()
    assert order["status"] == "pending"
    assert order["totalAmount"] == 20
    assert order["user"] == client.app.state.token_service.verify(auth["Authorization"][7:])
    assert order["lines"][0]["productId"] == widget["id"]
    assert order["lines"][0]["quantity"] == 2
    assert order["lines"][0]["price"] == 10
    assert order["lines"][0]["product"]["name"] == "Widget"

    assert client.get(f"/products/{widget['id']}", headers=auth).json()["stock"] == 5


def test_line_price_is_independent_of_product_price(client, auth, create_product):
    widget = create_product(auth, name="Widget", price=10, stock=5)
    created = _place(
        client, auth,
        lines=[{"product": widget["id"], "quantity": 1, "price": 10}],
        totalAmount=10,
    ).json()

    client.put(f"/products/{widget['id']}", json={"price": 99}, headers=auth)
    order = client.get(f"/orders/{created['id']}", headers=auth).json()
    assert order["lines"][0]["price"] == 10
    assert order["lines"][0]["product"]["price"] == 99


def test_total_amount_is_stored_verbatim(client, auth, create_product):
    widget = create_product(auth, name="Widget", price=10, stock=5)
    order = _place(
        client, auth,
        lines=[{"product": widget["id"], "quantity": 2, "price": 10}],
        totalAmount=1,
    ).json()
    assert order["totalAmount"] == 1


def test_explicit_status_and_legacy_products_key(client, auth, create_product):
    widget = create_product(auth, name="Widget", price=10, stock=5)
    resp = _place(
        client, auth,
        products=[{"product": widget["id"], "quantity": 1, "price": 10}],
        totalAmount=10,
        status="processing",
    )
    assert resp.status_code == 201
    assert resp.json()["status"] == "processing"
    assert len(resp.json()["lines"]) == 1


def test_invalid_orders_rejected(client, auth):
    bad_bodies = [
        {"lines": [{"product": 1, "quantity": 0, "price": 10}], "totalAmount": 0},
        {"lines": [{"quantity": 1, "price": 10}], "totalAmount": 10},
        {"lines": [{"product": 1, "quantity": 1}], "totalAmount": 10},
        {"lines": [{"product": 1, "quantity": 1, "price": 10}]},
        {"lines": [{"product": 1, "quantity": 1, "price": 10}], "totalAmount": 10, "status": "lost"},
    ]
    for body in bad_bodies:
        resp = client.post("/orders", json=body, headers=auth)
        assert resp.status_code == 400, body
        assert resp.json()["errors"]

    assert client.get("/orders", headers=auth).json() == []


def test_quantity_error_names_the_line(client, auth):
    resp = _place(
        client, auth,
        lines=[
            {"product": 1, "quantity": 1, "price": 1},
            {"product": 1, "quantity": 0, "price": 1},
        ],
        totalAmount=1,
    )
    assert resp.status_code == 400
    assert resp.json()["errors"] == [
        {"field": "lines.1.quantity", "message": "must be greater than or equal to 1"}
    ]


def test_orders_are_scoped_to_owner(client, register, create_product):
    alice = bearer(register("alice", "pw1"))
    bob = bearer(register("bob", "pw2"))
    widget = create_product(alice, name="Widget", price=10, stock=5)

    order = _place(
        client, alice,
        lines=[{"product": widget["id"], "quantity": 1, "price": 10}],
        totalAmount=10,
    ).json()

    assert [o["id"] for o in client.get("/orders", headers=alice).json()] == [order["id"]]
    assert client.get("/orders", headers=bob).json() == []

    foreign = client.get(f"/orders/{order['id']}", headers=bob)
    missing = client.get("/orders/9999", headers=bob)
    assert foreign.status_code == missing.status_code == 404
    assert foreign.json() == missing.json() == {"message": "Order not found"}

    assert client.get(f"/orders/{order['id']}", headers=alice).status_code == 200


def test_list_resolves_product_snapshots(client, auth, create_product):
    widget = create_product(auth, name="Widget", price=10, stock=5)
    bolt = create_product(auth, name="Bolt", price=2, stock=3)
    _place(
        client, auth,
        lines=[
            {"product": widget["id"], "quantity": 1, "price": 10},
            {"product": bolt["id"], "quantity": 3, "price": 2},
        ],
        totalAmount=16,
    )

    orders = client.get("/orders", headers=auth).json()
    assert len(orders) == 1
    names = [line["product"]["name"] for line in orders[0]["lines"]]
    assert names == ["Widget", "Bolt"]


def test_deleted_product_leaves_dangling_line(client, auth, create_product):
    widget = create_product(auth, name="Widget", price=10, stock=5)
    order = _place(
        client, auth,
        lines=[{"product": widget["id"], "quantity": 1, "price": 10}],
        totalAmount=10,
    ).json()

    assert client.delete(f"/products/{widget['id']}", headers=auth).status_code == 200

    line = client.get(f"/orders/{order['id']}", headers=auth).json()["lines"][0]
    assert line["productId"] == widget["id"]
    assert line["product"] is None


def test_stock_decrement_when_enabled(tmp_path):
    app = create_app(make_settings(tmp_path, decrement_stock_on_order=True))
    with TestClient(app) as client:
        token = client.post(
            "/auth/register", json={"username": "alice", "password": "pw1"}
        ).json()["token"]
        headers = bearer(token)
        widget = client.post(
            "/products", json={"name": "Widget", "price": 10, "stock": 5}, headers=headers
        ).json()

        ok = _place(
            client, headers,
            lines=[{"product": widget["id"], "quantity": 2, "price": 10}],
            totalAmount=20,
        )
        assert ok.status_code == 201
        assert client.get(f"/products/{widget['id']}", headers=headers).json()["stock"] == 3

        too_many = _place(
            client, headers,
            lines=[{"product": widget["id"], "quantity": 4, "price": 10}],
            totalAmount=40,
        )
        assert too_many.status_code == 400
        assert client.get(f"/products/{widget['id']}", headers=headers).json()["stock"] == 3
        assert len(client.get("/orders", headers=headers).json()) == 1

        unknown = _place(
            client, headers,
            lines=[{"product": 999, "quantity": 1, "price": 10}],
            totalAmount=10,
        )
        assert unknown.status_code == 404


def test_out_of_range_order_id_is_a_validation_error(client, auth):
    resp = client.get("/orders/1180591620717411303424", headers=auth)
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "order_id"


def test_out_of_range_line_integers_rejected(client, auth):
    for line in (
        {"product": 2**63, "quantity": 1, "price": 1},
        {"product": -(2**63), "quantity": 1, "price": 1},
        {"product": 1, "quantity": 2**40, "price": 1},
    ):
        resp = _place(client, auth, lines=[line], totalAmount=1)
        assert resp.status_code == 400, line
        assert resp.json()["errors"][0]["field"].startswith("lines.0.")

    assert client.get("/orders", headers=auth).json() == []
