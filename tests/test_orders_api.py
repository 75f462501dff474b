from farmfresh.models.cart import CartItem
from farmfresh.models.product import Product


def _fill_cart(c, *lines):
    for product, qty in lines:
        res = c.post("/api/cart/items", json={"productId": product.id, "quantity": qty})
        assert res.status_code == 201, res.text


def test_order_requires_items(login, customer):
    c = login(customer)
    res = c.post("/api/orders", json={"shippingAddress": "1 Main St"})
    assert res.status_code == 400
    assert res.json()["detail"] == "Your cart is empty"


def test_order_requires_address(login, customer, make_product):
    c = login(customer)
    _fill_cart(c, (make_product(), 1))
    assert c.post("/api/orders", json={"shippingAddress": ""}).status_code == 422


def test_place_order(login, customer, make_product, db):
    apples = make_product("Organic Apples", price=4.0, stock=10)
    eggs = make_product("Farm Eggs", price=4.5, stock=5)
    c = login(customer)
    _fill_cart(c, (apples, 3), (eggs, 2))

    payload = {
        "userId": customer.id,
        "shippingAddress": "1 Main St, Anytown",
        "items": [{"productId": apples.id, "quantity": 99}],
        "totalAmount": 0.01,
        "status": "delivered",
    }
    res = c.post("/api/orders", json=payload)
    assert res.status_code == 201
    order = res.json()

    # Lines, total and status come from the stored cart, not the payload
    assert order["status"] == "pending"
    assert order["total"] == 21.0
    assert order["total"] == sum(it["price"] * it["quantity"] for it in order["items"])
    assert order["address"] == "1 Main St, Anytown"
    assert order["phone"] == "555-111-2222"
    assert {it["productId"]: it["quantity"] for it in order["items"]} == {apples.id: 3, eggs.id: 2}
    assert all(it["farmerId"] == apples.farmer_id for it in order["items"])

    db.expire_all()
    assert db.get(Product, apples.id).stock == 7
    assert db.get(Product, eggs.id).stock == 3
    assert c.get("/api/cart").json()["items"] == []


def test_insufficient_stock_changes_nothing(login, customer, make_product, db):
    product = make_product(stock=5)
    c = login(customer)
    _fill_cart(c, (product, 4))

    # Stock drops after the item went into the cart
    db.get(Product, product.id).stock = 2
    db.commit()

    res = c.post("/api/orders", json={"shippingAddress": "1 Main St"})
    assert res.status_code == 400
    assert "Not enough stock" in res.json()["detail"]

    db.expire_all()
    assert db.get(Product, product.id).stock == 2
    assert db.query(CartItem).count() == 1
    assert c.get("/api/orders").json() == []


def test_order_listing_for_customer_and_farmer(login, customer, make_user, make_product):
    apples = make_product("Organic Apples")
    other_farmer = make_user("greenvalley", role="farmer")
    milk = make_product("Whole Milk", owner=other_farmer)

    c = login(customer)
    _fill_cart(c, (apples, 1))
    first = c.post("/api/orders", json={"shippingAddress": "1 Main St"}).json()
    _fill_cart(c, (milk, 1))
    second = c.post("/api/orders", json={"shippingAddress": "1 Main St"}).json()

    assert [o["id"] for o in c.get("/api/orders").json()] == [second["id"], first["id"]]
    assert [o["id"] for o in login(apples.farmer).get("/api/orders").json()] == [first["id"]]
    assert [o["id"] for o in login(other_farmer).get("/api/orders").json()] == [second["id"]]


def test_order_detail_access(login, customer, make_user, make_product):
    apples = make_product()
    c = login(customer)
    _fill_cart(c, (apples, 2))
    order = c.post("/api/orders", json={"shippingAddress": "1 Main St"}).json()

    detail = c.get(f"/api/orders/{order['id']}")
    assert detail.status_code == 200
    assert detail.json()["items"][0]["product"]["name"] == "Organic Apples"

    assert login(apples.farmer).get(f"/api/orders/{order['id']}").status_code == 200
    assert login(make_user("mallory")).get(f"/api/orders/{order['id']}").status_code == 403
    assert login(make_user("stranger", role="farmer")).get(f"/api/orders/{order['id']}").status_code == 403
    assert c.get("/api/orders/999").status_code == 404


def test_order_status_updates(login, customer, make_user, make_product):
    apples = make_product()
    c = login(customer)
    _fill_cart(c, (apples, 1))
    order = c.post("/api/orders", json={"shippingAddress": "1 Main St"}).json()
    url = f"/api/orders/{order['id']}/status"

    assert c.put(url, json={"status": "shipped"}).status_code == 403
    assert login(make_user("stranger", role="farmer")).put(url, json={"status": "shipped"}).status_code == 403

    farmer = login(apples.farmer)
    assert farmer.put(url, json={"status": "teleported"}).status_code == 422
    res = farmer.put(url, json={"status": "shipped"})
    assert res.status_code == 200
    assert res.json()["status"] == "shipped"

    assert farmer.put(url, json={"status": "delivered"}).status_code == 200
    res = farmer.put(url, json={"status": "cancelled"})
    assert res.status_code == 400
    assert res.json()["detail"] == "Cannot change status from delivered"


def test_product_with_orders_cannot_be_deleted(login, customer, make_product):
    apples = make_product()
    c = login(customer)
    _fill_cart(c, (apples, 1))
    c.post("/api/orders", json={"shippingAddress": "1 Main St"})

    assert login(apples.farmer).delete(f"/api/products/{apples.id}").status_code == 409
