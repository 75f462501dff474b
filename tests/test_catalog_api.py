from farmfresh.models.category import Category


def test_categories(client, db, category):
    db.add(Category(name="Dairy", slug="dairy"))
    db.commit()

    res = client.get("/api/categories")
    assert res.status_code == 200
    assert [c["slug"] for c in res.json()] == ["fruits", "dairy"]

    assert client.get(f"/api/categories/{category.id}").json()["name"] == "Fruits"
    assert client.get("/api/categories/999").status_code == 404


def test_product_listing_filters(client, db, make_user, make_product, category):
    other_farmer = make_user("greenvalley", role="farmer")
    dairy = Category(name="Dairy", slug="dairy")
    db.add(dairy)
    db.commit()

    apples = make_product("Organic Apples", featured=True)
    milk = make_product("Whole Milk", owner=other_farmer, category_id=dairy.id)

    assert len(client.get("/api/products").json()) == 2
    by_category = client.get("/api/products", params={"categoryId": dairy.id}).json()
    assert [p["id"] for p in by_category] == [milk.id]
    by_farmer = client.get("/api/products", params={"farmerId": apples.farmer_id}).json()
    assert [p["id"] for p in by_farmer] == [apples.id]
    featured = client.get("/api/products", params={"featured": True}).json()
    assert [p["id"] for p in featured] == [apples.id]


def test_get_product_by_slug_or_id(client, make_product):
    product = make_product("Fresh Carrots", price=2.49, tags=["root"], is_organic=True)

    by_slug = client.get("/api/products/fresh-carrots")
    assert by_slug.status_code == 200
    body = by_slug.json()
    assert body["id"] == product.id
    assert body["price"] == 2.49
    assert body["isOrganic"] is True
    assert body["tags"] == ["root"]
    assert body["farmerId"] == product.farmer_id

    assert client.get(f"/api/products/{product.id}").json()["slug"] == "fresh-carrots"
    assert client.get("/api/products/no-such-thing").status_code == 404


def test_farmer_creates_product(login, farmer, category):
    c = login(farmer)
    payload = {"name": "Organic Honey", "price": 8.99, "unit": "500g", "stock": 50,
               "categoryId": category.id, "tags": ["raw"]}
    res = c.post("/api/products", json=payload)
    assert res.status_code == 201
    body = res.json()
    assert body["slug"] == "organic-honey"
    assert body["farmerId"] == farmer.id

    # Same name gets a distinct slug
    again = c.post("/api/products", json=payload)
    assert again.json()["slug"] == "organic-honey-2"


def test_create_product_requires_farmer(login, client, customer, category):
    payload = {"name": "Apples", "price": 1, "categoryId": category.id}
    assert client.post("/api/products", json=payload).status_code == 401
    assert login(customer).post("/api/products", json=payload).status_code == 403


def test_create_product_unknown_category(login, farmer):
    res = login(farmer).post("/api/products", json={"name": "Apples", "price": 1, "categoryId": 42})
    assert res.status_code == 400


def test_farmer_updates_only_own_products(login, make_user, make_product):
    mine = make_product("Organic Apples", price=4.0)
    rival = make_user("rival", role="farmer")
    theirs = make_product("Rival Pears", owner=rival)

    c = login(mine.farmer)
    res = c.put(f"/api/products/{mine.id}", json={"price": 4.5, "stock": 7})
    assert res.status_code == 200
    assert res.json()["price"] == 4.5
    assert res.json()["stock"] == 7

    assert c.put(f"/api/products/{theirs.id}", json={"price": 1}).status_code == 403
    assert c.put(f"/api/products/{mine.id}", json={}).status_code == 400
    assert c.put(f"/api/products/{mine.id}", json={"stock": -1}).status_code == 422


def test_delete_product(login, make_product, client):
    product = make_product()
    c = login(product.farmer)
    assert c.delete(f"/api/products/{product.id}").status_code == 204
    assert client.get(f"/api/products/{product.id}").status_code == 404
    assert c.delete(f"/api/products/{product.id}").status_code == 404


def test_farmers_are_sanitized(client, farmer, customer):
    res = client.get("/api/farmers")
    assert res.status_code == 200
    farmers = res.json()
    assert [f["id"] for f in farmers] == [farmer.id]
    assert set(farmers[0]) == {"id", "name", "bio", "profileImage"}

    assert client.get(f"/api/farmers/{farmer.id}").json()["bio"] == "Third generation orchard"
    assert client.get(f"/api/farmers/{customer.id}").status_code == 404


def test_public_user_profile(client, customer):
    res = client.get(f"/api/users/{customer.id}")
    assert res.status_code == 200
    assert "email" not in res.json()
    assert client.get("/api/users/999").status_code == 404


def test_update_own_profile(login, customer):
    c = login(customer)
    res = c.put("/api/users/me", json={"address": "1 Orchard Way", "bio": "Loves plums"})
    assert res.status_code == 200
    assert res.json()["address"] == "1 Orchard Way"
    assert c.get("/api/auth/me").json()["bio"] == "Loves plums"
