from farmfresh.models.category import Category
from farmfresh.models.product import Product
from farmfresh.models.users import User
from farmfresh.seed import CATEGORIES, PRODUCTS, SAMPLE_PASSWORD, USERS, seed


def test_seed_populates_empty_database(db, client):
    assert seed(db) is True
    assert db.query(Category).count() == len(CATEGORIES)
    assert db.query(User).count() == len(USERS)
    assert db.query(Product).count() == len(PRODUCTS)

    honey = db.query(Product).filter(Product.slug == "organic-honey").one()
    assert honey.farmer.username == "sunsetApiaries"
    assert honey.category.name == "Specialty"

    # Sample accounts can sign in
    res = client.post("/api/auth/login", json={"email": "customer1@example.com", "password": SAMPLE_PASSWORD})
    assert res.status_code == 200


def test_seed_is_skipped_when_data_exists(db):
    assert seed(db) is True
    assert seed(db) is False
    assert db.query(Category).count() == len(CATEGORIES)
