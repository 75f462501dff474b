import os

# Point the app at a private in-memory database before it is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

from farmfresh.database import Base, SessionLocal, engine
from farmfresh.main import app
from farmfresh.models.category import Category
from farmfresh.models.product import Product
from farmfresh.models.users import User
from farmfresh.utils.hashing import get_password_hash

PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_user(db):
    def _make(username="alice", role="customer", password=PASSWORD, **extra):
        user = User(
            username=username,
            email=f"{username.lower()}@example.com",
            name=username.title(),
            role=role,
            password_hash=get_password_hash(password),
            **extra,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


@pytest.fixture
def farmer(make_user):
    return make_user("farmerjohn", role="farmer", bio="Third generation orchard")


@pytest.fixture
def customer(make_user):
    return make_user("alice", phone="555-111-2222")


@pytest.fixture
def category(db):
    cat = Category(name="Fruits", slug="fruits", description="Fresh fruits from local farms")
    db.add(cat)
    db.commit()
    db.refresh(cat)
    return cat


@pytest.fixture
def make_product(db, farmer, category):
    def _make(name="Organic Apples", price=4.0, stock=10, owner=None, **extra):
        product = Product(
            name=name,
            slug=name.lower().replace(" ", "-"),
            description=extra.pop("description", f"{name} straight from the farm"),
            price=price,
            unit=extra.pop("unit", "kg"),
            stock=stock,
            farmer_id=(owner or farmer).id,
            category_id=extra.pop("category_id", category.id),
            **extra,
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        return product
    return _make


@pytest.fixture
def login():
    """Returns a TestClient carrying the session cookie of the given user."""
    opened = []

    def _login(user, password=PASSWORD):
        c = TestClient(app)
        opened.append(c)
        res = c.post("/api/auth/login", json={"email": user.email, "password": password})
        assert res.status_code == 200, res.text
        return c

    yield _login
    for c in opened:
        c.close()
