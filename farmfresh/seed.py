# farmfresh/seed.py
"""Populate an empty database with sample categories, farmers and products.

Run with ``python -m farmfresh.seed``. Existing data is left alone: seeding
is skipped when any category is already present.
"""
from sqlalchemy.orm import Session

from farmfresh.database import SessionLocal, init_db
from farmfresh.models.category import Category
from farmfresh.models.product import Product
from farmfresh.models.users import User
from farmfresh.utils.hashing import get_password_hash
from farmfresh.utils.slug import slugify

# Password shared by every sample account
SAMPLE_PASSWORD = "password123"

CATEGORIES = [
    {"name": "Fruits", "description": "Fresh fruits from local farms"},
    {"name": "Vegetables", "description": "Organic vegetables grown locally"},
    {"name": "Grains", "description": "Locally grown grains and cereals"},
    {"name": "Dairy", "description": "Farm-fresh dairy products"},
    {"name": "Herbs", "description": "Fresh herbs and spices"},
    {"name": "Specialty", "description": "Specialty products from local farms"},
]

USERS = [
    {
        "username": "farmerJohn", "email": "john@organicfarm.com", "name": "John Smith",
        "role": "farmer", "address": "123 Farm Road, Farmville, CA 95432", "phone": "555-123-4567",
        "bio": "Organic fruits and vegetables grown without harmful pesticides. Family-owned for three generations.",
    },
    {
        "username": "greenValley", "email": "contact@greenvalley.com", "name": "Sarah Johnson",
        "role": "farmer", "address": "456 Dairy Lane, Greenfield, WI 53521", "phone": "555-987-6543",
        "bio": "Happy cows, creamy milk, yogurt and cheese from sustainable farming.",
    },
    {
        "username": "sunsetApiaries", "email": "info@sunsetapiaries.com", "name": "Michael Williams",
        "role": "farmer", "address": "789 Honey Road, Beeville, TX 78102", "phone": "555-456-7890",
        "bio": "Wildflower honey from bees we are committed to protecting.",
    },
    {
        "username": "customer1", "email": "customer1@example.com", "name": "Alice Brown",
        "role": "customer", "address": "123 Main St, Anytown, NY 10001", "phone": "555-111-2222",
    },
]

# (name, description, price, unit, stock, category, farmer username, organic, featured, tags)
PRODUCTS = [
    ("Organic Apples", "Fresh organic apples from our orchard. No pesticides used.",
     3.99, "kg", 100, "Fruits", "farmerJohn", True, True, ["seasonal", "orchard"]),
    ("Fresh Carrots", "Locally grown carrots harvested at peak ripeness.",
     2.49, "kg", 75, "Vegetables", "farmerJohn", False, False, ["root"]),
    ("Organic Honey", "Pure, raw honey made by our happy bees.",
     8.99, "500g", 50, "Specialty", "sunsetApiaries", True, True, ["raw", "local"]),
    ("Farm Fresh Eggs", "Free-range eggs from our happy hens.",
     4.50, "dozen", 40, "Dairy", "greenValley", False, False, ["free-range"]),
]


def seed(db: Session) -> bool:
    """Insert the sample data. Returns False when the database was not empty."""
    if db.query(Category.id).first() is not None:
        return False

    categories = {}
    for data in CATEGORIES:
        category = Category(slug=slugify(data["name"]), **data)
        db.add(category)
        categories[data["name"]] = category

    users = {}
    for data in USERS:
        user = User(password_hash=get_password_hash(SAMPLE_PASSWORD), **data)
        db.add(user)
        users[data["username"]] = user
    db.flush()

    for name, description, price, unit, stock, category, farmer, organic, featured, tags in PRODUCTS:
        db.add(Product(
            name=name, slug=slugify(name), description=description, price=price, unit=unit,
            stock=stock, category_id=categories[category].id, farmer_id=users[farmer].id,
            is_organic=organic, featured=featured, tags=tags,
        ))

    db.commit()
    return True


if __name__ == "__main__":
    init_db()
    session = SessionLocal()
    try:
        if seed(session):
            print(f"Seeded {len(CATEGORIES)} categories, {len(USERS)} users and {len(PRODUCTS)} products.")
        else:
            print("Database already contains data, nothing to seed.")
    finally:
        session.close()
