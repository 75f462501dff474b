# farmfresh/models/product.py
from sqlalchemy import (
    Column, Integer, String, Text, Float, Boolean, JSON, DateTime,
    ForeignKey, CheckConstraint, func
)
from sqlalchemy.orm import relationship
from farmfresh.database import Base

# A product listed by a farmer. Price is a plain float amount per unit
# (lb, basket, dozen, ...).
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    slug = Column(String, unique=True, nullable=False, index=True)
    description = Column(Text, nullable=False, default="")

    price = Column(Float, CheckConstraint("price >= 0"), nullable=False)
    unit = Column(String, nullable=False, default="each")
    image = Column(String, nullable=True)

    # Stock may never go below zero
    stock = Column(Integer, CheckConstraint("stock >= 0"), nullable=False, default=0)

    farmer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)

    is_organic = Column(Boolean, nullable=False, default=False)
    featured = Column(Boolean, nullable=False, default=False)
    tags = Column(JSON, nullable=False, default=list)

    # Aggregated from reviews
    rating = Column(Float, nullable=False, default=0.0)
    review_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    farmer = relationship("User")
    category = relationship("Category", back_populates="products")
