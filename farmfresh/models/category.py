# farmfresh/models/category.py
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from farmfresh.database import Base

# Product category shown in the shop navigation
class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    slug = Column(String, unique=True, nullable=False, index=True)
    description = Column(String, nullable=True)
    image = Column(String, nullable=True)

    products = relationship("Product", back_populates="category")
