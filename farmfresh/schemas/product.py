# farmfresh/schemas/product.py
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from farmfresh.schemas.base import ORMBase


# Shared base attributes for product entities
class ProductBase(ORMBase):
    name: str = Field(min_length=1)
    description: str = ""
    price: float = Field(ge=0)
    unit: str = "each"
    image: Optional[str] = None
    stock: int = Field(default=0, ge=0)
    category_id: int
    is_organic: bool = False
    featured: bool = False
    tags: List[str] = Field(default_factory=list)


# Schema for creating a new product; farmer_id comes from the session
class ProductCreate(ProductBase):
    slug: Optional[str] = None


# Schema for partial product updates
class ProductEditRequest(ORMBase):
    """Schema for PUT requests - all fields optional."""
    name: Optional[str] = Field(None, min_length=1)
    slug: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = None
    image: Optional[str] = None
    stock: Optional[int] = Field(None, ge=0)
    category_id: Optional[int] = None
    is_organic: Optional[bool] = None
    featured: Optional[bool] = None
    tags: Optional[List[str]] = None


# Full product representation
class ProductOut(ProductBase):
    id: int
    slug: str
    farmer_id: int
    rating: float = 0.0
    review_count: int = 0
    created_at: Optional[datetime] = None
