# farmfresh/schemas/review.py
from datetime import datetime
from typing import Optional

from pydantic import Field

from farmfresh.schemas.base import ORMBase
from farmfresh.schemas.user import ReviewAuthor


class ReviewCreate(ORMBase):
    rating: int = Field(ge=1, le=5)
    comment: Optional[str] = None


class ReviewOut(ORMBase):
    id: int
    user_id: int
    product_id: int
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    user: Optional[ReviewAuthor] = None
