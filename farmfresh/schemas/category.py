# farmfresh/schemas/category.py
from typing import Optional

from farmfresh.schemas.base import ORMBase


class CategoryOut(ORMBase):
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    image: Optional[str] = None
