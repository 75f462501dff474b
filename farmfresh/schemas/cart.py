# farmfresh/schemas/cart.py
from typing import List, Optional

from pydantic import Field

from farmfresh.schemas.base import ORMBase
from farmfresh.schemas.product import ProductOut

# Request schema for adding an item to the cart
class CartAddItem(ORMBase):
    product_id: int
    quantity: int = Field(default=1, ge=1)

# Request schema for updating cart item quantity
class CartUpdateItem(ORMBase):
    quantity: int = Field(ge=1)

# A single cart line as stored
class CartItemOut(ORMBase):
    id: int
    cart_id: int
    product_id: int
    quantity: int
    price: float

# A cart line with its product resolved; product may be missing
# when the product was deleted after it was added
class CartLineOut(CartItemOut):
    product: Optional[ProductOut] = None

# Response schema for the entire cart
class CartOut(ORMBase):
    id: int
    items: List[CartLineOut]
    total: float
