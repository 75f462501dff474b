# farmfresh/schemas/order.py
from datetime import datetime
from typing import Any, List, Literal, Optional

from pydantic import Field

from farmfresh.schemas.base import ORMBase
from farmfresh.schemas.product import ProductOut


# Output schema for an individual order line item
class OrderItemOut(ORMBase):
    id: int
    order_id: int
    product_id: int
    farmer_id: int
    quantity: int
    price: float
    product: Optional[ProductOut] = None


# Checkout payload. Lines and total are always rebuilt from the cart on the
# server; user_id, items, total_amount and status are accepted for
# compatibility with older clients and ignored.
class OrderCreatePayload(ORMBase):
    shipping_address: str = Field(min_length=1)
    phone: Optional[str] = None
    user_id: Optional[int] = None
    items: Optional[List[Any]] = None
    total_amount: Optional[float] = None
    status: Optional[str] = None


# Output schema representing the full order details
class OrderResponse(ORMBase):
    id: int
    user_id: int
    status: str
    total: float
    address: str
    phone: Optional[str] = None
    created_at: Optional[datetime] = None
    items: List[OrderItemOut] = Field(default_factory=list)


# Schema for updating order status
class OrderStatusPatch(ORMBase):
    status: Literal["processing", "shipped", "delivered", "cancelled"]
