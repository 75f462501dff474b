# farmfresh/client/cart.py
"""Client-side cart state.

The store is the single source of truth for the signed-in user's cart.
Every mutation is a plain write against the cart API followed by a full
re-read of ``GET /api/cart`` (mutate, then re-fetch and replace). Writes are
neither queued nor coalesced: two quick calls send two requests, and the
state left behind is whatever the last completed re-read returned.
"""
import logging
from typing import Awaitable, Callable, List, Optional

from pydantic import ValidationError

from farmfresh.client.api import ApiClient, ApiError, TransportError, Unauthorized
from farmfresh.client.notify import Notifier
from farmfresh.client.store import Store
from farmfresh.schemas.cart import CartLineOut, CartOut

logger = logging.getLogger(__name__)


def _is_valid_quantity(quantity) -> bool:
    return isinstance(quantity, int) and not isinstance(quantity, bool) and quantity >= 1


class CartStore(Store):
    def __init__(self, api: ApiClient, notifier: Optional[Notifier] = None):
        super().__init__()
        self.api = api
        self.notifier = notifier or Notifier()
        self.cart: Optional[CartOut] = None

    # ---- derived values ----
    @property
    def items(self) -> List[CartLineOut]:
        return list(self.cart.items) if self.cart else []

    @property
    def total_items(self) -> int:
        return sum(line.quantity for line in self.items)

    @property
    def subtotal(self) -> float:
        # Lines whose product has not been resolved are left out
        return round(sum(line.price * line.quantity for line in self.items if line.product is not None), 2)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def line_for_product(self, product_id: int) -> Optional[CartLineOut]:
        return next((line for line in self.items if line.product_id == product_id), None)

    # ---- reads ----
    async def refresh(self) -> Optional[CartOut]:
        """Re-read the cart. Any failure leaves an empty (None) cart, never an error."""
        try:
            data = await self.api.get("/api/cart")
            self.cart = CartOut.model_validate(data) if data is not None else None
        except Unauthorized:
            self.cart = None
        except (ApiError, TransportError, ValidationError) as e:
            logger.warning("Cart fetch failed, showing an empty cart: %s", e)
            self.cart = None
        self.status = "ready"
        await self._emit()
        return self.cart

    # ---- writes ----
    async def _mutate(
        self,
        write: Callable[[], Awaitable[object]],
        failure_title: str,
        success: Optional[tuple] = None,
    ) -> bool:
        try:
            await write()
        except (ApiError, TransportError) as e:
            self.notifier.error(failure_title, str(e))
            return False
        await self.refresh()
        if success:
            self.notifier.notify(*success)
        return True

    async def add_to_cart(self, product_id: int, quantity: int = 1) -> bool:
        if not _is_valid_quantity(quantity):
            self.notifier.error("Failed to add item", "Quantity must be a positive whole number")
            return False
        return await self._mutate(
            lambda: self.api.post("/api/cart/items", {"productId": product_id, "quantity": quantity}),
            "Failed to add item",
            ("Added to cart", "Item has been added to your cart."),
        )

    async def update_quantity(self, item_id: int, quantity: int) -> bool:
        # Quantities below one never reach the server; removal is explicit
        if not _is_valid_quantity(quantity):
            logger.debug("Ignoring quantity %r for cart item %s", quantity, item_id)
            return False
        return await self._mutate(
            lambda: self.api.put(f"/api/cart/items/{item_id}", {"quantity": quantity}),
            "Failed to update quantity",
        )

    async def remove_item(self, item_id: int) -> bool:
        return await self._mutate(
            lambda: self.api.delete(f"/api/cart/items/{item_id}"),
            "Failed to remove item",
            ("Item removed", "Item has been removed from your cart."),
        )

    async def clear_cart(self) -> bool:
        return await self._mutate(
            lambda: self.api.delete("/api/cart"),
            "Failed to clear cart",
            ("Cart cleared", "All items have been removed from your cart."),
        )
