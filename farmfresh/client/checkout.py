# farmfresh/client/checkout.py
import logging
from typing import Optional

from pydantic import ValidationError

from farmfresh.client.api import ApiError, TransportError
from farmfresh.client.auth import AuthStore
from farmfresh.client.cart import CartStore
from farmfresh.schemas.order import OrderResponse

logger = logging.getLogger(__name__)


def build_order_payload(auth: AuthStore, cart: CartStore, shipping_address: str, phone: Optional[str] = None) -> dict:
    """The checkout form's order body. The server rebuilds lines and total
    from the stored cart, the copy sent here is informational."""
    return {
        "userId": auth.user.id if auth.user else None,
        "shippingAddress": shipping_address,
        "phone": phone,
        "items": [
            {"productId": line.product_id, "quantity": line.quantity, "price": line.price}
            for line in cart.items
        ],
        "totalAmount": cart.subtotal,
        "status": "pending",
    }


async def place_order(auth: AuthStore, cart: CartStore, shipping_address: str, phone: Optional[str] = None) -> Optional[OrderResponse]:
    if cart.is_empty:
        cart.notifier.error("Checkout failed", "Your cart is empty")
        return None
    if not shipping_address or not shipping_address.strip():
        cart.notifier.error("Checkout failed", "A shipping address is required")
        return None

    payload = build_order_payload(auth, cart, shipping_address.strip(), phone)
    try:
        data = await cart.api.post("/api/orders", payload)
        order = OrderResponse.model_validate(data)
    except (ApiError, TransportError) as e:
        cart.notifier.error("Checkout failed", str(e))
        return None
    except ValidationError as e:
        logger.warning("Unexpected order response: %s", e)
        # The order may exist server side; re-read the cart to reflect that
        await cart.refresh()
        cart.notifier.error("Checkout failed", "Unexpected response from the server")
        return None
    logger.info("Order %s placed, total %.2f", order.id, order.total)
    # The server emptied the cart as part of the order
    await cart.refresh()
    cart.notifier.notify("Order placed", f"Order #{order.id} has been placed.")
    return order
