# farmfresh/routes/orders.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from farmfresh.database import get_db
from farmfresh.models.cart import Cart, CartItem
from farmfresh.models.order import Order, OrderItem, OrderStatus, FINAL_STATUSES
from farmfresh.models.product import Product
from farmfresh.models.users import User
from farmfresh.schemas.order import OrderCreatePayload, OrderResponse, OrderStatusPatch
from farmfresh.utils.audit import write_log
from farmfresh.utils.tokenJWT import get_current_user, role_required

router = APIRouter(prefix="/api/orders", tags=["Orders"])
logger = logging.getLogger(__name__)


def _load_order(db: Session, order_id: int) -> Order:
    order = db.query(Order).options(
        joinedload(Order.items).joinedload(OrderItem.product)
    ).filter(Order.id == order_id).first()
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order

def _farmer_has_items(order: Order, farmer_id: int) -> bool:
    return any(it.farmer_id == farmer_id for it in order.items)

def _can_view(order: Order, user: User) -> bool:
    if order.user_id == user.id:
        return True
    return user.is_farmer and _farmer_has_items(order, user.id)


# Place an order from the caller's cart
@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreatePayload,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    cart = db.query(Cart).filter(Cart.user_id == current_user.id).first()
    lines: List[CartItem] = list(cart.items) if cart else []
    if not lines:
        raise HTTPException(status_code=400, detail="Your cart is empty")

    try:
        # Lock the products so concurrent checkouts cannot oversell
        product_ids = sorted({ci.product_id for ci in lines})
        products = {
            p.id: p for p in db.query(Product).filter(Product.id.in_(product_ids)).with_for_update().all()
        }

        total = 0.0
        for ci in lines:
            product = products.get(ci.product_id)
            if product is None:
                raise HTTPException(status_code=404, detail=f"Product with ID {ci.product_id} not found")
            if product.stock < ci.quantity:
                raise HTTPException(
                    status_code=400,
                    detail=f"Not enough stock for {product.name}. Available: {product.stock}, Requested: {ci.quantity}",
                )
            total += ci.price * ci.quantity

        order = Order(
            user_id=current_user.id,
            status=OrderStatus.PENDING.value,
            total=round(total, 2),
            address=payload.shipping_address,
            phone=payload.phone or current_user.phone,
        )
        db.add(order)

        for ci in lines:
            product = products[ci.product_id]
            db.add(OrderItem(
                order=order, product_id=ci.product_id, farmer_id=product.farmer_id,
                quantity=ci.quantity, price=ci.price,
            ))
            # Guarded decrement: matches no row if stock changed underneath us
            result = db.execute(
                update(Product)
                .where(Product.id == ci.product_id, Product.stock >= ci.quantity)
                .values(stock=Product.stock - ci.quantity)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                raise HTTPException(status_code=409, detail=f"Stock for {product.name} changed, please retry")

        # Move cart lines into the order
        db.query(CartItem).filter(CartItem.cart_id == cart.id).delete(synchronize_session=False)
        db.commit()
    except HTTPException:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to place order for user %s: %s", current_user.id, e)
        raise HTTPException(status_code=500, detail="Failed to place order")

    write_log(db, user_id=current_user.id, action="ORDER_CREATE", resource="orders", request=request,
              meta={"order_id": order.id, "total": order.total, "lines": len(lines)})
    return _load_order(db, order.id)


# Customers see their own orders; farmers see orders containing their products
@router.get("", response_model=List[OrderResponse])
def list_orders(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    q = db.query(Order).options(joinedload(Order.items).joinedload(OrderItem.product))
    if current_user.is_farmer:
        farmer_orders = select(OrderItem.order_id).where(OrderItem.farmer_id == current_user.id)
        q = q.filter(Order.id.in_(farmer_orders))
    else:
        q = q.filter(Order.user_id == current_user.id)
    return q.order_by(Order.created_at.desc(), Order.id.desc()).all()


@router.get("/{order_id}", response_model=OrderResponse)
def get_order_detail(
    order_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    order = _load_order(db, order_id)
    if not _can_view(order, current_user):
        raise HTTPException(status_code=403, detail="You don't have access to this order")
    return order


# Farmers with items in the order move it through fulfilment
@router.put("/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: int,
    payload: OrderStatusPatch,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(role_required("farmer", detail="Only farmers can update order status"))
):
    order = _load_order(db, order_id)
    if not _farmer_has_items(order, current_user.id):
        raise HTTPException(status_code=403, detail="You don't have access to this order")

    old_status, new_status = order.status, payload.status
    if old_status in FINAL_STATUSES:
        raise HTTPException(status_code=400, detail=f"Cannot change status from {old_status}")

    order.status = new_status
    db.commit()
    write_log(db, user_id=current_user.id, action="ORDER_STATUS_CHANGE", resource="orders", request=request,
              meta={"order_id": order.id, "old": old_status, "new": new_status})
    return _load_order(db, order.id)
