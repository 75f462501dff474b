# farmfresh/routes/cart.py
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from farmfresh.database import get_db
from farmfresh.models.cart import Cart, CartItem
from farmfresh.models.product import Product
from farmfresh.models.users import User
from farmfresh.schemas.cart import CartAddItem, CartUpdateItem, CartOut, CartItemOut, CartLineOut
from farmfresh.utils.audit import write_log
from farmfresh.utils.tokenJWT import get_current_user

router = APIRouter(prefix="/api/cart", tags=["Cart"])
logger = logging.getLogger(__name__)

def _get_or_create_cart(db: Session, user_id: int) -> Cart:
    # Retrieve the user's cart or create it on first use
    cart = db.query(Cart).filter(Cart.user_id == user_id).first()
    if cart:
        return cart
    try:
        cart = Cart(user_id=user_id)
        db.add(cart)
        db.commit()
    except IntegrityError:
        # A concurrent request created the cart first
        db.rollback()
        logger.debug("Cart for user %s created concurrently, reusing it", user_id)
        return db.query(Cart).filter(Cart.user_id == user_id).one()
    db.refresh(cart)
    return cart

def _find_line(db: Session, cart_id: int, product_id: int):
    return db.query(CartItem).filter(
        CartItem.cart_id == cart_id, CartItem.product_id == product_id
    ).first()

def _increment_line(db: Session, item: CartItem, quantity: int) -> CartItem:
    # Incremented in SQL so concurrent adds to the same line all count
    item.quantity = CartItem.quantity + quantity
    db.commit()
    db.refresh(item)
    return item

def _get_line(db: Session, cart: Cart, item_id: int) -> CartItem:
    item = db.query(CartItem).filter(CartItem.id == item_id, CartItem.cart_id == cart.id).first()
    if not item:
        raise HTTPException(status_code=404, detail="Cart item not found")
    return item

def _cart_total(cart: Cart) -> float:
    return round(sum(it.line_total for it in cart.items), 2)

def _cart_to_out(cart: Cart) -> CartOut:
    lines = [CartLineOut.model_validate(it) for it in cart.items]
    return CartOut(id=cart.id, items=lines, total=_cart_total(cart))

@router.get("", response_model=CartOut)
def get_cart(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    cart = _get_or_create_cart(db, current_user.id)
    cart = (
        db.query(Cart)
        .options(joinedload(Cart.items).joinedload(CartItem.product))
        .filter(Cart.id == cart.id)
        .first()
    )
    return _cart_to_out(cart)

@router.post("/items", response_model=CartItemOut, status_code=status.HTTP_201_CREATED)
def add_to_cart(
    payload: CartAddItem,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    cart = _get_or_create_cart(db, current_user.id)

    product = db.query(Product).filter(Product.id == payload.product_id).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    item = _find_line(db, cart.id, payload.product_id)

    # Validate stock for the resulting line quantity
    new_qty = payload.quantity + (item.quantity if item else 0)
    if new_qty > product.stock:
        write_log(db, user_id=current_user.id, action="CART_ADD", resource="cart", status="FAIL",
                  request=request, meta={"product_id": product.id, "qty": payload.quantity, "stock": product.stock})
        raise HTTPException(status_code=400, detail="Not enough stock available")

    if item:
        # Existing line keeps its original price snapshot
        item = _increment_line(db, item, payload.quantity)
    else:
        try:
            item = CartItem(
                cart_id=cart.id,
                product_id=product.id,
                quantity=payload.quantity,
                price=product.price,
            )
            db.add(item)
            db.commit()
            db.refresh(item)
        except IntegrityError:
            # Another add for the same product inserted the line first
            db.rollback()
            item = _increment_line(db, _find_line(db, cart.id, payload.product_id), payload.quantity)

    write_log(db, user_id=current_user.id, action="CART_ADD", resource="cart", request=request,
              meta={"product_id": product.id, "qty": payload.quantity, "line_qty": item.quantity})
    return item

@router.put("/items/{item_id}", response_model=CartItemOut)
def update_cart_item(
    item_id: int,
    payload: CartUpdateItem,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    cart = _get_or_create_cart(db, current_user.id)
    item = _get_line(db, cart, item_id)

    # Validate stock for the new quantity
    product = db.query(Product).filter(Product.id == item.product_id).first()
    if not product or payload.quantity > product.stock:
        raise HTTPException(status_code=400, detail="Not enough stock available")

    item.quantity = payload.quantity
    db.commit()
    db.refresh(item)

    write_log(db, user_id=current_user.id, action="CART_UPDATE", resource="cart", request=request,
              meta={"item_id": item_id, "qty": payload.quantity})
    return item

@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_cart_item(
    item_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    cart = _get_or_create_cart(db, current_user.id)
    item = _get_line(db, cart, item_id)

    db.delete(item)
    db.commit()

    write_log(db, user_id=current_user.id, action="CART_DELETE", resource="cart", request=request,
              meta={"item_id": item_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def clear_cart(
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    cart = _get_or_create_cart(db, current_user.id)
    removed = db.query(CartItem).filter(CartItem.cart_id == cart.id).delete(synchronize_session=False)
    db.commit()

    write_log(db, user_id=current_user.id, action="CART_CLEAR", resource="cart", request=request,
              meta={"removed": removed})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
