# farmfresh/routes/reviews.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from farmfresh.database import get_db
from farmfresh.models.order import Order, OrderItem
from farmfresh.models.product import Product
from farmfresh.models.review import Review
from farmfresh.models.users import User
from farmfresh.schemas.review import ReviewCreate, ReviewOut
from farmfresh.utils.audit import write_log
from farmfresh.utils.tokenJWT import get_current_user

router = APIRouter(prefix="/api/products", tags=["Reviews"])


def _get_product(db: Session, product_id: int) -> Product:
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product

def _has_ordered(db: Session, user_id: int, product_id: int) -> bool:
    hit = (
        db.query(OrderItem.id)
        .join(Order, Order.id == OrderItem.order_id)
        .filter(Order.user_id == user_id, OrderItem.product_id == product_id)
        .first()
    )
    return hit is not None

# Keep the aggregated rating on the product in sync with its reviews
def _refresh_rating(db: Session, product: Product) -> None:
    avg, count = db.query(func.avg(Review.rating), func.count(Review.id)).filter(
        Review.product_id == product.id
    ).one()
    product.rating = round(float(avg or 0.0), 2)
    product.review_count = int(count or 0)


@router.get("/{product_id}/reviews", response_model=List[ReviewOut])
def list_reviews(product_id: int, db: Session = Depends(get_db)):
    _get_product(db, product_id)
    return (
        db.query(Review)
        .options(joinedload(Review.user))
        .filter(Review.product_id == product_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .all()
    )


@router.post("/{product_id}/reviews", response_model=ReviewOut, status_code=status.HTTP_201_CREATED)
def create_review(
    product_id: int,
    payload: ReviewCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    product = _get_product(db, product_id)

    # Only customers who ordered the product may review it
    if not _has_ordered(db, current_user.id, product_id):
        raise HTTPException(status_code=403, detail="You can only review products you've purchased")

    review = Review(user_id=current_user.id, product_id=product_id,
                    rating=payload.rating, comment=payload.comment)
    db.add(review)
    db.flush()
    _refresh_rating(db, product)
    db.commit()
    db.refresh(review)

    write_log(db, user_id=current_user.id, action="REVIEW_CREATE", resource="reviews",
              request=request, meta={"product_id": product_id, "rating": payload.rating})
    return review
