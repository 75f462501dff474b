# farmfresh/routes/products.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.orm import Session

from farmfresh.database import get_db
from farmfresh.models.cart import CartItem
from farmfresh.models.category import Category
from farmfresh.models.order import OrderItem
from farmfresh.models.product import Product
from farmfresh.models.users import User
from farmfresh.schemas import product as product_schemas
from farmfresh.utils.audit import write_log
from farmfresh.utils.slug import unique_slug
from farmfresh.utils.tokenJWT import role_required

router = APIRouter(prefix="/api/products", tags=["Products"])

farmer_required = role_required("farmer", detail="Only farmers can manage products")


# ---- HELPERS ----
def _get_product(db: Session, product_id: int) -> Product:
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product

def _get_own_product(db: Session, product_id: int, farmer: User) -> Product:
    product = _get_product(db, product_id)
    if product.farmer_id != farmer.id:
        raise HTTPException(status_code=403, detail="You can only manage your own products")
    return product

def _ensure_category(db: Session, category_id: int) -> None:
    if not db.query(Category.id).filter(Category.id == category_id).first():
        raise HTTPException(status_code=400, detail="Unknown category")


# =========================
# PRODUCT LIST
# =========================
@router.get("", response_model=List[product_schemas.ProductOut])
def list_products(
    category_id: Optional[int] = Query(None, alias="categoryId"),
    farmer_id: Optional[int] = Query(None, alias="farmerId"),
    featured: Optional[bool] = Query(None),
    db: Session = Depends(get_db),
):
    query = db.query(Product)
    if category_id is not None:
        query = query.filter(Product.category_id == category_id)
    if farmer_id is not None:
        query = query.filter(Product.farmer_id == farmer_id)
    if featured is not None:
        query = query.filter(Product.featured == featured)
    return query.order_by(Product.id.asc()).all()


# =========================
# SINGLE PRODUCT (slug or numeric id)
# =========================
@router.get("/{slug}", response_model=product_schemas.ProductOut)
def get_product(slug: str, db: Session = Depends(get_db)):
    product = db.query(Product).filter(Product.slug == slug).first()
    if product is None and slug.isdigit():
        product = db.query(Product).filter(Product.id == int(slug)).first()
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


# =========================
# CREATE PRODUCT
# =========================
@router.post("", response_model=product_schemas.ProductOut, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: product_schemas.ProductCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(farmer_required),
):
    _ensure_category(db, payload.category_id)

    data = payload.model_dump(exclude={"slug"})
    product = Product(
        **data,
        slug=unique_slug(db, Product, payload.slug or payload.name),
        farmer_id=current_user.id,
    )
    db.add(product)
    db.commit()
    db.refresh(product)

    write_log(db, user_id=current_user.id, action="PRODUCT_CREATE", resource="products",
              request=request, meta={"product_id": product.id, "name": product.name})
    return product


# =========================
# UPDATE PRODUCT
# =========================
@router.put("/{product_id}", response_model=product_schemas.ProductOut)
def update_product(
    product_id: int,
    payload: product_schemas.ProductEditRequest,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(farmer_required),
):
    product = _get_own_product(db, product_id, current_user)

    changes = payload.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=400, detail="No fields to update")
    if changes.get("category_id") is not None:
        _ensure_category(db, changes["category_id"])
    if "slug" in changes:
        slug = changes.pop("slug")
        if slug:
            product.slug = unique_slug(db, Product, slug, exclude_id=product.id)

    # Existing cart lines keep their price snapshot
    for field, value in changes.items():
        if value is None and field != "image":
            continue
        setattr(product, field, value)

    db.commit()
    db.refresh(product)

    write_log(db, user_id=current_user.id, action="PRODUCT_UPDATE", resource="products",
              request=request, meta={"product_id": product.id, "fields": sorted(changes)})
    return product


# =========================
# DELETE PRODUCT
# =========================
@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(farmer_required),
):
    product = _get_own_product(db, product_id, current_user)

    # Order history keeps referencing the product
    if db.query(OrderItem.id).filter(OrderItem.product_id == product.id).first():
        raise HTTPException(status_code=409, detail="Product has orders and cannot be deleted")

    # Pending cart lines for the product go away with it
    db.query(CartItem).filter(CartItem.product_id == product.id).delete(synchronize_session=False)
    db.delete(product)
    db.commit()

    write_log(db, user_id=current_user.id, action="PRODUCT_DELETE", resource="products",
              request=request, meta={"product_id": product_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
