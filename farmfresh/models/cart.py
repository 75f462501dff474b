# farmfresh/models/cart.py
from sqlalchemy import Column, Integer, ForeignKey, DateTime, Float, UniqueConstraint, CheckConstraint, func
from sqlalchemy.orm import relationship
from farmfresh.database import Base

# Represents the user's shopping cart, one per user, created lazily
class Cart(Base):
    __tablename__ = "carts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # One-to-many relationship with cart items
    items = relationship(
        "CartItem", back_populates="cart", cascade="all, delete-orphan", order_by="CartItem.id"
    )


# A single line (product + quantity) within a cart
class CartItem(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True, index=True)
    cart_id = Column(Integer, ForeignKey("carts.id"), index=True, nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), index=True, nullable=False)
    quantity = Column(Integer, CheckConstraint("quantity >= 1"), nullable=False, default=1)
    price = Column(Float, nullable=False) # Unit price at the moment of addition

    cart = relationship("Cart", back_populates="items")
    product = relationship("Product")

    __table_args__ = (
        # One line per product within a cart
        UniqueConstraint("cart_id", "product_id", name="uq_cartitem_cart_product"),
    )

    @property
    def line_total(self) -> float:
        return self.price * self.quantity
