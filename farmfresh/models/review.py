# farmfresh/models/review.py
from sqlalchemy import Column, Integer, Text, ForeignKey, DateTime, CheckConstraint, func
from sqlalchemy.orm import relationship
from farmfresh.database import Base

# A customer's rating of a product; a user may review the same product more than once
class Review(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    rating = Column(Integer, CheckConstraint("rating >= 1 AND rating <= 5"), nullable=False)
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User")
