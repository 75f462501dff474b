# farmfresh/models/log.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON, func
from farmfresh.database import Base

# Audit trail entry: who did what to which resource, and whether it worked
class Log(Base):
    __tablename__ = "logs"

    id = Column(Integer, primary_key=True, index=True)
    ts = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    action = Column(String(50), index=True)    # e.g. CART_ADD, ORDER_CREATE
    resource = Column(String(50), index=True)  # e.g. cart, orders, auth
    status = Column(String(20), index=True)    # SUCCESS / FAIL
    ip = Column(String(64), nullable=True)

    meta = Column(JSON, nullable=True)
