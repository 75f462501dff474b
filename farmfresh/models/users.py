# farmfresh/models/users.py
from sqlalchemy import Column, Integer, String, Text, DateTime, func
from farmfresh.database import Base

# Represents an account; role is a plain tag ("customer" or "farmer")
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, nullable=False, index=True)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    name = Column(String, nullable=False)
    role = Column(String, nullable=False, default="customer")

    # Contact and profile details
    address = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    bio = Column(Text, nullable=True)
    profile_image = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def is_farmer(self) -> bool:
        return (self.role or "").lower() == "farmer"
