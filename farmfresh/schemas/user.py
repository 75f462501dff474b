# farmfresh/schemas/user.py
from datetime import datetime
from typing import Literal, Optional

from pydantic import EmailStr, Field

from farmfresh.schemas.base import ORMBase

Role = Literal["customer", "farmer"]

# Schema for user authentication credentials
class UserLogin(ORMBase):
    email: EmailStr
    password: str

# Schema for user registration requests
class UserCreate(ORMBase):
    username: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6)
    name: str = Field(min_length=1)
    role: Role = "customer"
    address: Optional[str] = None
    phone: Optional[str] = None
    bio: Optional[str] = None
    profile_image: Optional[str] = None

# Partial profile update of the current user
class UserUpdate(ORMBase):
    name: Optional[str] = Field(None, min_length=1)
    address: Optional[str] = None
    phone: Optional[str] = None
    bio: Optional[str] = None
    profile_image: Optional[str] = None

# Full account details, only ever returned to the account owner
class UserResponse(ORMBase):
    id: int
    username: str
    email: EmailStr
    name: str
    role: str
    address: Optional[str] = None
    phone: Optional[str] = None
    bio: Optional[str] = None
    profile_image: Optional[str] = None
    created_at: Optional[datetime] = None

# Public profile, safe to show to anyone (farmers page, review authors)
class PublicUser(ORMBase):
    id: int
    name: str
    bio: Optional[str] = None
    profile_image: Optional[str] = None

class ReviewAuthor(ORMBase):
    id: int
    name: str
    profile_image: Optional[str] = None

# Login response: the user plus the bearer token also stored in the cookie
class LoginResponse(UserResponse):
    access_token: str
    token_type: str = "bearer"
