# farmfresh/routes/users.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from farmfresh.database import get_db
from farmfresh.models.users import User
from farmfresh.schemas.user import PublicUser, UserResponse, UserUpdate
from farmfresh.utils.audit import write_log
from farmfresh.utils.tokenJWT import get_current_user

router = APIRouter(prefix="/api", tags=["Users"])


# List farmers with public profile fields only
@router.get("/farmers", response_model=List[PublicUser])
def list_farmers(db: Session = Depends(get_db)):
    return db.query(User).filter(User.role == "farmer").order_by(User.id.asc()).all()


@router.get("/farmers/{farmer_id}", response_model=PublicUser)
def get_farmer(farmer_id: int, db: Session = Depends(get_db)):
    farmer = db.query(User).filter(User.id == farmer_id).first()
    if not farmer or not farmer.is_farmer:
        raise HTTPException(status_code=404, detail="Farmer not found")
    return farmer


# Update own profile; declared before /users/{user_id} so "me" is not parsed as an id
@router.put("/users/me", response_model=UserResponse)
def update_me(
    payload: UserUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    changes = payload.model_dump(exclude_unset=True)
    if "name" in changes and changes["name"] is None:
        del changes["name"]
    for field, value in changes.items():
        setattr(current_user, field, value)
    db.commit()
    db.refresh(current_user)

    write_log(db, user_id=current_user.id, action="PROFILE_UPDATE", resource="users",
              request=request, meta={"fields": sorted(changes)})
    return current_user


@router.get("/users/{user_id}", response_model=PublicUser)
def get_user(user_id: int, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user
