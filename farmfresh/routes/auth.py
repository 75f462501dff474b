# farmfresh/routes/auth.py
from fastapi import APIRouter, Depends, HTTPException, status, Request, Response
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from farmfresh.database import get_db
from farmfresh.models.users import User
from farmfresh.schemas import user as schemas
from farmfresh.utils.audit import write_log
from farmfresh.utils.hashing import get_password_hash, verify_password
from farmfresh.utils.tokenJWT import (
    create_access_token, get_current_user, set_session_cookie, clear_session_cookie
)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def _issue_session(response: Response, user: User) -> str:
    token = create_access_token(data={"sub": user.email, "role": user.role})
    set_session_cookie(response, token)
    return token


# Register a new user and start their session
@router.post("/register", response_model=schemas.UserResponse, status_code=status.HTTP_201_CREATED)
def register(payload: schemas.UserCreate, request: Request, response: Response, db: Session = Depends(get_db)):
    # Normalize identity fields
    email = payload.email.strip().lower()
    username = payload.username.strip()

    # Check for an existing account with the same email or username
    existing = db.query(User).filter(
        or_(func.lower(User.email) == email, func.lower(User.username) == username.lower())
    ).first()
    if existing:
        reason = "Email already registered" if existing.email.lower() == email else "Username already taken"
        write_log(db, user_id=None, action="REGISTER", resource="auth", status="FAIL",
                  request=request, meta={"email": email, "reason": reason})
        raise HTTPException(status_code=400, detail=reason)

    user = User(
        username=username,
        email=email,
        password_hash=get_password_hash(payload.password),
        name=payload.name,
        role=payload.role,
        address=payload.address,
        phone=payload.phone,
        bio=payload.bio,
        profile_image=payload.profile_image,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    _issue_session(response, user)
    write_log(db, user_id=user.id, action="REGISTER", resource="auth", status="SUCCESS",
              request=request, meta={"email": user.email, "role": user.role})
    return user


# Authenticate user, issue JWT token and set the session cookie
@router.post("/login", response_model=schemas.LoginResponse)
def login(payload: schemas.UserLogin, request: Request, response: Response, db: Session = Depends(get_db)):
    email = payload.email.strip().lower()
    user = db.query(User).filter(func.lower(User.email) == email).first()

    if not user or not verify_password(payload.password, user.password_hash):
        write_log(db, user_id=(user.id if user else None), action="LOGIN", resource="auth",
                  status="FAIL", request=request, meta={"email": email})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    token = _issue_session(response, user)
    write_log(db, user_id=user.id, action="LOGIN", resource="auth",
              status="SUCCESS", request=request, meta={"email": user.email})

    out = schemas.UserResponse.model_validate(user).model_dump()
    return schemas.LoginResponse(**out, access_token=token)


# End the session; succeeds for anonymous callers too
@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(response: Response):
    clear_session_cookie(response)
    return None


# Retrieve current authenticated user details
@router.get("/me", response_model=schemas.UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user
