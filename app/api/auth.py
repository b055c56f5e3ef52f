from typing import Optional
from datetime import timedelta
from fastapi import APIRouter, Depends, Response, Cookie, Header
from sqlalchemy.orm import Session
from app.core.config import settings
from app.core.database import get_db
from app.core.errors import AuthenticationError, AuthorizationError
from app.core.security import verify_password, create_access_token, decode_access_token, ACCESS_TOKEN_EXPIRE_MINUTES
from app.models.user import User
from app.schemas.auth import UserCreate, UserLogin, UserResponse, Token
from app.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["Authentication"])

# ---------------------------------------------------------
# REGISTER
# ---------------------------------------------------------
@router.post("/register", response_model=UserResponse, status_code=201)
def register(user_in: UserCreate, db: Session = Depends(get_db)):
    return UserService(db).register(user_in.email, user_in.password, user_in.name)

# ---------------------------------------------------------
# LOGIN
# ---------------------------------------------------------
@router.post("/login", response_model=Token)
def login(response: Response, login_data: UserLogin, db: Session = Depends(get_db)):
    # 1. Check user and password
    user = UserService(db).get_by_email(login_data.email)
    if not user or not verify_password(login_data.password, user.password_hash):
        raise AuthenticationError("Incorrect email or password")

    # 2. Create token
    access_token = create_access_token(
        data={"sub": user.id, "role": user.role},
        expires_delta=timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )

    # 3. Set cookie for credentialed browser requests
    response.set_cookie(
        key="access_token",
        value=f"Bearer {access_token}",
        httponly=True,
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        expires=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        samesite="lax",
        secure=settings.COOKIE_SECURE
    )

    return {"access_token": access_token, "token_type": "bearer"}

# ---------------------------------------------------------
# LOGOUT
# ---------------------------------------------------------
@router.post("/logout")
def logout(response: Response):
    response.delete_cookie("access_token")
    return {"message": "Logged out successfully"}

# ---------------------------------------------------------
# CURRENT USER (Dependency)
# ---------------------------------------------------------
def _strip_bearer(value: str) -> str:
    return value[7:] if value.lower().startswith("bearer ") else value

def get_current_user(
    access_token: Optional[str] = Cookie(None),
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db)
) -> User:
    """
    Tries to get token from Cookie first, then Authorization header.
    """
    token = None
    if access_token:
        token = _strip_bearer(access_token)
    elif authorization:
        token = _strip_bearer(authorization)

    if not token:
        raise AuthenticationError("Not authenticated")

    claims = decode_access_token(token)
    if not claims or not claims.get("sub"):
        raise AuthenticationError("Invalid or expired token")

    user = db.query(User).filter(User.id == claims["sub"]).first()
    if not user:
        raise AuthenticationError("Invalid or expired token")
    return user

def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_admin:
        raise AuthorizationError("Admin access required")
    return current_user

@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user
