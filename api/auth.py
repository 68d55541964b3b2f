import logging
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi_limiter.depends import RateLimiter
from jose import JWTError
from sqlalchemy.orm import Session

from api.deps import get_current_user
from core.security import (
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)
from db import get_db
from models.enums import UserRole
from models.user import User
from schemas.user import (
    RefreshTokenRequest,
    Token,
    UserLogin,
    UserRegister,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])

# Shared by the unauthenticated endpoints; 5 requests per minute per client
auth_rate_limiter = RateLimiter(times=5, seconds=60)


def _token_claims(user: User) -> dict:
    return {"sub": str(user.id), "role": user.role.value}


# ---------------- Register ----------------
@router.post("/register", response_model=UserResponse, status_code=201,
             description="Self-service sign up, always with the USER role",
             dependencies=[Depends(auth_rate_limiter)])
def register(
    user: UserRegister,
    db: Session = Depends(get_db)
):
    if db.query(User).filter(User.username == user.username).first():
        raise HTTPException(status_code=400, detail="User already exists")

    new_user = User(
        username=user.username,
        name=user.name,
        position=user.position,
        hashed_password=hash_password(user.password),
        role=UserRole.user,
        is_active=True,
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    logger.info(f"Registered user {new_user.id} ({new_user.username})")
    return new_user


# ---------------- Login ----------------
@router.post("/login", response_model=Token, dependencies=[Depends(auth_rate_limiter)])
def login(form_data: UserLogin, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.username == form_data.username).first()

    if not user or not user.is_active or not verify_password(form_data.password, user.hashed_password):
        logger.warning(f"Failed login for username {form_data.username!r}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return {
        "access_token": create_access_token(data=_token_claims(user)),
        "refresh_token": create_refresh_token(data={"sub": str(user.id)}),
        "token_type": "bearer",
        "user": user,
    }


# ---------------- Refresh Token ----------------
@router.post("/refresh-token", response_model=Token)
def refresh_token(
    payload: RefreshTokenRequest,
    db: Session = Depends(get_db)
):
    try:
        token_data = decode_token(payload.refresh_token)
        user_id = int(token_data.get("sub") or 0)
    except (JWTError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid refresh token")

    if not user_id or token_data.get("type") != REFRESH_TOKEN_TYPE:
        raise HTTPException(status_code=401, detail="Invalid refresh token")

    user = db.query(User).filter(User.id == user_id).first()
    if not user or not user.is_active:
        raise HTTPException(status_code=401, detail="User not found")

    return {
        "access_token": create_access_token(data=_token_claims(user)),
        "token_type": "bearer",
        "user": user,
    }


# ---------------- Get Current User ----------------
@router.get("/me", response_model=UserResponse)
def get_me(current_user=Depends(get_current_user)):
    return current_user["user"]
