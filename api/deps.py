from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session

from core.security import ACCESS_TOKEN_TYPE, decode_token, oauth2_scheme
from db import get_db
from models.enums import UserRole
from models.user import User


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
):
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access denied. No token provided.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = decode_token(credentials.credentials)

        user_id = int(payload.get("sub") or 0)
        role = payload.get("role")

    except (JWTError, ValueError):
        raise HTTPException(401, "Invalid token")

    if not user_id or not role or payload.get("type") != ACCESS_TOKEN_TYPE:
        raise HTTPException(401, "Invalid token")

    user = db.query(User).filter(User.id == user_id).first()

    if not user or not user.is_active:
        raise HTTPException(401, "User not found")

    return {
        "id": user.id,
        "role": role,
        "user": user
    }


def require_role(required_roles: list[UserRole]):
    def role_checker(current_user=Depends(get_current_user)):
        if current_user["role"] not in [r.value for r in required_roles]:
            raise HTTPException(status_code=403, detail="You do not have permission to access this resource")
        return current_user
    return role_checker
