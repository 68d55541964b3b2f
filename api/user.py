import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy import or_
from sqlalchemy.orm import Session

from api.deps import get_current_user, require_role
from core.security import hash_password
from db import get_db
from models.enums import UserRole
from models.user import User
from schemas.common import PaginatedResponse
from schemas.user import UserCreate, UserFilters, UserResponse
from utils.pagination import paginate_queryset

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


# -----------------
# Create User
# -----------------
@router.post("/", response_model=UserResponse, status_code=201)
def create_user(
    payload: UserCreate,
    db: Session = Depends(get_db),
    current_user=Depends(require_role([UserRole.admin])),
):
    if db.query(User).filter(User.username == payload.username).first():
        raise HTTPException(status_code=400, detail="User already exists")

    user = User(
        username=payload.username,
        name=payload.name,
        position=payload.position,
        hashed_password=hash_password(payload.password),
        role=payload.role,
        is_active=payload.is_active,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info(f"User {current_user['id']} created user {user.id} with role {user.role.value}")
    return user


# -----------------
# List Users
# -----------------
@router.get("/", response_model=PaginatedResponse)
def list_users(
    request: Request,
    filters: UserFilters = Depends(),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    query = db.query(User).filter(User.is_active == True)  # noqa: E712

    if filters.search:
        term = f"%{filters.search}%"
        query = query.filter(or_(User.username.ilike(term), User.name.ilike(term)))

    if filters.role:
        query = query.filter(User.role == filters.role)

    base_url = str(request.url).split("?")[0]
    return paginate_queryset(query.order_by(User.id), page, page_size, base_url, UserResponse)
