from pydantic import BaseModel, field_validator
from typing import Optional

from models.enums import UserRole


class UserBase(BaseModel):
    username: str
    name: str
    position: Optional[str] = None

    @field_validator("username")
    def validate_username(cls, v):
        username = v.strip()
        if not username or " " in username:
            raise ValueError("Username must be a single non-empty word")
        return username

    @field_validator("name")
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()


class UserRegister(UserBase):
    password: str

    @field_validator("password")
    def validate_password(cls, password):
        if len(password) < 8:
            raise ValueError("Password must be at least 8 characters")
        return password


class UserCreate(UserRegister):
    role: UserRole = UserRole.user
    is_active: bool = True


class UserResponse(BaseModel):
    id: int
    username: str
    name: str
    position: Optional[str] = None
    role: UserRole
    is_active: bool

    class Config:
        from_attributes = True


class UserLogin(BaseModel):
    username: str
    password: str


class Token(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str
    user: UserResponse


class RefreshTokenRequest(BaseModel):
    refresh_token: str


class UserFilters(BaseModel):
    search: Optional[str] = None  # search in username/name
    role: Optional[UserRole] = None
