from datetime import date, datetime
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from models.enums import ProjectStatus
from schemas.common import UserBrief


class ProjectBase(BaseModel):
    code: str
    name: str
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    duration: Optional[str] = None
    group: Optional[str] = None
    value: Optional[float] = None
    progress_method: str

    @field_validator("code", "name", "progress_method")
    def validate_required_text(cls, v):
        if not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()


class ProjectCreate(ProjectBase):
    manager_id: int
    implementer_ids: List[int] = []
    follower_ids: List[int] = []


class ProjectUpdate(BaseModel):
    code: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    duration: Optional[str] = None
    group: Optional[str] = None
    value: Optional[float] = None
    progress_method: Optional[str] = None
    manager_id: Optional[int] = None
    status: Optional[ProjectStatus] = None
    progress: Optional[int] = Field(default=None, ge=0, le=100)
    implementer_ids: Optional[List[int]] = None
    follower_ids: Optional[List[int]] = None

    @field_validator("code", "name", "progress_method")
    def validate_required_text(cls, v):
        if v is None:
            return v
        if not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()


class ProjectFilters(BaseModel):
    name: Optional[str] = None
    status: Optional[ProjectStatus] = None
    manager_id: Optional[int] = None
    sort: Optional[str] = "desc"  # asc or desc


class ProjectOut(ProjectBase):
    id: int
    status: ProjectStatus
    progress: int
    manager: UserBrief
    implementers: List[UserBrief] = []
    followers: List[UserBrief] = []
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
