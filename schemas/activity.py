from datetime import datetime
from pydantic import BaseModel
from typing import Optional

from models.enums import UserRole


class ActivityUser(BaseModel):
    id: int
    name: str
    role: UserRole

    class Config:
        from_attributes = True


class ProjectActivityOut(BaseModel):
    id: int
    project_id: int
    action: str
    field_name: Optional[str] = None
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    created_at: datetime
    user: ActivityUser

    class Config:
        from_attributes = True
