from datetime import datetime
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Optional

from models.enums import WorkflowStatus
from schemas.common import UserBrief


class ProjectBrief(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class ProjectWorkflowOut(BaseModel):
    """Workflow record as the web client reads it (camelCase keys)."""

    id: int
    project_id: int
    current_status: WorkflowStatus

    received_start_at: Optional[datetime] = None
    received_confirmed_at: Optional[datetime] = None
    in_progress_start_at: Optional[datetime] = None
    in_progress_confirmed_at: Optional[datetime] = None
    completed_start_at: Optional[datetime] = None
    completed_approved_at: Optional[datetime] = None
    completed_approved_by_id: Optional[int] = None
    completed_confirmed_at: Optional[datetime] = None
    sent_to_customer_at: Optional[datetime] = None

    completed_approved_by: Optional[UserBrief] = None
    project: Optional[ProjectBrief] = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True
