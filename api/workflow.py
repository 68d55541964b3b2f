from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.deps import get_current_user
from db import get_db
from schemas.workflow import ProjectWorkflowOut
from utils import workflow as workflow_service


router = APIRouter(prefix="/projects", tags=["Project Workflow"])


# -------------------------------------------------------
# GET WORKFLOW (created on first read for older projects)
# -------------------------------------------------------
@router.get("/{project_id}/workflow", response_model=ProjectWorkflowOut)
def get_project_workflow(
    project_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return workflow_service.get_project_workflow(db, project_id)


# -------------------------------------------------------
# RECEIVED -> IN_PROGRESS
# -------------------------------------------------------
@router.post("/{project_id}/workflow/confirm-received", response_model=ProjectWorkflowOut)
def confirm_received(
    project_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return workflow_service.confirm_received(db, project_id, current_user)


# -------------------------------------------------------
# IN_PROGRESS -> COMPLETED
# -------------------------------------------------------
@router.post("/{project_id}/workflow/confirm-in-progress", response_model=ProjectWorkflowOut)
def confirm_in_progress(
    project_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return workflow_service.confirm_in_progress(db, project_id, current_user)


# -------------------------------------------------------
# MANAGER / ADMIN APPROVAL OF COMPLETED
# -------------------------------------------------------
@router.post("/{project_id}/workflow/approve-completed", response_model=ProjectWorkflowOut)
def approve_completed(
    project_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return workflow_service.approve_completed(db, project_id, current_user)


# -------------------------------------------------------
# COMPLETED (approved) -> SENT_TO_CUSTOMER
# -------------------------------------------------------
@router.post("/{project_id}/workflow/confirm-sent-to-customer", response_model=ProjectWorkflowOut)
def confirm_sent_to_customer(
    project_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return workflow_service.confirm_sent_to_customer(db, project_id, current_user)
