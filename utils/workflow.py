"""
Project workflow state machine.

    RECEIVED -> IN_PROGRESS -> COMPLETED -> SENT_TO_CUSTOMER

Every transition is a read-check-write inside one transaction. The write is
a conditional UPDATE that repeats the state check in its WHERE clause, so a
request that lost a race against another one matches zero rows and is
rejected with ConcurrentModificationError instead of transitioning twice.

Approval of the COMPLETED phase is a flag (completed_approved_at) and does
not move current_status; sending to the customer requires it.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.exceptions import (
    AlreadyApprovedError,
    ApprovalRequiredError,
    AuthorizationError,
    ConcurrentModificationError,
    InvalidStateError,
    NotFoundError,
)
from models.enums import UserRole, WorkflowStatus
from models.project_workflow import ProjectWorkflow
from utils.activity import create_activity
from utils.project_helpers import get_active_project, mark_project_completed

logger = logging.getLogger(__name__)


WORKFLOW_STATUS_FIELD = "workflowStatus"
WORKFLOW_APPROVAL_FIELD = "workflowApproval"

ALLOWED_WORKFLOW_TRANSITIONS = {
    WorkflowStatus.received: WorkflowStatus.in_progress,
    WorkflowStatus.in_progress: WorkflowStatus.completed,
    WorkflowStatus.completed: WorkflowStatus.sent_to_customer,
}

STATUS_LABELS = {
    WorkflowStatus.received: "Received",
    WorkflowStatus.in_progress: "In progress",
    WorkflowStatus.completed: "Completed",
    WorkflowStatus.sent_to_customer: "Sent to customer",
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def is_approver(project, actor: dict) -> bool:
    return actor["role"] == UserRole.admin.value or project.manager_id == actor["id"]


# -------------------------------------------------------
# READ
# -------------------------------------------------------
def find_workflow(db: Session, project_id: int) -> ProjectWorkflow | None:
    return db.query(ProjectWorkflow).filter(
        ProjectWorkflow.project_id == project_id
    ).first()


def get_project_workflow(db: Session, project_id: int) -> ProjectWorkflow:
    """Return the workflow of a project, creating it at RECEIVED if missing."""
    get_active_project(db, project_id)

    workflow = find_workflow(db, project_id)
    if workflow:
        return workflow

    workflow = ProjectWorkflow(
        project_id=project_id,
        current_status=WorkflowStatus.received,
        received_start_at=utcnow(),
    )
    db.add(workflow)

    try:
        db.commit()
    except IntegrityError:
        # A concurrent first read created it; use theirs
        db.rollback()
        workflow = find_workflow(db, project_id)
        if workflow is None:
            raise
        return workflow

    logger.info(f"Created workflow for project {project_id}")
    db.refresh(workflow)
    return workflow


def _require_workflow(db: Session, project_id: int) -> ProjectWorkflow:
    # Soft-deleted projects answer 404 like the read does
    get_active_project(db, project_id)

    workflow = find_workflow(db, project_id)
    if not workflow:
        raise NotFoundError("Workflow", project_id, "Workflow not found for this project")
    return workflow


def _require_status(workflow: ProjectWorkflow, expected: WorkflowStatus) -> None:
    if workflow.current_status != expected:
        logger.warning(
            f"Rejected workflow transition for project {workflow.project_id}: "
            f"status is {workflow.current_status.value}, expected {expected.value}"
        )
        raise InvalidStateError(f'Project is not in the "{STATUS_LABELS[expected]}" state')


def _conditional_update(db: Session, project_id: int, conditions: list, values: dict) -> None:
    matched = db.query(ProjectWorkflow).filter(
        ProjectWorkflow.project_id == project_id,
        *conditions
    ).update(values, synchronize_session=False)

    if matched == 0:
        db.rollback()
        logger.warning(f"Concurrent modification of workflow for project {project_id}")
        raise ConcurrentModificationError(project_id)


def _advance(db: Session, workflow: ProjectWorkflow, actor: dict, values: dict, description: str, conditions=()) -> ProjectWorkflow:
    """Move the workflow one step forward and log it, in one transaction."""
    project_id = workflow.project_id
    old_status = workflow.current_status
    new_status = ALLOWED_WORKFLOW_TRANSITIONS[old_status]

    _conditional_update(
        db,
        project_id,
        [ProjectWorkflow.current_status == old_status, *conditions],
        {**values, "current_status": new_status},
    )

    create_activity(
        db,
        project_id,
        actor["id"],
        description,
        WORKFLOW_STATUS_FIELD,
        old_status.value,
        new_status.value,
    )

    if new_status == WorkflowStatus.sent_to_customer:
        mark_project_completed(db, project_id)

    db.commit()
    db.refresh(workflow)

    logger.info(
        f"User {actor['id']} moved workflow of project {project_id} "
        f"from {old_status.value} to {new_status.value}"
    )
    return workflow


# -------------------------------------------------------
# TRANSITIONS
# -------------------------------------------------------
def confirm_received(db: Session, project_id: int, actor: dict) -> ProjectWorkflow:
    """RECEIVED -> IN_PROGRESS. The in-progress phase starts at confirmation."""
    workflow = _require_workflow(db, project_id)
    _require_status(workflow, WorkflowStatus.received)

    now = utcnow()
    return _advance(
        db,
        workflow,
        actor,
        {"received_confirmed_at": now, "in_progress_start_at": now},
        'Confirmed information received, moved to "In progress"',
    )


def confirm_in_progress(db: Session, project_id: int, actor: dict) -> ProjectWorkflow:
    """IN_PROGRESS -> COMPLETED. Completion then awaits manager approval."""
    workflow = _require_workflow(db, project_id)
    _require_status(workflow, WorkflowStatus.in_progress)

    now = utcnow()
    return _advance(
        db,
        workflow,
        actor,
        {"in_progress_confirmed_at": now, "completed_start_at": now},
        "Confirmed work completed, awaiting manager approval",
    )


def approve_completed(db: Session, project_id: int, actor: dict) -> ProjectWorkflow:
    """Manager or admin sign-off on the COMPLETED phase.

    Sets the approval flag only; current_status stays COMPLETED.
    """
    project = get_active_project(db, project_id)

    if not is_approver(project, actor):
        logger.warning(f"User {actor['id']} is not allowed to approve project {project_id}")
        raise AuthorizationError("Only the project manager or an administrator can approve completion")

    workflow = _require_workflow(db, project_id)

    if workflow.completed_approved_at is not None:
        raise AlreadyApprovedError("Project completion has already been approved")

    _require_status(workflow, WorkflowStatus.completed)

    _conditional_update(
        db,
        project_id,
        [
            ProjectWorkflow.current_status == WorkflowStatus.completed,
            ProjectWorkflow.completed_approved_at.is_(None),
        ],
        {"completed_approved_at": utcnow(), "completed_approved_by_id": actor["id"]},
    )

    create_activity(
        db,
        project_id,
        actor["id"],
        "Manager approved completion, project can be sent to the customer",
        WORKFLOW_APPROVAL_FIELD,
        "pending",
        "approved",
    )

    db.commit()
    db.refresh(workflow)

    logger.info(f"User {actor['id']} approved completion of project {project_id}")
    return workflow


def confirm_sent_to_customer(db: Session, project_id: int, actor: dict) -> ProjectWorkflow:
    """COMPLETED (approved) -> SENT_TO_CUSTOMER, and mark the project completed."""
    workflow = _require_workflow(db, project_id)

    if workflow.completed_approved_at is None:
        logger.warning(f"Rejected send to customer for project {project_id}: completion not approved")
        raise ApprovalRequiredError(
            'The project manager must approve "Completed" before sending to the customer'
        )

    _require_status(workflow, WorkflowStatus.completed)

    now = utcnow()
    return _advance(
        db,
        workflow,
        actor,
        {"completed_confirmed_at": now, "sent_to_customer_at": now},
        "Confirmed sent to customer, project finished",
        conditions=[ProjectWorkflow.completed_approved_at.isnot(None)],
    )
