import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from core.exceptions import NotFoundError
from models.enums import ProjectStatus, WorkflowStatus
from models.project import Project
from models.project_workflow import ProjectWorkflow

logger = logging.getLogger(__name__)


def get_active_project(db: Session, project_id: int) -> Project:
    project = db.query(Project).filter(
        Project.id == project_id,
        Project.is_deleted == False  # noqa: E712
    ).first()

    if not project:
        raise NotFoundError("Project", project_id, "Project not found")

    return project


def mark_project_completed(db: Session, project_id: int) -> None:
    """Mirror the final workflow step onto the project's own status/progress."""
    db.query(Project).filter(Project.id == project_id).update(
        {"status": ProjectStatus.completed, "progress": 100},
        synchronize_session=False,
    )


def backfill_project_workflows(db: Session) -> int:
    """Create a RECEIVED workflow for every live project that has none."""
    missing = db.query(Project.id).outerjoin(
        ProjectWorkflow, ProjectWorkflow.project_id == Project.id
    ).filter(
        ProjectWorkflow.id.is_(None),
        Project.is_deleted == False  # noqa: E712
    ).all()

    now = datetime.now(timezone.utc)
    for (project_id,) in missing:
        db.add(ProjectWorkflow(
            project_id=project_id,
            current_status=WorkflowStatus.received,
            received_start_at=now,
        ))

    db.commit()

    if missing:
        logger.info(f"Backfilled workflows for {len(missing)} project(s)")

    return len(missing)
