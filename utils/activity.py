import logging
from typing import Optional

from sqlalchemy.orm import Session

from models.project_activity import ProjectActivity

logger = logging.getLogger(__name__)


def create_activity(
    db: Session,
    project_id: int,
    user_id: int,
    action: str,
    field_name: Optional[str] = None,
    old_value: Optional[str] = None,
    new_value: Optional[str] = None,
) -> ProjectActivity:
    """Append an audit entry to the current session.

    Nothing is committed here: the entry becomes durable with the caller's
    commit, together with the change it describes.
    """
    activity = ProjectActivity(
        project_id=project_id,
        user_id=user_id,
        action=action,
        field_name=field_name,
        old_value=None if old_value is None else str(old_value),
        new_value=None if new_value is None else str(new_value),
    )
    db.add(activity)
    logger.debug(f"Activity queued for project {project_id} by user {user_id}: {action}")
    return activity
