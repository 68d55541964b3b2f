import logging
from typing import List

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy import or_, select
from sqlalchemy.orm import Session, joinedload

from api.deps import get_current_user
from db import get_db
from models.enums import UserRole
from models.project import Project, project_followers, project_implementers
from models.project_activity import ProjectActivity
from schemas.activity import ProjectActivityOut
from schemas.common import PaginatedResponse
from utils.pagination import paginate_queryset
from utils.project_helpers import get_active_project

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Activities"])


#------------------------------
# Activity history of a project
#------------------------------
@router.get("/projects/{project_id}/activities", response_model=PaginatedResponse)
def list_project_activities(
    project_id: int,
    request: Request,
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    get_active_project(db, project_id)

    query = db.query(ProjectActivity).options(
        joinedload(ProjectActivity.user)
    ).filter(
        ProjectActivity.project_id == project_id
    ).order_by(ProjectActivity.created_at.desc(), ProjectActivity.id.desc())

    base_url = str(request.url).split("?")[0]
    return paginate_queryset(query, page, page_size, base_url, ProjectActivityOut)


#------------------------------
# Recent activity for the dashboard
#------------------------------
@router.get("/activities", response_model=List[ProjectActivityOut])
def list_recent_activities(
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    query = db.query(ProjectActivity).options(
        joinedload(ProjectActivity.user)
    ).join(Project, Project.id == ProjectActivity.project_id).filter(
        Project.is_deleted == False  # noqa: E712
    )

    # Non-admins only see projects they take part in
    if current_user["role"] != UserRole.admin.value:
        user_id = current_user["id"]
        implementer_projects = select(project_implementers.c.project_id).where(
            project_implementers.c.user_id == user_id
        )
        follower_projects = select(project_followers.c.project_id).where(
            project_followers.c.user_id == user_id
        )
        query = query.filter(or_(
            Project.manager_id == user_id,
            Project.id.in_(implementer_projects),
            Project.id.in_(follower_projects),
        ))

    activities = query.order_by(
        ProjectActivity.created_at.desc(), ProjectActivity.id.desc()
    ).limit(limit).all()

    logger.info(f"User {current_user['id']} accessed recent activities (limit={limit})")

    return activities
