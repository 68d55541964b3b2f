# ------------------------------------------------------------
# PROJECT CRUD
# ------------------------------------------------------------

import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from api.deps import get_current_user, require_role
from db import get_db
from models.enums import UserRole, WorkflowStatus
from models.project import Project
from models.project_workflow import ProjectWorkflow
from models.user import User
from schemas.common import PaginatedResponse
from schemas.project import ProjectCreate, ProjectFilters, ProjectOut, ProjectUpdate
from utils.activity import create_activity
from utils.pagination import paginate_queryset
from utils.project_helpers import get_active_project
from utils.workflow import is_approver, utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["Projects"])

# Scalar fields tracked in the activity log on update
TRACKED_FIELDS = (
    "code",
    "name",
    "description",
    "start_date",
    "end_date",
    "duration",
    "group",
    "value",
    "progress_method",
    "manager_id",
    "status",
    "progress",
)

# Tracked fields that may be cleared by sending null
NULLABLE_FIELDS = (
    "description",
    "start_date",
    "end_date",
    "duration",
    "group",
    "value",
)


def _load_users(db: Session, user_ids: list[int]) -> list[User]:
    if not user_ids:
        return []

    users = db.query(User).filter(User.id.in_(user_ids)).all()
    if len(users) != len(set(user_ids)):
        raise HTTPException(400, "One or more users do not exist")
    return users


def _display(value):
    if value is None:
        return None
    return value.value if hasattr(value, "value") else str(value)


# -------------------------------------------------------
# CREATE PROJECT
# -------------------------------------------------------
@router.post("/", response_model=ProjectOut)
def create_project(
    payload: ProjectCreate,
    db: Session = Depends(get_db),
    current_user=Depends(
        require_role([
            UserRole.admin,
            UserRole.manager,
        ])
    ),
):
    if db.query(Project).filter(Project.code == payload.code).first():
        raise HTTPException(400, "Project code already exists")

    if not db.query(User).filter(User.id == payload.manager_id).first():
        raise HTTPException(400, "Manager does not exist")

    try:
        # -------------------------------------------------------------
        # STEP 1 — Base project
        # -------------------------------------------------------------
        project = Project(
            **payload.model_dump(exclude={"manager_id", "implementer_ids", "follower_ids"}),
            manager_id=payload.manager_id,
        )
        db.add(project)
        db.flush()  # ensures project.id is generated

        # -------------------------------------------------------------
        # STEP 2 — Implementers / followers
        # -------------------------------------------------------------
        project.implementers = _load_users(db, payload.implementer_ids)
        project.followers = _load_users(db, payload.follower_ids)

        # -------------------------------------------------------------
        # STEP 3 — Workflow starts at RECEIVED
        # -------------------------------------------------------------
        db.add(ProjectWorkflow(
            project_id=project.id,
            current_status=WorkflowStatus.received,
            received_start_at=utcnow(),
        ))

        create_activity(db, project.id, current_user["id"], "Project created")

        db.commit()
        db.refresh(project)

    except Exception:
        db.rollback()
        raise

    logger.info(f"User {current_user['id']} created project {project.id} ({project.code})")
    return project


# -------------------------------------------------------
# GET ALL PROJECTS
# -------------------------------------------------------
@router.get("/", response_model=PaginatedResponse)
def get_projects(
    request: Request,
    filters: ProjectFilters = Depends(),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    query = db.query(Project).filter(Project.is_deleted == False)  # noqa: E712

    # ------------------------------
    # Filters
    # ------------------------------
    if filters.name:
        query = query.filter(Project.name.ilike(f"%{filters.name}%"))

    if filters.status:
        query = query.filter(Project.status == filters.status)

    if filters.manager_id:
        query = query.filter(Project.manager_id == filters.manager_id)

    # Sorting
    if filters.sort == "asc":
        query = query.order_by(Project.created_at.asc(), Project.id.asc())
    else:
        query = query.order_by(Project.created_at.desc(), Project.id.desc())

    base_url = str(request.url).split("?")[0]
    return paginate_queryset(query, page, page_size, base_url, ProjectOut)


# -------------------------------------------------------
# GET SINGLE PROJECT
# -------------------------------------------------------
@router.get("/{project_id}/", response_model=ProjectOut)
def get_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return get_active_project(db, project_id)


# -------------------------------------------------------
# UPDATE PROJECT
# -------------------------------------------------------
@router.put("/{project_id}/", response_model=ProjectOut)
def update_project(
    project_id: int,
    payload: ProjectUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    project = get_active_project(db, project_id)

    if not is_approver(project, current_user):
        raise HTTPException(403, "Only the project manager or an administrator can edit this project")

    update_data = payload.model_dump(exclude_unset=True)

    if "code" in update_data and update_data["code"] != project.code:
        if db.query(Project).filter(Project.code == update_data["code"]).first():
            raise HTTPException(400, "Project code already exists")

    if "manager_id" in update_data:
        if not db.query(User).filter(User.id == update_data["manager_id"]).first():
            raise HTTPException(400, "Manager does not exist")

    # ------------------------------------------------
    # Scalar fields, one activity entry per change
    # ------------------------------------------------
    for field in TRACKED_FIELDS:
        if field not in update_data:
            continue
        if update_data[field] is None and field not in NULLABLE_FIELDS:
            continue

        old_value = getattr(project, field)
        new_value = update_data[field]
        if old_value == new_value:
            continue

        setattr(project, field, new_value)
        create_activity(
            db,
            project.id,
            current_user["id"],
            f"Updated {field}",
            field,
            _display(old_value),
            _display(new_value),
        )

    # ------------------------------------------------
    # Implementers / followers
    # ------------------------------------------------
    if payload.implementer_ids is not None:
        project.implementers = _load_users(db, payload.implementer_ids)

    if payload.follower_ids is not None:
        project.followers = _load_users(db, payload.follower_ids)

    db.commit()
    db.refresh(project)

    logger.info(f"User {current_user['id']} updated project {project.id}")
    return project


# -------------------------------------------------------
# DELETE PROJECT (SOFT DELETE)
# -------------------------------------------------------
@router.delete("/{project_id}/", status_code=204)
def delete_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(require_role([UserRole.admin])),
):
    project = get_active_project(db, project_id)

    project.is_deleted = True
    db.commit()

    logger.info(f"User {current_user['id']} deleted project {project_id}")
    return None
