import uuid

from models.enums import WorkflowStatus
from models.project import Project
from models.project_workflow import ProjectWorkflow
from utils.workflow import utcnow

API = "/api"
TEST_PASSWORD = "Password123"


def fake_code():
    return "PRJ-" + uuid.uuid4().hex[:8].upper()


def fake_project(manager_id, **overrides):
    payload = {
        "code": fake_code(),
        "name": "Project " + uuid.uuid4().hex[:5],
        "description": "Test project",
        "progress_method": "manual",
        "manager_id": manager_id,
        "implementer_ids": [],
        "follower_ids": [],
    }
    payload.update(overrides)
    return payload


def create_project_via_api(client, headers, manager_id, **overrides):
    res = client.post(f"{API}/projects/", json=fake_project(manager_id, **overrides), headers=headers)
    assert res.status_code == 200, res.text
    return res.json()


def create_project_row(db, manager_id, with_workflow=True, status=WorkflowStatus.received, **workflow_fields):
    """Insert a project directly, optionally with its workflow at a given status."""
    project = Project(
        code=fake_code(),
        name="Project " + uuid.uuid4().hex[:5],
        progress_method="manual",
        manager_id=manager_id,
    )
    db.add(project)
    db.flush()

    if with_workflow:
        db.add(ProjectWorkflow(
            project_id=project.id,
            current_status=status,
            received_start_at=utcnow(),
            **workflow_fields,
        ))

    db.commit()
    return project.id
