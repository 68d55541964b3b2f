from models.project_workflow import ProjectWorkflow
from tests.factories import API, create_project_via_api, fake_project


def test_create_project_starts_workflow(client, db, users, admin_headers):
    implementer_id = users["user"]["id"]
    project = create_project_via_api(
        client, admin_headers, users["manager"]["id"], implementer_ids=[implementer_id]
    )

    assert project["status"] == "IN_PROGRESS"
    assert project["progress"] == 0
    assert project["manager"]["id"] == users["manager"]["id"]
    assert [u["id"] for u in project["implementers"]] == [implementer_id]

    workflow = db.query(ProjectWorkflow).filter(ProjectWorkflow.project_id == project["id"]).one()
    assert workflow.current_status.value == "RECEIVED"
    assert workflow.received_start_at is not None


def test_manager_can_create_project(client, users, manager_headers):
    project = create_project_via_api(client, manager_headers, users["manager"]["id"])
    assert project["code"].startswith("PRJ-")


def test_user_cannot_create_project(client, users, user_headers):
    res = client.post(f"{API}/projects/", json=fake_project(users["manager"]["id"]), headers=user_headers)
    assert res.status_code == 403


def test_duplicate_code_rejected(client, users, admin_headers):
    payload = fake_project(users["manager"]["id"])
    assert client.post(f"{API}/projects/", json=payload, headers=admin_headers).status_code == 200

    res = client.post(f"{API}/projects/", json=payload, headers=admin_headers)
    assert res.status_code == 400
    assert res.json()["detail"] == "Project code already exists"


def test_unknown_manager_rejected(client, admin_headers):
    res = client.post(f"{API}/projects/", json=fake_project(999999), headers=admin_headers)
    assert res.status_code == 400


def test_list_projects_filters_by_name(client, users, admin_headers, user_headers):
    project = create_project_via_api(client, admin_headers, users["manager"]["id"], name="Bridge inspection")

    res = client.get(f"{API}/projects/", params={"name": "bridge insp"}, headers=user_headers)

    assert res.status_code == 200
    body = res.json()
    assert body["count"] >= 1
    assert project["id"] in [p["id"] for p in body["results"]]


def test_get_missing_project(client, user_headers):
    res = client.get(f"{API}/projects/999999/", headers=user_headers)
    assert res.status_code == 404


def test_update_project_logs_changed_fields(client, users, admin_headers, manager_headers):
    project = create_project_via_api(client, admin_headers, users["manager"]["id"])

    res = client.put(
        f"{API}/projects/{project['id']}/",
        json={"name": "Renamed", "progress": 40, "description": project["description"]},
        headers=manager_headers,
    )
    assert res.status_code == 200, res.text
    assert res.json()["name"] == "Renamed"
    assert res.json()["progress"] == 40

    activities = client.get(f"{API}/projects/{project['id']}/activities", headers=manager_headers).json()
    fields = {a["field_name"]: (a["old_value"], a["new_value"]) for a in activities["results"]}
    assert fields["progress"] == ("0", "40")
    assert fields["name"][1] == "Renamed"
    assert "description" not in fields


def test_only_manager_or_admin_can_update(client, users, admin_headers, other_manager_headers):
    project = create_project_via_api(client, admin_headers, users["manager"]["id"])

    res = client.put(f"{API}/projects/{project['id']}/", json={"name": "Nope"}, headers=other_manager_headers)
    assert res.status_code == 403


def test_soft_delete_hides_project_and_workflow(client, users, admin_headers, manager_headers):
    project = create_project_via_api(client, admin_headers, users["manager"]["id"])

    assert client.delete(f"{API}/projects/{project['id']}/", headers=manager_headers).status_code == 403
    assert client.delete(f"{API}/projects/{project['id']}/", headers=admin_headers).status_code == 204

    assert client.get(f"{API}/projects/{project['id']}/", headers=admin_headers).status_code == 404
    assert client.get(f"{API}/projects/{project['id']}/workflow", headers=admin_headers).status_code == 404


def test_update_rejects_blank_required_text(client, users, admin_headers, manager_headers):
    project = create_project_via_api(client, admin_headers, users["manager"]["id"])
    url = f"{API}/projects/{project['id']}/"

    for payload in ({"name": " "}, {"code": "  "}, {"progress_method": ""}):
        res = client.put(url, json=payload, headers=manager_headers)
        assert res.status_code == 422, payload

    assert client.get(url, headers=manager_headers).json()["name"] == project["name"]
    assert client.get(f"{API}/projects/", headers=manager_headers).status_code == 200


def test_update_can_clear_optional_fields(client, users, admin_headers, manager_headers):
    project = create_project_via_api(
        client, admin_headers, users["manager"]["id"], group="Infra", value=1500.0
    )
    url = f"{API}/projects/{project['id']}/"

    res = client.put(url, json={"description": None, "group": None, "value": None, "name": None}, headers=manager_headers)

    assert res.status_code == 200, res.text
    body = res.json()
    assert body["description"] is None
    assert body["group"] is None
    assert body["value"] is None
    # required fields ignore null
    assert body["name"] == project["name"]

    activities = client.get(f"{API}/projects/{project['id']}/activities", headers=manager_headers).json()
    fields = {a["field_name"]: (a["old_value"], a["new_value"]) for a in activities["results"]}
    assert fields["group"] == ("Infra", None)
    assert "name" not in fields


def test_list_rejects_invalid_page(client, user_headers):
    assert client.get(f"{API}/projects/", params={"page": 0}, headers=user_headers).status_code == 422
    assert client.get(f"{API}/projects/", params={"page_size": 0}, headers=user_headers).status_code == 422
