from tests.factories import API, create_project_via_api


def test_project_activities_newest_first(client, users, admin_headers, user_headers):
    project = create_project_via_api(client, admin_headers, users["manager"]["id"])
    project_id = project["id"]

    client.post(f"{API}/projects/{project_id}/workflow/confirm-received", headers=user_headers)

    res = client.get(f"{API}/projects/{project_id}/activities", headers=user_headers)

    assert res.status_code == 200
    body = res.json()
    assert body["count"] == 2
    latest, created = body["results"]
    assert latest["field_name"] == "workflowStatus"
    assert (latest["old_value"], latest["new_value"]) == ("RECEIVED", "IN_PROGRESS")
    assert latest["user"]["id"] == users["user"]["id"]
    assert created["action"] == "Project created"


def test_project_activities_pagination(client, users, admin_headers, manager_headers):
    project = create_project_via_api(client, admin_headers, users["manager"]["id"])
    for progress in (10, 20, 30):
        client.put(f"{API}/projects/{project['id']}/", json={"progress": progress}, headers=manager_headers)

    res = client.get(
        f"{API}/projects/{project['id']}/activities",
        params={"page": 1, "page_size": 2},
        headers=manager_headers,
    )

    body = res.json()
    assert body["count"] == 4
    assert len(body["results"]) == 2
    assert body["next"].endswith("page=2&page_size=2")
    assert body["previous"] is None


def test_activities_of_missing_project(client, user_headers):
    assert client.get(f"{API}/projects/999999/activities", headers=user_headers).status_code == 404


def test_recent_activities_scoped_to_participation(client, users, admin_headers, other_manager_headers):
    project = create_project_via_api(client, admin_headers, users["manager"]["id"])

    admin_feed = client.get(f"{API}/activities", params={"limit": 100}, headers=admin_headers).json()
    assert project["id"] in [a["project_id"] for a in admin_feed]

    outsider_feed = client.get(f"{API}/activities", params={"limit": 100}, headers=other_manager_headers).json()
    assert project["id"] not in [a["project_id"] for a in outsider_feed]


def test_recent_activities_include_followed_projects(client, users, admin_headers, other_manager_headers):
    project = create_project_via_api(
        client, admin_headers, users["manager"]["id"], follower_ids=[users["other_manager"]["id"]]
    )

    feed = client.get(f"{API}/activities", params={"limit": 100}, headers=other_manager_headers).json()
    assert project["id"] in [a["project_id"] for a in feed]
