"""Plan creation, the eager-loaded plan graph, versions and duplication policies."""
from fastapi.testclient import TestClient

from myra.container import get_database
from myra.main import app
from myra.persistence.repositories.sqlite.sqlite_plan_repository import (
    SqliteManagementConsiderationRepository,
)


# ------------------------------------------------------------------
# Create
# ------------------------------------------------------------------
def test_create_plan(client, headers, agreement, users, records):
    resp = client.post(
        "/plan",
        json={"agreementId": agreement, "rangeName": "Hat Creek", "planStartDate": "2024-01-01", "statusId": 1},
        headers=headers["officer"],
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["rangeName"] == "Hat Creek"
    assert data["creatorId"] == users["officer"].id
    assert data["uploaded"] is True
    assert data["staffInitiated"] is False

    versions = records.plan_version.versions_for(data["id"])
    assert [v.version for v in versions] == [-1]


def test_create_plan_for_unknown_agreement(client, headers, agreement):
    resp = client.post("/plan", json={"agreementId": "RAN000000"}, headers=headers["admin"])
    assert resp.status_code == 404
    assert resp.json()["message"] == "Unable to find the related agreement"


def test_create_plan_outside_the_officers_zone(client, headers, agreement):
    resp = client.post("/plan", json={"agreementId": "RAN099999"}, headers=headers["officer"])
    assert resp.status_code == 403


def test_create_plan_requires_agreement(client, headers, agreement):
    resp = client.post("/plan", json={"rangeName": "Orphan"}, headers=headers["admin"])
    assert resp.status_code == 400


def test_create_plan_with_unknown_status(client, headers, agreement):
    resp = client.post("/plan", json={"agreementId": agreement, "statusId": 99}, headers=headers["admin"])
    assert resp.status_code == 400


def test_create_plan_with_unknown_amendment_type_or_null_flags(client, headers, agreement, records):
    resp = client.post("/plan", json={"agreementId": agreement, "amendmentTypeId": 99}, headers=headers["admin"])
    assert resp.status_code == 400
    assert resp.json()["message"] == 'Unacceptable amendment type with "99"'

    resp = client.post("/plan", json={"agreementId": agreement, "uploaded": None}, headers=headers["admin"])
    assert resp.status_code == 400
    assert resp.json()["message"] == 'Unacceptable null for "uploaded"'
    assert records.plan.find({"agreement_id": agreement}) == []


# ------------------------------------------------------------------
# Read
# ------------------------------------------------------------------
def test_get_plan_graph_uses_canonical_ids(client, headers, populated_plan, records):
    resp = client.get(f"/plan/{populated_plan.canonical_id}", headers=headers["viewer"])
    assert resp.status_code == 200
    data = resp.json()

    pastures = {p["name"]: p["id"] for p in data["pastures"]}
    assert set(pastures) == {"North", "South"}
    community = data["pastures"][0]["plantCommunities"][0]
    assert community["monitoringAreas"][0]["name"] == "Key area"
    assert len(community["indicatorPlants"]) == 1
    assert len(community["plantCommunityActions"]) == 1

    entry = data["grazingSchedules"][0]["grazingScheduleEntries"][0]
    assert entry["pastureId"] == pastures["South"]
    assert "grazingScheduleId" not in entry
    assert sorted(data["ministerIssues"][0]["pastures"]) == sorted(pastures.values())


def test_get_missing_plan(client, headers, plan):
    resp = client.get("/plan/9999", headers=headers["admin"])
    assert resp.status_code == 404


def test_get_plan_refused_outside_zone(client, headers, plan):
    resp = client.get(f"/plan/{plan.canonical_id}", headers=headers["other_officer"])
    assert resp.status_code == 403


# ------------------------------------------------------------------
# Duplicate
# ------------------------------------------------------------------
def test_duplicate_requires_policy(client, headers, plan):
    url = f"/plan/{plan.canonical_id}/duplicate"
    assert client.post(url, json={}, headers=headers["admin"]).status_code == 400
    assert client.post(url, json={"policy": "sideways"}, headers=headers["admin"]).status_code == 400


def test_duplicate_refused_for_read_only(client, headers, plan):
    resp = client.post(f"/plan/{plan.canonical_id}/duplicate", json={"policy": "newVersion"}, headers=headers["viewer"])
    assert resp.status_code == 403


def test_duplicate_as_new_version(client, headers, populated_plan, records):
    cid = populated_plan.canonical_id
    resp = client.post(f"/plan/{cid}/duplicate", json={"policy": "newVersion"}, headers=headers["admin"])
    assert resp.status_code == 200
    assert resp.json()["id"] == cid

    current = records.plan.find_current_version(cid)
    assert current.id != populated_plan.id

    versions = client.get(f"/plan/{cid}/versions", headers=headers["admin"]).json()
    assert [(v["version"], v["isCurrent"]) for v in versions] == [(-1, True), (1, False)]


def test_repeated_new_versions_are_numbered(client, headers, plan):
    url = f"/plan/{plan.canonical_id}"
    for _ in range(2):
        assert client.post(f"{url}/duplicate", json={"policy": "newVersion"}, headers=headers["admin"]).status_code == 200
    versions = client.get(f"{url}/versions", headers=headers["admin"]).json()
    assert [v["version"] for v in versions] == [-1, 2, 1]


def test_edits_after_new_version_land_on_the_copy(client, headers, populated_plan, records):
    cid = populated_plan.canonical_id
    client.post(f"/plan/{cid}/duplicate", json={"policy": "newVersion"}, headers=headers["admin"])
    north = records.pasture.find_one({"plan_id": populated_plan.id, "name": "North"})

    resp = client.put(f"/plan/{cid}/pasture/{north.canonical_id}", json={"notes": "edited"}, headers=headers["admin"])
    assert resp.status_code == 200

    assert records.pasture.find_by_id(north.id).notes is None
    current = records.plan.find_current_version(cid)
    copy = records.pasture.find_one({"plan_id": current.id, "canonical_id": north.canonical_id})
    assert copy.notes == "edited"


def test_duplicate_as_independent_plan(client, headers, populated_plan, records):
    cid = populated_plan.canonical_id
    resp = client.post(f"/plan/{cid}/duplicate", json={"policy": "independent"}, headers=headers["admin"])
    assert resp.status_code == 200
    new_cid = resp.json()["id"]
    assert new_cid != cid

    assert [v.version for v in records.plan_version.versions_for(cid)] == [-1]
    assert [v.version for v in records.plan_version.versions_for(new_cid)] == [-1]
    assert records.plan.find_current_version(cid).id == populated_plan.id

    copy = client.get(f"/plan/{new_cid}", headers=headers["admin"]).json()
    assert len(copy["pastures"]) == 2


def test_failed_duplication_leaves_versions_untouched(database, headers, populated_plan, records, monkeypatch):
    def boom(self, *args, **kwargs):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(SqliteManagementConsiderationRepository, "create", boom)
    app.dependency_overrides[get_database] = lambda: database
    try:
        client = TestClient(app, raise_server_exceptions=False)
        resp = client.post(
            f"/plan/{populated_plan.canonical_id}/duplicate", json={"policy": "newVersion"}, headers=headers["admin"]
        )
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert resp.json() == {"status": 500, "message": "Internal server error"}
    assert [v.version for v in records.plan_version.versions_for(populated_plan.canonical_id)] == [-1]
    assert len(records.plan.find()) == 1
