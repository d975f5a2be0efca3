"""Grazing schedules, minister issues, additional requirements and management considerations."""
import pytest


@pytest.fixture
def pastures(client, headers, plan):
    url = f"/plan/{plan.canonical_id}/pasture"
    return {
        name: client.post(url, json={"name": name}, headers=headers["admin"]).json()["id"]
        for name in ("North", "South")
    }


# ------------------------------------------------------------------
# Grazing schedule
# ------------------------------------------------------------------
def test_schedule_lifecycle(client, headers, plan, pastures, records):
    url = f"/plan/{plan.canonical_id}/schedule"
    resp = client.post(url, json={"year": 2024, "narative": "Rest rotation"}, headers=headers["admin"])
    assert resp.status_code == 200
    schedule = resp.json()
    assert schedule["year"] == 2024
    assert "planId" not in schedule

    resp = client.put(f"{url}/{schedule['id']}", json={"narative": "Deferred"}, headers=headers["admin"])
    assert resp.status_code == 200
    assert resp.json()["narative"] == "Deferred"

    resp = client.post(
        f"{url}/{schedule['id']}/entry",
        json={"pastureId": pastures["South"], "livestockTypeId": 1, "livestockCount": 40, "dateIn": "2024-05-01"},
        headers=headers["admin"],
    )
    assert resp.status_code == 200
    assert resp.json()["pastureId"] == pastures["South"]

    assert client.delete(f"{url}/{schedule['id']}", headers=headers["admin"]).status_code == 204
    assert records.grazing_schedule_entry.find() == []
    assert client.delete(f"{url}/{schedule['id']}", headers=headers["admin"]).status_code == 400


def test_schedule_requires_year(client, headers, plan):
    resp = client.post(f"/plan/{plan.canonical_id}/schedule", json={"narative": "No year"}, headers=headers["admin"])
    assert resp.status_code == 400


def test_update_missing_schedule(client, headers, plan):
    resp = client.put(f"/plan/{plan.canonical_id}/schedule/9999", json={"year": 2025}, headers=headers["admin"])
    assert resp.status_code == 404


@pytest.fixture
def entry_url(client, headers, plan):
    url = f"/plan/{plan.canonical_id}/schedule"
    schedule = client.post(url, json={"year": 2025}, headers=headers["admin"]).json()
    return f"{url}/{schedule['id']}/entry"


def test_entry_moves_between_pastures(client, headers, pastures, entry_url):
    entry = client.post(
        entry_url, json={"pastureId": pastures["North"], "livestockTypeId": 2}, headers=headers["admin"]
    ).json()
    resp = client.put(f"{entry_url}/{entry['id']}", json={"pastureId": pastures["South"]}, headers=headers["admin"])
    assert resp.status_code == 200
    assert resp.json()["pastureId"] == pastures["South"]
    assert resp.json()["livestockTypeId"] == 2


def test_entry_on_a_pasture_of_another_plan(client, headers, plan_factory, pastures, entry_url, records):
    other = plan_factory(range_name="Elsewhere")
    foreign = client.post(f"/plan/{other.canonical_id}/pasture", json={"name": "Foreign"}, headers=headers["admin"])
    resp = client.post(
        entry_url, json={"pastureId": foreign.json()["id"], "livestockTypeId": 1}, headers=headers["admin"]
    )
    assert resp.status_code == 404
    assert records.grazing_schedule_entry.find() == []


def test_entry_with_unknown_livestock(client, headers, pastures, entry_url):
    resp = client.post(entry_url, json={"pastureId": pastures["North"], "livestockTypeId": 99}, headers=headers["admin"])
    assert resp.status_code == 400


def test_destroy_entry(client, headers, pastures, entry_url):
    entry = client.post(
        entry_url, json={"pastureId": pastures["North"], "livestockTypeId": 1}, headers=headers["admin"]
    ).json()
    assert client.delete(f"{entry_url}/{entry['id']}", headers=headers["admin"]).status_code == 204
    assert client.delete(f"{entry_url}/{entry['id']}", headers=headers["admin"]).status_code == 400


# ------------------------------------------------------------------
# Minister issue
# ------------------------------------------------------------------
def test_store_issue_with_pastures(client, headers, plan, pastures):
    resp = client.post(
        f"/plan/{plan.canonical_id}/issue",
        json={"issueTypeId": 1, "detail": "Trampled banks", "pastures": [pastures["North"], pastures["South"]]},
        headers=headers["admin"],
    )
    assert resp.status_code == 200
    issue = resp.json()
    assert issue["identified"] is False
    assert sorted(issue["pastures"]) == sorted(pastures.values())
    assert "pastureIds" not in issue


def test_store_issue_with_unknown_pasture_writes_nothing(client, headers, plan, pastures, records):
    resp = client.post(
        f"/plan/{plan.canonical_id}/issue", json={"issueTypeId": 1, "pastures": [9999]}, headers=headers["admin"]
    )
    assert resp.status_code == 404
    assert records.minister_issue.find() == []


def test_update_issue_reconciles_pastures(client, headers, plan, pastures, records):
    url = f"/plan/{plan.canonical_id}/issue"
    issue = client.post(
        url, json={"issueTypeId": 2, "pastures": [pastures["North"], pastures["South"]]}, headers=headers["admin"]
    ).json()
    south_link = records.minister_issue_pasture.find_one(
        {"pasture_id": records.pasture.find_one({"canonical_id": pastures["South"]}).id}
    )

    resp = client.put(f"{url}/{issue['id']}", json={"pastures": [pastures["South"]]}, headers=headers["admin"])
    assert resp.status_code == 200
    assert resp.json()["pastures"] == [pastures["South"]]
    links = records.minister_issue_pasture.find()
    assert [link.id for link in links] == [south_link.id]

    resp = client.put(f"{url}/{issue['id']}", json={"identified": True}, headers=headers["admin"])
    assert resp.json()["identified"] is True
    assert resp.json()["pastures"] == [pastures["South"]]


def test_issue_action_lifecycle(client, headers, plan):
    url = f"/plan/{plan.canonical_id}/issue"
    issue = client.post(url, json={"issueTypeId": 3}, headers=headers["admin"]).json()
    action_url = f"{url}/{issue['id']}/action"

    assert client.post(action_url, json={"actionTypeId": 99}, headers=headers["admin"]).status_code == 400
    resp = client.post(action_url, json={"actionTypeId": 1, "detail": "Move cattle"}, headers=headers["admin"])
    assert resp.status_code == 200
    action = resp.json()
    assert "issueId" not in action

    resp = client.put(f"{action_url}/{action['id']}", json={"other": "Fence"}, headers=headers["admin"])
    assert resp.status_code == 200
    assert resp.json()["other"] == "Fence"

    assert client.delete(f"{action_url}/{action['id']}", headers=headers["admin"]).status_code == 204
    assert client.delete(f"{url}/{issue['id']}", headers=headers["admin"]).status_code == 204
    assert client.delete(f"{url}/{issue['id']}", headers=headers["admin"]).status_code == 400


def test_action_on_missing_issue(client, headers, plan):
    resp = client.post(f"/plan/{plan.canonical_id}/issue/9999/action", json={"actionTypeId": 1}, headers=headers["admin"])
    assert resp.status_code == 404


# ------------------------------------------------------------------
# Additional requirements and management considerations
# ------------------------------------------------------------------
def test_additional_requirement_lifecycle(client, headers, plan):
    url = f"/plan/{plan.canonical_id}/additionalRequirement"
    assert client.post(url, json={"categoryId": 42}, headers=headers["admin"]).status_code == 400
    resp = client.post(url, json={"categoryId": 1, "detail": "Water licence"}, headers=headers["admin"])
    assert resp.status_code == 200
    requirement = resp.json()
    assert requirement["categoryId"] == 1

    resp = client.put(f"{url}/{requirement['id']}", json={"url": "https://example.org"}, headers=headers["admin"])
    assert resp.json()["url"] == "https://example.org"
    assert client.delete(f"{url}/{requirement['id']}", headers=headers["admin"]).status_code == 204


def test_management_consideration_lifecycle(client, headers, plan):
    url = f"/plan/{plan.canonical_id}/managementConsideration"
    assert client.post(url, json={"detail": "No type"}, headers=headers["admin"]).status_code == 400
    resp = client.post(url, json={"considerationTypeId": 2, "detail": "Calving"}, headers=headers["admin"])
    assert resp.status_code == 200
    consideration = resp.json()

    assert client.put(f"{url}/9999", json={"detail": "x"}, headers=headers["admin"]).status_code == 404
    assert client.delete(f"{url}/{consideration['id']}", headers=headers["admin"]).status_code == 204
    assert client.delete(f"{url}/{consideration['id']}", headers=headers["admin"]).status_code == 400


def test_requirements_refused_for_read_only(client, headers, plan):
    resp = client.post(
        f"/plan/{plan.canonical_id}/additionalRequirement", json={"categoryId": 1}, headers=headers["viewer"]
    )
    assert resp.status_code == 403


# ------------------------------------------------------------------
# Nulls on required columns
# ------------------------------------------------------------------
def test_schedule_and_entry_refuse_null_for_required_fields(client, headers, plan, pastures, records):
    url = f"/plan/{plan.canonical_id}/schedule"
    schedule = client.post(url, json={"year": 2026}, headers=headers["admin"]).json()

    resp = client.put(f"{url}/{schedule['id']}", json={"year": None}, headers=headers["admin"])
    assert resp.status_code == 400
    assert resp.json() == {"status": 400, "message": 'Unacceptable null for "year"'}
    assert records.grazing_schedule.find_one({"canonical_id": schedule["id"]}).year == 2026

    entry = client.post(
        f"{url}/{schedule['id']}/entry",
        json={"pastureId": pastures["North"], "livestockTypeId": 1},
        headers=headers["admin"],
    ).json()
    resp = client.put(
        f"{url}/{schedule['id']}/entry/{entry['id']}", json={"pastureId": None}, headers=headers["admin"]
    )
    assert resp.status_code == 400


def test_issue_updates_refuse_null_for_required_fields(client, headers, plan, records):
    url = f"/plan/{plan.canonical_id}/issue"
    issue = client.post(url, json={"issueTypeId": 2}, headers=headers["admin"]).json()
    action = client.post(f"{url}/{issue['id']}/action", json={"actionTypeId": 1}, headers=headers["admin"]).json()

    assert client.put(f"{url}/{issue['id']}", json={"issueTypeId": None}, headers=headers["admin"]).status_code == 400
    assert client.put(f"{url}/{issue['id']}", json={"identified": None}, headers=headers["admin"]).status_code == 400
    resp = client.put(
        f"{url}/{issue['id']}/action/{action['id']}", json={"actionTypeId": None}, headers=headers["admin"]
    )
    assert resp.status_code == 400
    assert client.post(url, json={"issueTypeId": 1, "identified": None}, headers=headers["admin"]).status_code == 400

    stored = records.minister_issue.find_one({"canonical_id": issue["id"]})
    assert stored.issue_type_id == 2
    assert stored.identified is False


def test_requirement_updates_refuse_null_type(client, headers, plan):
    requirement_url = f"/plan/{plan.canonical_id}/additionalRequirement"
    requirement = client.post(requirement_url, json={"categoryId": 1}, headers=headers["admin"]).json()
    resp = client.put(f"{requirement_url}/{requirement['id']}", json={"categoryId": None}, headers=headers["admin"])
    assert resp.status_code == 400

    consideration_url = f"/plan/{plan.canonical_id}/managementConsideration"
    consideration = client.post(consideration_url, json={"considerationTypeId": 1}, headers=headers["admin"]).json()
    resp = client.put(
        f"{consideration_url}/{consideration['id']}", json={"considerationTypeId": None}, headers=headers["admin"]
    )
    assert resp.status_code == 400
