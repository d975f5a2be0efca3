"""Monitoring areas and the reconciliation of their purpose set."""
import pytest


@pytest.fixture
def area_url(client, headers, plan):
    admin = headers["admin"]
    pasture = client.post(f"/plan/{plan.canonical_id}/pasture", json={"name": "Upper"}, headers=admin).json()
    community = client.post(
        f"/plan/{plan.canonical_id}/pasture/{pasture['id']}/plantCommunity",
        json={"communityTypeId": 2, "purposeOfAction": "none"},
        headers=admin,
    ).json()
    return f"/plan/{plan.canonical_id}/pasture/{pasture['id']}/plantCommunity/{community['id']}/monitoringArea"


def _purpose_rows(records, area_canonical_id):
    area = records.monitoring_area.find_one({"canonical_id": area_canonical_id})
    return {p.purpose_type_id: p.id for p in records.monitoring_area_purpose.find({"monitoring_area_id": area.id})}


def test_store_monitoring_area_with_purposes(client, headers, area_url, records):
    resp = client.post(
        area_url,
        json={"name": "Key area 1", "purposeTypeIds": [1, 2, 3], "latitude": 50.7, "longitude": -120.3},
        headers=headers["admin"],
    )
    assert resp.status_code == 200
    area = resp.json()
    assert area["name"] == "Key area 1"
    assert [p["purposeTypeId"] for p in area["purposes"]] == [1, 2, 3]
    assert all("monitoringAreaId" not in p for p in area["purposes"])
    assert set(_purpose_rows(records, area["id"])) == {1, 2, 3}


def test_store_monitoring_area_requires_name_and_purposes(client, headers, area_url):
    assert client.post(area_url, json={"purposeTypeIds": [1]}, headers=headers["admin"]).status_code == 400
    assert client.post(area_url, json={"name": "No purposes"}, headers=headers["admin"]).status_code == 400


def test_store_monitoring_area_rejects_unknown_purpose(client, headers, area_url, records):
    resp = client.post(area_url, json={"name": "Bad", "purposeTypeIds": [1, 42]}, headers=headers["admin"])
    assert resp.status_code == 400
    assert records.monitoring_area.find() == []
    assert records.monitoring_area_purpose.find() == []


def test_update_reconciles_purposes_as_a_set(client, headers, area_url, records):
    area = client.post(area_url, json={"name": "Key", "purposeTypeIds": [1, 2, 3]}, headers=headers["admin"]).json()
    before = _purpose_rows(records, area["id"])

    resp = client.put(f"{area_url}/{area['id']}", json={"purposeTypeIds": [2, 3, 4]}, headers=headers["admin"])
    assert resp.status_code == 200
    assert sorted(p["purposeTypeId"] for p in resp.json()["purposes"]) == [2, 3, 4]

    after = _purpose_rows(records, area["id"])
    assert set(after) == {2, 3, 4}
    assert after[2] == before[2]
    assert after[3] == before[3]


def test_update_with_only_purposes_leaves_the_row_alone(client, headers, area_url, records):
    area = client.post(area_url, json={"name": "Key", "purposeTypeIds": [1]}, headers=headers["admin"]).json()
    resp = client.put(f"{area_url}/{area['id']}", json={"purposeTypeIds": [1, 5]}, headers=headers["admin"])
    assert resp.status_code == 200
    assert resp.json()["name"] == "Key"
    assert resp.json()["updatedAt"] == area["updatedAt"]


def test_update_fields_and_purposes_together(client, headers, area_url):
    area = client.post(area_url, json={"name": "Key", "purposeTypeIds": [1]}, headers=headers["admin"]).json()
    resp = client.put(
        f"{area_url}/{area['id']}",
        json={"name": "Renamed", "healthId": 5, "purposeTypeIds": [1]},
        headers=headers["admin"],
    )
    assert resp.status_code == 200
    assert resp.json()["name"] == "Renamed"
    assert resp.json()["healthId"] == 5


def test_update_rejects_unknown_purpose_and_keeps_existing(client, headers, area_url, records):
    area = client.post(area_url, json={"name": "Key", "purposeTypeIds": [1, 2]}, headers=headers["admin"]).json()
    resp = client.put(f"{area_url}/{area['id']}", json={"purposeTypeIds": [2, 77]}, headers=headers["admin"])
    assert resp.status_code == 400
    assert set(_purpose_rows(records, area["id"])) == {1, 2}


def test_update_missing_area(client, headers, area_url):
    resp = client.put(f"{area_url}/9999", json={"purposeTypeIds": [1]}, headers=headers["admin"])
    assert resp.status_code == 404


def test_destroy_monitoring_area_removes_purposes(client, headers, area_url, records):
    area = client.post(area_url, json={"name": "Key", "purposeTypeIds": [1, 2]}, headers=headers["admin"]).json()
    assert client.delete(f"{area_url}/{area['id']}", headers=headers["admin"]).status_code == 204
    assert records.monitoring_area.find() == []
    assert records.monitoring_area_purpose.find() == []
    assert client.delete(f"{area_url}/{area['id']}", headers=headers["admin"]).status_code == 400


def test_store_rejects_unknown_health(client, headers, area_url, records):
    resp = client.post(
        area_url, json={"name": "K", "purposeTypeIds": [1], "healthId": 999}, headers=headers["admin"]
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == 'Unacceptable monitoring area health with "999"'
    assert records.monitoring_area.find() == []
    assert records.monitoring_area_purpose.find() == []


def test_update_refuses_null_name_and_unknown_health(client, headers, area_url, records):
    area = client.post(area_url, json={"name": "Key", "purposeTypeIds": [1, 2]}, headers=headers["admin"]).json()
    url = f"{area_url}/{area['id']}"

    resp = client.put(url, json={"name": None, "purposeTypeIds": [1, 2]}, headers=headers["admin"])
    assert resp.status_code == 400
    assert resp.json()["message"] == 'Unacceptable null for "name"'

    resp = client.put(url, json={"healthId": 999, "purposeTypeIds": [1]}, headers=headers["admin"])
    assert resp.status_code == 400

    assert records.monitoring_area.find_one({"canonical_id": area["id"]}).name == "Key"
    assert set(_purpose_rows(records, area["id"])) == {1, 2}

    resp = client.put(url, json={"healthId": 2, "purposeTypeIds": [1, 2]}, headers=headers["admin"])
    assert resp.status_code == 200
    assert resp.json()["healthId"] == 2
