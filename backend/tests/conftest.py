"""Shared fixtures: a fresh database per test, users of every role, one agreement."""
import pytest
from fastapi.testclient import TestClient

from myra.api.auth import create_token
from myra.container import get_database
from myra.domain.access.rules import (
    ROLE_AGREEMENT_HOLDER,
    ROLE_RANGE_OFFICER,
    ROLE_READ_ONLY,
)
from myra.domain.issue.models import MinisterIssue, MinisterIssueAction, MinisterIssuePasture
from myra.domain.pasture.models import (
    IndicatorPlant,
    MonitoringArea,
    MonitoringAreaPurpose,
    Pasture,
    PlantCommunity,
    PlantCommunityAction,
)
from myra.domain.plan.models import AdditionalRequirement, ManagementConsideration, Plan, PlanVersion
from myra.domain.schedule.models import GrazingSchedule, GrazingScheduleEntry
from myra.domain.zone.models import District, User, Zone
from myra.main import app
from myra.persistence.db import Database, init_db
from myra.persistence.records import Records

AGREEMENT_ID = "RAN073124"
OTHER_AGREEMENT_ID = "RAN099999"
CLIENT_NUMBER = "00012345"


@pytest.fixture
def database(tmp_path):
    db = Database(str(tmp_path / "myra-test.db"))
    init_db(db)
    return db


@pytest.fixture
def records(database):
    return Records.from_database(database)


@pytest.fixture
def users(records):
    return {
        "admin": records.user.find_one({"username": "admin"}),
        "officer": records.user.create(User(username="officer", role=ROLE_RANGE_OFFICER)),
        "other_officer": records.user.create(User(username="other-officer", role=ROLE_RANGE_OFFICER)),
        "client": records.user.create(
            User(username="client", role=ROLE_AGREEMENT_HOLDER, client_id=CLIENT_NUMBER)
        ),
        "viewer": records.user.create(User(username="viewer", role=ROLE_READ_ONLY)),
    }


@pytest.fixture
def zones(records, users):
    district = records.district.create(District(code="DKA", description="Kamloops"))
    return {
        "assigned": records.zone.create(Zone(
            code="DKA1", description="Kamloops 1", district_id=district.id, user_id=users["officer"].id,
        )),
        "unassigned": records.zone.create(Zone(code="DKA2", description="Kamloops 2", district_id=district.id)),
    }


@pytest.fixture
def agreement(database, zones):
    with database.connection() as conn:
        conn.execute(
            "INSERT INTO agreement (id, agreement_start_date, agreement_end_date, zone_id) VALUES (?, ?, ?, ?)",
            (AGREEMENT_ID, "2019-01-01", "2043-12-31", zones["assigned"].id),
        )
        conn.execute(
            "INSERT INTO agreement (id, zone_id) VALUES (?, ?)",
            (OTHER_AGREEMENT_ID, zones["unassigned"].id),
        )
        conn.execute(
            "INSERT INTO client_agreement (agreement_id, client_id) VALUES (?, ?)",
            (AGREEMENT_ID, CLIENT_NUMBER),
        )
    return AGREEMENT_ID


@pytest.fixture
def plan_factory(records, agreement):
    """Creates a plan row plus its current-version marker."""
    def make_plan(agreement_id=AGREEMENT_ID, **fields):
        with records.db.transaction() as conn:
            plan = records.plan.create(Plan(agreement_id=agreement_id, status_id=1, **fields), conn=conn)
            records.plan_version.create(
                PlanVersion(canonical_id=plan.canonical_id, plan_id=plan.id), conn=conn
            )
        return plan
    return make_plan


@pytest.fixture
def plan(plan_factory):
    return plan_factory(range_name="Hat Creek")


@pytest.fixture
def client(database):
    app.dependency_overrides[get_database] = lambda: database
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def headers(users):
    return {
        role: {"Authorization": f"Bearer {create_token(user)}"}
        for role, user in users.items()
    }


@pytest.fixture
def populated_plan(records, plan):
    """
    Plan with two pastures, a plant community subtree on the first, a grazing
    schedule entry on the second and an issue touching both.
    """
    north = records.pasture.create(Pasture(plan_id=plan.id, name="North"))
    south = records.pasture.create(Pasture(plan_id=plan.id, name="South"))

    community = records.plant_community.create(
        PlantCommunity(pasture_id=north.id, community_type_id=1, purpose_of_action="establish")
    )
    records.indicator_plant.create(
        IndicatorPlant(plant_community_id=community.id, criteria="rangereadiness", plant_species_id=1)
    )
    area = records.monitoring_area.create(MonitoringArea(plant_community_id=community.id, name="Key area"))
    for purpose_type_id in (1, 2):
        records.monitoring_area_purpose.create(
            MonitoringAreaPurpose(monitoring_area_id=area.id, purpose_type_id=purpose_type_id)
        )
    records.plant_community_action.create(PlantCommunityAction(plant_community_id=community.id, action_type_id=1))

    schedule = records.grazing_schedule.create(GrazingSchedule(plan_id=plan.id, year=2024))
    records.grazing_schedule_entry.create(GrazingScheduleEntry(
        grazing_schedule_id=schedule.id, pasture_id=south.id, livestock_type_id=1, livestock_count=50,
    ))

    issue = records.minister_issue.create(MinisterIssue(plan_id=plan.id, issue_type_id=1, detail="Riparian damage"))
    records.minister_issue_action.create(MinisterIssueAction(issue_id=issue.id, action_type_id=1))
    for pasture in (north, south):
        records.minister_issue_pasture.create(MinisterIssuePasture(minister_issue_id=issue.id, pasture_id=pasture.id))

    records.additional_requirement.create(AdditionalRequirement(plan_id=plan.id, category_id=1))
    records.management_consideration.create(ManagementConsideration(plan_id=plan.id, consideration_type_id=1))
    return plan
