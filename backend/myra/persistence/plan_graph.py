"""Eager loading of a plan's owned tree, one query per parent."""
from __future__ import annotations
import sqlite3
from typing import List, Optional

from myra.domain.issue.models import MinisterIssue
from myra.domain.pasture.models import MonitoringArea, Pasture, PlantCommunity
from myra.domain.plan.models import Plan
from myra.domain.schedule.models import GrazingSchedule
from myra.persistence.records import Records


def fetch_monitoring_areas(
    records: Records, community_id: int, conn: sqlite3.Connection
) -> List[MonitoringArea]:
    areas = records.monitoring_area.find({"plant_community_id": community_id}, conn=conn)
    for area in areas:
        area.purposes = records.monitoring_area_purpose.find(
            {"monitoring_area_id": area.id}, conn=conn
        )
    return areas


def fetch_plant_communities(
    records: Records, pasture_id: int, conn: sqlite3.Connection
) -> List[PlantCommunity]:
    communities = records.plant_community.find({"pasture_id": pasture_id}, conn=conn)
    for community in communities:
        where = {"plant_community_id": community.id}
        community.indicator_plants = records.indicator_plant.find(where, conn=conn)
        community.monitoring_areas = fetch_monitoring_areas(records, community.id, conn)
        community.plant_community_actions = records.plant_community_action.find(where, conn=conn)
    return communities


def fetch_pastures(records: Records, plan_id: int, conn: sqlite3.Connection) -> List[Pasture]:
    pastures = records.pasture.find({"plan_id": plan_id}, conn=conn)
    for pasture in pastures:
        pasture.plant_communities = fetch_plant_communities(records, pasture.id, conn)
    return pastures


def fetch_grazing_schedules(
    records: Records, plan_id: int, conn: sqlite3.Connection
) -> List[GrazingSchedule]:
    schedules = records.grazing_schedule.find({"plan_id": plan_id}, order=("year", "asc"), conn=conn)
    for schedule in schedules:
        schedule.grazing_schedule_entries = records.grazing_schedule_entry.find(
            {"grazing_schedule_id": schedule.id}, conn=conn
        )
    return schedules


def fetch_minister_issues(
    records: Records, plan_id: int, conn: sqlite3.Connection
) -> List[MinisterIssue]:
    issues = records.minister_issue.find({"plan_id": plan_id}, conn=conn)
    for issue in issues:
        issue.pasture_ids = records.minister_issue_pasture.pasture_ids_for(issue.id, conn=conn)
        issue.minister_issue_actions = records.minister_issue_action.find(
            {"issue_id": issue.id}, conn=conn
        )
    return issues


def load_plan_graph(
    records: Records, plan_id: int, conn: Optional[sqlite3.Connection] = None
) -> Optional[Plan]:
    """Return the plan row with every one-to-many child attached, or None."""
    with records.db.connection(conn) as c:
        plan = records.plan.find_by_id(plan_id, conn=c)
        if plan is None:
            return None
        where = {"plan_id": plan.id}
        plan.pastures = fetch_pastures(records, plan.id, c)
        plan.grazing_schedules = fetch_grazing_schedules(records, plan.id, c)
        plan.minister_issues = fetch_minister_issues(records, plan.id, c)
        plan.additional_requirements = records.additional_requirement.find(where, conn=c)
        plan.management_considerations = records.management_consideration.find(where, conn=c)
    return plan
