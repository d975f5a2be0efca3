"""Deep copy of a plan graph with foreign keys remapped onto the new rows."""
from __future__ import annotations
import logging
import sqlite3
from dataclasses import replace
from typing import Callable, Dict, Iterable, List, Tuple, TypeVar

from myra.domain.common.errors import DuplicationConsistencyError, PlanNotFoundError
from myra.domain.issue.models import MinisterIssue, MinisterIssuePasture
from myra.domain.pasture.models import MonitoringArea, Pasture, PlantCommunity
from myra.domain.plan.models import Plan
from myra.domain.schedule.models import GrazingSchedule
from myra.persistence.interfaces.record_repository import RecordRepository
from myra.persistence.plan_graph import load_plan_graph
from myra.persistence.records import Records

T = TypeVar("T")

logger = logging.getLogger(__name__)


def duplicate_each(
    repo: RecordRepository[T],
    rows: Iterable[T],
    remap: Callable[[T], T],
    conn: sqlite3.Connection,
) -> List[Tuple[T, T]]:
    """
    Insert a copy of every row with its id stripped and its foreign keys set by
    `remap`. Returns (new row, original row) pairs so that the caller can copy
    the original's children under the new row's id.
    """
    return [(repo.create(remap(replace(row, id=None)), conn=conn), row) for row in rows]


class PlanDuplicator:
    """
    Copies one plan and everything it owns. Each level keeps its own
    original-id to new-id mapping; the pasture mapping is also handed to the
    grazing schedule and minister issue branches, which point at pastures.
    """

    def __init__(self, records: Records):
        self._r = records

    def duplicate_all(self, plan_id: int, conn: sqlite3.Connection) -> Plan:
        """
        Must run inside the caller's transaction. The copy keeps the source
        canonical_id; what that means for versioning is the caller's decision.
        """
        source = load_plan_graph(self._r, plan_id, conn=conn)
        if source is None:
            raise PlanNotFoundError(plan_id)

        logger.info("Duplicating plan %s (canonical id %s)", source.id, source.canonical_id)
        new_plan = self._r.plan.create(replace(source, id=None), conn=conn)

        pasture_ids: Dict[int, int] = {}
        for new_pasture, old_pasture in duplicate_each(
            self._r.pasture,
            source.pastures,
            lambda p: replace(p, plan_id=new_plan.id),
            conn,
        ):
            new_pasture.plant_communities = self._duplicate_communities(
                old_pasture, new_pasture, conn
            )
            pasture_ids[old_pasture.id] = new_pasture.id
            new_plan.pastures.append(new_pasture)

        new_plan.grazing_schedules = self._duplicate_schedules(
            source, new_plan, pasture_ids, conn
        )
        new_plan.minister_issues = self._duplicate_issues(source, new_plan, pasture_ids, conn)
        new_plan.additional_requirements = [
            new for new, _ in duplicate_each(
                self._r.additional_requirement,
                source.additional_requirements,
                lambda r: replace(r, plan_id=new_plan.id),
                conn,
            )
        ]
        new_plan.management_considerations = [
            new for new, _ in duplicate_each(
                self._r.management_consideration,
                source.management_considerations,
                lambda m: replace(m, plan_id=new_plan.id),
                conn,
            )
        ]

        logger.info("Plan %s duplicated into plan %s", source.id, new_plan.id)
        return new_plan

    # ------------------------------------------------------------------
    # Pasture subtree
    # ------------------------------------------------------------------
    def _duplicate_communities(
        self, old_pasture: Pasture, new_pasture: Pasture, conn: sqlite3.Connection
    ) -> List[PlantCommunity]:
        communities = []
        for new_community, old_community in duplicate_each(
            self._r.plant_community,
            old_pasture.plant_communities,
            lambda pc: replace(pc, pasture_id=new_pasture.id),
            conn,
        ):
            new_community.indicator_plants = [
                new for new, _ in duplicate_each(
                    self._r.indicator_plant,
                    old_community.indicator_plants,
                    lambda ip: replace(ip, plant_community_id=new_community.id),
                    conn,
                )
            ]
            new_community.monitoring_areas = self._duplicate_areas(
                old_community, new_community, conn
            )
            new_community.plant_community_actions = [
                new for new, _ in duplicate_each(
                    self._r.plant_community_action,
                    old_community.plant_community_actions,
                    lambda a: replace(a, plant_community_id=new_community.id),
                    conn,
                )
            ]
            communities.append(new_community)
        return communities

    def _duplicate_areas(
        self, old_community: PlantCommunity, new_community: PlantCommunity, conn: sqlite3.Connection
    ) -> List[MonitoringArea]:
        areas = []
        for new_area, old_area in duplicate_each(
            self._r.monitoring_area,
            old_community.monitoring_areas,
            lambda a: replace(a, plant_community_id=new_community.id),
            conn,
        ):
            new_area.purposes = [
                new for new, _ in duplicate_each(
                    self._r.monitoring_area_purpose,
                    old_area.purposes,
                    lambda p: replace(p, monitoring_area_id=new_area.id),
                    conn,
                )
            ]
            areas.append(new_area)
        return areas

    # ------------------------------------------------------------------
    # Branches that point back at pastures
    # ------------------------------------------------------------------
    @staticmethod
    def _new_pasture_id(
        pasture_ids: Dict[int, int], old_pasture_id: int, source: str, plan: Plan
    ) -> int:
        try:
            return pasture_ids[old_pasture_id]
        except KeyError:
            raise DuplicationConsistencyError(source, old_pasture_id, plan.id) from None

    def _duplicate_schedules(
        self,
        source: Plan,
        new_plan: Plan,
        pasture_ids: Dict[int, int],
        conn: sqlite3.Connection,
    ) -> List[GrazingSchedule]:
        schedules = []
        for new_schedule, old_schedule in duplicate_each(
            self._r.grazing_schedule,
            source.grazing_schedules,
            lambda s: replace(s, plan_id=new_plan.id),
            conn,
        ):
            new_schedule.grazing_schedule_entries = [
                new for new, _ in duplicate_each(
                    self._r.grazing_schedule_entry,
                    old_schedule.grazing_schedule_entries,
                    lambda e: replace(
                        e,
                        grazing_schedule_id=new_schedule.id,
                        pasture_id=self._new_pasture_id(
                            pasture_ids, e.pasture_id, f"Grazing schedule entry {e.id}", source
                        ),
                    ),
                    conn,
                )
            ]
            schedules.append(new_schedule)
        return schedules

    def _duplicate_issues(
        self,
        source: Plan,
        new_plan: Plan,
        pasture_ids: Dict[int, int],
        conn: sqlite3.Connection,
    ) -> List[MinisterIssue]:
        issues = []
        for new_issue, old_issue in duplicate_each(
            self._r.minister_issue,
            source.minister_issues,
            lambda i: replace(i, plan_id=new_plan.id),
            conn,
        ):
            new_issue.minister_issue_actions = [
                new for new, _ in duplicate_each(
                    self._r.minister_issue_action,
                    old_issue.minister_issue_actions,
                    lambda a: replace(a, issue_id=new_issue.id),
                    conn,
                )
            ]
            links = [
                MinisterIssuePasture(
                    minister_issue_id=new_issue.id,
                    pasture_id=self._new_pasture_id(
                        pasture_ids, pasture_id, f"Minister issue {old_issue.id}", source
                    ),
                )
                for pasture_id in old_issue.pasture_ids
            ]
            new_issue.pasture_ids = [
                new.pasture_id
                for new, _ in duplicate_each(
                    self._r.minister_issue_pasture, links, lambda link: link, conn
                )
            ]
            issues.append(new_issue)
        return issues
