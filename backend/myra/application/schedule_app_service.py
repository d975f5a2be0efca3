"""Application service — grazing schedules and their entries."""
from __future__ import annotations
import logging
from typing import Optional, Tuple

from myra.application.scoped_service import PlanScopedService
from myra.domain.common.identity import EntityKey
from myra.domain.common.result import Result
from myra.domain.plan.models import Plan
from myra.domain.schedule.models import GrazingSchedule, GrazingScheduleEntry

logger = logging.getLogger(__name__)

# An entry together with the key of the pasture it grazes, so the API can
# report the pasture by canonical id.
EntryWithPasture = Tuple[GrazingScheduleEntry, Optional[EntityKey]]


class ScheduleAppService(PlanScopedService):

    def _schedule_in(self, plan: Plan, schedule_canonical_id: int) -> Result[GrazingSchedule]:
        schedule = self._r.grazing_schedule.find_one(
            {"plan_id": plan.id, "canonical_id": schedule_canonical_id}
        )
        if schedule is None:
            return Result.fail(f"No grazing schedule found with id: {schedule_canonical_id}", 404)
        return Result.ok(schedule)

    def _pasture_key(self, plan: Plan, pasture_canonical_id: int) -> Result[EntityKey]:
        pasture = self._r.pasture.find_one({"plan_id": plan.id, "canonical_id": pasture_canonical_id})
        if pasture is None:
            return Result.fail(f"No pasture found with id: {pasture_canonical_id}", 404)
        return Result.ok(EntityKey.of(pasture))

    # ------------------------------------------------------------------
    # Schedule
    # ------------------------------------------------------------------
    def create_schedule(self, plan_canonical_id: int, user_id: int, data: dict) -> Result[GrazingSchedule]:
        plan = self._plan(plan_canonical_id, user_id)
        if not plan.is_success:
            return Result.fail(plan.error, plan.code)
        schedule = self._r.grazing_schedule.create(GrazingSchedule(**data, plan_id=plan.value.id))
        logger.info("Created %s grazing schedule %s in plan %s", schedule.year, schedule.canonical_id, plan_canonical_id)
        return Result.ok(schedule)

    def update_schedule(
        self, plan_canonical_id: int, schedule_canonical_id: int, user_id: int, data: dict
    ) -> Result[GrazingSchedule]:
        plan = self._plan(plan_canonical_id, user_id)
        if not plan.is_success:
            return Result.fail(plan.error, plan.code)
        required = self._not_null(data, "year")
        if not required.is_success:
            return Result.fail(required.error, required.code)
        return self._update_in(
            self._r.grazing_schedule,
            {"plan_id": plan.value.id, "canonical_id": schedule_canonical_id},
            data,
            "Grazing schedule",
        )

    def delete_schedule(self, plan_canonical_id: int, schedule_canonical_id: int, user_id: int) -> Result[bool]:
        plan = self._plan(plan_canonical_id, user_id)
        if not plan.is_success:
            return Result.fail(plan.error, plan.code)
        return self._remove_from(
            self._r.grazing_schedule,
            {"plan_id": plan.value.id, "canonical_id": schedule_canonical_id},
            "Grazing schedule",
        )

    # ------------------------------------------------------------------
    # Entry
    # ------------------------------------------------------------------
    def create_entry(
        self, plan_canonical_id: int, schedule_canonical_id: int, user_id: int, data: dict
    ) -> Result[EntryWithPasture]:
        plan = self._plan(plan_canonical_id, user_id)
        if not plan.is_success:
            return Result.fail(plan.error, plan.code)
        schedule = self._schedule_in(plan.value, schedule_canonical_id)
        if not schedule.is_success:
            return Result.fail(schedule.error, schedule.code)

        data = dict(data)
        pasture = self._pasture_key(plan.value, data.pop("pasture_id", None))
        if not pasture.is_success:
            return Result.fail(pasture.error, pasture.code)
        livestock = self._check_reference("ref_livestock", [data.get("livestock_type_id")], "livestock type")
        if not livestock.is_success:
            return Result.fail(livestock.error, livestock.code)

        entry = self._r.grazing_schedule_entry.create(GrazingScheduleEntry(
            **data,
            grazing_schedule_id=schedule.value.id,
            pasture_id=pasture.value.internal,
        ))
        return Result.ok((entry, pasture.value))

    def update_entry(
        self,
        plan_canonical_id: int,
        schedule_canonical_id: int,
        entry_canonical_id: int,
        user_id: int,
        data: dict,
    ) -> Result[EntryWithPasture]:
        plan = self._plan(plan_canonical_id, user_id)
        if not plan.is_success:
            return Result.fail(plan.error, plan.code)
        schedule = self._schedule_in(plan.value, schedule_canonical_id)
        if not schedule.is_success:
            return Result.fail(schedule.error, schedule.code)

        data = dict(data)
        required = self._not_null(data, "pasture_id")
        if not required.is_success:
            return Result.fail(required.error, required.code)
        if "pasture_id" in data:
            pasture = self._pasture_key(plan.value, data["pasture_id"])
            if not pasture.is_success:
                return Result.fail(pasture.error, pasture.code)
            data["pasture_id"] = pasture.value.internal
        livestock = self._check_optional_reference(
            "ref_livestock", data.get("livestock_type_id"), "livestock type"
        )
        if not livestock.is_success:
            return Result.fail(livestock.error, livestock.code)

        updated = self._update_in(
            self._r.grazing_schedule_entry,
            {"grazing_schedule_id": schedule.value.id, "canonical_id": entry_canonical_id},
            data,
            "Grazing schedule entry",
        )
        if not updated.is_success:
            return Result.fail(updated.error, updated.code)
        entry = updated.value
        pasture = self._r.pasture.find_by_id(entry.pasture_id) if entry.pasture_id else None
        return Result.ok((entry, EntityKey.of(pasture) if pasture else None))

    def delete_entry(
        self, plan_canonical_id: int, schedule_canonical_id: int, entry_canonical_id: int, user_id: int
    ) -> Result[bool]:
        plan = self._plan(plan_canonical_id, user_id)
        if not plan.is_success:
            return Result.fail(plan.error, plan.code)
        schedule = self._schedule_in(plan.value, schedule_canonical_id)
        if not schedule.is_success:
            return Result.fail(schedule.error, schedule.code)
        return self._remove_from(
            self._r.grazing_schedule_entry,
            {"grazing_schedule_id": schedule.value.id, "canonical_id": entry_canonical_id},
            "Grazing schedule entry",
        )
