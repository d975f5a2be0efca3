"""
Application service — the pasture subtree of the current plan version.

Every operation resolves the plan by canonical id, checks agreement access,
then resolves each ancestor by canonical id within its parent. Anything not
found on the way down is a 404.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List

from myra.application.scoped_service import PlanScopedService
from myra.domain.common.identity import EntityKey
from myra.domain.common.reconcile import unique_in_order
from myra.domain.common.result import Result
from myra.domain.pasture.models import (
    IndicatorPlant,
    MonitoringArea,
    MonitoringAreaPurpose,
    Pasture,
    PlantCommunity,
    PlantCommunityAction,
)
from myra.domain.pasture.rules import (
    reconcile_purposes,
    validate_criteria,
    validate_purpose_of_action,
)
from myra.domain.plan.models import Plan

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommunityScope:
    plan: EntityKey
    pasture: EntityKey
    community: EntityKey


class PastureAppService(PlanScopedService):

    # ------------------------------------------------------------------
    # Ancestor resolution
    # ------------------------------------------------------------------
    def _pasture_in(self, plan: Plan, pasture_canonical_id: int) -> Result[Pasture]:
        pasture = self._r.pasture.find_one(
            {"plan_id": plan.id, "canonical_id": pasture_canonical_id}
        )
        if pasture is None:
            return Result.fail(f"No pasture found with id: {pasture_canonical_id}", 404)
        return Result.ok(pasture)

    def _community_scope(
        self, plan_canonical_id: int, pasture_canonical_id: int, community_canonical_id: int, user_id: int
    ) -> Result[CommunityScope]:
        plan = self._plan(plan_canonical_id, user_id)
        if not plan.is_success:
            return Result.fail(plan.error, plan.code)
        pasture = self._pasture_in(plan.value, pasture_canonical_id)
        if not pasture.is_success:
            return Result.fail(pasture.error, pasture.code)
        community = self._r.plant_community.find_one(
            {"pasture_id": pasture.value.id, "canonical_id": community_canonical_id}
        )
        if community is None:
            return Result.fail(f"No plant community found with id: {community_canonical_id}", 404)
        return Result.ok(CommunityScope(
            plan=EntityKey.of(plan.value),
            pasture=EntityKey.of(pasture.value),
            community=EntityKey.of(community),
        ))

    # ------------------------------------------------------------------
    # Pasture
    # ------------------------------------------------------------------
    def create_pasture(self, plan_canonical_id: int, user_id: int, data: dict) -> Result[Pasture]:
        plan = self._plan(plan_canonical_id, user_id)
        if not plan.is_success:
            return Result.fail(plan.error, plan.code)
        pasture = self._r.pasture.create(Pasture(**data, plan_id=plan.value.id))
        logger.info("Created pasture %s in plan %s", pasture.canonical_id, plan_canonical_id)
        return Result.ok(pasture)

    def update_pasture(
        self, plan_canonical_id: int, pasture_canonical_id: int, user_id: int, data: dict
    ) -> Result[Pasture]:
        plan = self._plan(plan_canonical_id, user_id)
        if not plan.is_success:
            return Result.fail(plan.error, plan.code)
        return self._update_in(
            self._r.pasture,
            {"plan_id": plan.value.id, "canonical_id": pasture_canonical_id},
            data,
            "Pasture",
        )

    def delete_pasture(self, plan_canonical_id: int, pasture_canonical_id: int, user_id: int) -> Result[bool]:
        plan = self._plan(plan_canonical_id, user_id)
        if not plan.is_success:
            return Result.fail(plan.error, plan.code)
        removed = self._remove_from(
            self._r.pasture,
            {"plan_id": plan.value.id, "canonical_id": pasture_canonical_id},
            "Pasture",
        )
        if removed.is_success:
            logger.info("Deleted pasture %s from plan %s", pasture_canonical_id, plan_canonical_id)
        return removed

    # ------------------------------------------------------------------
    # Plant community
    # ------------------------------------------------------------------
    def create_plant_community(
        self, plan_canonical_id: int, pasture_canonical_id: int, user_id: int, data: dict
    ) -> Result[PlantCommunity]:
        plan = self._plan(plan_canonical_id, user_id)
        if not plan.is_success:
            return Result.fail(plan.error, plan.code)
        pasture = self._pasture_in(plan.value, pasture_canonical_id)
        if not pasture.is_success:
            return Result.fail(pasture.error, pasture.code)

        purpose = validate_purpose_of_action(data.get("purpose_of_action"))
        if not purpose.is_success:
            return Result.fail(purpose.error, purpose.code)
        community_type = self._check_reference(
            "ref_plant_community_type", [data.get("community_type_id")], "plant community type"
        )
        if not community_type.is_success:
            return Result.fail(community_type.error, community_type.code)
        checked = self._check_community_fields(data)
        if not checked.is_success:
            return Result.fail(checked.error, checked.code)

        community = self._r.plant_community.create(
            PlantCommunity(**data, pasture_id=pasture.value.id)
        )
        logger.info("Created plant community %s in pasture %s", community.canonical_id, pasture_canonical_id)
        return Result.ok(community)

    def update_plant_community(
        self,
        plan_canonical_id: int,
        pasture_canonical_id: int,
        community_canonical_id: int,
        user_id: int,
        data: dict,
    ) -> Result[PlantCommunity]:
        scope = self._community_scope(plan_canonical_id, pasture_canonical_id, community_canonical_id, user_id)
        if not scope.is_success:
            return Result.fail(scope.error, scope.code)

        if "purpose_of_action" in data:
            purpose = validate_purpose_of_action(data["purpose_of_action"])
            if not purpose.is_success:
                return Result.fail(purpose.error, purpose.code)
        community_type = self._check_optional_reference(
            "ref_plant_community_type", data.get("community_type_id"), "plant community type"
        )
        if not community_type.is_success:
            return Result.fail(community_type.error, community_type.code)
        checked = self._check_community_fields(data)
        if not checked.is_success:
            return Result.fail(checked.error, checked.code)

        return self._update_in(
            self._r.plant_community, {"id": scope.value.community.internal}, data, "Plant community"
        )

    def _check_community_fields(self, data: dict) -> Result[dict]:
        approved = self._not_null(data, "approved")
        if not approved.is_success:
            return approved
        elevation = self._check_optional_reference(
            "ref_plant_community_elevation", data.get("elevation_id"), "plant community elevation"
        )
        if not elevation.is_success:
            return Result.fail(elevation.error, elevation.code)
        return Result.ok(data)

    def delete_plant_community(
        self, plan_canonical_id: int, pasture_canonical_id: int, community_canonical_id: int, user_id: int
    ) -> Result[bool]:
        plan = self._plan(plan_canonical_id, user_id)
        if not plan.is_success:
            return Result.fail(plan.error, plan.code)
        pasture = self._pasture_in(plan.value, pasture_canonical_id)
        if not pasture.is_success:
            return Result.fail(pasture.error, pasture.code)
        return self._remove_from(
            self._r.plant_community,
            {"pasture_id": pasture.value.id, "canonical_id": community_canonical_id},
            "Plant community",
        )

    # ------------------------------------------------------------------
    # Plant community action
    # ------------------------------------------------------------------
    def create_action(
        self,
        plan_canonical_id: int,
        pasture_canonical_id: int,
        community_canonical_id: int,
        user_id: int,
        data: dict,
    ) -> Result[PlantCommunityAction]:
        scope = self._community_scope(plan_canonical_id, pasture_canonical_id, community_canonical_id, user_id)
        if not scope.is_success:
            return Result.fail(scope.error, scope.code)
        action_type = self._check_reference(
            "ref_plant_community_action_type", [data.get("action_type_id")], "action type"
        )
        if not action_type.is_success:
            return Result.fail(action_type.error, action_type.code)

        action = self._r.plant_community_action.create(
            PlantCommunityAction(**data, plant_community_id=scope.value.community.internal)
        )
        return Result.ok(action)

    def update_action(
        self,
        plan_canonical_id: int,
        pasture_canonical_id: int,
        community_canonical_id: int,
        action_canonical_id: int,
        user_id: int,
        data: dict,
    ) -> Result[PlantCommunityAction]:
        scope = self._community_scope(plan_canonical_id, pasture_canonical_id, community_canonical_id, user_id)
        if not scope.is_success:
            return Result.fail(scope.error, scope.code)
        required = self._not_null(data, "action_type_id")
        if not required.is_success:
            return Result.fail(required.error, required.code)
        action_type = self._check_optional_reference(
            "ref_plant_community_action_type", data.get("action_type_id"), "action type"
        )
        if not action_type.is_success:
            return Result.fail(action_type.error, action_type.code)
        return self._update_in(
            self._r.plant_community_action,
            {"plant_community_id": scope.value.community.internal, "canonical_id": action_canonical_id},
            data,
            "Plant community action",
        )

    def delete_action(
        self,
        plan_canonical_id: int,
        pasture_canonical_id: int,
        community_canonical_id: int,
        action_canonical_id: int,
        user_id: int,
    ) -> Result[bool]:
        scope = self._community_scope(plan_canonical_id, pasture_canonical_id, community_canonical_id, user_id)
        if not scope.is_success:
            return Result.fail(scope.error, scope.code)
        return self._remove_from(
            self._r.plant_community_action,
            {"plant_community_id": scope.value.community.internal, "canonical_id": action_canonical_id},
            "Plant community action",
        )

    # ------------------------------------------------------------------
    # Indicator plant
    # ------------------------------------------------------------------
    def create_indicator_plant(
        self,
        plan_canonical_id: int,
        pasture_canonical_id: int,
        community_canonical_id: int,
        user_id: int,
        data: dict,
    ) -> Result[IndicatorPlant]:
        scope = self._community_scope(plan_canonical_id, pasture_canonical_id, community_canonical_id, user_id)
        if not scope.is_success:
            return Result.fail(scope.error, scope.code)
        criteria = validate_criteria(data.get("criteria"))
        if not criteria.is_success:
            return Result.fail(criteria.error, criteria.code)
        species = self._check_optional_reference(
            "ref_plant_species", data.get("plant_species_id"), "plant species"
        )
        if not species.is_success:
            return Result.fail(species.error, species.code)

        plant = self._r.indicator_plant.create(
            IndicatorPlant(**data, plant_community_id=scope.value.community.internal)
        )
        return Result.ok(plant)

    def update_indicator_plant(
        self,
        plan_canonical_id: int,
        pasture_canonical_id: int,
        community_canonical_id: int,
        plant_canonical_id: int,
        user_id: int,
        data: dict,
    ) -> Result[IndicatorPlant]:
        scope = self._community_scope(plan_canonical_id, pasture_canonical_id, community_canonical_id, user_id)
        if not scope.is_success:
            return Result.fail(scope.error, scope.code)
        if "criteria" in data:
            criteria = validate_criteria(data["criteria"])
            if not criteria.is_success:
                return Result.fail(criteria.error, criteria.code)
        species = self._check_optional_reference(
            "ref_plant_species", data.get("plant_species_id"), "plant species"
        )
        if not species.is_success:
            return Result.fail(species.error, species.code)
        return self._update_in(
            self._r.indicator_plant,
            {"plant_community_id": scope.value.community.internal, "canonical_id": plant_canonical_id},
            data,
            "Indicator plant",
        )

    def delete_indicator_plant(
        self,
        plan_canonical_id: int,
        pasture_canonical_id: int,
        community_canonical_id: int,
        plant_canonical_id: int,
        user_id: int,
    ) -> Result[bool]:
        scope = self._community_scope(plan_canonical_id, pasture_canonical_id, community_canonical_id, user_id)
        if not scope.is_success:
            return Result.fail(scope.error, scope.code)
        return self._remove_from(
            self._r.indicator_plant,
            {"plant_community_id": scope.value.community.internal, "canonical_id": plant_canonical_id},
            "Indicator plant",
        )

    # ------------------------------------------------------------------
    # Monitoring area
    # ------------------------------------------------------------------
    def create_monitoring_area(
        self,
        plan_canonical_id: int,
        pasture_canonical_id: int,
        community_canonical_id: int,
        user_id: int,
        data: dict,
    ) -> Result[MonitoringArea]:
        scope = self._community_scope(plan_canonical_id, pasture_canonical_id, community_canonical_id, user_id)
        if not scope.is_success:
            return Result.fail(scope.error, scope.code)

        data = dict(data)
        requested = unique_in_order(data.pop("purpose_type_ids", []))
        purposes = self._check_reference(
            "ref_monitoring_area_purpose_type", requested, "monitoring area purpose"
        )
        if not purposes.is_success:
            return Result.fail(purposes.error, purposes.code)
        checked = self._check_area_fields(data)
        if not checked.is_success:
            return Result.fail(checked.error, checked.code)

        with self._r.db.transaction() as conn:
            area = self._r.monitoring_area.create(
                MonitoringArea(**data, plant_community_id=scope.value.community.internal),
                conn=conn,
            )
            area.purposes = self._add_purposes(area.id, purposes.value, conn)

        logger.info(
            "Created monitoring area %s with purposes %s", area.canonical_id, purposes.value
        )
        return Result.ok(area)

    def update_monitoring_area(
        self,
        plan_canonical_id: int,
        pasture_canonical_id: int,
        community_canonical_id: int,
        area_canonical_id: int,
        user_id: int,
        data: dict,
    ) -> Result[MonitoringArea]:
        """
        The purposes left afterwards are exactly `purpose_type_ids` (absent
        means none). Purposes already present keep their rows.
        """
        scope = self._community_scope(plan_canonical_id, pasture_canonical_id, community_canonical_id, user_id)
        if not scope.is_success:
            return Result.fail(scope.error, scope.code)
        area = self._r.monitoring_area.find_one(
            {"plant_community_id": scope.value.community.internal, "canonical_id": area_canonical_id}
        )
        if area is None:
            return Result.fail("Monitoring area doesn't exist", 404)

        data = dict(data)
        requested = unique_in_order(data.pop("purpose_type_ids", None) or [])
        purposes = self._check_reference(
            "ref_monitoring_area_purpose_type", requested, "monitoring area purpose"
        )
        if not purposes.is_success:
            return Result.fail(purposes.error, purposes.code)
        checked = self._check_area_fields(data)
        if not checked.is_success:
            return Result.fail(checked.error, checked.code)

        with self._r.db.transaction() as conn:
            existing = self._r.monitoring_area_purpose.find({"monitoring_area_id": area.id}, conn=conn)
            keep, remove, add = reconcile_purposes(existing, requested)
            for purpose in remove:
                self._r.monitoring_area_purpose.remove({"id": purpose.id}, conn=conn)
            added = self._add_purposes(area.id, add, conn)
            if data:
                area = self._r.monitoring_area.update({"id": area.id}, data, conn=conn)

        order = {purpose_type_id: i for i, purpose_type_id in enumerate(requested)}
        area.purposes = sorted(keep + added, key=lambda p: order[p.purpose_type_id])
        logger.info(
            "Updated monitoring area %s: removed purposes %s, added %s",
            area.canonical_id, [p.purpose_type_id for p in remove], add,
        )
        return Result.ok(area)

    def delete_monitoring_area(
        self,
        plan_canonical_id: int,
        pasture_canonical_id: int,
        community_canonical_id: int,
        area_canonical_id: int,
        user_id: int,
    ) -> Result[bool]:
        scope = self._community_scope(plan_canonical_id, pasture_canonical_id, community_canonical_id, user_id)
        if not scope.is_success:
            return Result.fail(scope.error, scope.code)
        area = self._r.monitoring_area.find_one(
            {"plant_community_id": scope.value.community.internal, "canonical_id": area_canonical_id}
        )
        if area is None:
            return Result.fail("Monitoring area doesn't exist", 400)

        with self._r.db.transaction() as conn:
            self._r.monitoring_area_purpose.remove({"monitoring_area_id": area.id}, conn=conn)
            self._r.monitoring_area.remove({"id": area.id}, conn=conn)
        return Result.ok(True)

    def _check_area_fields(self, data: dict) -> Result[dict]:
        name = self._not_null(data, "name")
        if not name.is_success:
            return name
        health = self._check_optional_reference(
            "ref_monitoring_area_health", data.get("health_id"), "monitoring area health"
        )
        if not health.is_success:
            return Result.fail(health.error, health.code)
        return Result.ok(data)

    def _add_purposes(self, area_id: int, purpose_type_ids: List[int], conn) -> List[MonitoringAreaPurpose]:
        return [
            self._r.monitoring_area_purpose.create(
                MonitoringAreaPurpose(monitoring_area_id=area_id, purpose_type_id=purpose_type_id),
                conn=conn,
            )
            for purpose_type_id in purpose_type_ids
        ]
