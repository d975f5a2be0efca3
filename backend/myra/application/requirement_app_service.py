"""Application service — additional requirements and management considerations of a plan."""
from __future__ import annotations
import logging

from myra.application.scoped_service import PlanScopedService
from myra.domain.common.result import Result
from myra.domain.plan.models import AdditionalRequirement, ManagementConsideration

logger = logging.getLogger(__name__)


class RequirementAppService(PlanScopedService):

    # ------------------------------------------------------------------
    # Additional requirement
    # ------------------------------------------------------------------
    def create_requirement(self, plan_canonical_id: int, user_id: int, data: dict) -> Result[AdditionalRequirement]:
        plan = self._plan(plan_canonical_id, user_id)
        if not plan.is_success:
            return Result.fail(plan.error, plan.code)
        category = self._check_reference(
            "ref_additional_requirement_category", [data.get("category_id")], "requirement category"
        )
        if not category.is_success:
            return Result.fail(category.error, category.code)
        requirement = self._r.additional_requirement.create(
            AdditionalRequirement(**data, plan_id=plan.value.id)
        )
        logger.info("Created additional requirement %s in plan %s", requirement.canonical_id, plan_canonical_id)
        return Result.ok(requirement)

    def update_requirement(
        self, plan_canonical_id: int, requirement_canonical_id: int, user_id: int, data: dict
    ) -> Result[AdditionalRequirement]:
        plan = self._plan(plan_canonical_id, user_id)
        if not plan.is_success:
            return Result.fail(plan.error, plan.code)
        required = self._not_null(data, "category_id")
        if not required.is_success:
            return Result.fail(required.error, required.code)
        category = self._check_optional_reference(
            "ref_additional_requirement_category", data.get("category_id"), "requirement category"
        )
        if not category.is_success:
            return Result.fail(category.error, category.code)
        return self._update_in(
            self._r.additional_requirement,
            {"plan_id": plan.value.id, "canonical_id": requirement_canonical_id},
            data,
            "Additional requirement",
        )

    def delete_requirement(self, plan_canonical_id: int, requirement_canonical_id: int, user_id: int) -> Result[bool]:
        plan = self._plan(plan_canonical_id, user_id)
        if not plan.is_success:
            return Result.fail(plan.error, plan.code)
        return self._remove_from(
            self._r.additional_requirement,
            {"plan_id": plan.value.id, "canonical_id": requirement_canonical_id},
            "Additional requirement",
        )

    # ------------------------------------------------------------------
    # Management consideration
    # ------------------------------------------------------------------
    def create_consideration(
        self, plan_canonical_id: int, user_id: int, data: dict
    ) -> Result[ManagementConsideration]:
        plan = self._plan(plan_canonical_id, user_id)
        if not plan.is_success:
            return Result.fail(plan.error, plan.code)
        consideration_type = self._check_reference(
            "ref_management_consideration_type", [data.get("consideration_type_id")], "consideration type"
        )
        if not consideration_type.is_success:
            return Result.fail(consideration_type.error, consideration_type.code)
        consideration = self._r.management_consideration.create(
            ManagementConsideration(**data, plan_id=plan.value.id)
        )
        logger.info("Created management consideration %s in plan %s", consideration.canonical_id, plan_canonical_id)
        return Result.ok(consideration)

    def update_consideration(
        self, plan_canonical_id: int, consideration_canonical_id: int, user_id: int, data: dict
    ) -> Result[ManagementConsideration]:
        plan = self._plan(plan_canonical_id, user_id)
        if not plan.is_success:
            return Result.fail(plan.error, plan.code)
        required = self._not_null(data, "consideration_type_id")
        if not required.is_success:
            return Result.fail(required.error, required.code)
        consideration_type = self._check_optional_reference(
            "ref_management_consideration_type", data.get("consideration_type_id"), "consideration type"
        )
        if not consideration_type.is_success:
            return Result.fail(consideration_type.error, consideration_type.code)
        return self._update_in(
            self._r.management_consideration,
            {"plan_id": plan.value.id, "canonical_id": consideration_canonical_id},
            data,
            "Management consideration",
        )

    def delete_consideration(
        self, plan_canonical_id: int, consideration_canonical_id: int, user_id: int
    ) -> Result[bool]:
        plan = self._plan(plan_canonical_id, user_id)
        if not plan.is_success:
            return Result.fail(plan.error, plan.code)
        return self._remove_from(
            self._r.management_consideration,
            {"plan_id": plan.value.id, "canonical_id": consideration_canonical_id},
            "Management consideration",
        )
