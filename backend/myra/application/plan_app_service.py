"""Application service — plan creation, retrieval, versions and duplication."""
from __future__ import annotations
import logging
from typing import List

from myra.application.scoped_service import PlanScopedService
from myra.domain.common.result import Result
from myra.domain.plan.models import CURRENT_VERSION, Plan, PlanVersion
from myra.domain.plan.rules import VersioningPolicy, next_version_number
from myra.persistence.duplication import PlanDuplicator
from myra.persistence.plan_graph import load_plan_graph

logger = logging.getLogger(__name__)


class PlanAppService(PlanScopedService):

    # ------------------------------------------------------------------
    # CREATE
    # ------------------------------------------------------------------
    def create_plan(self, user_id: int, data: dict) -> Result[Plan]:
        access = self._access.can_user_access_this_agreement(user_id, data.get("agreement_id"))
        if not access.is_success:
            return Result.fail(access.error, access.code)

        required = self._not_null(data, "uploaded", "staff_initiated")
        if not required.is_success:
            return Result.fail(required.error, required.code)
        status = self._check_optional_reference("ref_plan_status", data.get("status_id"), "plan status")
        if not status.is_success:
            return Result.fail(status.error, status.code)
        amendment_type = self._check_optional_reference(
            "ref_amendment_type", data.get("amendment_type_id"), "amendment type"
        )
        if not amendment_type.is_success:
            return Result.fail(amendment_type.error, amendment_type.code)

        with self._r.db.transaction() as conn:
            plan = self._r.plan.create(Plan(**data, creator_id=user_id), conn=conn)
            self._r.plan_version.create(
                PlanVersion(canonical_id=plan.canonical_id, plan_id=plan.id, version=CURRENT_VERSION),
                conn=conn,
            )
        logger.info("Created plan %s for agreement %s", plan.canonical_id, plan.agreement_id)
        return Result.ok(plan)

    # ------------------------------------------------------------------
    # READ
    # ------------------------------------------------------------------
    def get_plan(self, plan_canonical_id: int, user_id: int) -> Result[Plan]:
        current = self._plan(plan_canonical_id, user_id, write=False)
        if not current.is_success:
            return current
        return Result.ok(load_plan_graph(self._r, current.value.id))

    def list_versions(self, plan_canonical_id: int, user_id: int) -> Result[List[PlanVersion]]:
        current = self._plan(plan_canonical_id, user_id, write=False)
        if not current.is_success:
            return Result.fail(current.error, current.code)
        return Result.ok(self._r.plan_version.versions_for(current.value.canonical_id))

    # ------------------------------------------------------------------
    # DUPLICATE
    # ------------------------------------------------------------------
    def duplicate_plan(
        self, plan_canonical_id: int, user_id: int, *, policy: VersioningPolicy
    ) -> Result[Plan]:
        """
        Copy the current version and its whole subtree. `policy` decides whether
        the copy becomes the plan's new current version or a plan of its own;
        the copy and the version bookkeeping commit or roll back together.
        """
        current = self._plan(plan_canonical_id, user_id)
        if not current.is_success:
            return current
        source = current.value

        try:
            with self._r.db.transaction() as conn:
                new_plan = PlanDuplicator(self._r).duplicate_all(source.id, conn)
                if policy is VersioningPolicy.NEW_VERSION:
                    self._promote_to_current_version(source, new_plan, conn)
                else:
                    self._detach_as_independent_plan(new_plan, conn)
        except Exception as e:
            logger.error("Duplication of plan %s rolled back: %s", plan_canonical_id, e)
            raise

        logger.info(
            "Plan %s duplicated as %s (policy=%s)",
            plan_canonical_id, new_plan.canonical_id, policy.value,
        )
        return Result.ok(new_plan)

    def _promote_to_current_version(self, source: Plan, new_plan: Plan, conn) -> None:
        versions = self._r.plan_version.find({"canonical_id": source.canonical_id}, conn=conn)
        number = next_version_number(v.version for v in versions)
        self._r.plan_version.update(
            {"canonical_id": source.canonical_id, "version": CURRENT_VERSION},
            {"version": number},
            conn=conn,
        )
        self._r.plan_version.create(
            PlanVersion(canonical_id=source.canonical_id, plan_id=new_plan.id, version=CURRENT_VERSION),
            conn=conn,
        )

    def _detach_as_independent_plan(self, new_plan: Plan, conn) -> None:
        self._r.plan.update({"id": new_plan.id}, {"canonical_id": new_plan.id}, conn=conn)
        new_plan.canonical_id = new_plan.id
        self._r.plan_version.create(
            PlanVersion(canonical_id=new_plan.canonical_id, plan_id=new_plan.id, version=CURRENT_VERSION),
            conn=conn,
        )
