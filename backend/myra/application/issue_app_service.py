"""Application service — minister issues, their actions and affected pastures."""
from __future__ import annotations
import logging
from typing import Iterable, List, Tuple

from myra.application.scoped_service import PlanScopedService
from myra.domain.common.identity import EntityKey
from myra.domain.common.reconcile import reconcile, unique_in_order
from myra.domain.common.result import Result
from myra.domain.issue.models import MinisterIssue, MinisterIssueAction, MinisterIssuePasture
from myra.domain.plan.models import Plan

logger = logging.getLogger(__name__)

IssueWithPastures = Tuple[MinisterIssue, List[EntityKey]]


class IssueAppService(PlanScopedService):

    def _issue_in(self, plan: Plan, issue_canonical_id: int) -> Result[MinisterIssue]:
        issue = self._r.minister_issue.find_one({"plan_id": plan.id, "canonical_id": issue_canonical_id})
        if issue is None:
            return Result.fail(f"No minister issue found with id: {issue_canonical_id}", 404)
        return Result.ok(issue)

    def _pasture_keys(self, plan: Plan, pasture_canonical_ids: Iterable[int]) -> Result[List[EntityKey]]:
        """Every requested pasture must belong to the plan."""
        keys = []
        for canonical_id in unique_in_order(pasture_canonical_ids):
            pasture = self._r.pasture.find_one({"plan_id": plan.id, "canonical_id": canonical_id})
            if pasture is None:
                return Result.fail(f"No pasture found with id: {canonical_id}", 404)
            keys.append(EntityKey.of(pasture))
        return Result.ok(keys)

    # ------------------------------------------------------------------
    # Issue
    # ------------------------------------------------------------------
    def create_issue(self, plan_canonical_id: int, user_id: int, data: dict) -> Result[IssueWithPastures]:
        plan = self._plan(plan_canonical_id, user_id)
        if not plan.is_success:
            return Result.fail(plan.error, plan.code)

        data = dict(data)
        pastures = self._pasture_keys(plan.value, data.pop("pastures", None) or [])
        if not pastures.is_success:
            return Result.fail(pastures.error, pastures.code)
        issue_type = self._check_reference(
            "ref_minister_issue_type", [data.get("issue_type_id")], "minister issue type"
        )
        if not issue_type.is_success:
            return Result.fail(issue_type.error, issue_type.code)
        required = self._not_null(data, "identified")
        if not required.is_success:
            return Result.fail(required.error, required.code)

        with self._r.db.transaction() as conn:
            issue = self._r.minister_issue.create(MinisterIssue(**data, plan_id=plan.value.id), conn=conn)
            for key in pastures.value:
                self._r.minister_issue_pasture.create(
                    MinisterIssuePasture(minister_issue_id=issue.id, pasture_id=key.internal), conn=conn
                )
        issue.pasture_ids = [key.internal for key in pastures.value]
        logger.info("Created minister issue %s in plan %s", issue.canonical_id, plan_canonical_id)
        return Result.ok((issue, pastures.value))

    def update_issue(
        self, plan_canonical_id: int, issue_canonical_id: int, user_id: int, data: dict
    ) -> Result[IssueWithPastures]:
        """Pastures, when supplied, replace the issue's pasture set; links already present are kept."""
        plan = self._plan(plan_canonical_id, user_id)
        if not plan.is_success:
            return Result.fail(plan.error, plan.code)
        issue = self._issue_in(plan.value, issue_canonical_id)
        if not issue.is_success:
            return Result.fail(issue.error, issue.code)

        data = dict(data)
        requested = data.pop("pastures", None)
        pastures = self._pasture_keys(plan.value, requested or [])
        if not pastures.is_success:
            return Result.fail(pastures.error, pastures.code)
        required = self._not_null(data, "issue_type_id", "identified")
        if not required.is_success:
            return Result.fail(required.error, required.code)
        issue_type = self._check_optional_reference(
            "ref_minister_issue_type", data.get("issue_type_id"), "minister issue type"
        )
        if not issue_type.is_success:
            return Result.fail(issue_type.error, issue_type.code)

        updated = issue.value
        with self._r.db.transaction() as conn:
            if requested is not None:
                existing = self._r.minister_issue_pasture.find({"minister_issue_id": updated.id}, conn=conn)
                _, remove, add = reconcile(
                    existing, [key.internal for key in pastures.value], key=lambda link: link.pasture_id
                )
                for link in remove:
                    self._r.minister_issue_pasture.remove({"id": link.id}, conn=conn)
                for pasture_id in add:
                    self._r.minister_issue_pasture.create(
                        MinisterIssuePasture(minister_issue_id=updated.id, pasture_id=pasture_id), conn=conn
                    )
            if data:
                updated = self._r.minister_issue.update({"id": updated.id}, data, conn=conn)
            updated.pasture_ids = self._r.minister_issue_pasture.pasture_ids_for(updated.id, conn=conn)

        keys = [EntityKey.of(p) for p in (self._r.pasture.find_by_id(i) for i in updated.pasture_ids) if p]
        return Result.ok((updated, keys))

    def delete_issue(self, plan_canonical_id: int, issue_canonical_id: int, user_id: int) -> Result[bool]:
        plan = self._plan(plan_canonical_id, user_id)
        if not plan.is_success:
            return Result.fail(plan.error, plan.code)
        return self._remove_from(
            self._r.minister_issue,
            {"plan_id": plan.value.id, "canonical_id": issue_canonical_id},
            "Minister issue",
        )

    # ------------------------------------------------------------------
    # Issue action
    # ------------------------------------------------------------------
    def create_action(
        self, plan_canonical_id: int, issue_canonical_id: int, user_id: int, data: dict
    ) -> Result[MinisterIssueAction]:
        plan = self._plan(plan_canonical_id, user_id)
        if not plan.is_success:
            return Result.fail(plan.error, plan.code)
        issue = self._issue_in(plan.value, issue_canonical_id)
        if not issue.is_success:
            return Result.fail(issue.error, issue.code)
        action_type = self._check_reference(
            "ref_minister_issue_action_type", [data.get("action_type_id")], "minister issue action type"
        )
        if not action_type.is_success:
            return Result.fail(action_type.error, action_type.code)

        action = self._r.minister_issue_action.create(MinisterIssueAction(**data, issue_id=issue.value.id))
        return Result.ok(action)

    def update_action(
        self,
        plan_canonical_id: int,
        issue_canonical_id: int,
        action_canonical_id: int,
        user_id: int,
        data: dict,
    ) -> Result[MinisterIssueAction]:
        plan = self._plan(plan_canonical_id, user_id)
        if not plan.is_success:
            return Result.fail(plan.error, plan.code)
        issue = self._issue_in(plan.value, issue_canonical_id)
        if not issue.is_success:
            return Result.fail(issue.error, issue.code)
        required = self._not_null(data, "action_type_id")
        if not required.is_success:
            return Result.fail(required.error, required.code)
        action_type = self._check_optional_reference(
            "ref_minister_issue_action_type", data.get("action_type_id"), "minister issue action type"
        )
        if not action_type.is_success:
            return Result.fail(action_type.error, action_type.code)
        return self._update_in(
            self._r.minister_issue_action,
            {"issue_id": issue.value.id, "canonical_id": action_canonical_id},
            data,
            "Minister issue action",
        )

    def delete_action(
        self, plan_canonical_id: int, issue_canonical_id: int, action_canonical_id: int, user_id: int
    ) -> Result[bool]:
        plan = self._plan(plan_canonical_id, user_id)
        if not plan.is_success:
            return Result.fail(plan.error, plan.code)
        issue = self._issue_in(plan.value, issue_canonical_id)
        if not issue.is_success:
            return Result.fail(issue.error, issue.code)
        return self._remove_from(
            self._r.minister_issue_action,
            {"issue_id": issue.value.id, "canonical_id": action_canonical_id},
            "Minister issue action",
        )
