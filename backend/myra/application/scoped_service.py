"""Shared plumbing for services that act on the subtree of one current plan."""
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional, TypeVar

from myra.application.access_service import AgreementAccessService
from myra.domain.common.result import Result
from myra.domain.plan.models import Plan
from myra.persistence.interfaces.record_repository import RecordRepository
from myra.persistence.records import Records

T = TypeVar("T")


class PlanScopedService:
    def __init__(self, records: Records, access: AgreementAccessService):
        self._r = records
        self._access = access

    def _plan(self, plan_canonical_id: int, user_id: int, write: bool = True) -> Result[Plan]:
        return self._access.resolve_current_plan(plan_canonical_id, user_id, write=write)

    def _check_reference(self, table: str, ids: Iterable[int], label: str) -> Result[List[int]]:
        ids = list(ids)
        missing = self._r.reference.missing_ids(table, ids)
        if missing:
            return Result.fail(f'Unacceptable {label} with "{missing[0]}"')
        return Result.ok(ids)

    def _check_optional_reference(self, table: str, value: Optional[int], label: str) -> Result[Optional[int]]:
        if value is None:
            return Result.ok(None)
        checked = self._check_reference(table, [value], label)
        if not checked.is_success:
            return Result.fail(checked.error, checked.code)
        return Result.ok(value)

    @staticmethod
    def _not_null(data: Dict[str, Any], *fields: str) -> Result[Dict[str, Any]]:
        """NOT NULL columns may be left out of a body but not set to null."""
        for name in fields:
            if name in data and data[name] is None:
                return Result.fail(f'Unacceptable null for "{name}"')
        return Result.ok(data)

    def _update_in(
        self, repo: RecordRepository[T], where: Dict[str, Any], data: Dict[str, Any], label: str
    ) -> Result[T]:
        updated = repo.update(where, data)
        if updated is None:
            return Result.fail(f"{label} doesn't exist", 404)
        return Result.ok(updated)

    def _remove_from(self, repo: RecordRepository[T], where: Dict[str, Any], label: str) -> Result[bool]:
        if repo.remove(where) == 0:
            return Result.fail(f"{label} doesn't exist", 400)
        return Result.ok(True)
