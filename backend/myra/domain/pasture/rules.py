"""Business rules for the pasture subtree — enumerated fields and purpose reconciliation."""
from __future__ import annotations
from typing import Iterable, List, Optional, Tuple

from myra.domain.common.reconcile import reconcile
from myra.domain.common.result import Result
from myra.domain.pasture.models import MonitoringAreaPurpose

PURPOSE_OF_ACTION = ("establish", "maintain", "none")

PLANT_COMMUNITY_CRITERIA = ("rangereadiness", "stubbleheight", "shrubuse")


def validate_purpose_of_action(purpose_of_action: Optional[str]) -> Result[str]:
    if purpose_of_action not in PURPOSE_OF_ACTION:
        return Result.fail(f'Unacceptable purpose of action with "{purpose_of_action}"')
    return Result.ok(purpose_of_action)


def validate_criteria(criteria: Optional[str]) -> Result[str]:
    if criteria not in PLANT_COMMUNITY_CRITERIA:
        return Result.fail(f'Unacceptable plant community criteria with "{criteria}"')
    return Result.ok(criteria)


def reconcile_purposes(
    existing: List[MonitoringAreaPurpose],
    purpose_type_ids: Iterable[int],
) -> Tuple[List[MonitoringAreaPurpose], List[MonitoringAreaPurpose], List[int]]:
    """
    Existing purposes {1,2,3} reconciled against [2,3,4] keep 2 and 3 as they
    are, remove 1 and add 4.
    """
    return reconcile(existing, purpose_type_ids, key=lambda p: p.purpose_type_id)
