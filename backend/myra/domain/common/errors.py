"""Exceptions for failures that cannot be expressed as a Result."""
from __future__ import annotations


class PlanGraphError(Exception):
    """Base class for errors raised while walking a plan graph."""


class PlanNotFoundError(PlanGraphError):
    def __init__(self, plan_id: int):
        super().__init__(f"Plan with internal id {plan_id} does not exist")
        self.plan_id = plan_id


class DuplicationConsistencyError(PlanGraphError):
    """A row in the source graph points at a pasture outside the duplicated set."""

    def __init__(self, source: str, pasture_id: int, plan_id: int):
        super().__init__(
            f"{source} references pasture {pasture_id}, which is not a pasture of plan {plan_id}; "
            "refusing to duplicate an inconsistent plan"
        )
        self.source = source
        self.pasture_id = pasture_id
        self.plan_id = plan_id
