"""Abstract repository interface for the Plan aggregate root."""
from __future__ import annotations
import sqlite3
from abc import abstractmethod
from typing import List, Optional

from myra.domain.plan.models import Plan, PlanVersion
from myra.persistence.interfaces.record_repository import RecordRepository


class PlanRepository(RecordRepository[Plan]):

    @abstractmethod
    def find_current_version(
        self, canonical_id: int, conn: Optional[sqlite3.Connection] = None
    ) -> Optional[Plan]:
        """Return the plan row whose version marker is -1, or None; storage errors also give None."""
        ...

    @abstractmethod
    def agreement_for_plan_id(
        self, plan_id: int, conn: Optional[sqlite3.Connection] = None
    ) -> Optional[str]:
        """Return the agreement id that owns the plan, or None."""
        ...


class PlanVersionRepository(RecordRepository[PlanVersion]):

    @abstractmethod
    def versions_for(
        self, canonical_id: int, conn: Optional[sqlite3.Connection] = None
    ) -> List[PlanVersion]:
        """Current version first, then snapshots newest first."""
        ...
