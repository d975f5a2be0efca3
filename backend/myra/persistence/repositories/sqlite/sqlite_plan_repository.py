"""SQLite implementations of the plan, plan version and plan child records."""
from __future__ import annotations
import logging
import sqlite3
from typing import List, Optional

from myra.domain.plan.models import (
    CURRENT_VERSION,
    AdditionalRequirement,
    ManagementConsideration,
    Plan,
    PlanVersion,
)
from myra.persistence.interfaces.plan_repository import PlanRepository, PlanVersionRepository
from myra.persistence.repositories.sqlite.sqlite_record_repository import (
    SqliteRecordRepository,
    dataclass_columns,
)

logger = logging.getLogger(__name__)


class SqlitePlanRepository(SqliteRecordRepository[Plan], PlanRepository):
    table = "plan"
    model = Plan
    columns = dataclass_columns(Plan)
    bool_columns = frozenset({"uploaded", "staff_initiated"})

    def find_current_version(
        self, canonical_id: int, conn: Optional[sqlite3.Connection] = None
    ) -> Optional[Plan]:
        try:
            with self._db.connection(conn) as c:
                row = c.execute(
                    """
                    SELECT plan.*
                    FROM plan_version
                    INNER JOIN plan ON plan_version.plan_id = plan.id
                    WHERE plan_version.canonical_id = ? AND plan_version.version = ?
                    """,
                    (canonical_id, CURRENT_VERSION),
                ).fetchone()
        except sqlite3.Error as e:
            logger.warning("Current version lookup for plan %s failed: %s", canonical_id, e)
            return None
        return self._from_row(row) if row else None

    def agreement_for_plan_id(
        self, plan_id: int, conn: Optional[sqlite3.Connection] = None
    ) -> Optional[str]:
        if not plan_id:
            return None
        with self._db.connection(conn) as c:
            row = c.execute("SELECT agreement_id FROM plan WHERE id = ?", (plan_id,)).fetchone()
        return row["agreement_id"] if row else None


class SqlitePlanVersionRepository(SqliteRecordRepository[PlanVersion], PlanVersionRepository):
    table = "plan_version"
    model = PlanVersion
    columns = dataclass_columns(PlanVersion)

    def versions_for(
        self, canonical_id: int, conn: Optional[sqlite3.Connection] = None
    ) -> List[PlanVersion]:
        with self._db.connection(conn) as c:
            rows = c.execute(
                """
                SELECT * FROM plan_version
                WHERE canonical_id = ?
                ORDER BY CASE WHEN version = ? THEN 0 ELSE 1 END, version DESC
                """,
                (canonical_id, CURRENT_VERSION),
            ).fetchall()
        return [self._from_row(r) for r in rows]


class SqliteAdditionalRequirementRepository(SqliteRecordRepository[AdditionalRequirement]):
    table = "additional_requirement"
    model = AdditionalRequirement
    columns = dataclass_columns(AdditionalRequirement)


class SqliteManagementConsiderationRepository(SqliteRecordRepository[ManagementConsideration]):
    table = "management_consideration"
    model = ManagementConsideration
    columns = dataclass_columns(ManagementConsideration)
