"""SQLite records for minister issues, their actions and pasture links."""
from __future__ import annotations
import sqlite3
from typing import List, Optional

from myra.domain.issue.models import MinisterIssue, MinisterIssueAction, MinisterIssuePasture
from myra.persistence.repositories.sqlite.sqlite_record_repository import (
    SqliteRecordRepository,
    dataclass_columns,
)


class SqliteMinisterIssueRepository(SqliteRecordRepository[MinisterIssue]):
    table = "minister_issue"
    model = MinisterIssue
    columns = dataclass_columns(MinisterIssue)
    bool_columns = frozenset({"identified"})


class SqliteMinisterIssueActionRepository(SqliteRecordRepository[MinisterIssueAction]):
    table = "minister_issue_action"
    model = MinisterIssueAction
    columns = dataclass_columns(MinisterIssueAction)


class SqliteMinisterIssuePastureRepository(SqliteRecordRepository[MinisterIssuePasture]):
    table = "minister_issue_pasture"
    model = MinisterIssuePasture
    columns = dataclass_columns(MinisterIssuePasture)

    def pasture_ids_for(
        self, issue_id: int, conn: Optional[sqlite3.Connection] = None
    ) -> List[int]:
        return [link.pasture_id for link in self.find({"minister_issue_id": issue_id}, conn=conn)]
