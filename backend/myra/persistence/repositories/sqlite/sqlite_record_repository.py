"""Generic SQLite implementation of RecordRepository for dataclass rows."""
from __future__ import annotations
import sqlite3
from dataclasses import MISSING, fields
from typing import Any, Dict, FrozenSet, List, Optional, Tuple, Type

from myra.persistence.db import Database
from myra.persistence.interfaces.record_repository import Order, RecordRepository, T, Where


class SqliteRecordRepository(RecordRepository[T]):
    """
    Subclasses name their table, their dataclass and the dataclass fields that
    are real columns; nested collections on the dataclass are never persisted.
    """

    table: str = ""
    model: Type[T]
    columns: Tuple[str, ...] = ()
    bool_columns: FrozenSet[str] = frozenset()
    default_order: Optional[Order] = ("id", "asc")

    def __init__(self, db: Database):
        self._db = db

    # ------------------------------------------------------------------
    # Row mapping
    # ------------------------------------------------------------------
    def _from_row(self, row: sqlite3.Row) -> T:
        data = {c: row[c] for c in self.columns}
        for c in self.bool_columns:
            if data[c] is not None:
                data[c] = bool(data[c])
        return self.model(**data)

    def _check_columns(self, names) -> None:
        unknown = set(names) - set(self.columns)
        if unknown:
            raise ValueError(f"Unknown column(s) for {self.table}: {sorted(unknown)}")

    def _where(self, where: Optional[Where]) -> Tuple[str, List[Any]]:
        if not where:
            return "", []
        self._check_columns(where)
        clause = " AND ".join(f"{column} = ?" for column in where)
        return f" WHERE {clause}", list(where.values())

    def _order(self, order: Optional[Order]) -> str:
        order = order or self.default_order
        if not order:
            return ""
        column, direction = order
        self._check_columns([column])
        if direction.lower() not in ("asc", "desc"):
            raise ValueError(f"Invalid sort direction '{direction}'")
        return f" ORDER BY {column} {direction.upper()}"

    # ------------------------------------------------------------------
    # RecordRepository
    # ------------------------------------------------------------------
    def find(
        self,
        where: Optional[Where] = None,
        order: Optional[Order] = None,
        conn: Optional[sqlite3.Connection] = None,
    ) -> List[T]:
        clause, params = self._where(where)
        with self._db.connection(conn) as c:
            rows = c.execute(
                f"SELECT * FROM {self.table}{clause}{self._order(order)}", params
            ).fetchall()
        return [self._from_row(r) for r in rows]

    def find_one(self, where: Where, conn: Optional[sqlite3.Connection] = None) -> Optional[T]:
        clause, params = self._where(where)
        with self._db.connection(conn) as c:
            row = c.execute(
                f"SELECT * FROM {self.table}{clause}{self._order(None)} LIMIT 1", params
            ).fetchone()
        return self._from_row(row) if row else None

    def find_by_id(self, row_id: int, conn: Optional[sqlite3.Connection] = None) -> Optional[T]:
        return self.find_one({"id": row_id}, conn=conn)

    def create(self, entity: T, conn: Optional[sqlite3.Connection] = None) -> T:
        # None values are left out so that column defaults and triggers apply
        data = {
            c: getattr(entity, c)
            for c in self.columns
            if c != "id" and getattr(entity, c) is not None
        }
        with self._db.connection(conn) as c:
            if data:
                names = ", ".join(data)
                placeholders = ", ".join(f":{name}" for name in data)
                cur = c.execute(
                    f"INSERT INTO {self.table} ({names}) VALUES ({placeholders})", data
                )
            else:
                cur = c.execute(f"INSERT INTO {self.table} DEFAULT VALUES")
            return self.find_by_id(cur.lastrowid, conn=c)

    def update(
        self,
        where: Where,
        values: Dict[str, Any],
        conn: Optional[sqlite3.Connection] = None,
    ) -> Optional[T]:
        values = {k: v for k, v in values.items() if k != "id"}
        self._check_columns(values)
        clause, params = self._where(where)
        with self._db.connection(conn) as c:
            ids = [r["id"] for r in c.execute(f"SELECT id FROM {self.table}{clause}", params)]
            if not ids:
                return None
            if values:
                assignments = [f"{name} = ?" for name in values]
                if "updated_at" in self.columns and "updated_at" not in values:
                    assignments.append("updated_at = CURRENT_TIMESTAMP")
                id_marks = ", ".join("?" for _ in ids)
                c.execute(
                    f"UPDATE {self.table} SET {', '.join(assignments)} WHERE id IN ({id_marks})",
                    [*values.values(), *ids],
                )
            return self.find_by_id(ids[0], conn=c)

    def remove(self, where: Where, conn: Optional[sqlite3.Connection] = None) -> int:
        if not where:
            raise ValueError(f"Refusing to delete every row of {self.table}")
        clause, params = self._where(where)
        with self._db.connection(conn) as c:
            cur = c.execute(f"DELETE FROM {self.table}{clause}", params)
        return cur.rowcount


def dataclass_columns(model: type, exclude: Tuple[str, ...] = ()) -> Tuple[str, ...]:
    """Scalar fields of a row dataclass; list-valued children are not columns."""
    return tuple(
        f.name
        for f in fields(model)
        if f.default_factory is MISSING and f.name not in exclude
    )
