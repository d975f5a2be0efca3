"""Abstract record interface — one implementation per table."""
from __future__ import annotations
import sqlite3
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar

T = TypeVar("T")

Where = Dict[str, Any]
Order = Tuple[str, str]


class RecordRepository(ABC, Generic[T]):
    """
    Every method takes an optional connection so that callers can run several
    calls inside one transaction; without one a short-lived connection is used.
    """

    @abstractmethod
    def find(
        self,
        where: Optional[Where] = None,
        order: Optional[Order] = None,
        conn: Optional[sqlite3.Connection] = None,
    ) -> List[T]:
        """Return all rows matching every column = value pair in `where`."""
        ...

    @abstractmethod
    def find_one(self, where: Where, conn: Optional[sqlite3.Connection] = None) -> Optional[T]:
        """Return the first matching row, or None."""
        ...

    @abstractmethod
    def find_by_id(self, row_id: int, conn: Optional[sqlite3.Connection] = None) -> Optional[T]:
        ...

    @abstractmethod
    def create(self, entity: T, conn: Optional[sqlite3.Connection] = None) -> T:
        """Insert the entity (its id is ignored) and return the stored row."""
        ...

    @abstractmethod
    def update(
        self,
        where: Where,
        values: Dict[str, Any],
        conn: Optional[sqlite3.Connection] = None,
    ) -> Optional[T]:
        """Apply `values` to matching rows; return the first updated row or None."""
        ...

    @abstractmethod
    def remove(self, where: Where, conn: Optional[sqlite3.Connection] = None) -> int:
        """Delete matching rows and return how many were deleted."""
        ...
