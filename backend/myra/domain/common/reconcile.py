"""Set reconciliation for link rows (purposes, issue pastures)."""
from __future__ import annotations
from typing import Callable, Iterable, List, Tuple, TypeVar

T = TypeVar("T")


def unique_in_order(values: Iterable[int]) -> List[int]:
    seen = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


def reconcile(
    existing: List[T],
    requested: Iterable[int],
    key: Callable[[T], int],
) -> Tuple[List[T], List[T], List[int]]:
    """
    Compare existing link rows against the requested key set.

    Returns (keep, remove, add): rows whose key is still requested, rows whose
    key is no longer requested, and requested keys with no existing row.
    """
    wanted = unique_in_order(requested)
    wanted_set = set(wanted)
    keep = [row for row in existing if key(row) in wanted_set]
    remove = [row for row in existing if key(row) not in wanted_set]
    present = {key(row) for row in existing}
    add = [value for value in wanted if value not in present]
    return keep, remove, add
