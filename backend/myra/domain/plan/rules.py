"""Versioning rules for plan duplication."""
from __future__ import annotations
from enum import Enum
from typing import Iterable

from myra.domain.plan.models import CURRENT_VERSION


class VersioningPolicy(str, Enum):
    """What a duplicated plan becomes relative to its source."""

    # Same canonical id; the source row is frozen under the next version number
    # and the copy becomes the current (-1) version.
    NEW_VERSION = "newVersion"
    # A separate plan with its own canonical id and its own current version.
    INDEPENDENT = "independent"


def next_version_number(existing_versions: Iterable[int]) -> int:
    """Next snapshot number for a canonical id; the current marker is ignored."""
    numbered = [v for v in existing_versions if v != CURRENT_VERSION]
    return max(numbered, default=0) + 1
