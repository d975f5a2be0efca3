"""Minister issue models."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class MinisterIssueAction:
    id: Optional[int] = None
    issue_id: Optional[int] = None
    action_type_id: Optional[int] = None
    detail: Optional[str] = None
    other: Optional[str] = None
    no_graze_start_day: Optional[int] = None
    no_graze_start_month: Optional[int] = None
    no_graze_end_day: Optional[int] = None
    no_graze_end_month: Optional[int] = None
    canonical_id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class MinisterIssuePasture:
    id: Optional[int] = None
    minister_issue_id: Optional[int] = None
    pasture_id: Optional[int] = None


@dataclass
class MinisterIssue:
    id: Optional[int] = None
    plan_id: Optional[int] = None
    issue_type_id: Optional[int] = None
    detail: Optional[str] = None
    objective: Optional[str] = None
    identified: bool = False
    canonical_id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    minister_issue_actions: List[MinisterIssueAction] = field(default_factory=list)
    pasture_ids: List[int] = field(default_factory=list)  # internal pasture ids
