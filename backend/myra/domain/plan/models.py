"""Plan aggregate models — the root of the plan graph."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

from myra.domain.issue.models import MinisterIssue
from myra.domain.pasture.models import Pasture
from myra.domain.schedule.models import GrazingSchedule

CURRENT_VERSION = -1


@dataclass
class AdditionalRequirement:
    id: Optional[int] = None
    plan_id: Optional[int] = None
    category_id: Optional[int] = None
    detail: Optional[str] = None
    url: Optional[str] = None
    canonical_id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class ManagementConsideration:
    id: Optional[int] = None
    plan_id: Optional[int] = None
    consideration_type_id: Optional[int] = None
    detail: Optional[str] = None
    url: Optional[str] = None
    canonical_id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class PlanVersion:
    id: Optional[int] = None
    canonical_id: Optional[int] = None
    plan_id: Optional[int] = None
    version: int = CURRENT_VERSION  # -1 is the live, editable copy
    created_at: Optional[str] = None

    @property
    def is_current(self) -> bool:
        return self.version == CURRENT_VERSION


@dataclass
class Plan:
    id: Optional[int] = None
    range_name: Optional[str] = None
    plan_start_date: Optional[str] = None
    plan_end_date: Optional[str] = None
    notes: Optional[str] = None
    alt_business_name: Optional[str] = None
    agreement_id: Optional[str] = None
    status_id: Optional[int] = None
    uploaded: bool = True
    amendment_type_id: Optional[int] = None
    extension_id: Optional[int] = None
    creator_id: Optional[int] = None
    staff_initiated: bool = False
    effective_at: Optional[str] = None
    submitted_at: Optional[str] = None
    canonical_id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    pastures: List[Pasture] = field(default_factory=list)
    grazing_schedules: List[GrazingSchedule] = field(default_factory=list)
    minister_issues: List[MinisterIssue] = field(default_factory=list)
    additional_requirements: List[AdditionalRequirement] = field(default_factory=list)
    management_considerations: List[ManagementConsideration] = field(default_factory=list)
