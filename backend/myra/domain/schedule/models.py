"""Grazing schedule models."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class GrazingScheduleEntry:
    id: Optional[int] = None
    grazing_schedule_id: Optional[int] = None
    pasture_id: Optional[int] = None
    livestock_type_id: Optional[int] = None
    livestock_count: Optional[int] = None
    date_in: Optional[str] = None
    date_out: Optional[str] = None
    grace_days: Optional[int] = None
    pld_percent: Optional[float] = None
    canonical_id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class GrazingSchedule:
    id: Optional[int] = None
    plan_id: Optional[int] = None
    year: Optional[int] = None
    narative: Optional[str] = None
    canonical_id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    grazing_schedule_entries: List[GrazingScheduleEntry] = field(default_factory=list)
