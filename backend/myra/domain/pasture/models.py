"""Pasture subtree models — pure Python, no DB or HTTP dependencies."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class MonitoringAreaPurpose:
    id: Optional[int] = None
    monitoring_area_id: Optional[int] = None
    purpose_type_id: Optional[int] = None
    canonical_id: Optional[int] = None


@dataclass
class MonitoringArea:
    id: Optional[int] = None
    plant_community_id: Optional[int] = None
    health_id: Optional[int] = None
    name: Optional[str] = None
    other_purpose: Optional[str] = None
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    transect_azimuth: Optional[int] = None
    rangeland_health: Optional[str] = None
    canonical_id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    purposes: List[MonitoringAreaPurpose] = field(default_factory=list)


@dataclass
class IndicatorPlant:
    id: Optional[int] = None
    plant_community_id: Optional[int] = None
    plant_species_id: Optional[int] = None
    criteria: Optional[str] = None  # rangereadiness | stubbleheight | shrubuse
    value: Optional[float] = None
    name: Optional[str] = None
    canonical_id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class PlantCommunityAction:
    id: Optional[int] = None
    plant_community_id: Optional[int] = None
    action_type_id: Optional[int] = None
    name: Optional[str] = None
    details: Optional[str] = None
    no_graze_start_day: Optional[int] = None
    no_graze_start_month: Optional[int] = None
    no_graze_end_day: Optional[int] = None
    no_graze_end_month: Optional[int] = None
    canonical_id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class PlantCommunity:
    id: Optional[int] = None
    pasture_id: Optional[int] = None
    community_type_id: Optional[int] = None
    elevation_id: Optional[int] = None
    purpose_of_action: Optional[str] = None  # establish | maintain | none
    name: Optional[str] = None
    aspect: Optional[str] = None
    url: Optional[str] = None
    notes: Optional[str] = None
    range_readiness_day: Optional[int] = None
    range_readiness_month: Optional[int] = None
    range_readiness_note: Optional[str] = None
    shrub_use: Optional[float] = None
    approved: bool = False
    canonical_id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    indicator_plants: List[IndicatorPlant] = field(default_factory=list)
    monitoring_areas: List[MonitoringArea] = field(default_factory=list)
    plant_community_actions: List[PlantCommunityAction] = field(default_factory=list)


@dataclass
class Pasture:
    id: Optional[int] = None
    plan_id: Optional[int] = None
    name: Optional[str] = None
    allowable_aum: Optional[int] = None
    grace_days: Optional[int] = None
    pld_percent: Optional[float] = None
    notes: Optional[str] = None
    canonical_id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    plant_communities: List[PlantCommunity] = field(default_factory=list)
