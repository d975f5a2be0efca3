"""Agreement, zone and user models."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass
class District:
    id: Optional[int] = None
    code: Optional[str] = None
    description: Optional[str] = None


@dataclass
class User:
    id: Optional[int] = None
    username: Optional[str] = None
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None  # myra_admin | myra_read_only | myra_range_officer | myra_client
    client_id: Optional[str] = None
    active: bool = True
    created_at: Optional[str] = None


@dataclass
class Zone:
    id: Optional[int] = None
    code: Optional[str] = None
    description: Optional[str] = None
    district_id: Optional[int] = None
    user_id: Optional[int] = None
    district: Optional[District] = None
    user: Optional[User] = None


@dataclass
class Agreement:
    id: Optional[str] = None  # forest file id, e.g. RAN073124
    agreement_start_date: Optional[str] = None
    agreement_end_date: Optional[str] = None
    zone_id: Optional[int] = None
    zone: Optional[Zone] = None
