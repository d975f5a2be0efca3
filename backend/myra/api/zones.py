"""Zone API — list zones, assign a range officer to a zone."""
from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends, Query

from myra.api.auth import get_current_user
from myra.api.errors import unwrap
from myra.api.serializers import CamelModel, externalize
from myra.application.zone_app_service import ZoneAppService
from myra.container import get_zone_app_service

router = APIRouter(prefix="/zone", tags=["zones"])


class ZoneUserBody(CamelModel):
    user_id: int


@router.get("")
def list_zones(
    district_id: Optional[int] = Query(None, alias="districtId"),
    svc: ZoneAppService = Depends(get_zone_app_service),
    current_user: dict = Depends(get_current_user),
):
    return [externalize(z) for z in svc.list_zones(district_id)]


@router.put("/{zone_id}/user")
def assign_user(
    zone_id: int,
    body: ZoneUserBody,
    svc: ZoneAppService = Depends(get_zone_app_service),
    current_user: dict = Depends(get_current_user),
):
    return externalize(unwrap(svc.assign_user(zone_id, body.user_id)))
