"""Pasture API — pastures, plant communities and everything recorded against a plant community."""
from __future__ import annotations
from typing import List, Optional

from fastapi import APIRouter, Depends, status

from myra.api.auth import get_current_user_id
from myra.api.errors import unwrap
from myra.api.serializers import CamelModel, externalize
from myra.application.pasture_app_service import PastureAppService
from myra.container import get_pasture_app_service

router = APIRouter(prefix="/plan/{plan_id}/pasture", tags=["pastures"])

_COMMUNITY = "/{pasture_id}/plantCommunity/{community_id}"


# ------------------------------------------------------------------
# Pydantic schemas
# ------------------------------------------------------------------
class PastureBody(CamelModel):
    name: Optional[str] = None
    allowable_aum: Optional[int] = None
    grace_days: Optional[int] = None
    pld_percent: Optional[float] = None
    notes: Optional[str] = None


class PlantCommunityUpdateBody(CamelModel):
    community_type_id: Optional[int] = None
    elevation_id: Optional[int] = None
    purpose_of_action: Optional[str] = None
    name: Optional[str] = None
    aspect: Optional[str] = None
    url: Optional[str] = None
    notes: Optional[str] = None
    range_readiness_day: Optional[int] = None
    range_readiness_month: Optional[int] = None
    range_readiness_note: Optional[str] = None
    shrub_use: Optional[float] = None
    approved: Optional[bool] = None


class PlantCommunityBody(PlantCommunityUpdateBody):
    community_type_id: int
    purpose_of_action: str


class ActionUpdateBody(CamelModel):
    action_type_id: Optional[int] = None
    name: Optional[str] = None
    details: Optional[str] = None
    no_graze_start_day: Optional[int] = None
    no_graze_start_month: Optional[int] = None
    no_graze_end_day: Optional[int] = None
    no_graze_end_month: Optional[int] = None


class ActionBody(ActionUpdateBody):
    action_type_id: int


class IndicatorPlantUpdateBody(CamelModel):
    plant_species_id: Optional[int] = None
    criteria: Optional[str] = None
    value: Optional[float] = None
    name: Optional[str] = None


class IndicatorPlantBody(IndicatorPlantUpdateBody):
    criteria: str


class MonitoringAreaUpdateBody(CamelModel):
    name: Optional[str] = None
    health_id: Optional[int] = None
    other_purpose: Optional[str] = None
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    transect_azimuth: Optional[int] = None
    rangeland_health: Optional[str] = None
    purpose_type_ids: Optional[List[int]] = None


class MonitoringAreaBody(MonitoringAreaUpdateBody):
    name: str
    purpose_type_ids: List[int]


# ------------------------------------------------------------------
# Pasture
# ------------------------------------------------------------------
@router.post("")
def store_pasture(
    plan_id: int,
    body: PastureBody,
    svc: PastureAppService = Depends(get_pasture_app_service),
    user_id: int = Depends(get_current_user_id),
):
    return externalize(unwrap(svc.create_pasture(plan_id, user_id, body.model_dump(exclude_unset=True))))


@router.put("/{pasture_id}")
def update_pasture(
    plan_id: int,
    pasture_id: int,
    body: PastureBody,
    svc: PastureAppService = Depends(get_pasture_app_service),
    user_id: int = Depends(get_current_user_id),
):
    data = body.model_dump(exclude_unset=True)
    return externalize(unwrap(svc.update_pasture(plan_id, pasture_id, user_id, data)))


@router.delete("/{pasture_id}", status_code=status.HTTP_204_NO_CONTENT)
def destroy_pasture(
    plan_id: int,
    pasture_id: int,
    svc: PastureAppService = Depends(get_pasture_app_service),
    user_id: int = Depends(get_current_user_id),
):
    unwrap(svc.delete_pasture(plan_id, pasture_id, user_id))


# ------------------------------------------------------------------
# Plant community
# ------------------------------------------------------------------
@router.post("/{pasture_id}/plantCommunity")
def store_plant_community(
    plan_id: int,
    pasture_id: int,
    body: PlantCommunityBody,
    svc: PastureAppService = Depends(get_pasture_app_service),
    user_id: int = Depends(get_current_user_id),
):
    data = body.model_dump(exclude_unset=True)
    return externalize(unwrap(svc.create_plant_community(plan_id, pasture_id, user_id, data)))


@router.put(_COMMUNITY)
def update_plant_community(
    plan_id: int,
    pasture_id: int,
    community_id: int,
    body: PlantCommunityUpdateBody,
    svc: PastureAppService = Depends(get_pasture_app_service),
    user_id: int = Depends(get_current_user_id),
):
    data = body.model_dump(exclude_unset=True)
    return externalize(unwrap(svc.update_plant_community(plan_id, pasture_id, community_id, user_id, data)))


@router.delete(_COMMUNITY, status_code=status.HTTP_204_NO_CONTENT)
def destroy_plant_community(
    plan_id: int,
    pasture_id: int,
    community_id: int,
    svc: PastureAppService = Depends(get_pasture_app_service),
    user_id: int = Depends(get_current_user_id),
):
    unwrap(svc.delete_plant_community(plan_id, pasture_id, community_id, user_id))


# ------------------------------------------------------------------
# Plant community action
# ------------------------------------------------------------------
@router.post(_COMMUNITY + "/action")
def store_action(
    plan_id: int,
    pasture_id: int,
    community_id: int,
    body: ActionBody,
    svc: PastureAppService = Depends(get_pasture_app_service),
    user_id: int = Depends(get_current_user_id),
):
    data = body.model_dump(exclude_unset=True)
    return externalize(unwrap(svc.create_action(plan_id, pasture_id, community_id, user_id, data)))


@router.put(_COMMUNITY + "/action/{action_id}")
def update_action(
    plan_id: int,
    pasture_id: int,
    community_id: int,
    action_id: int,
    body: ActionUpdateBody,
    svc: PastureAppService = Depends(get_pasture_app_service),
    user_id: int = Depends(get_current_user_id),
):
    data = body.model_dump(exclude_unset=True)
    return externalize(unwrap(svc.update_action(plan_id, pasture_id, community_id, action_id, user_id, data)))


@router.delete(_COMMUNITY + "/action/{action_id}", status_code=status.HTTP_204_NO_CONTENT)
def destroy_action(
    plan_id: int,
    pasture_id: int,
    community_id: int,
    action_id: int,
    svc: PastureAppService = Depends(get_pasture_app_service),
    user_id: int = Depends(get_current_user_id),
):
    unwrap(svc.delete_action(plan_id, pasture_id, community_id, action_id, user_id))


# ------------------------------------------------------------------
# Indicator plant
# ------------------------------------------------------------------
@router.post(_COMMUNITY + "/indicatorPlant")
def store_indicator_plant(
    plan_id: int,
    pasture_id: int,
    community_id: int,
    body: IndicatorPlantBody,
    svc: PastureAppService = Depends(get_pasture_app_service),
    user_id: int = Depends(get_current_user_id),
):
    data = body.model_dump(exclude_unset=True)
    return externalize(unwrap(svc.create_indicator_plant(plan_id, pasture_id, community_id, user_id, data)))


@router.put(_COMMUNITY + "/indicatorPlant/{plant_id}")
def update_indicator_plant(
    plan_id: int,
    pasture_id: int,
    community_id: int,
    plant_id: int,
    body: IndicatorPlantUpdateBody,
    svc: PastureAppService = Depends(get_pasture_app_service),
    user_id: int = Depends(get_current_user_id),
):
    data = body.model_dump(exclude_unset=True)
    return externalize(unwrap(
        svc.update_indicator_plant(plan_id, pasture_id, community_id, plant_id, user_id, data)
    ))


@router.delete(_COMMUNITY + "/indicatorPlant/{plant_id}", status_code=status.HTTP_204_NO_CONTENT)
def destroy_indicator_plant(
    plan_id: int,
    pasture_id: int,
    community_id: int,
    plant_id: int,
    svc: PastureAppService = Depends(get_pasture_app_service),
    user_id: int = Depends(get_current_user_id),
):
    unwrap(svc.delete_indicator_plant(plan_id, pasture_id, community_id, plant_id, user_id))


# ------------------------------------------------------------------
# Monitoring area
# ------------------------------------------------------------------
@router.post(_COMMUNITY + "/monitoringArea")
def store_monitoring_area(
    plan_id: int,
    pasture_id: int,
    community_id: int,
    body: MonitoringAreaBody,
    svc: PastureAppService = Depends(get_pasture_app_service),
    user_id: int = Depends(get_current_user_id),
):
    data = body.model_dump(exclude_unset=True)
    return externalize(unwrap(svc.create_monitoring_area(plan_id, pasture_id, community_id, user_id, data)))


@router.put(_COMMUNITY + "/monitoringArea/{area_id}")
def update_monitoring_area(
    plan_id: int,
    pasture_id: int,
    community_id: int,
    area_id: int,
    body: MonitoringAreaUpdateBody,
    svc: PastureAppService = Depends(get_pasture_app_service),
    user_id: int = Depends(get_current_user_id),
):
    data = body.model_dump(exclude_unset=True)
    return externalize(unwrap(
        svc.update_monitoring_area(plan_id, pasture_id, community_id, area_id, user_id, data)
    ))


@router.delete(_COMMUNITY + "/monitoringArea/{area_id}", status_code=status.HTTP_204_NO_CONTENT)
def destroy_monitoring_area(
    plan_id: int,
    pasture_id: int,
    community_id: int,
    area_id: int,
    svc: PastureAppService = Depends(get_pasture_app_service),
    user_id: int = Depends(get_current_user_id),
):
    unwrap(svc.delete_monitoring_area(plan_id, pasture_id, community_id, area_id, user_id))
