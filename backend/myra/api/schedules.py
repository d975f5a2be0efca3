"""Grazing schedule API — schedules by year and their pasture entries."""
from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends, status

from myra.api.auth import get_current_user_id
from myra.api.errors import unwrap
from myra.api.serializers import CamelModel, externalize
from myra.application.schedule_app_service import EntryWithPasture, ScheduleAppService
from myra.container import get_schedule_app_service

router = APIRouter(prefix="/plan/{plan_id}/schedule", tags=["schedules"])


# ------------------------------------------------------------------
# Pydantic schemas
# ------------------------------------------------------------------
class ScheduleUpdateBody(CamelModel):
    year: Optional[int] = None
    narative: Optional[str] = None


class ScheduleBody(ScheduleUpdateBody):
    year: int


class EntryUpdateBody(CamelModel):
    pasture_id: Optional[int] = None
    livestock_type_id: Optional[int] = None
    livestock_count: Optional[int] = None
    date_in: Optional[str] = None
    date_out: Optional[str] = None
    grace_days: Optional[int] = None
    pld_percent: Optional[float] = None


class EntryBody(EntryUpdateBody):
    pasture_id: int
    livestock_type_id: int


def _serialize_entry(value: EntryWithPasture) -> dict:
    entry, pasture = value
    return externalize(entry, {pasture.internal: pasture.external} if pasture else None)


# ------------------------------------------------------------------
# Schedule
# ------------------------------------------------------------------
@router.post("")
def store_schedule(
    plan_id: int,
    body: ScheduleBody,
    svc: ScheduleAppService = Depends(get_schedule_app_service),
    user_id: int = Depends(get_current_user_id),
):
    return externalize(unwrap(svc.create_schedule(plan_id, user_id, body.model_dump(exclude_unset=True))))


@router.put("/{schedule_id}")
def update_schedule(
    plan_id: int,
    schedule_id: int,
    body: ScheduleUpdateBody,
    svc: ScheduleAppService = Depends(get_schedule_app_service),
    user_id: int = Depends(get_current_user_id),
):
    data = body.model_dump(exclude_unset=True)
    return externalize(unwrap(svc.update_schedule(plan_id, schedule_id, user_id, data)))


@router.delete("/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT)
def destroy_schedule(
    plan_id: int,
    schedule_id: int,
    svc: ScheduleAppService = Depends(get_schedule_app_service),
    user_id: int = Depends(get_current_user_id),
):
    unwrap(svc.delete_schedule(plan_id, schedule_id, user_id))


# ------------------------------------------------------------------
# Entry
# ------------------------------------------------------------------
@router.post("/{schedule_id}/entry")
def store_entry(
    plan_id: int,
    schedule_id: int,
    body: EntryBody,
    svc: ScheduleAppService = Depends(get_schedule_app_service),
    user_id: int = Depends(get_current_user_id),
):
    data = body.model_dump(exclude_unset=True)
    return _serialize_entry(unwrap(svc.create_entry(plan_id, schedule_id, user_id, data)))


@router.put("/{schedule_id}/entry/{entry_id}")
def update_entry(
    plan_id: int,
    schedule_id: int,
    entry_id: int,
    body: EntryUpdateBody,
    svc: ScheduleAppService = Depends(get_schedule_app_service),
    user_id: int = Depends(get_current_user_id),
):
    data = body.model_dump(exclude_unset=True)
    return _serialize_entry(unwrap(svc.update_entry(plan_id, schedule_id, entry_id, user_id, data)))


@router.delete("/{schedule_id}/entry/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def destroy_entry(
    plan_id: int,
    schedule_id: int,
    entry_id: int,
    svc: ScheduleAppService = Depends(get_schedule_app_service),
    user_id: int = Depends(get_current_user_id),
):
    unwrap(svc.delete_entry(plan_id, schedule_id, entry_id, user_id))
