"""Plan API — create, read, list versions, duplicate."""
from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends

from myra.api.auth import get_current_user_id
from myra.api.errors import unwrap
from myra.api.serializers import CamelModel, serialize_plan, serialize_version
from myra.application.plan_app_service import PlanAppService
from myra.container import get_plan_app_service
from myra.domain.plan.rules import VersioningPolicy

router = APIRouter(prefix="/plan", tags=["plans"])


# ------------------------------------------------------------------
# Pydantic schemas
# ------------------------------------------------------------------
class PlanBody(CamelModel):
    agreement_id: str
    range_name: Optional[str] = None
    plan_start_date: Optional[str] = None
    plan_end_date: Optional[str] = None
    notes: Optional[str] = None
    alt_business_name: Optional[str] = None
    status_id: Optional[int] = None
    uploaded: Optional[bool] = None
    amendment_type_id: Optional[int] = None
    extension_id: Optional[int] = None
    staff_initiated: Optional[bool] = None
    effective_at: Optional[str] = None
    submitted_at: Optional[str] = None


class DuplicateBody(CamelModel):
    policy: VersioningPolicy


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------
@router.post("")
def create_plan(
    body: PlanBody,
    svc: PlanAppService = Depends(get_plan_app_service),
    user_id: int = Depends(get_current_user_id),
):
    return serialize_plan(unwrap(svc.create_plan(user_id, body.model_dump(exclude_unset=True))))


@router.get("/{plan_id}")
def get_plan(
    plan_id: int,
    svc: PlanAppService = Depends(get_plan_app_service),
    user_id: int = Depends(get_current_user_id),
):
    return serialize_plan(unwrap(svc.get_plan(plan_id, user_id)))


@router.get("/{plan_id}/versions")
def list_versions(
    plan_id: int,
    svc: PlanAppService = Depends(get_plan_app_service),
    user_id: int = Depends(get_current_user_id),
):
    return [serialize_version(v) for v in unwrap(svc.list_versions(plan_id, user_id))]


@router.post("/{plan_id}/duplicate")
def duplicate_plan(
    plan_id: int,
    body: DuplicateBody,
    svc: PlanAppService = Depends(get_plan_app_service),
    user_id: int = Depends(get_current_user_id),
):
    return serialize_plan(unwrap(svc.duplicate_plan(plan_id, user_id, policy=body.policy)))
