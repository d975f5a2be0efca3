"""Additional requirement and management consideration API."""
from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends, status

from myra.api.auth import get_current_user_id
from myra.api.errors import unwrap
from myra.api.serializers import CamelModel, externalize
from myra.application.requirement_app_service import RequirementAppService
from myra.container import get_requirement_app_service

router = APIRouter(prefix="/plan/{plan_id}", tags=["requirements"])


# ------------------------------------------------------------------
# Pydantic schemas
# ------------------------------------------------------------------
class RequirementUpdateBody(CamelModel):
    category_id: Optional[int] = None
    detail: Optional[str] = None
    url: Optional[str] = None


class RequirementBody(RequirementUpdateBody):
    category_id: int


class ConsiderationUpdateBody(CamelModel):
    consideration_type_id: Optional[int] = None
    detail: Optional[str] = None
    url: Optional[str] = None


class ConsiderationBody(ConsiderationUpdateBody):
    consideration_type_id: int


# ------------------------------------------------------------------
# Additional requirement
# ------------------------------------------------------------------
@router.post("/additionalRequirement")
def store_requirement(
    plan_id: int,
    body: RequirementBody,
    svc: RequirementAppService = Depends(get_requirement_app_service),
    user_id: int = Depends(get_current_user_id),
):
    data = body.model_dump(exclude_unset=True)
    return externalize(unwrap(svc.create_requirement(plan_id, user_id, data)))


@router.put("/additionalRequirement/{requirement_id}")
def update_requirement(
    plan_id: int,
    requirement_id: int,
    body: RequirementUpdateBody,
    svc: RequirementAppService = Depends(get_requirement_app_service),
    user_id: int = Depends(get_current_user_id),
):
    data = body.model_dump(exclude_unset=True)
    return externalize(unwrap(svc.update_requirement(plan_id, requirement_id, user_id, data)))


@router.delete("/additionalRequirement/{requirement_id}", status_code=status.HTTP_204_NO_CONTENT)
def destroy_requirement(
    plan_id: int,
    requirement_id: int,
    svc: RequirementAppService = Depends(get_requirement_app_service),
    user_id: int = Depends(get_current_user_id),
):
    unwrap(svc.delete_requirement(plan_id, requirement_id, user_id))


# ------------------------------------------------------------------
# Management consideration
# ------------------------------------------------------------------
@router.post("/managementConsideration")
def store_consideration(
    plan_id: int,
    body: ConsiderationBody,
    svc: RequirementAppService = Depends(get_requirement_app_service),
    user_id: int = Depends(get_current_user_id),
):
    data = body.model_dump(exclude_unset=True)
    return externalize(unwrap(svc.create_consideration(plan_id, user_id, data)))


@router.put("/managementConsideration/{consideration_id}")
def update_consideration(
    plan_id: int,
    consideration_id: int,
    body: ConsiderationUpdateBody,
    svc: RequirementAppService = Depends(get_requirement_app_service),
    user_id: int = Depends(get_current_user_id),
):
    data = body.model_dump(exclude_unset=True)
    return externalize(unwrap(svc.update_consideration(plan_id, consideration_id, user_id, data)))


@router.delete("/managementConsideration/{consideration_id}", status_code=status.HTTP_204_NO_CONTENT)
def destroy_consideration(
    plan_id: int,
    consideration_id: int,
    svc: RequirementAppService = Depends(get_requirement_app_service),
    user_id: int = Depends(get_current_user_id),
):
    unwrap(svc.delete_consideration(plan_id, consideration_id, user_id))
