"""Minister issue API — issues, their actions and affected pastures."""
from __future__ import annotations
from typing import List, Optional

from fastapi import APIRouter, Depends, status

from myra.api.auth import get_current_user_id
from myra.api.errors import unwrap
from myra.api.serializers import CamelModel, externalize
from myra.application.issue_app_service import IssueAppService, IssueWithPastures
from myra.container import get_issue_app_service

router = APIRouter(prefix="/plan/{plan_id}/issue", tags=["issues"])


# ------------------------------------------------------------------
# Pydantic schemas
# ------------------------------------------------------------------
class IssueUpdateBody(CamelModel):
    issue_type_id: Optional[int] = None
    detail: Optional[str] = None
    objective: Optional[str] = None
    identified: Optional[bool] = None
    pastures: Optional[List[int]] = None


class IssueBody(IssueUpdateBody):
    issue_type_id: int


class IssueActionUpdateBody(CamelModel):
    action_type_id: Optional[int] = None
    detail: Optional[str] = None
    other: Optional[str] = None
    no_graze_start_day: Optional[int] = None
    no_graze_start_month: Optional[int] = None
    no_graze_end_day: Optional[int] = None
    no_graze_end_month: Optional[int] = None


class IssueActionBody(IssueActionUpdateBody):
    action_type_id: int


def _serialize_issue(value: IssueWithPastures) -> dict:
    issue, pastures = value
    return externalize(issue, {key.internal: key.external for key in pastures})


# ------------------------------------------------------------------
# Issue
# ------------------------------------------------------------------
@router.post("")
def store_issue(
    plan_id: int,
    body: IssueBody,
    svc: IssueAppService = Depends(get_issue_app_service),
    user_id: int = Depends(get_current_user_id),
):
    return _serialize_issue(unwrap(svc.create_issue(plan_id, user_id, body.model_dump(exclude_unset=True))))


@router.put("/{issue_id}")
def update_issue(
    plan_id: int,
    issue_id: int,
    body: IssueUpdateBody,
    svc: IssueAppService = Depends(get_issue_app_service),
    user_id: int = Depends(get_current_user_id),
):
    data = body.model_dump(exclude_unset=True)
    return _serialize_issue(unwrap(svc.update_issue(plan_id, issue_id, user_id, data)))


@router.delete("/{issue_id}", status_code=status.HTTP_204_NO_CONTENT)
def destroy_issue(
    plan_id: int,
    issue_id: int,
    svc: IssueAppService = Depends(get_issue_app_service),
    user_id: int = Depends(get_current_user_id),
):
    unwrap(svc.delete_issue(plan_id, issue_id, user_id))


# ------------------------------------------------------------------
# Issue action
# ------------------------------------------------------------------
@router.post("/{issue_id}/action")
def store_issue_action(
    plan_id: int,
    issue_id: int,
    body: IssueActionBody,
    svc: IssueAppService = Depends(get_issue_app_service),
    user_id: int = Depends(get_current_user_id),
):
    data = body.model_dump(exclude_unset=True)
    return externalize(unwrap(svc.create_action(plan_id, issue_id, user_id, data)))


@router.put("/{issue_id}/action/{action_id}")
def update_issue_action(
    plan_id: int,
    issue_id: int,
    action_id: int,
    body: IssueActionUpdateBody,
    svc: IssueAppService = Depends(get_issue_app_service),
    user_id: int = Depends(get_current_user_id),
):
    data = body.model_dump(exclude_unset=True)
    return externalize(unwrap(svc.update_action(plan_id, issue_id, action_id, user_id, data)))


@router.delete("/{issue_id}/action/{action_id}", status_code=status.HTTP_204_NO_CONTENT)
def destroy_issue_action(
    plan_id: int,
    issue_id: int,
    action_id: int,
    svc: IssueAppService = Depends(get_issue_app_service),
    user_id: int = Depends(get_current_user_id),
):
    unwrap(svc.delete_action(plan_id, issue_id, action_id, user_id))
