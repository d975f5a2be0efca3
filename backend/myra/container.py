"""Dependency injection container — wires the database, records and services for FastAPI."""
from __future__ import annotations
from functools import lru_cache

from fastapi import Depends

from myra.application.access_service import AgreementAccessService
from myra.application.issue_app_service import IssueAppService
from myra.application.pasture_app_service import PastureAppService
from myra.application.plan_app_service import PlanAppService
from myra.application.requirement_app_service import RequirementAppService
from myra.application.schedule_app_service import ScheduleAppService
from myra.application.zone_app_service import ZoneAppService
from myra.core.config import DATABASE_PATH
from myra.persistence.db import Database
from myra.persistence.records import Records


@lru_cache(maxsize=1)
def get_database() -> Database:
    return Database(DATABASE_PATH)


def get_records(db: Database = Depends(get_database)) -> Records:
    return Records.from_database(db)


def get_access_service(records: Records = Depends(get_records)) -> AgreementAccessService:
    return AgreementAccessService(records)


def get_plan_app_service(
    records: Records = Depends(get_records),
    access: AgreementAccessService = Depends(get_access_service),
) -> PlanAppService:
    return PlanAppService(records, access)


def get_pasture_app_service(
    records: Records = Depends(get_records),
    access: AgreementAccessService = Depends(get_access_service),
) -> PastureAppService:
    return PastureAppService(records, access)


def get_schedule_app_service(
    records: Records = Depends(get_records),
    access: AgreementAccessService = Depends(get_access_service),
) -> ScheduleAppService:
    return ScheduleAppService(records, access)


def get_issue_app_service(
    records: Records = Depends(get_records),
    access: AgreementAccessService = Depends(get_access_service),
) -> IssueAppService:
    return IssueAppService(records, access)


def get_requirement_app_service(
    records: Records = Depends(get_records),
    access: AgreementAccessService = Depends(get_access_service),
) -> RequirementAppService:
    return RequirementAppService(records, access)


def get_zone_app_service(records: Records = Depends(get_records)) -> ZoneAppService:
    return ZoneAppService(records)
