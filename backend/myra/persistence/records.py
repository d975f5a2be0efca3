"""All record repositories for one database, built together and passed around explicitly."""
from __future__ import annotations
from dataclasses import dataclass

from myra.persistence.db import Database
from myra.persistence.repositories.sqlite.sqlite_issue_repository import (
    SqliteMinisterIssueActionRepository,
    SqliteMinisterIssuePastureRepository,
    SqliteMinisterIssueRepository,
)
from myra.persistence.repositories.sqlite.sqlite_pasture_repository import (
    SqliteIndicatorPlantRepository,
    SqliteMonitoringAreaPurposeRepository,
    SqliteMonitoringAreaRepository,
    SqlitePastureRepository,
    SqlitePlantCommunityActionRepository,
    SqlitePlantCommunityRepository,
)
from myra.persistence.repositories.sqlite.sqlite_plan_repository import (
    SqliteAdditionalRequirementRepository,
    SqliteManagementConsiderationRepository,
    SqlitePlanRepository,
    SqlitePlanVersionRepository,
)
from myra.persistence.repositories.sqlite.sqlite_schedule_repository import (
    SqliteGrazingScheduleEntryRepository,
    SqliteGrazingScheduleRepository,
)
from myra.persistence.repositories.sqlite.sqlite_zone_repository import (
    SqliteAgreementRepository,
    SqliteDistrictRepository,
    SqliteReferenceRepository,
    SqliteUserRepository,
    SqliteZoneRepository,
)


@dataclass
class Records:
    db: Database
    plan: SqlitePlanRepository
    plan_version: SqlitePlanVersionRepository
    pasture: SqlitePastureRepository
    plant_community: SqlitePlantCommunityRepository
    indicator_plant: SqliteIndicatorPlantRepository
    plant_community_action: SqlitePlantCommunityActionRepository
    monitoring_area: SqliteMonitoringAreaRepository
    monitoring_area_purpose: SqliteMonitoringAreaPurposeRepository
    grazing_schedule: SqliteGrazingScheduleRepository
    grazing_schedule_entry: SqliteGrazingScheduleEntryRepository
    minister_issue: SqliteMinisterIssueRepository
    minister_issue_action: SqliteMinisterIssueActionRepository
    minister_issue_pasture: SqliteMinisterIssuePastureRepository
    additional_requirement: SqliteAdditionalRequirementRepository
    management_consideration: SqliteManagementConsiderationRepository
    user: SqliteUserRepository
    district: SqliteDistrictRepository
    zone: SqliteZoneRepository
    agreement: SqliteAgreementRepository
    reference: SqliteReferenceRepository

    @classmethod
    def from_database(cls, db: Database) -> "Records":
        users = SqliteUserRepository(db)
        districts = SqliteDistrictRepository(db)
        zones = SqliteZoneRepository(db, districts=districts, users=users)
        return cls(
            db=db,
            plan=SqlitePlanRepository(db),
            plan_version=SqlitePlanVersionRepository(db),
            pasture=SqlitePastureRepository(db),
            plant_community=SqlitePlantCommunityRepository(db),
            indicator_plant=SqliteIndicatorPlantRepository(db),
            plant_community_action=SqlitePlantCommunityActionRepository(db),
            monitoring_area=SqliteMonitoringAreaRepository(db),
            monitoring_area_purpose=SqliteMonitoringAreaPurposeRepository(db),
            grazing_schedule=SqliteGrazingScheduleRepository(db),
            grazing_schedule_entry=SqliteGrazingScheduleEntryRepository(db),
            minister_issue=SqliteMinisterIssueRepository(db),
            minister_issue_action=SqliteMinisterIssueActionRepository(db),
            minister_issue_pasture=SqliteMinisterIssuePastureRepository(db),
            additional_requirement=SqliteAdditionalRequirementRepository(db),
            management_consideration=SqliteManagementConsiderationRepository(db),
            user=users,
            district=districts,
            zone=zones,
            agreement=SqliteAgreementRepository(db, zones=zones),
            reference=SqliteReferenceRepository(db),
        )
