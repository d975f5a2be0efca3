"""SQLite records for the pasture subtree."""
from __future__ import annotations

from myra.domain.pasture.models import (
    IndicatorPlant,
    MonitoringArea,
    MonitoringAreaPurpose,
    Pasture,
    PlantCommunity,
    PlantCommunityAction,
)
from myra.persistence.repositories.sqlite.sqlite_record_repository import (
    SqliteRecordRepository,
    dataclass_columns,
)


class SqlitePastureRepository(SqliteRecordRepository[Pasture]):
    table = "pasture"
    model = Pasture
    columns = dataclass_columns(Pasture)


class SqlitePlantCommunityRepository(SqliteRecordRepository[PlantCommunity]):
    table = "plant_community"
    model = PlantCommunity
    columns = dataclass_columns(PlantCommunity)
    bool_columns = frozenset({"approved"})


class SqliteIndicatorPlantRepository(SqliteRecordRepository[IndicatorPlant]):
    table = "indicator_plant"
    model = IndicatorPlant
    columns = dataclass_columns(IndicatorPlant)


class SqlitePlantCommunityActionRepository(SqliteRecordRepository[PlantCommunityAction]):
    table = "plant_community_action"
    model = PlantCommunityAction
    columns = dataclass_columns(PlantCommunityAction)


class SqliteMonitoringAreaRepository(SqliteRecordRepository[MonitoringArea]):
    table = "monitoring_area"
    model = MonitoringArea
    columns = dataclass_columns(MonitoringArea)


class SqliteMonitoringAreaPurposeRepository(SqliteRecordRepository[MonitoringAreaPurpose]):
    table = "monitoring_area_purpose"
    model = MonitoringAreaPurpose
    columns = dataclass_columns(MonitoringAreaPurpose)
