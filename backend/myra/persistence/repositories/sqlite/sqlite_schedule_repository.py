"""SQLite records for grazing schedules and their entries."""
from __future__ import annotations

from myra.domain.schedule.models import GrazingSchedule, GrazingScheduleEntry
from myra.persistence.repositories.sqlite.sqlite_record_repository import (
    SqliteRecordRepository,
    dataclass_columns,
)


class SqliteGrazingScheduleRepository(SqliteRecordRepository[GrazingSchedule]):
    table = "grazing_schedule"
    model = GrazingSchedule
    columns = dataclass_columns(GrazingSchedule)
    default_order = ("year", "asc")


class SqliteGrazingScheduleEntryRepository(SqliteRecordRepository[GrazingScheduleEntry]):
    table = "grazing_schedule_entry"
    model = GrazingScheduleEntry
    columns = dataclass_columns(GrazingScheduleEntry)
