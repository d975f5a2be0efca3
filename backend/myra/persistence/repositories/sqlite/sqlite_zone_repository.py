"""SQLite records for users, districts, zones, agreements and lookup tables."""
from __future__ import annotations
import sqlite3
from typing import Iterable, List, Optional, Set, Tuple

from myra.domain.zone.models import Agreement, District, User, Zone
from myra.persistence.repositories.sqlite.sqlite_record_repository import (
    SqliteRecordRepository,
    dataclass_columns,
)


class SqliteUserRepository(SqliteRecordRepository[User]):
    table = "user_account"
    model = User
    columns = dataclass_columns(User)
    bool_columns = frozenset({"active"})

    def find_with_password_hash(
        self, username: str, conn: Optional[sqlite3.Connection] = None
    ) -> Optional[Tuple[User, Optional[str]]]:
        with self._db.connection(conn) as c:
            row = c.execute(
                "SELECT * FROM user_account WHERE username = ?", (username,)
            ).fetchone()
        if not row:
            return None
        return self._from_row(row), row["password_hash"]


class SqliteDistrictRepository(SqliteRecordRepository[District]):
    table = "district"
    model = District
    columns = dataclass_columns(District)


class SqliteZoneRepository(SqliteRecordRepository[Zone]):
    table = "zone"
    model = Zone
    columns = dataclass_columns(Zone, exclude=("district", "user"))

    def __init__(self, db, districts: SqliteDistrictRepository, users: SqliteUserRepository):
        super().__init__(db)
        self._districts = districts
        self._users = users

    def find_with_district_and_user(
        self, district_id: Optional[int] = None, conn: Optional[sqlite3.Connection] = None
    ) -> List[Zone]:
        where = {"district_id": district_id} if district_id is not None else None
        with self._db.connection(conn) as c:
            zones = self.find(where, conn=c)
            for zone in zones:
                zone.district = self._districts.find_by_id(zone.district_id, conn=c)
                zone.user = self._users.find_by_id(zone.user_id, conn=c) if zone.user_id else None
        return zones


class SqliteAgreementRepository(SqliteRecordRepository[Agreement]):
    table = "agreement"
    model = Agreement
    columns = dataclass_columns(Agreement, exclude=("zone",))

    def __init__(self, db, zones: SqliteZoneRepository):
        super().__init__(db)
        self._zones = zones

    def find_with_zone(
        self, agreement_id: str, conn: Optional[sqlite3.Connection] = None
    ) -> Optional[Agreement]:
        with self._db.connection(conn) as c:
            agreement = self.find_by_id(agreement_id, conn=c)
            if agreement and agreement.zone_id is not None:
                agreement.zone = self._zones.find_by_id(agreement.zone_id, conn=c)
        return agreement

    def client_ids_for(
        self, agreement_id: str, conn: Optional[sqlite3.Connection] = None
    ) -> Set[str]:
        with self._db.connection(conn) as c:
            rows = c.execute(
                "SELECT client_id FROM client_agreement WHERE agreement_id = ?", (agreement_id,)
            ).fetchall()
        return {r["client_id"] for r in rows}


class SqliteReferenceRepository:
    """Read-only access to the ref_* lookup tables."""

    tables = frozenset({
        "ref_plan_status",
        "ref_amendment_type",
        "ref_plant_community_type",
        "ref_plant_community_elevation",
        "ref_plant_community_action_type",
        "ref_monitoring_area_health",
        "ref_monitoring_area_purpose_type",
        "ref_plant_species",
        "ref_livestock",
        "ref_minister_issue_type",
        "ref_minister_issue_action_type",
        "ref_additional_requirement_category",
        "ref_management_consideration_type",
    })

    def __init__(self, db):
        self._db = db

    def _check_table(self, table: str) -> None:
        if table not in self.tables:
            raise ValueError(f"Unknown reference table '{table}'")

    def active_ids(self, table: str, conn: Optional[sqlite3.Connection] = None) -> Set[int]:
        self._check_table(table)
        with self._db.connection(conn) as c:
            rows = c.execute(f"SELECT id FROM {table} WHERE active = 1").fetchall()
        return {r["id"] for r in rows}

    def missing_ids(
        self, table: str, ids: Iterable[int], conn: Optional[sqlite3.Connection] = None
    ) -> List[int]:
        """Requested ids that are not active values of the lookup table, in request order."""
        known = self.active_ids(table, conn=conn)
        return [i for i in ids if i not in known]
