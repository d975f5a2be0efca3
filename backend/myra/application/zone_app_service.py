"""Application service — zones and the range officers assigned to them."""
from __future__ import annotations
import logging
from typing import List, Optional

from myra.domain.common.result import Result
from myra.domain.zone.models import User, Zone
from myra.persistence.records import Records

logger = logging.getLogger(__name__)


class ZoneAppService:
    def __init__(self, records: Records):
        self._r = records

    def list_zones(self, district_id: Optional[int] = None) -> List[Zone]:
        return self._r.zone.find_with_district_and_user(district_id)

    def assign_user(self, zone_id: int, user_id: int) -> Result[User]:
        zone = self._r.zone.find_by_id(zone_id)
        if zone is None:
            return Result.fail(f"No Zone with ID {zone_id} exists", 404)
        user = self._r.user.find_by_id(user_id)
        if user is None:
            return Result.fail(f"No user with ID {user_id} exists", 404)

        self._r.zone.update({"id": zone.id}, {"user_id": user.id})
        logger.info("Zone %s assigned to user %s", zone.code, user.username)
        return Result.ok(user)
