"""Agreement-scoped authorization and current-plan resolution."""
from __future__ import annotations
import logging
from typing import Optional

from myra.domain.access.rules import can_access_agreement
from myra.domain.common.result import Result
from myra.domain.plan.models import Plan
from myra.domain.zone.models import Agreement
from myra.persistence.records import Records

logger = logging.getLogger(__name__)


class AgreementAccessService:
    """Checked on every request before anything is written; never cached."""

    def __init__(self, records: Records):
        self._r = records

    def can_user_access_this_agreement(
        self, user_id: int, agreement_id: Optional[str], write: bool = True
    ) -> Result[Agreement]:
        if not agreement_id:
            return Result.fail("Unable to find the related agreement", 404)
        agreement = self._r.agreement.find_with_zone(agreement_id)
        if agreement is None:
            return Result.fail("Unable to find the related agreement", 404)

        user = self._r.user.find_by_id(user_id)
        if user is None:
            return Result.fail("You do not access to this agreement", 403)

        client_ids = self._r.agreement.client_ids_for(agreement_id)
        if not can_access_agreement(user, agreement, client_ids, write=write):
            logger.warning("User %s refused access to agreement %s", user_id, agreement_id)
            return Result.fail("You do not access to this agreement", 403)
        return Result.ok(agreement)

    def resolve_current_plan(
        self, canonical_id: int, user_id: int, write: bool = True
    ) -> Result[Plan]:
        """Current version of the plan, provided the user may access its agreement."""
        plan = self._r.plan.find_current_version(canonical_id)
        if plan is None:
            return Result.fail("Plan doesn't exist", 404)

        agreement_id = self._r.plan.agreement_for_plan_id(plan.id)
        access = self.can_user_access_this_agreement(user_id, agreement_id, write=write)
        if not access.is_success:
            return Result.fail(access.error, access.code)
        return Result.ok(plan)
