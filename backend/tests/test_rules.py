"""Pure domain rules — no database."""
import pytest

from myra.core.security import hash_password, verify_password
from myra.domain.access.rules import (
    ROLE_ADMIN,
    ROLE_AGREEMENT_HOLDER,
    ROLE_RANGE_OFFICER,
    ROLE_READ_ONLY,
    can_access_agreement,
)
from myra.domain.common.identity import EntityKey
from myra.domain.common.reconcile import reconcile, unique_in_order
from myra.domain.pasture.models import MonitoringAreaPurpose, Pasture
from myra.domain.pasture.rules import (
    reconcile_purposes,
    validate_criteria,
    validate_purpose_of_action,
)
from myra.domain.plan.rules import next_version_number
from myra.domain.zone.models import Agreement, User, Zone


# ------------------------------------------------------------------
# Enumerated fields
# ------------------------------------------------------------------
@pytest.mark.parametrize("value", ["establish", "maintain", "none"])
def test_purpose_of_action_accepts_allowed_values(value):
    assert validate_purpose_of_action(value).is_success


@pytest.mark.parametrize("value", ["Establish", "grow", "", None])
def test_purpose_of_action_rejects_everything_else(value):
    result = validate_purpose_of_action(value)
    assert not result.is_success
    assert result.code == 400
    assert "purpose of action" in result.error


def test_criteria_values():
    assert validate_criteria("stubbleheight").is_success
    assert not validate_criteria("height").is_success


# ------------------------------------------------------------------
# Reconciliation
# ------------------------------------------------------------------
def test_reconcile_purposes_keeps_common_removes_missing_adds_new():
    existing = [
        MonitoringAreaPurpose(id=10, monitoring_area_id=1, purpose_type_id=1),
        MonitoringAreaPurpose(id=11, monitoring_area_id=1, purpose_type_id=2),
        MonitoringAreaPurpose(id=12, monitoring_area_id=1, purpose_type_id=3),
    ]
    keep, remove, add = reconcile_purposes(existing, [2, 3, 4])
    assert [p.id for p in keep] == [11, 12]
    assert [p.id for p in remove] == [10]
    assert add == [4]


def test_reconcile_ignores_duplicate_requests():
    keep, remove, add = reconcile([], [5, 5, 6, 5], key=lambda x: x)
    assert (keep, remove, add) == ([], [], [5, 6])


def test_unique_in_order():
    assert unique_in_order([3, 1, 3, 2, 1]) == [3, 1, 2]


# ------------------------------------------------------------------
# Versioning
# ------------------------------------------------------------------
def test_next_version_number_ignores_current_marker():
    assert next_version_number([-1]) == 1
    assert next_version_number([-1, 1, 2]) == 3
    assert next_version_number([]) == 1


def test_entity_key_pairs_internal_and_canonical_ids():
    key = EntityKey.of(Pasture(id=42, canonical_id=7))
    assert key.internal == 42
    assert key.external == 7


# ------------------------------------------------------------------
# Agreement access
# ------------------------------------------------------------------
def _agreement(zone_user_id=None):
    return Agreement(id="RAN1", zone=Zone(id=1, user_id=zone_user_id))


def test_admin_reads_and_writes():
    admin = User(id=1, role=ROLE_ADMIN)
    assert can_access_agreement(admin, _agreement(), set())


def test_read_only_cannot_write():
    viewer = User(id=2, role=ROLE_READ_ONLY)
    assert can_access_agreement(viewer, _agreement(), set(), write=False)
    assert not can_access_agreement(viewer, _agreement(), set(), write=True)


def test_range_officer_needs_the_zone():
    officer = User(id=3, role=ROLE_RANGE_OFFICER)
    assert can_access_agreement(officer, _agreement(zone_user_id=3), set())
    assert not can_access_agreement(officer, _agreement(zone_user_id=4), set())


def test_agreement_holder_needs_a_client_link():
    holder = User(id=5, role=ROLE_AGREEMENT_HOLDER, client_id="001")
    assert can_access_agreement(holder, _agreement(), {"001"})
    assert not can_access_agreement(holder, _agreement(), {"002"})


def test_inactive_user_is_refused():
    admin = User(id=1, role=ROLE_ADMIN, active=False)
    assert not can_access_agreement(admin, _agreement(), set())


def test_unknown_role_is_refused():
    stranger = User(id=9, role="myra_unknown")
    assert not can_access_agreement(stranger, _agreement(zone_user_id=9), {"001"}, write=False)


def test_password_hash_round_trip():
    hashed = hash_password("s3cret")
    assert hashed != "s3cret"
    assert verify_password("s3cret", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("s3cret", None)
    assert not verify_password("s3cret", "not-a-bcrypt-hash")
