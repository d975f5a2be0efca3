"""Agreement access rules — which users may read or change an agreement's plans."""
from __future__ import annotations
from typing import Collection

from myra.domain.zone.models import Agreement, User

ROLE_ADMIN = "myra_admin"
ROLE_READ_ONLY = "myra_read_only"
ROLE_RANGE_OFFICER = "myra_range_officer"
ROLE_AGREEMENT_HOLDER = "myra_client"


def can_access_agreement(
    user: User,
    agreement: Agreement,
    agreement_client_ids: Collection[str],
    write: bool = True,
) -> bool:
    """
    Admins see everything, read-only staff see everything but change nothing,
    range officers own the agreements in the zones assigned to them and
    agreement holders reach agreements their client number is linked to.
    """
    if not user.active:
        return False
    if user.role == ROLE_ADMIN:
        return True
    if user.role == ROLE_READ_ONLY:
        return not write
    if user.role == ROLE_RANGE_OFFICER:
        return agreement.zone is not None and agreement.zone.user_id == user.id
    if user.role == ROLE_AGREEMENT_HOLDER:
        return user.client_id is not None and user.client_id in agreement_client_ids
    return False
