"""
Role-based permission groups.

A controller's access is derived entirely from the role codes stored on
their roster record. Groups nest: every admin is also on the events and
training teams, and anyone holding any role code counts as staff.
"""

from enum import Enum
from typing import Optional

from artcc.core.exceptions import PermissionDeniedError
from artcc.core.logging import get_logger
from artcc.models.controller import Controller

logger = get_logger(__name__)

ADMIN_ROLES = {"ATM", "DATM", "TA", "WM"}
EVENTS_ROLES = ADMIN_ROLES | {"EC", "AEC"}
TRAINING_ROLES = ADMIN_ROLES | {"INS", "MTR"}
STAFF_ROLES = EVENTS_ROLES | TRAINING_ROLES | {"FE", "AFE", "AWM"}


class PermissionsGroup(str, Enum):
    LOGGED_IN = "logged_in"
    SOME_STAFF = "some_staff"
    EVENTS_TEAM = "events_team"
    TRAINING_TEAM = "training_team"
    ADMIN = "admin"


_GROUP_ROLES = {
    PermissionsGroup.SOME_STAFF: STAFF_ROLES,
    PermissionsGroup.EVENTS_TEAM: EVENTS_ROLES,
    PermissionsGroup.TRAINING_TEAM: TRAINING_ROLES,
    PermissionsGroup.ADMIN: ADMIN_ROLES,
}


def is_member_of(controller: Optional[Controller], group: PermissionsGroup) -> bool:
    if controller is None:
        return False
    if group == PermissionsGroup.LOGGED_IN:
        return True
    return bool(controller.role_codes & _GROUP_ROLES[group])


def ensure_member_of(controller: Optional[Controller], group: PermissionsGroup) -> None:
    """Raise PermissionDeniedError unless the controller is in the group."""
    if not is_member_of(controller, group):
        logger.info(
            "access_rejected",
            cid=controller.cid if controller else None,
            group=group.value,
        )
        raise PermissionDeniedError(f"Requires {group.value.replace('_', ' ')} access")
