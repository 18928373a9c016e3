"""
Authorization gate.

Role precedence is admin > provider > client. Decisions only look at the
caller's identity, the action and (for user records) the target id; no
resource is loaded here.

Appointments are open to any authenticated identity: there is no ownership
check limiting a client to their own bookings.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .exceptions import ForbiddenError, UnauthorizedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """An authenticated caller."""

    user_id: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class Action(str, Enum):
    LIST_USERS = "users:list"
    CREATE_USER = "users:create"
    READ_USER = "users:read"
    UPDATE_USER = "users:update"
    DELETE_USER = "users:delete"
    ASSIGN_ROLE = "users:assign-role"
    READ_CATALOG = "catalog:read"
    WRITE_CATALOG = "catalog:write"
    ACCESS_APPOINTMENTS = "appointments:access"


PUBLIC_ACTIONS = frozenset({Action.READ_CATALOG})
ADMIN_ACTIONS = frozenset(
    {Action.LIST_USERS, Action.CREATE_USER, Action.ASSIGN_ROLE, Action.WRITE_CATALOG}
)
SELF_OR_ADMIN_ACTIONS = frozenset({Action.READ_USER, Action.UPDATE_USER, Action.DELETE_USER})
AUTHENTICATED_ACTIONS = frozenset({Action.ACCESS_APPOINTMENTS})

# User fields (request field names) each role may change through PUT /users/{id}
SELF_SERVICE_USER_FIELDS = frozenset({"email", "password", "name", "phone", "avatarUrl"})
ADMIN_ONLY_USER_FIELDS = frozenset({"role", "authProvider", "authId"})

EDITABLE_USER_FIELDS = {
    "admin": SELF_SERVICE_USER_FIELDS | ADMIN_ONLY_USER_FIELDS,
    "provider": SELF_SERVICE_USER_FIELDS,
    "client": SELF_SERVICE_USER_FIELDS,
}


def is_allowed(identity: Optional[Identity], action: Action, target_id: Optional[str] = None) -> bool:
    if action in PUBLIC_ACTIONS:
        return True
    if identity is None:
        return False
    if identity.is_admin:
        return True
    if action in SELF_OR_ADMIN_ACTIONS:
        return target_id is not None and identity.user_id == target_id
    return action in AUTHENTICATED_ACTIONS


def authorize(identity: Optional[Identity], action: Action, target_id: Optional[str] = None) -> None:
    """
    Raise unless ``identity`` may perform ``action`` (on ``target_id``).

    Raises:
        UnauthorizedError: No identity and the action is not public
        ForbiddenError: Authenticated but not permitted
    """
    if is_allowed(identity, action, target_id):
        return
    if identity is None:
        raise UnauthorizedError("Authentication required")
    logger.warning(
        f"🚫 Access denied: user {identity.user_id} ({identity.role}) -> {action.value}"
        + (f" on {target_id}" if target_id else "")
    )
    raise ForbiddenError("Forbidden: insufficient privileges")


def editable_user_fields(identity: Identity) -> frozenset:
    return EDITABLE_USER_FIELDS.get(identity.role, SELF_SERVICE_USER_FIELDS)


def filter_user_update(identity: Identity, fields: dict[str, Any]) -> dict[str, Any]:
    """Silently drop the fields the caller's role may not change."""
    allowed = editable_user_fields(identity)
    dropped = sorted(set(fields) - allowed)
    if dropped:
        logger.info(f"Ignoring fields {dropped} in update from {identity.role} {identity.user_id}")
    return {name: value for name, value in fields.items() if name in allowed}
