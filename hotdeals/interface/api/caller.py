"""Caller context passed by the upstream gateway.

Authentication happens upstream; the gateway forwards the resolved user id
in ``X-User-Id`` and the caller's capacity in ``X-Actor-Role``.
"""

from uuid import UUID

from hotdeals.domain.value import ActorRole
from hotdeals.interface.error import MissingCallerError


def require_user_id(x_user_id: str | None) -> str:
    """Return the caller's user id.

    Raises:
        MissingCallerError: If the header is absent or not a UUID
    """
    if not x_user_id:
        raise MissingCallerError("X-User-Id header required")
    try:
        return str(UUID(x_user_id))
    except ValueError:
        raise MissingCallerError("X-User-Id must be a UUID") from None


def actor_role(x_actor_role: str | None) -> ActorRole:
    """Return the caller's role (plain user when absent).

    Raises:
        MissingCallerError: If the header names an unknown role
    """
    if not x_actor_role:
        return ActorRole.USER
    try:
        return ActorRole(x_actor_role.upper())
    except ValueError:
        raise MissingCallerError(f"Unknown actor role: {x_actor_role}") from None
