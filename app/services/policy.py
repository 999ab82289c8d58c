"""
Authorization as a pure function of (identity, action, resource).

Services consult this before every protected mutation. It runs on the client
and therefore protects nothing against a hostile client: any real backend has
to repeat these exact checks server-side.
"""

from typing import Any, Optional

from app.errors import Unauthorized
from app.schemas import Profile

ADMIN_ONLY = {
    "content.create",
    "content.update",
    "content.delete",
    "comment.list_all",
    "like.list_all",
    "user.list",
    "user.update_role",
    "user.delete",
}
AUTHENTICATED = {"comment.create", "like.toggle"}
OWNER_ONLY = {"comment.update", "user.update_profile"}
OWNER_OR_ADMIN = {"comment.delete"}


def _owner_id(resource: Any) -> Optional[str]:
    if resource is None:
        return None
    if isinstance(resource, str):
        return resource
    # Users own themselves, everything else is owned through user_id.
    if isinstance(resource, Profile):
        return resource.id
    return getattr(resource, "user_id", None)


def is_allowed(identity: Optional[Profile], action: str, resource: Any = None) -> bool:
    if identity is None:
        return False
    is_admin = identity.role == "admin"

    if action in ADMIN_ONLY:
        if action == "user.delete" and isinstance(resource, Profile) and resource.role == "admin":
            return False
        return is_admin
    if action in AUTHENTICATED:
        return True
    if action in OWNER_ONLY:
        return _owner_id(resource) == identity.id
    if action in OWNER_OR_ADMIN:
        return is_admin or _owner_id(resource) == identity.id
    raise ValueError(f"Unknown action: {action}")


def authorize(identity: Optional[Profile], action: str, resource: Any = None) -> None:
    if identity is None:
        raise Unauthorized("Sign in required")
    if action == "user.delete" and isinstance(resource, Profile) and resource.role == "admin":
        raise Unauthorized("Cannot delete admin user")
    if not is_allowed(identity, action, resource):
        raise Unauthorized()
