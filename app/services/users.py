import re
from typing import Any, Dict, List, Optional

from app.auth.session import placeholder_avatar
from app.errors import NotFound, ValidationError
from app.schemas import Profile
from app.services.base import BaseService, service_call
from app.services.policy import authorize

USERNAME_RE = re.compile(r"^[A-Za-z0-9_]{3,}$")
MAX_BIO_LENGTH = 500
EDITABLE_FIELDS = ("username", "display_name", "full_name", "bio", "avatar_url")
ROLES = ("admin", "user")


def validate_username(username: str) -> str:
    if not USERNAME_RE.match(username):
        raise ValidationError("Username must be at least 3 characters: letters, digits or underscores")
    return username


class UserService(BaseService):
    def __init__(self, stores, latency: float = 0.0, sessions=None):
        super().__init__(stores, latency)
        self.sessions = sessions

    async def _get(self, user_id: str):
        user = await self.stores.users.get_by_id(user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    async def _sync_session(self, user_id: str) -> None:
        # Keep the cached identity current after a profile mutation.
        if self.sessions is None:
            return
        current = self.sessions.current_user()
        if current is not None and current.id == user_id:
            await self.sessions.refresh()

    @service_call("load users")
    async def list_users(self, actor: Optional[Profile]) -> List[Profile]:
        authorize(actor, "user.list")
        return [user.to_profile() for user in await self.stores.users.list()]

    @service_call("load profile")
    async def get_profile(self, user_id: str) -> Profile:
        return (await self._get(user_id)).to_profile()

    @service_call("update profile")
    async def update_profile(self, actor: Optional[Profile], user_id: str, updates: Dict[str, Any]) -> Profile:
        target = await self._get(user_id)
        authorize(actor, "user.update_profile", target.to_profile())

        unknown = set(updates) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Cannot update: {', '.join(sorted(unknown))}")

        changes = {}
        for key, value in updates.items():
            if isinstance(value, str):
                value = value.strip()
            changes[key] = value or None
        if changes.get("username"):
            validate_username(changes["username"])
        if changes.get("bio") and len(changes["bio"]) > MAX_BIO_LENGTH:
            raise ValidationError(f"Bio must be at most {MAX_BIO_LENGTH} characters")

        updated = await self.stores.users.update(user_id, changes)
        await self._sync_session(user_id)
        return updated.to_profile()

    @service_call("check username")
    async def check_username_available(self, username: str, exclude_user_id: Optional[str] = None) -> bool:
        validate_username(username)
        existing = await self.stores.users.find_one({"username": username})
        return existing is None or existing.id == exclude_user_id

    @service_call("upload avatar")
    async def upload_avatar(self, actor: Optional[Profile], user_id: str) -> str:
        """Mocked upload: mints a fresh placeholder URL and stores it on the profile."""
        target = await self._get(user_id)
        authorize(actor, "user.update_profile", target.to_profile())
        stamp = int(self.stores.users.clock().timestamp() * 1000)
        avatar_url = placeholder_avatar(f"{user_id}-{stamp}")
        await self.stores.users.update(user_id, {"avatar_url": avatar_url})
        await self._sync_session(user_id)
        return avatar_url

    @service_call("update role")
    async def update_role(self, actor: Optional[Profile], user_id: str, role: str) -> Profile:
        authorize(actor, "user.update_role")
        if role not in ROLES:
            raise ValidationError(f"Unknown role: {role}")
        await self._get(user_id)
        updated = await self.stores.users.update(user_id, {"role": role})
        await self._sync_session(user_id)
        return updated.to_profile()

    @service_call("delete user")
    async def delete_user(self, actor: Optional[Profile], user_id: str) -> bool:
        authorize(actor, "user.list")
        target = await self._get(user_id)
        authorize(actor, "user.delete", target.to_profile())
        await self.stores.users.remove(user_id)
        return True
