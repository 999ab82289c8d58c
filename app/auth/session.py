"""
Client session lifecycle.

The session is the one piece of state mirrored into durable client storage.
It is kept as a single serialized record; the "current user" is read out of
that record rather than stored a second time. Expiry is lazy: every
``get_session()`` call re-reads storage and purges a record whose
``expiresAt`` has passed. There is no background timer.

NOTE: everything here runs on the client and is trusted by nothing. A real
deployment must re-validate credentials, roles and ownership server-side.
"""

import json
import logging
import re
import secrets
from datetime import timedelta
from enum import Enum
from typing import Optional, Tuple

from app.auth.passwords import hash_password, verify_password
from app.auth.storage import ClientStorage
from app.errors import AuthError, Conflict, InvalidCredentials, ServiceError, ValidationError
from app.schemas import Profile, Role, Session, UserRecord
from app.stores.base import Repository, utcnow

logger = logging.getLogger(__name__)

SESSION_KEY = "portfolio.auth.session"
# Written by older builds next to the session record. Never written now.
LEGACY_USER_KEY = "portfolio.auth.user"

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
AVATAR_URL = "https://api.dicebear.com/7.x/avataaars/svg?seed={seed}"


class AuthState(str, Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


def placeholder_avatar(seed: str) -> str:
    return AVATAR_URL.format(seed=seed)


class AuthSessionManager:
    def __init__(
        self,
        users: Repository[UserRecord],
        storage: ClientStorage,
        ttl: timedelta = timedelta(hours=24),
        clock=utcnow,
    ):
        self.users = users
        self.storage = storage
        self.ttl = ttl
        self.clock = clock
        self.state = AuthState.ANONYMOUS
        self._session: Optional[Session] = None

    # -- sign in / up / out -----------------------------------------------

    async def sign_in(self, email: str, password: str) -> Tuple[Optional[Session], Optional[ServiceError]]:
        self.state = AuthState.AUTHENTICATING
        try:
            user = await self.users.find_one({"email": email})
            # Same check and same message whether or not the email exists.
            password_ok = verify_password(password or "", user.password_hash if user else None)
            if user is None or not password_ok:
                logger.info("Sign in rejected")
                self._settle()
                return None, InvalidCredentials()
            session = self._start_session(user)
        except ServiceError as e:
            logger.error("Sign in failed: %s", e.message)
            self._settle()
            return None, AuthError("Sign in failed")
        except (OSError, ValueError) as e:
            logger.error("Sign in failed: %s", e)
            self._settle()
            return None, AuthError("Sign in failed")
        logger.info("Signed in %s", session.user.id)
        return session, None

    async def sign_up(
        self, email: str, password: str, full_name: Optional[str] = None
    ) -> Tuple[Optional[Session], Optional[ServiceError]]:
        email = (email or "").strip()
        if not EMAIL_RE.match(email):
            return None, ValidationError("A valid email address is required")
        if not password:
            return None, ValidationError("Password is required")

        self.state = AuthState.AUTHENTICATING
        try:
            if await self.users.find_one({"email": email}) is not None:
                self._settle()
                return None, Conflict("Email already registered")
            full_name = (full_name or "").strip() or None
            user = await self.users.insert(
                UserRecord(
                    email=email,
                    password_hash=hash_password(password),
                    role="user",
                    full_name=full_name,
                    display_name=full_name,
                    avatar_url=placeholder_avatar(email),
                )
            )
            session = self._start_session(user)
        except Conflict:
            self._settle()
            return None, Conflict("Email already registered")
        except ServiceError as e:
            logger.error("Sign up failed: %s", e.message)
            self._settle()
            return None, AuthError("Sign up failed")
        except (OSError, ValueError) as e:
            logger.error("Sign up failed: %s", e)
            self._settle()
            return None, AuthError("Sign up failed")
        logger.info("Registered %s", session.user.id)
        return session, None

    async def sign_out(self) -> None:
        try:
            self._purge()
        except OSError as e:
            # Still drop the in-memory session, never leave a half-signed-in client.
            logger.error("Error clearing stored session: %s", e)
        finally:
            self._session = None
            self.state = AuthState.ANONYMOUS

    async def sign_in_with_oauth(self, provider: str) -> Tuple[None, AuthError]:
        return None, AuthError(f"OAuth with {provider} is not available in demo mode")

    # -- reads ---------------------------------------------------------------

    def get_session(self) -> Optional[Session]:
        try:
            raw = self.storage.get(SESSION_KEY)
            if raw is None:
                if self.storage.get(LEGACY_USER_KEY) is not None:
                    self.storage.remove(LEGACY_USER_KEY)
                return self._drop()

            try:
                session = Session.model_validate(json.loads(raw))
            except ValueError:
                logger.warning("Stored session is unreadable, discarding it")
                self._purge()
                return self._drop()

            if self.clock() >= session.expires_at:
                logger.info("Session for %s expired", session.user.id)
                self._purge()
                return self._drop()
        except OSError as e:
            logger.error("Error reading stored session: %s", e)
            return self._drop()

        self._session = session
        self.state = AuthState.AUTHENTICATED
        return session.model_copy(deep=True)

    def current_user(self) -> Optional[Profile]:
        session = self.get_session()
        return session.user if session else None

    async def refresh(self) -> Optional[Session]:
        """Re-read storage and re-sync the cached profile from the user store."""
        session = self.get_session()
        if session is None:
            return None
        try:
            user = await self.users.get_by_id(session.user.id)
        except ServiceError as e:
            logger.error("Error refreshing session user: %s", e.message)
            return session
        if user is None:
            logger.info("User %s no longer exists, signing out", session.user.id)
            await self.sign_out()
            return None
        session.user = user.to_profile()
        try:
            self._persist(session)
        except OSError as e:
            logger.error("Error persisting refreshed session: %s", e)
        self._session = session
        return session.model_copy(deep=True)

    def has_role(self, role: Role) -> bool:
        user = self.current_user()
        return user is not None and user.role == role

    def is_admin(self) -> bool:
        return self.has_role("admin")

    # -- internals -----------------------------------------------------------

    def _start_session(self, user: UserRecord) -> Session:
        session = Session(
            user=user.to_profile(),
            token=secrets.token_urlsafe(32),
            expires_at=self.clock() + self.ttl,
        )
        self._persist(session)
        self._session = session
        self.state = AuthState.AUTHENTICATED
        return session.model_copy(deep=True)

    def _persist(self, session: Session) -> None:
        self.storage.set(SESSION_KEY, json.dumps(session.model_dump(mode="json", by_alias=True)))

    def _purge(self) -> None:
        self.storage.remove(SESSION_KEY)
        self.storage.remove(LEGACY_USER_KEY)

    def _drop(self) -> None:
        self._session = None
        self.state = AuthState.ANONYMOUS
        return None

    def _settle(self) -> None:
        # A failed attempt leaves any earlier, still valid session in place.
        self.get_session()
