from typing import Optional

from app.auth.session import AuthSessionManager
from app.errors import Result
from app.schemas import Session
from app.services.base import BaseService


class AuthService(BaseService):
    """Latency-bearing facade over the session manager, in the ``{data, error}`` shape."""

    def __init__(self, stores, sessions: AuthSessionManager, latency: float = 0.0):
        super().__init__(stores, latency)
        self.sessions = sessions

    async def sign_in(self, email: str, password: str) -> Result[Session]:
        await self.delay()
        session, error = await self.sessions.sign_in(email, password)
        return Result(data=session, error=error)

    async def sign_up(self, email: str, password: str, full_name: Optional[str] = None) -> Result[Session]:
        await self.delay()
        session, error = await self.sessions.sign_up(email, password, full_name)
        return Result(data=session, error=error)

    async def sign_out(self) -> Result[None]:
        await self.delay(self.latency * 0.4)
        await self.sessions.sign_out()
        return Result.success(None)

    async def get_session(self) -> Result[Optional[Session]]:
        await self.delay(self.latency * 0.4)
        return Result.success(self.sessions.get_session())

    async def refresh(self) -> Result[Optional[Session]]:
        return Result.success(await self.sessions.refresh())

    async def sign_in_with_oauth(self, provider: str) -> Result[None]:
        await self.delay()
        _, error = await self.sessions.sign_in_with_oauth(provider)
        return Result.failure(error)
