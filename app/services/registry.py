import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from app.auth.session import AuthSessionManager
from app.auth.storage import ClientStorage, FileStorage
from app.config import Settings, get_settings
from app.mocks.seed import seed_stores
from app.services.auth import AuthService
from app.services.blog import BlogService
from app.services.comments import CommentService
from app.services.likes import LikeService
from app.services.projects import ProjectService
from app.services.stats import StatsService
from app.services.users import UserService
from app.stores.base import utcnow
from app.stores.factory import Stores, build_stores

logger = logging.getLogger(__name__)


@dataclass
class Services:
    settings: Settings
    stores: Stores
    sessions: AuthSessionManager
    auth: AuthService
    users: UserService
    projects: ProjectService
    blog: BlogService
    comments: CommentService
    likes: LikeService
    stats: StatsService

    async def close(self) -> None:
        await self.stores.close()


async def build_services(
    settings: Optional[Settings] = None,
    storage: Optional[ClientStorage] = None,
    stores: Optional[Stores] = None,
    clock=utcnow,
) -> Services:
    """Wire the process-wide stores, the client session and every domain service."""
    settings = settings or get_settings()
    stores = stores or build_stores(settings, clock=clock)
    if settings.seed_mock_data and stores.mode != "rest":
        await seed_stores(stores)

    storage = storage or FileStorage(settings.session_store_path)
    sessions = AuthSessionManager(
        stores.users, storage, ttl=timedelta(hours=settings.session_ttl_hours), clock=clock
    )
    latency = settings.latency_seconds

    return Services(
        settings=settings,
        stores=stores,
        sessions=sessions,
        auth=AuthService(stores, sessions, latency),
        users=UserService(stores, latency, sessions=sessions),
        projects=ProjectService(stores, latency),
        blog=BlogService(stores, latency),
        comments=CommentService(stores, latency),
        likes=LikeService(stores, latency),
        stats=StatsService(stores, latency, persistent=stores.mode != "mock"),
    )
