import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Optional

from sqlalchemy.pool import StaticPool

from app.config import Settings
from app.schemas import BlogPost, Comment, Like, Project, UserRecord, ViewCount
from app.stores.base import Repository, utcnow
from app.stores.feed import ChangeFeed

logger = logging.getLogger(__name__)

# table, model, id prefix, label, unique keys
TABLES = {
    "users": ("profiles", UserRecord, "user", "User", [("email",), ("username",)]),
    "projects": ("projects", Project, "project", "Project", [("slug",)]),
    "blogs": ("blog_posts", BlogPost, "blog", "Blog post", [("slug",)]),
    "comments": ("comments", Comment, "comment", "Comment", []),
    "likes": ("likes", Like, "like", "Like", [("entity_type", "entity_id", "user_id")]),
    "views": ("view_counts", ViewCount, "views", "View count", [("entity_type", "entity_id")]),
}


@dataclass
class Stores:
    users: Repository[UserRecord]
    projects: Repository[Project]
    blogs: Repository[BlogPost]
    comments: Repository[Comment]
    likes: Repository[Like]
    views: Repository[ViewCount]
    feed: ChangeFeed = field(default_factory=ChangeFeed)
    mode: str = "mock"

    async def close(self) -> None:
        # All REST repositories share one client, closing it once is enough.
        await self.users.close()


def _orm_models():
    from app.models.blog import BlogPost as BlogPostRow
    from app.models.comment import Comment as CommentRow
    from app.models.like import Like as LikeRow
    from app.models.profile import Profile as ProfileRow
    from app.models.project import Project as ProjectRow
    from app.models.view_count import ViewCount as ViewCountRow

    return {
        "users": ProfileRow,
        "projects": ProjectRow,
        "blogs": BlogPostRow,
        "comments": CommentRow,
        "likes": LikeRow,
        "views": ViewCountRow,
    }


def build_stores(settings: Settings, clock: Callable = utcnow, feed: Optional[ChangeFeed] = None) -> Stores:
    """Pick the backing store from configuration: REST, SQL, or in-memory mock."""
    feed = feed or ChangeFeed()
    mode = settings.backend_mode
    repos = {}

    if mode == "rest":
        from app.stores.rest import RestClient, RestRepository

        client = RestClient(settings.backend_url, settings.backend_api_key, settings.backend_timeout)
        for name, (table, model, prefix, label, unique) in TABLES.items():
            repos[name] = RestRepository(table, model, prefix, label, unique=unique, feed=feed, clock=clock, client=client)
    elif mode == "sql":
        from app.database import make_session_factory
        from app.stores.sql import SqlRepository

        engine, SessionLocal = make_session_factory(settings.database_url)
        # One shared connection cannot carry two transactions at once.
        lock = threading.Lock() if isinstance(engine.pool, StaticPool) else None
        orm = _orm_models()
        for name, (table, model, prefix, label, unique) in TABLES.items():
            repos[name] = SqlRepository(
                table, model, prefix, label, unique=unique, feed=feed, clock=clock,
                orm_model=orm[name], session_factory=SessionLocal, session_lock=lock,
            )
    else:
        from app.stores.memory import MemoryRepository

        for name, (table, model, prefix, label, unique) in TABLES.items():
            repos[name] = MemoryRepository(table, model, prefix, label, unique=unique, feed=feed, clock=clock)

    logger.info("Stores ready in %s mode", mode)
    return Stores(feed=feed, mode=mode, **repos)
