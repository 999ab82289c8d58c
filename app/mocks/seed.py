import logging

from app.auth.passwords import hash_password
from app.mocks.blogs import MOCK_BLOGS
from app.mocks.comments import MOCK_COMMENTS
from app.mocks.likes import MOCK_LIKES
from app.mocks.projects import MOCK_PROJECTS
from app.mocks.users import MOCK_USERS
from app.schemas import BlogPost, Comment, Like, Project, UserRecord

logger = logging.getLogger(__name__)


def _timestamped(row: dict) -> dict:
    row = dict(row)
    row.setdefault("updated_at", row["created_at"])
    return row


def mock_users():
    users = []
    for row in MOCK_USERS:
        row = _timestamped(row)
        row["password_hash"] = hash_password(row.pop("password"))
        users.append(UserRecord.model_validate(row))
    return users


async def seed_stores(stores) -> None:
    """Load the demo data set into empty stores."""
    if await stores.users.count():
        logger.info("Stores already hold data, skipping seed")
        return

    await stores.users.load(mock_users())
    await stores.projects.load([Project.model_validate(_timestamped(row)) for row in MOCK_PROJECTS])
    await stores.blogs.load([BlogPost.model_validate(_timestamped(row)) for row in MOCK_BLOGS])
    await stores.comments.load([Comment.model_validate(_timestamped(row)) for row in MOCK_COMMENTS])
    await stores.likes.load([Like.model_validate(row) for row in MOCK_LIKES])
    logger.info(
        "Seeded %d users, %d projects, %d posts, %d comments, %d likes",
        len(MOCK_USERS), len(MOCK_PROJECTS), len(MOCK_BLOGS), len(MOCK_COMMENTS), len(MOCK_LIKES),
    )
