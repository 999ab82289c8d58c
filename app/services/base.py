import asyncio
import functools
import logging
from typing import Optional

from app.errors import NotFound, Result, ServiceError, TransportError, ValidationError
from app.schemas import ENTITY_TYPES

logger = logging.getLogger(__name__)

MAX_COMMENT_LENGTH = 5000


def service_call(action: str):
    """
    Wrap an async service operation into the ``{data, error}`` contract.

    Waits the simulated latency first, then runs the operation. ServiceErrors
    come back as the error half; anything unexpected is logged and reported as
    a TransportError so no exception ever reaches the caller.
    """

    def decorator(fn):
        @functools.wraps(fn)
        async def wrapper(self, *args, **kwargs) -> Result:
            await self.delay()
            try:
                return Result.success(await fn(self, *args, **kwargs))
            except ServiceError as e:
                logger.info("%s failed: %s", action, e.message)
                return Result.failure(e)
            except Exception as e:
                logger.exception("Error trying to %s: %s", action, e)
                return Result.failure(TransportError(f"Failed to {action}"))

        return wrapper

    return decorator


class BaseService:
    def __init__(self, stores, latency: float = 0.0):
        self.stores = stores
        self.latency = latency

    async def delay(self, seconds: Optional[float] = None) -> None:
        seconds = self.latency if seconds is None else seconds
        if seconds > 0:
            await asyncio.sleep(seconds)

    def check_entity_type(self, entity_type: str) -> None:
        if entity_type not in ENTITY_TYPES:
            raise ValidationError(f"Unknown entity type: {entity_type}")

    async def ensure_entity(self, entity_type: str, entity_id: str) -> None:
        self.check_entity_type(entity_type)
        store = self.stores.projects if entity_type == "project" else self.stores.blogs
        if await store.get_by_id(entity_id) is None:
            raise NotFound("Project not found" if entity_type == "project" else "Blog post not found")
