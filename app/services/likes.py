import asyncio
import weakref
from typing import List, Optional, Tuple

from app.errors import NotFound
from app.schemas import Like, LikeData, Profile, ToggleResult
from app.services.base import BaseService, service_call
from app.services.policy import authorize


class LikeService(BaseService):
    """
    Likes with at most one row per (entity_type, entity_id, user_id).

    Toggles for the same triple are serialized, so concurrent toggles are
    applied in arrival order and the last one decides the final state: two
    overlapping toggles end exactly where two sequential toggles would.
    """

    def __init__(self, stores, latency: float = 0.0):
        super().__init__(stores, latency)
        # An entry lives only while some toggle holds or waits on its lock.
        self._locks: "weakref.WeakValueDictionary[Tuple[str, str, str], asyncio.Lock]" = weakref.WeakValueDictionary()

    def _lock_for(self, key: Tuple[str, str, str]) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock

    async def _count(self, entity_type: str, entity_id: str) -> int:
        return await self.stores.likes.count({"entity_type": entity_type, "entity_id": entity_id})

    @service_call("load likes")
    async def get_like_data(self, entity_type: str, entity_id: str, user_id: Optional[str] = None) -> LikeData:
        self.check_entity_type(entity_type)
        has_liked = False
        if user_id:
            triple = {"entity_type": entity_type, "entity_id": entity_id, "user_id": user_id}
            has_liked = await self.stores.likes.find_one(triple) is not None
        return LikeData(count=await self._count(entity_type, entity_id), has_liked=has_liked)

    @service_call("toggle like")
    async def toggle_like(self, actor: Optional[Profile], entity_type: str, entity_id: str) -> ToggleResult:
        authorize(actor, "like.toggle")
        await self.ensure_entity(entity_type, entity_id)
        key = (entity_type, entity_id, actor.id)
        lock = self._lock_for(key)
        async with lock:
            triple = {"entity_type": entity_type, "entity_id": entity_id, "user_id": actor.id}
            existing = await self.stores.likes.find_one(triple)
            if existing is not None:
                try:
                    await self.stores.likes.remove(existing.id)
                except NotFound:
                    # Removed by another writer in the meantime; the outcome is the same.
                    pass
                liked = False
            else:
                # A duplicate insert is rejected by the store with Conflict.
                await self.stores.likes.insert(Like(**triple))
                liked = True
            return ToggleResult(liked=liked, count=await self._count(entity_type, entity_id))

    @service_call("load user likes")
    async def list_user_likes(self, user_id: str) -> List[Like]:
        return await self.stores.likes.list({"user_id": user_id})

    @service_call("load all likes")
    async def list_all(self, actor: Optional[Profile]) -> List[Like]:
        authorize(actor, "like.list_all")
        return await self.stores.likes.list()
