from app.errors import Conflict, NotConfigured
from app.schemas import ViewCount
from app.services.base import BaseService, service_call


class StatsService(BaseService):
    """View counters. Only meaningful with a persistent backend."""

    def __init__(self, stores, latency: float = 0.0, persistent: bool = False):
        super().__init__(stores, latency)
        self.persistent = persistent

    def _require_backend(self) -> None:
        if not self.persistent:
            raise NotConfigured("View tracking needs a persistent backend (set BACKEND_URL/BACKEND_API_KEY or DATABASE_URL)")

    @service_call("record view")
    async def record_view(self, entity_type: str, entity_id: str) -> int:
        self._require_backend()
        await self.ensure_entity(entity_type, entity_id)
        scope = {"entity_type": entity_type, "entity_id": entity_id}
        existing = await self.stores.views.find_one(scope)
        if existing is None:
            try:
                created = await self.stores.views.insert(ViewCount(**scope, count=1))
                return created.count
            except Conflict:
                existing = await self.stores.views.find_one(scope)
        updated = await self.stores.views.update(existing.id, {"count": existing.count + 1})
        return updated.count

    @service_call("load views")
    async def get_views(self, entity_type: str, entity_id: str) -> int:
        self._require_backend()
        self.check_entity_type(entity_type)
        existing = await self.stores.views.find_one({"entity_type": entity_type, "entity_id": entity_id})
        return existing.count if existing else 0
