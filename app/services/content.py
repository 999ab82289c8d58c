"""Shared create/read/update/delete rules for slug-addressed content (projects, blog posts)."""

import re
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from app.errors import NotFound, ValidationError
from app.schemas import Profile
from app.services.base import BaseService
from app.services.policy import authorize

SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def validate_slug(slug: Any) -> str:
    if not isinstance(slug, str) or not SLUG_RE.match(slug):
        raise ValidationError("Slug must be lowercase letters, digits and single hyphens")
    return slug


class ContentService(BaseService):
    model: Type[BaseModel]
    entity_type: str
    label: str

    @property
    def store(self):
        raise NotImplementedError

    async def _get(self, slug: str):
        record = await self.store.get_by_slug(slug)
        if record is None:
            raise NotFound(f"{self.label} not found")
        return record

    async def _create(self, actor: Optional[Profile], data: Dict[str, Any]):
        authorize(actor, "content.create")
        data = {k: v for k, v in data.items() if k not in ("id", "created_at", "updated_at")}
        validate_slug(data.get("slug"))
        if not str(data.get("title") or "").strip():
            raise ValidationError("Title is required")
        try:
            record = self.model.model_validate(data)
        except SchemaError as e:
            raise ValidationError(f"Invalid {self.label.lower()}: {e.errors()[0]['msg']}")
        return await self.store.insert(record)

    async def _update(self, actor: Optional[Profile], slug: str, updates: Dict[str, Any]):
        authorize(actor, "content.update")
        current = await self._get(slug)
        if "slug" in updates:
            validate_slug(updates["slug"])
        if "title" in updates and not str(updates["title"] or "").strip():
            raise ValidationError("Title is required")
        return await self.store.update(current.id, updates)

    async def _delete(self, actor: Optional[Profile], slug: str) -> bool:
        authorize(actor, "content.delete")
        current = await self._get(slug)
        # The entity goes only once its social rows are gone.
        await self._purge_social(current.id)
        await self.store.remove(current.id)
        return True

    async def _purge_social(self, entity_id: str) -> None:
        # Comments, likes and view counts die with their entity.
        scope = {"entity_type": self.entity_type, "entity_id": entity_id}
        for store in (self.stores.comments, self.stores.likes, self.stores.views):
            for row in await store.list(scope):
                await store.remove(row.id)
