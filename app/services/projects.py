from typing import Any, Dict, List, Optional

from app.schemas import Profile, Project
from app.services.base import service_call
from app.services.content import ContentService


class ProjectService(ContentService):
    model = Project
    entity_type = "project"
    label = "Project"

    @property
    def store(self):
        return self.stores.projects

    @service_call("load projects")
    async def list_projects(self, category: Optional[str] = None) -> List[Project]:
        return await self.store.list({"category": category} if category else None)

    @service_call("load featured projects")
    async def list_featured(self) -> List[Project]:
        return await self.store.list({"featured": True})

    @service_call("load project")
    async def get_project(self, slug: str) -> Project:
        return await self._get(slug)

    @service_call("load categories")
    async def list_categories(self) -> List[str]:
        seen = []
        for project in await self.store.list():
            if project.category and project.category not in seen:
                seen.append(project.category)
        return seen

    @service_call("create project")
    async def create_project(self, actor: Optional[Profile], data: Dict[str, Any]) -> Project:
        return await self._create(actor, data)

    @service_call("update project")
    async def update_project(self, actor: Optional[Profile], slug: str, updates: Dict[str, Any]) -> Project:
        return await self._update(actor, slug, updates)

    @service_call("delete project")
    async def delete_project(self, actor: Optional[Profile], slug: str) -> bool:
        return await self._delete(actor, slug)
