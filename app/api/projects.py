from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.api.responses import unwrap
from app.dependencies import get_services, require_user
from app.schemas import Profile
from app.services.registry import Services

router = APIRouter(prefix="/api/projects", tags=["projects"])


class ProjectRequest(BaseModel):
    slug: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    long_description: Optional[str] = None
    image: Optional[str] = None
    technologies: Optional[List[str]] = None
    category: Optional[str] = None
    github_url: Optional[str] = None
    live_url: Optional[str] = None
    featured: Optional[bool] = None


@router.get("")
async def get_projects(category: Optional[str] = None, services: Services = Depends(get_services)):
    """All projects, optionally narrowed to one category."""
    return unwrap(await services.projects.list_projects(category))


@router.get("/featured")
async def get_featured_projects(services: Services = Depends(get_services)):
    return unwrap(await services.projects.list_featured())


@router.get("/categories")
async def get_categories(services: Services = Depends(get_services)):
    return {"categories": unwrap(await services.projects.list_categories())}


@router.post("", status_code=201)
async def create_project(
    data: ProjectRequest,
    user: Profile = Depends(require_user),
    services: Services = Depends(get_services),
):
    """Create a project. Admin only; the slug must be unused."""
    return unwrap(await services.projects.create_project(user, data.model_dump(exclude_none=True)))


@router.get("/{slug}")
async def get_project(slug: str, services: Services = Depends(get_services)):
    return unwrap(await services.projects.get_project(slug))


@router.put("/{slug}")
async def update_project(
    slug: str,
    data: ProjectRequest,
    user: Profile = Depends(require_user),
    services: Services = Depends(get_services),
):
    return unwrap(await services.projects.update_project(user, slug, data.model_dump(exclude_unset=True)))


@router.delete("/{slug}")
async def delete_project(slug: str, user: Profile = Depends(require_user), services: Services = Depends(get_services)):
    """Delete a project along with its comments, likes and view count."""
    unwrap(await services.projects.delete_project(user, slug))
    return {"message": "Project deleted"}


@router.get("/{slug}/views")
async def get_project_views(slug: str, services: Services = Depends(get_services)):
    project = unwrap(await services.projects.get_project(slug))
    return {"slug": slug, "views": unwrap(await services.stats.get_views("project", project.id))}


@router.post("/{slug}/views")
async def record_project_view(slug: str, services: Services = Depends(get_services)):
    """Count one view. Answers 503 when no persistent backend is configured."""
    project = unwrap(await services.projects.get_project(slug))
    return {"slug": slug, "views": unwrap(await services.stats.record_view("project", project.id))}
