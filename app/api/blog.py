from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.api.responses import unwrap
from app.dependencies import get_current_user, get_services, require_user
from app.schemas import Profile
from app.services.registry import Services

router = APIRouter(prefix="/api/blog", tags=["blog"])


class BlogPostRequest(BaseModel):
    slug: Optional[str] = None
    title: Optional[str] = None
    excerpt: Optional[str] = None
    content: Optional[str] = None
    cover_image: Optional[str] = None
    author_id: Optional[str] = None
    tags: Optional[List[str]] = None
    published: Optional[bool] = None
    read_time: Optional[int] = None


@router.post("/posts", status_code=201)
async def create_blog_post(
    post: BlogPostRequest,
    user: Profile = Depends(require_user),
    services: Services = Depends(get_services),
):
    """Create a new blog post. Admin only; the author defaults to the caller."""
    return unwrap(await services.blog.create_post(user, post.model_dump(exclude_none=True)))


@router.get("/posts")
async def get_blog_posts(
    tag: Optional[str] = None,
    author_id: Optional[str] = None,
    include_drafts: bool = False,
    user: Optional[Profile] = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    """Published posts, newest first. ``include_drafts`` is honoured for admins only."""
    return unwrap(await services.blog.list_posts(tag, author_id, include_drafts, user))


@router.get("/tags")
async def get_tags(services: Services = Depends(get_services)):
    return {"tags": unwrap(await services.blog.list_tags())}


@router.get("/posts/{slug}")
async def get_blog_post(
    slug: str,
    user: Optional[Profile] = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    return unwrap(await services.blog.get_post(slug, user))


@router.put("/posts/{slug}")
async def update_blog_post(
    slug: str,
    post: BlogPostRequest,
    user: Profile = Depends(require_user),
    services: Services = Depends(get_services),
):
    return unwrap(await services.blog.update_post(user, slug, post.model_dump(exclude_unset=True)))


@router.delete("/posts/{slug}")
async def delete_blog_post(slug: str, user: Profile = Depends(require_user), services: Services = Depends(get_services)):
    unwrap(await services.blog.delete_post(user, slug))
    return {"message": "Blog post deleted"}
