from typing import Any, Dict, List, Optional

from app.errors import NotFound
from app.schemas import BlogPost, Profile
from app.services.base import service_call
from app.services.content import ContentService
from app.services.policy import authorize


def _is_admin(actor: Optional[Profile]) -> bool:
    return actor is not None and actor.role == "admin"


class BlogService(ContentService):
    model = BlogPost
    entity_type = "blog"
    label = "Blog post"

    @property
    def store(self):
        return self.stores.blogs

    @service_call("load blog posts")
    async def list_posts(
        self,
        tag: Optional[str] = None,
        author_id: Optional[str] = None,
        include_drafts: bool = False,
        actor: Optional[Profile] = None,
    ) -> List[BlogPost]:
        """Published posts, newest first. Drafts only for admins who ask for them."""
        filters = {}
        if include_drafts:
            authorize(actor, "content.update")
        else:
            filters["published"] = True
        if author_id:
            filters["author_id"] = author_id

        posts = await self.store.list(filters or None)
        if tag:
            posts = [p for p in posts if tag in p.tags]
        return sorted(posts, key=lambda p: p.created_at, reverse=True)

    @service_call("load blog post")
    async def get_post(self, slug: str, actor: Optional[Profile] = None) -> BlogPost:
        post = await self._get(slug)
        if not post.published and not _is_admin(actor):
            raise NotFound("Blog post not found")
        return post

    @service_call("load tags")
    async def list_tags(self) -> List[str]:
        tags = []
        for post in await self.store.list({"published": True}):
            for tag in post.tags:
                if tag not in tags:
                    tags.append(tag)
        return tags

    @service_call("create blog post")
    async def create_post(self, actor: Optional[Profile], data: Dict[str, Any]) -> BlogPost:
        data = dict(data)
        if actor is not None:
            data.setdefault("author_id", actor.id)
        return await self._create(actor, data)

    @service_call("update blog post")
    async def update_post(self, actor: Optional[Profile], slug: str, updates: Dict[str, Any]) -> BlogPost:
        return await self._update(actor, slug, updates)

    @service_call("delete blog post")
    async def delete_post(self, actor: Optional[Profile], slug: str) -> bool:
        return await self._delete(actor, slug)
