from typing import Dict, List, Optional

from app.errors import NotFound, ValidationError
from app.schemas import Comment, CommentWithAuthor, Profile
from app.services.base import MAX_COMMENT_LENGTH, BaseService, service_call
from app.services.policy import authorize


def clean_content(content: Optional[str]) -> str:
    content = (content or "").strip()
    if not content:
        raise ValidationError("Comment content cannot be empty")
    if len(content) > MAX_COMMENT_LENGTH:
        raise ValidationError(f"Comment is too long (max {MAX_COMMENT_LENGTH} characters)")
    return content


def newest_first(comments):
    return sorted(comments, key=lambda c: c.created_at, reverse=True)


class CommentService(BaseService):
    async def _with_authors(self, comments: List[Comment]) -> List[CommentWithAuthor]:
        authors: Dict[str, Optional[Profile]] = {}
        joined = []
        for comment in comments:
            if comment.user_id not in authors:
                user = await self.stores.users.get_by_id(comment.user_id)
                authors[comment.user_id] = user.to_profile() if user else None
            joined.append(CommentWithAuthor(**comment.model_dump(), author=authors[comment.user_id]))
        return joined

    async def _get(self, comment_id: str) -> Comment:
        comment = await self.stores.comments.get_by_id(comment_id)
        if comment is None:
            raise NotFound("Comment not found")
        return comment

    @service_call("load comments")
    async def list_comments(self, entity_type: str, entity_id: str) -> List[CommentWithAuthor]:
        self.check_entity_type(entity_type)
        comments = await self.stores.comments.list({"entity_type": entity_type, "entity_id": entity_id})
        return await self._with_authors(newest_first(comments))

    @service_call("create comment")
    async def add_comment(
        self, actor: Optional[Profile], entity_type: str, entity_id: str, content: str
    ) -> CommentWithAuthor:
        authorize(actor, "comment.create")
        content = clean_content(content)
        await self.ensure_entity(entity_type, entity_id)
        comment = await self.stores.comments.insert(
            Comment(entity_type=entity_type, entity_id=entity_id, user_id=actor.id, content=content)
        )
        return CommentWithAuthor(**comment.model_dump(), author=actor)

    @service_call("update comment")
    async def update_comment(self, actor: Optional[Profile], comment_id: str, content: str) -> CommentWithAuthor:
        comment = await self._get(comment_id)
        authorize(actor, "comment.update", comment)
        content = clean_content(content)
        updated = await self.stores.comments.update(comment_id, {"content": content})
        return (await self._with_authors([updated]))[0]

    @service_call("delete comment")
    async def delete_comment(self, actor: Optional[Profile], comment_id: str) -> bool:
        comment = await self._get(comment_id)
        authorize(actor, "comment.delete", comment)
        await self.stores.comments.remove(comment_id)
        return True

    @service_call("load all comments")
    async def list_all(self, actor: Optional[Profile]) -> List[CommentWithAuthor]:
        authorize(actor, "comment.list_all")
        return await self._with_authors(newest_first(await self.stores.comments.list()))
