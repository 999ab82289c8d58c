from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from app.api.responses import unwrap
from app.dependencies import get_services, require_user
from app.schemas import Profile
from app.services.registry import Services

router = APIRouter(prefix="/api/comments", tags=["comments"])


class CommentRequest(BaseModel):
    content: str


@router.get("")
async def get_all_comments(user: Profile = Depends(require_user), services: Services = Depends(get_services)):
    """Every comment on the site, newest first. Admin only."""
    return unwrap(await services.comments.list_all(user))


@router.get("/{entity_type}/{entity_id}")
async def get_comments(entity_type: str, entity_id: str, services: Services = Depends(get_services)):
    """Comments for one project or blog post, newest first, with their authors."""
    return unwrap(await services.comments.list_comments(entity_type, entity_id))


@router.post("/{entity_type}/{entity_id}", status_code=status.HTTP_201_CREATED)
async def create_comment(
    entity_type: str,
    entity_id: str,
    comment: CommentRequest,
    user: Profile = Depends(require_user),
    services: Services = Depends(get_services),
):
    return unwrap(await services.comments.add_comment(user, entity_type, entity_id, comment.content))


@router.put("/{comment_id}")
async def update_comment(
    comment_id: str,
    comment: CommentRequest,
    user: Profile = Depends(require_user),
    services: Services = Depends(get_services),
):
    """Edit your own comment. Nobody else may, admins included."""
    return unwrap(await services.comments.update_comment(user, comment_id, comment.content))


@router.delete("/{comment_id}")
async def delete_comment(comment_id: str, user: Profile = Depends(require_user), services: Services = Depends(get_services)):
    unwrap(await services.comments.delete_comment(user, comment_id))
    return {"message": "Comment deleted"}
