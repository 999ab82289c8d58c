from typing import Optional

from fastapi import APIRouter, Depends

from app.api.responses import unwrap
from app.dependencies import get_current_user, get_services, require_user
from app.schemas import Profile
from app.services.registry import Services

router = APIRouter(prefix="/api/likes", tags=["likes"])


@router.get("")
async def get_all_likes(user: Profile = Depends(require_user), services: Services = Depends(get_services)):
    """Every like on the site. Admin only."""
    return unwrap(await services.likes.list_all(user))


@router.get("/me")
async def get_my_likes(user: Profile = Depends(require_user), services: Services = Depends(get_services)):
    return unwrap(await services.likes.list_user_likes(user.id))


@router.get("/{entity_type}/{entity_id}")
async def get_likes(
    entity_type: str,
    entity_id: str,
    user: Optional[Profile] = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    """Like count, and whether the signed-in user (if any) is among them."""
    return unwrap(await services.likes.get_like_data(entity_type, entity_id, user.id if user else None))


@router.post("/{entity_type}/{entity_id}/toggle")
async def toggle_like(
    entity_type: str,
    entity_id: str,
    user: Profile = Depends(require_user),
    services: Services = Depends(get_services),
):
    return unwrap(await services.likes.toggle_like(user, entity_type, entity_id))
