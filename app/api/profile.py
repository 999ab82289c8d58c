from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.api.responses import unwrap
from app.dependencies import get_services, require_user
from app.schemas import Profile
from app.services.registry import Services

router = APIRouter()


class ProfileRequest(BaseModel):
    full_name: Optional[str] = None
    username: Optional[str] = None
    display_name: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None


@router.get("/profile")
async def get_profile(user: Profile = Depends(require_user), services: Services = Depends(get_services)):
    return unwrap(await services.users.get_profile(user.id))


@router.put("/profile")
async def save_profile(
    data: ProfileRequest,
    user: Profile = Depends(require_user),
    services: Services = Depends(get_services),
):
    """
    Update the signed-in user's own profile. Only the fields sent are touched;
    blank strings clear a field. The stored session is refreshed to match.
    """
    updates = data.model_dump(exclude_unset=True)
    return unwrap(await services.users.update_profile(user, user.id, updates))


@router.post("/profile/avatar")
async def upload_avatar(user: Profile = Depends(require_user), services: Services = Depends(get_services)):
    avatar_url = unwrap(await services.users.upload_avatar(user, user.id))
    return {"avatar_url": avatar_url}
