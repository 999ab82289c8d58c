from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.api.responses import unwrap
from app.dependencies import get_current_user, get_services, require_user
from app.schemas import Profile
from app.services.registry import Services

router = APIRouter(prefix="/api/users", tags=["users"])


class RoleRequest(BaseModel):
    role: str


@router.get("")
async def list_users(user: Profile = Depends(require_user), services: Services = Depends(get_services)):
    """Every profile. Admin only."""
    return unwrap(await services.users.list_users(user))


@router.get("/username-available")
async def username_available(
    username: str,
    user: Optional[Profile] = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    # The caller's own username counts as available to them.
    available = unwrap(await services.users.check_username_available(username, user.id if user else None))
    return {"username": username, "available": available}


@router.get("/{user_id}")
async def get_user(user_id: str, services: Services = Depends(get_services)):
    return unwrap(await services.users.get_profile(user_id))


@router.put("/{user_id}/role")
async def update_role(
    user_id: str,
    data: RoleRequest,
    user: Profile = Depends(require_user),
    services: Services = Depends(get_services),
):
    return unwrap(await services.users.update_role(user, user_id, data.role))


@router.delete("/{user_id}")
async def delete_user(user_id: str, user: Profile = Depends(require_user), services: Services = Depends(get_services)):
    """Admin only, and admins themselves can't be deleted."""
    unwrap(await services.users.delete_user(user, user_id))
    return {"message": "User deleted"}
