# app/dependencies.py
import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from app.schemas import Profile
from app.services.registry import Services

logger = logging.getLogger(__name__)


def get_services(request: Request) -> Services:
    services = getattr(request.app.state, "services", None)
    if services is None:
        logger.error("Services requested before application startup completed")
        raise HTTPException(status_code=503, detail="Server is starting up")
    return services


def get_current_user(services: Services = Depends(get_services)) -> Optional[Profile]:
    """The signed-in user, or None. An expired session is purged on the way."""
    session = services.sessions.get_session()
    return session.user if session else None


def require_user(user: Optional[Profile] = Depends(get_current_user)) -> Profile:
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return user


def require_admin(user: Profile = Depends(require_user)) -> Profile:
    if user.role != "admin":
        logger.info("Admin route refused for user %s", user.id)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
    return user
