from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.api.responses import unwrap
from app.dependencies import get_services
from app.services.registry import Services

router = APIRouter(prefix="/api/auth", tags=["auth"])


class SignInRequest(BaseModel):
    email: str
    password: str


class SignUpRequest(BaseModel):
    email: str
    password: str
    full_name: Optional[str] = None


@router.post("/signin")
async def sign_in(data: SignInRequest, services: Services = Depends(get_services)):
    """Check the credentials and start a session. Wrong email and wrong password look the same."""
    return unwrap(await services.auth.sign_in(data.email, data.password))


@router.post("/signup", status_code=201)
async def sign_up(data: SignUpRequest, services: Services = Depends(get_services)):
    """Create a ``user`` role account and sign it in."""
    return unwrap(await services.auth.sign_up(data.email, data.password, data.full_name))


@router.post("/signout")
async def sign_out(services: Services = Depends(get_services)):
    unwrap(await services.auth.sign_out())
    return {"message": "Signed out"}


@router.get("/session")
async def get_session(services: Services = Depends(get_services)):
    """The current session, or null when nobody is signed in or it has expired."""
    return unwrap(await services.auth.get_session())


@router.post("/oauth/{provider}")
async def sign_in_with_oauth(provider: str, services: Services = Depends(get_services)):
    return unwrap(await services.auth.sign_in_with_oauth(provider))
