import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.auth import router as auth_router
from app.api.blog import router as blog_router
from app.api.comments import router as comments_router
from app.api.likes import router as likes_router
from app.api.profile import router as profile_router
from app.api.projects import router as projects_router
from app.api.users import router as users_router
from app.auth.storage import ClientStorage
from app.config import Settings, get_settings
from app.services.registry import build_services

logger = logging.getLogger(__name__)

origins = [
    "http://localhost:3000",
    "http://localhost:8000",  # Keep for local testing
]


def create_app(settings: Optional[Settings] = None, storage: Optional[ClientStorage] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.services = await build_services(settings, storage=storage)
        logger.info("Portfolio backend ready (%s mode)", app.state.services.stores.mode)
        try:
            yield
        finally:
            await app.state.services.close()
            app.state.services = None

    app = FastAPI(
        title="Portfolio",
        lifespan=lifespan,
        docs_url=None if settings.env == "prod" else "/docs",
        redoc_url=None if settings.env == "prod" else "/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health_check():
        services = getattr(app.state, "services", None)
        return {"status": "ok", "backend": services.stores.mode if services else None}

    app.include_router(auth_router)
    app.include_router(profile_router, prefix="/api")
    app.include_router(users_router)
    app.include_router(projects_router)
    app.include_router(blog_router)
    app.include_router(comments_router)
    app.include_router(likes_router)

    # Custom 404 Error Handler
    @app.exception_handler(StarletteHTTPException)
    async def custom_http_exception_handler(request, exc):
        detail = exc.detail if exc.status_code != 404 or exc.detail != "Not Found" else f"No route for {request.url.path}"
        return JSONResponse({"detail": detail}, status_code=exc.status_code, headers=getattr(exc, "headers", None))

    return app


app = create_app()
