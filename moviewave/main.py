"""
=============================================================================
MovieWave API - backend-for-frontend
=============================================================================
Features:
  - Account management proxied to Supabase auth (register, login, recovery)
  - Favorites and ratings keyed by Pexels video ids
  - Pexels video search with a multi-genre "popular" feed
  - JSON logging with request correlation ids
=============================================================================
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings, warn_missing_optional
from .dependencies import close_resources, init_resources
from .exceptions import (
    MovieWaveException,
    app_exception_handler,
    global_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from .limiter import limiter
from .logging_config import setup_logging
from .middleware import RequestTrackingMiddleware
from .routers import auth_router, favorite_router, rating_router, system_router, video_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        warn_missing_optional(settings)
        await init_resources(settings)
        yield
        await close_resources()

    app = FastAPI(
        title="MovieWave API",
        description="Auth, favorites, ratings and video search for the MovieWave frontend",
        version=system_router.VERSION,
        lifespan=lifespan,
    )

    # =========================================================================
    # CORS CONFIGURATION - only the configured frontend origin
    # =========================================================================
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_middleware(RequestTrackingMiddleware)

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(MovieWaveException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.include_router(system_router.router)
    app.include_router(auth_router.router)
    app.include_router(favorite_router.router)
    app.include_router(rating_router.router)
    app.include_router(video_router.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("moviewave.main:app", host="0.0.0.0", port=get_settings().PORT)
