import logging
from typing import Any, Dict, Optional

import asyncpg
import httpx
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .clients.brevo import BrevoClient
from .clients.pexels import PexelsClient
from .clients.supabase_auth import SupabaseAuthClient
from .config import Settings, get_settings
from .exceptions import Unauthorized
from .services.identity_service import IdentityResolver

logger = logging.getLogger(__name__)


# Global state for connections
class AppState:
    pg_pool: Optional[asyncpg.Pool] = None
    http_client: Optional[httpx.AsyncClient] = None


state = AppState()


async def init_resources(settings: Settings):
    """Initialize all resources"""
    state.pg_pool = await asyncpg.create_pool(
        settings.DATABASE_URL,
        min_size=settings.DB_POOL_MIN_SIZE,
        max_size=settings.DB_POOL_MAX_SIZE,
    )
    # Upstream calls are not bounded by a timeout
    state.http_client = httpx.AsyncClient(timeout=None)
    logger.info("All connections initialized")


async def close_resources():
    """Close all resources"""
    if state.http_client:
        await state.http_client.aclose()
    if state.pg_pool:
        await state.pg_pool.close()
    logger.info("All connections closed")


# Dependencies
async def get_db_pool() -> asyncpg.Pool:
    return state.pg_pool


async def get_http_client() -> httpx.AsyncClient:
    return state.http_client


async def get_auth_client(
    http: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> SupabaseAuthClient:
    return SupabaseAuthClient(http, settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)


async def get_pexels_client(
    http: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> Optional[PexelsClient]:
    if not settings.PEXELS_API_KEY:
        return None
    return PexelsClient(http, settings.PEXELS_API_KEY)


async def get_brevo_client(
    http: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> Optional[BrevoClient]:
    if not settings.BREVO_API_KEY:
        return None
    return BrevoClient(http, settings.BREVO_API_KEY)


# Auth Dependencies
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_client: SupabaseAuthClient = Depends(get_auth_client),
) -> Dict[str, Any]:
    # Missing header, other schemes and empty tokens all arrive here as None
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Token required")
    return await IdentityResolver(auth_client).resolve_user(credentials.credentials)


async def get_current_user_id(user: Dict[str, Any] = Depends(get_current_user)) -> str:
    return user["id"]
