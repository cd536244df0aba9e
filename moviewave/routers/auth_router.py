from datetime import timedelta
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, status

from ..clients.supabase_auth import SupabaseAuthClient
from ..config import Settings, get_settings
from ..dependencies import get_auth_client, get_brevo_client, get_current_user, get_current_user_id, get_db_pool
from ..limiter import limiter
from ..repositories.user_repository import UserRepository
from ..schemas.auth import (
    AuthResponse,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    UserCreate,
    UserLogin,
    UserProfile,
    UserUpdate,
)
from ..services.auth_service import AuthService
from ..services.email_service import EmailService

router = APIRouter(prefix="/api", tags=["auth"])


async def get_auth_service(
    db = Depends(get_db_pool),
    auth_client: SupabaseAuthClient = Depends(get_auth_client),
    brevo = Depends(get_brevo_client),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    email_service = EmailService(brevo, settings.EMAIL_SENDER, settings.FRONTEND_URL)
    return AuthService(
        auth_client,
        UserRepository(db),
        email_service,
        jwt_secret=settings.JWT_SECRET,
        reset_token_ttl=timedelta(minutes=settings.RESET_TOKEN_EXPIRE_MINUTES),
        expose_reset_token=settings.is_development,
    )


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=AuthResponse)
@limiter.limit("5/minute")
async def register(
    user_data: UserCreate,
    request: Request,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new user"""
    return await service.register_user(user_data)


@router.post("/login", response_model=AuthResponse)
@limiter.limit("10/minute")
async def login(
    login_data: UserLogin,
    request: Request,
    service: AuthService = Depends(get_auth_service)
):
    """Login to get the auth platform access token"""
    return await service.authenticate_user(login_data)


@router.get("/user-profile", response_model=UserProfile)
async def user_profile(
    user_id: str = Depends(get_current_user_id),
    service: AuthService = Depends(get_auth_service)
):
    return await service.get_profile(user_id)


@router.put("/update-user")
async def update_user(
    update: UserUpdate,
    user: Dict[str, Any] = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service)
):
    return await service.update_user(user, update)


@router.delete("/delete-account")
async def delete_account(
    user: Dict[str, Any] = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service)
):
    return await service.delete_account(user)


@router.post("/forgot-password")
@limiter.limit("5/minute")
async def forgot_password(
    body: ForgotPasswordRequest,
    request: Request,
    service: AuthService = Depends(get_auth_service)
):
    """Send a password recovery email"""
    return await service.forgot_password(body.email)


@router.post("/reset-password")
@limiter.limit("5/minute")
async def reset_password(
    body: ResetPasswordRequest,
    request: Request,
    service: AuthService = Depends(get_auth_service)
):
    return await service.reset_password(body.token, body.newPassword)
