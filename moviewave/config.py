import logging
from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

INSECURE_JWT_SECRET = "secret"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Mandatory: the process refuses to start without these
    SUPABASE_URL: str = Field(validation_alias=AliasChoices("SUPABASE_URL", "VITE_SUPABASE_URL"))
    SUPABASE_SERVICE_ROLE_KEY: str = Field(
        validation_alias=AliasChoices("SUPABASE_SERVICE_ROLE_KEY", "SERVICE_ROLE_KEY")
    )
    DATABASE_URL: str

    # Optional: missing values are reported at startup
    PEXELS_API_KEY: Optional[str] = None
    BREVO_API_KEY: Optional[str] = None
    JWT_SECRET: str = INSECURE_JWT_SECRET

    EMAIL_SENDER: str = "noreply@moviewave.app"
    FRONTEND_URL: str = "http://localhost:5173"
    APP_ENV: str = Field("development", validation_alias=AliasChoices("APP_ENV", "NODE_ENV"))
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    RATE_LIMIT_STORAGE_URI: str = "memory://"
    DB_POOL_MIN_SIZE: int = 1
    DB_POOL_MAX_SIZE: int = 10
    RESET_TOKEN_EXPIRE_MINUTES: int = 60

    @property
    def is_development(self) -> bool:
        return self.APP_ENV.lower() == "development"

    @property
    def is_production(self) -> bool:
        return self.APP_ENV.lower() == "production"

    @property
    def allowed_origins(self) -> list[str]:
        return [self.FRONTEND_URL.strip().rstrip("/")]


@lru_cache
def get_settings() -> Settings:
    return Settings()


def warn_missing_optional(settings: Settings) -> list[str]:
    """Log a warning for every optional integration left unconfigured."""
    missing = []
    if not settings.PEXELS_API_KEY:
        missing.append("PEXELS_API_KEY")
    if not settings.BREVO_API_KEY:
        missing.append("BREVO_API_KEY")
    for key in missing:
        logger.warning(f"{key} is not set, the dependent endpoints will answer 500", extra={"setting": key})
    if settings.JWT_SECRET == INSECURE_JWT_SECRET:
        logger.warning("JWT_SECRET is not set, recovery tokens use an insecure default", extra={"setting": "JWT_SECRET"})
        missing.append("JWT_SECRET")
    return missing
