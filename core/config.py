"""Application configuration via environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_SECRET_KEY = "change-me-in-production-dev-only-secret"

DEFAULT_PUBLIC_ROUTES = ",".join(
    [
        "/",
        "/health(.*)",
        "/docs",
        "/redoc",
        "/openapi.json",
        "/api/webhooks/clerk",
        "/api/webhooks/stripe",
    ]
)


class Settings(BaseSettings):
    """Environment-based configuration. Validated at startup."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    APP_NAME: str = Field(default="imaginify", description="Service name for logs and headers")
    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development", description="Deployment environment"
    )
    DEBUG: bool = Field(default=False, description="Enable debug mode")

    HOST: str = Field(default="0.0.0.0", description="Bind address; 0.0.0.0 for containers")
    PORT: int = Field(default=8000, ge=1, le=65535)

    SECRET_KEY: str = Field(default=DEV_SECRET_KEY, min_length=32)
    JWT_ALGORITHM: str = Field(default="HS256")
    JWT_ACCESS_EXPIRE_MINUTES: int = Field(default=30, ge=1)
    PUBLIC_ROUTES: str = Field(
        default=DEFAULT_PUBLIC_ROUTES,
        description="Comma-separated paths reachable without a token; a trailing (.*) matches by prefix",
    )

    MONGODB_URL: str = Field(default="", description="MongoDB connection string")
    MONGODB_DB_NAME: str = Field(default="imaginify")

    DOWNLOAD_TIMEOUT_SECONDS: float = Field(default=30.0, gt=0)

    LOG_LEVEL: str = Field(default="INFO")
    LOG_JSON: bool = Field(default=False, description="JSON logs for cloud aggregators")

    @field_validator("SECRET_KEY", mode="before")
    @classmethod
    def validate_secret(cls, v: str) -> str:
        if isinstance(v, str) and len(v) < 32:
            raise ValueError("SECRET_KEY must be at least 32 characters")
        return v

    @model_validator(mode="after")
    def require_real_secret_in_production(self) -> "Settings":
        if self.is_production and self.SECRET_KEY == DEV_SECRET_KEY:
            raise ValueError("SECRET_KEY must be set in production")
        return self

    @property
    def public_routes_list(self) -> list[str]:
        return [r.strip() for r in self.PUBLIC_ROUTES.split(",") if r.strip()]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance. Use for DI; avoids re-reading env on every request."""
    return Settings()
