from typing import List, Optional
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Secrets that ship in examples and local .env files
PLACEHOLDER_SECRETS = {
    "change-me",
    "changeme",
    "secret",
    "your-secret-key-change-in-production",
}


class Settings(BaseSettings):
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    BCRYPT_ROUNDS: int = 10

    ENVIRONMENT: str = "development"  # "development", "test" or "production"
    LOG_LEVEL: str = "INFO"

    # Host fallback for non-production environments. When enabled, requests whose
    # hostname is listed in DEV_HOSTS (or ends with a preview suffix) resolve to
    # FALLBACK_TENANT_SUBDOMAIN instead of failing subdomain resolution.
    HOST_FALLBACK_ENABLED: Optional[bool] = None
    FALLBACK_TENANT_SUBDOMAIN: Optional[str] = None
    DEV_HOSTS: List[str] = ["localhost", "127.0.0.1"]
    PREVIEW_HOST_SUFFIXES: List[str] = []

    PUBLIC_PATHS: List[str] = ["/api/health", "/api/auth/login", "/api/auth/register"]
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def host_fallback_enabled(self) -> bool:
        if self.HOST_FALLBACK_ENABLED is None:
            return not self.is_production
        return self.HOST_FALLBACK_ENABLED

    @field_validator("SECRET_KEY")
    @classmethod
    def secret_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("SECRET_KEY must not be empty")
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def bcrypt_cost(cls, v: int) -> int:
        if v < 10:
            raise ValueError("BCRYPT_ROUNDS must be at least 10")
        return v

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Refuse to boot production with a well-known secret or a host fallback."""
        if self.is_production:
            if self.SECRET_KEY.lower() in PLACEHOLDER_SECRETS:
                raise ValueError(
                    "SECRET_KEY must be set to a secure value in production. "
                    'Generate one with: python -c "import secrets; print(secrets.token_urlsafe(32))"'
                )
            if self.HOST_FALLBACK_ENABLED:
                raise ValueError("HOST_FALLBACK_ENABLED cannot be used in production")
        return self

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
