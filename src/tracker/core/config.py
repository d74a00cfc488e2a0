from functools import lru_cache
from urllib.parse import urlparse

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Collab Tracker"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True

    # Security
    log_user_emails: bool = False  # Keep off in production (GDPR)
    allowed_app_url_domains: list[str] = ["localhost", "127.0.0.1"]

    # Database
    database_url: str
    database_pool_size: int = 5
    database_max_overflow: int = 10
    auto_create_tables: bool = True

    # Auth
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    argon2_time_cost: int = 3
    argon2_memory_cost: int = 65536
    argon2_parallelism: int = 1

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        if v == "change-this-to-a-secure-random-string":
            raise ValueError(
                "JWT_SECRET_KEY must be changed from default value. "
                "Generate a secure secret with: openssl rand -hex 32"
            )
        if len(v) < 32:
            raise ValueError("JWT_SECRET_KEY must be at least 32 characters")
        return v

    # CORS
    cors_origins: list[str] = ["http://localhost:5173"]

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Validate CORS origins - reject wildcards when credentials are used."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    # Email (Resend)
    resend_api_key: str | None = None  # If not set, emails are logged but not sent
    email_from: str = "noreply@example.com"
    email_send_timeout_seconds: int = 10
    app_url: str = "http://localhost:5173"  # Frontend URL for invitation links

    @field_validator("app_url")
    @classmethod
    def validate_app_url(cls, v: str, info: ValidationInfo) -> str:
        """Validate APP_URL is from allowed domain list to prevent SSRF in emails."""
        allowed = info.data.get("allowed_app_url_domains", ["localhost", "127.0.0.1"])
        hostname = urlparse(v).hostname or ""

        if not any(hostname == domain or hostname.endswith(f".{domain}") for domain in allowed):
            raise ValueError(
                f"APP_URL domain '{hostname}' not in allowed list. "
                f"Add it to ALLOWED_APP_URL_DOMAINS or use: {allowed}"
            )
        return v

    # Subscriptions
    free_plan_months: int = 3
    enforce_project_limit: bool = False  # Gate project creation on plan entitlement


@lru_cache
def get_settings() -> Settings:
    return Settings()
