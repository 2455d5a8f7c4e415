"""
Application configuration using Pydantic Settings.

Environment-based infrastructure switching is controlled by the ENVIRONMENT variable.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Environment
    # ===========================================
    ENVIRONMENT: Literal["local"] = "local"
    DEBUG: bool = True

    # ===========================================
    # Database
    # ===========================================
    DATABASE_URL: str = "sqlite+aiosqlite:///./planner.db"

    # ===========================================
    # LLM Configuration
    # ===========================================
    # LLM Provider: "litellm" | "gemini-api"
    # - litellm: LiteLLM (OpenAI, Bedrock, etc. with optional custom endpoint)
    # - gemini-api: Gemini API (API Key)
    LLM_PROVIDER: Literal["litellm", "gemini-api"] = "litellm"

    # LiteLLM model identifier (for litellm provider)
    LITELLM_MODEL: str = "gpt-4"

    # LiteLLM custom endpoint (optional, for proxy servers)
    LITELLM_API_BASE: str = ""

    # LiteLLM custom API key (optional, for custom endpoints)
    LITELLM_API_KEY: str = ""

    # Gemini model name (for gemini-api provider)
    GEMINI_MODEL: str = "gemini-2.0-flash"

    # Google API Key (for gemini-api provider)
    GOOGLE_API_KEY: str = ""

    # Schedule generation sampling
    AI_SCHEDULE_TEMPERATURE: float = 0.1
    AI_SCHEDULE_MAX_TOKENS: int = 1000

    # ===========================================
    # Auth
    # ===========================================
    AUTH_PROVIDER: Literal["mock", "local"] = "mock"

    # Local auth (password + JWT)
    LOCAL_JWT_SECRET: str = ""
    LOCAL_JWT_ISSUER: str = "dayplanner-local"
    LOCAL_JWT_EXPIRE_MINUTES: int = 60 * 24 * 30

    # Comma-separated emails that are granted the admin role on registration
    ADMIN_EMAILS: str = "admin@planner.com"

    # ===========================================
    # Password reset (OTP)
    # ===========================================
    PASSWORD_RESET_OTP_TTL_SECONDS: int = 300
    PASSWORD_RESET_MAX_REQUESTS: int = 3
    PASSWORD_RESET_MAX_ATTEMPTS: int = 5

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"]
    )

    @property
    def is_local(self) -> bool:
        """Check if running in local environment."""
        return self.ENVIRONMENT == "local"

    @property
    def admin_emails(self) -> set[str]:
        """Normalized set of admin emails."""
        raw = self.ADMIN_EMAILS.strip()
        if not raw:
            return set()
        return {email.strip().lower() for email in raw.split(",") if email.strip()}


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
