"""Application configuration via environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Central configuration for the FitBusiness wellness service."""

    # Application
    app_name: str = "FitBusiness"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = Field(default="development", pattern=r"^(development|staging|production)$")
    log_level: str = "INFO"
    log_format: str = Field(default="json", pattern=r"^(json|console)$")

    # API
    api_prefix: str = "/api"
    allowed_origins: str = "http://localhost:3000"
    rate_limit_default: str = "100/minute"
    rate_limit_burst: str = "200/minute"

    # Mock data seeded into each new store
    seed_mock_data: bool = True
    seed_random_seed: int | None = None
    seed_audit_log_count: int = Field(default=50, ge=0)

    # Identity provider
    identity_provider_configured: bool = False
    admin_email_domain: str = "fitbusiness.com"
    hr_email_domain: str = "empresa.com"
    default_company_id: str = "co-1"

    # Generative AI insights
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    gemini_api_url: str = "https://generativelanguage.googleapis.com/v1beta"
    insight_timeout_seconds: float = Field(default=10.0, gt=0)

    @property
    def allowed_origins_list(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",")]

    @property
    def insights_enabled(self) -> bool:
        return bool(self.gemini_api_key)

    model_config = {"env_prefix": "FITBUSINESS_", "env_file": ".env", "extra": "ignore"}


def get_settings() -> Settings:
    """Return a settings instance built from the environment."""
    return Settings()
