"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - analytics_enabled defaults to True only when environment == "production"

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box locally
"""

from pathlib import Path

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


DEFAULT_COURSES_PATH = Path(__file__).parent / "data" / "music_course.json"


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    environment: str = "development"

    # Course dataset
    courses_data_path: Path = DEFAULT_COURSES_PATH
    featured_limit: int = 6

    # EmailJS (message-send collaborator)
    emailjs_api_url: str = "https://api.emailjs.com/api/v1.0/email/send"
    emailjs_service_id: str = ""
    emailjs_template_id: str = ""
    emailjs_public_key: str = ""
    emailjs_private_key: str = ""
    message_send_timeout_seconds: float = 15.0

    # reCAPTCHA — site key is public, exposed to the client as-is
    recaptcha_site_key: str = ""

    # Analytics (GA4 Measurement Protocol)
    analytics_enabled: bool | None = None
    analytics_endpoint: str = "https://www.google-analytics.com/mp/collect"
    analytics_measurement_id: str = ""
    analytics_api_secret: str = ""
    analytics_max_retries: int = 3
    analytics_retry_delay_ms: int = 1000
    analytics_timeout_seconds: float = 5.0

    # Contact form
    contact_form_name: str = "contact_form_secure"
    success_reset_seconds: float = 5.0
    contact_form_ttl_seconds: float = 1800.0
    contact_form_max_instances: int = 1000

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("environment", mode="before")
    @classmethod
    def normalize_environment(cls, v: str) -> str:
        return v.strip().lower() if isinstance(v, str) else v

    @model_validator(mode="after")
    def default_analytics_to_production(self) -> "Settings":
        if self.analytics_enabled is None:
            self.analytics_enabled = self.is_production
        return self

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()
