# common/config.py
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Load from .env; ignore stray keys; allow case-insensitive env var lookup
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Default OpenAI service (OPENAI_API_KEY, OPENAI_API_BASE, OPENAI_ORG_ID)
    openai_api_key: str = ""
    openai_api_base: str = "https://api.openai.com/v1"
    openai_org_id: Optional[str] = None

    # Azure OpenAI gateway
    azure_openai_api_base: str = ""
    azure_openai_api_key: str = ""
    azure_openai_api_version: Optional[str] = None
    azure_openai_deployment_id: Optional[str] = None

    # Per-attempt transport timeout (seconds)
    http_timeout: float = 60.0

    # Retry budget
    retry_max_attempts: int = 5
    retry_max_elapsed: float = 60.0
    retry_initial_interval: float = 0.5
    retry_max_interval: float = 8.0
    retry_jitter: float = 0.5
    retry_after_cap: float = 30.0

    log_level: str = "INFO"
    mute_all_logs: bool = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Construct with no args so pydantic-settings reads .env / env automatically
    return Settings()


settings = get_settings()
