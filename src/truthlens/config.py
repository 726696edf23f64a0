from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

PLACEHOLDER_MARKERS = ("dummy", "replacewith")


class Settings(BaseSettings):
    """Configuration sourced from environment variables."""

    fact_check_api_key: str | None = None
    fact_check_api_url: str = "https://factchecktools.googleapis.com/v1alpha1/claims:search"
    fact_check_live_enabled: bool = True
    fact_check_requests_per_minute: int = Field(default=30, ge=1)
    fact_check_backoff_seconds: float = Field(default=1.0, ge=0.0)
    fact_check_timeout: float = 10.0
    cache_ttl_seconds: float = Field(default=3600.0, ge=0.0)
    live_scan_min_length: int = 50
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "",
        "case_sensitive": False,
    }

    @property
    def live_fact_check_ready(self) -> bool:
        if not self.fact_check_live_enabled or not self.fact_check_api_key:
            return False
        lowered = self.fact_check_api_key.lower()
        return not any(marker in lowered for marker in PLACEHOLDER_MARKERS)


@lru_cache(1)
def get_settings() -> Settings:
    return Settings()
