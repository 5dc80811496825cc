import os
from collections.abc import Mapping
from datetime import timedelta

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

load_dotenv()


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # ReqRes API Configuration
    base_url: str = Field(min_length=1, alias="REQRES_BASE_URL")
    timeout_seconds: int = Field(default=30, gt=0, alias="REQRES_TIMEOUT_SECONDS")
    api_key: str | None = Field(default=None, alias="REQRES_API_KEY")

    # Cache Configuration
    enable_caching: bool = Field(default=True, alias="REQRES_ENABLE_CACHING")
    cache_timeout_minutes: int = Field(
        default=5, ge=0, alias="REQRES_CACHE_TIMEOUT_MINUTES"
    )

    # Pagination Configuration
    max_concurrent_pages: int = Field(
        default=4, ge=1, alias="REQRES_MAX_CONCURRENT_PAGES"
    )

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from environment variables (``os.environ`` by default)."""
        source = os.environ if env is None else env
        return cls.model_validate(dict(source))

    @property
    def timeout(self) -> float:
        return float(self.timeout_seconds)

    @property
    def cache_ttl(self) -> timedelta:
        return timedelta(minutes=self.cache_timeout_minutes)
