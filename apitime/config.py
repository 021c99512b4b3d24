"""Framework Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting has a default: the framework works with no environment at all
    - get_settings() is cached (lru_cache): one instance per process
    - `configurations` only seeds a registry when asked (ConfigurationRegistry.from_settings)

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Env prefix APITIME_ keeps framework settings apart from the host application's
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__version__ = "0.1.0"


class Settings(BaseSettings):
    """Framework settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="APITIME_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    # Observability
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    # Default transport
    http_timeout_seconds: float = Field(default=30.0, gt=0)
    follow_redirects: bool = True
    user_agent: str = Field(default=f"apitime/{__version__}", min_length=1)

    # Decode diagnostics
    raw_snippet_limit: int = Field(default=1000, ge=1)

    # Registry bootstrap: {"key": "https://base.url"} (JSON in env)
    configurations: dict[str, str] = Field(default_factory=dict)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


@lru_cache
def get_settings() -> Settings:
    return Settings()
