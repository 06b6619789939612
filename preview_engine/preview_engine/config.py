"""Engine configuration loaded from environment variables."""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from preview_engine.models.preview import DEFAULT_ROOT_CANDIDATES, SynthesisOptions

logger = logging.getLogger(__name__)


class PlatformEnv(str, Enum):
    DEV = "dev"
    STAGING = "staging"
    PROD = "prod"


class Settings(BaseSettings):
    """Application settings loaded from environment variables with PREVIEW_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="PREVIEW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    env: PlatformEnv = PlatformEnv.DEV
    debug: bool = False

    # State store
    database_url: str = "sqlite+aiosqlite:///.livepreview/state.db"
    database_pool_size: int = 10
    database_max_overflow: int = 20

    # Version history
    history_default_limit: int = 20
    history_max_limit: int = 50

    # Snapshot / summary cache
    cache_enabled: bool = True
    cache_ttl_seconds: int = 300
    cache_max_entries: int = 1_000

    # Preview assets
    react_url: str = "https://unpkg.com/react@18/umd/react.development.js"
    react_dom_url: str = "https://unpkg.com/react-dom@18/umd/react-dom.development.js"
    babel_url: str = "https://unpkg.com/@babel/standalone/babel.min.js"
    tailwind_url: str = "https://cdn.tailwindcss.com"
    root_candidates: tuple[str, ...] = DEFAULT_ROOT_CANDIDATES

    # Directory loader
    max_file_bytes: int = 1_000_000

    # Telemetry
    structured_logging: bool = False

    @field_validator("history_default_limit", "history_max_limit", "cache_max_entries")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be >= 1")
        return v

    def synthesis_options(self, *, title: str = "Preview") -> SynthesisOptions:
        return SynthesisOptions(
            react_url=self.react_url,
            react_dom_url=self.react_dom_url,
            babel_url=self.babel_url,
            tailwind_url=self.tailwind_url,
            root_candidates=self.root_candidates,
            title=title,
        )


def load_settings(**overrides: object) -> Settings:
    """Load settings from environment, with optional overrides for testing."""
    settings = Settings(**overrides)  # type: ignore[arg-type]

    if settings.debug:
        logger.info("Loaded settings for environment: %s", settings.env.value)

    return settings
