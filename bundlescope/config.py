"""Application configuration management."""

import logging
import os
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


PACKAGE_ROOT = Path(__file__).resolve().parent
PUBLIC_DIR = PACKAGE_ROOT / "public"
TEMPLATES_DIR = PACKAGE_ROOT / "templates"

SIZE_METRICS = ("stat", "parsed", "gzip", "brotli")
COMPRESSION_ALGORITHMS = ("gzip", "brotli")


class Settings(BaseSettings):
    """Defaults loaded from BUNDLESCOPE_* environment variables."""

    # Environment
    environment: Literal["development", "production", "testing"] = "development"

    # Server
    host: str = "127.0.0.1"
    port: int = 8888
    open_browser: bool = True

    # Report
    default_sizes: Literal["stat", "parsed", "gzip", "brotli"] = "parsed"

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None
    log_json: bool = False

    model_config = SettingsConfigDict(
        env_prefix="BUNDLESCOPE_", env_file=".env", case_sensitive=False, extra="ignore"
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        env_var = os.getenv("BUNDLESCOPE_ENVIRONMENT", "").lower() == "testing"
        pytest_flag = bool(os.getenv("PYTEST_CURRENT_TEST"))
        return self.environment == "testing" or env_var or pytest_flag

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Ports outside 0-65535 cannot be bound; 0 asks the OS for a free one."""
        if not 0 <= v <= 65535:
            raise ValueError(f"PORT must be between 0 and 65535, got {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return level


# Global settings instance
settings = Settings()
if settings.is_testing:
    settings.environment = "testing"
