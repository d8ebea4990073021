"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts without any configuration at all; in that case the admin
gate falls back to the default password and logs a warning.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "BRF Ellagården API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    # Mirrors the environment name used by the original deployment.
    # Stack traces are only exposed in error responses when this is
    # ``development``.
    environment: str = os.getenv("NODE_ENV", "production")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Shared admin password compared against HTTP Basic credentials.
    # Empty means "not configured".
    auth_secret: str = os.getenv("AUTH_SECRET", "")

    # Directory holding ``bookings.json``, ``sections.json`` and the
    # booking export snapshots.  Relative paths are resolved against
    # the current working directory.
    data_dir: str = os.getenv("DATA_DIR", "data")
    upload_dir: str = os.getenv("UPLOAD_DIR", "uploads")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5000"))

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir).resolve()

    @property
    def upload_path(self) -> Path:
        return Path(self.upload_dir).resolve()


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
