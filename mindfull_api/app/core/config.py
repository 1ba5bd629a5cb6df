"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts locally without any setup; in production set at least
``API_TOKEN`` and ``DATABASE_URL``.
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Mindfull API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Bearer token every client must present in the Authorization
    # header.  An empty value rejects all requests.
    api_token: str = os.getenv("API_TOKEN", "")

    # Path to the SQLite database.  Relative paths are resolved against
    # the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "mindfull.db")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must be set before importing this module.
settings = Settings()
