"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields.  A
``Settings`` instance is passed explicitly to ``create_app`` and from
there to every service, so tests can build isolated applications
without touching the process environment.
"""

import os
from dataclasses import dataclass


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Headless CMS API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")
    log_file_level: str = os.getenv("LOG_FILE_LEVEL", "DEBUG")

    # The single admin secret.  When empty every login attempt is
    # rejected; ``create_app`` logs a warning about it at startup.
    admin_password: str = os.getenv("ADMIN_PASSWORD", "")

    # Lifetime of an issued admin token.  Tokens are never renewed; a
    # fresh login is required once this many hours have passed.
    token_expiry_hours: int = int(os.getenv("TOKEN_EXPIRY_HOURS", "24"))

    # Path to the SQLite database file.  A relative path is resolved
    # against the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "blog.db")

    # Routes are served both at the root and under this prefix.  The
    # blog frontend talks to ``http://localhost:8000/api``.
    api_prefix: str = os.getenv("API_PREFIX", "/api")

    # Comma‑separated list of allowed CORS origins, ``*`` for any.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))

    @property
    def cors_origin_list(self) -> list[str]:
        return _split_csv(self.cors_origins) or ["*"]


# Instantiate settings once so the entry point can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes defaults at import time, environment variables should be
# set before importing this module.
settings = Settings()
