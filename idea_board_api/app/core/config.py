"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts with an in‑memory store and no external services.  In a
production deployment you should override these via environment
variables (for example ``IDEA_STORE=postgres`` together with the
``DB_*`` connection parameters).
"""

import os
from dataclasses import dataclass, field
from typing import List


def _env(name: str, default: str):
    return field(default_factory=lambda: os.getenv(name, default))


def _env_int(name: str, default: int):
    return field(default_factory=lambda: int(os.getenv(name, str(default))))


def _env_bool(name: str, default: bool):
    return field(
        default_factory=lambda: os.getenv(name, str(default)).lower() in {"1", "true", "yes"}
    )


@dataclass
class Settings:
    """Application settings loaded from environment variables.

    Values are read when the instance is created, so constructing a new
    ``Settings()`` picks up the current environment.
    """

    project_name: str = _env("PROJECT_NAME", "Idea Board API")
    api_version: str = _env("API_VERSION", "1.0.0")
    log_level: str = _env("LOG_LEVEL", "INFO")
    log_file: str = _env("LOG_FILE", "")

    host: str = _env("HOST", "0.0.0.0")
    port: int = _env_int("PORT", 3001)

    # Which store backs the API: ``memory``, ``sqlite`` or ``postgres``.
    idea_store: str = _env("IDEA_STORE", "memory")
    # Load a few example ideas into the memory store on startup.
    seed_demo_ideas: bool = _env_bool("SEED_DEMO_IDEAS", False)

    # Path to the SQLite database file.  Relative paths are resolved
    # against the project root by the ``db`` module.
    database_url: str = _env("DATABASE_URL", "idea_board.db")

    db_host: str = _env("DB_HOST", "localhost")
    db_port: int = _env_int("DB_PORT", 5432)
    db_user: str = _env("DB_USER", "postgres")
    db_password: str = _env("DB_PASSWORD", "password")
    db_name: str = _env("DB_NAME", "idea_board")

    # Comma‑separated list of origins allowed by CORS; ``*`` allows any.
    cors_origins: str = _env("CORS_ORIGINS", "*")

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.
settings = Settings()
