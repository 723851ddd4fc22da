"""Central configuration loading utilities."""

from __future__ import annotations

import os
from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class BaseEnvSettings(BaseSettings):
    """Base settings that enforce case sensitivity for env vars."""

    model_config = {
        "env_file": None,
        "case_sensitive": True,
        "extra": "ignore",
        "populate_by_name": True,
    }


class DatabaseSettings(BaseEnvSettings):
    """Connection parameters for the attendance database."""

    host: str = Field("localhost", alias="DB_HOST", min_length=1)
    port: int = Field(3306, alias="DB_PORT", ge=1, le=65535)
    user: str = Field("admin", alias="DB_USER", min_length=1)
    password: str = Field("", alias="DB_PASSWORD")
    database: str = Field("attendance_system", alias="DB_NAME", min_length=1)
    charset: str = Field("utf8mb4", alias="DB_CHARSET", min_length=1)
    connect_timeout: int = Field(10, alias="DB_CONNECT_TIMEOUT", ge=1)


class GatewaySettings(BaseEnvSettings):
    """Behaviour of the tool gateway itself."""

    read_only: bool = Field(False, alias="ATTENDANCE_READ_ONLY")
    default_leave_year: Optional[int] = Field(None, alias="ATTENDANCE_DEFAULT_YEAR", ge=1900, le=9999)
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    def resolved_leave_year(self) -> int:
        return self.default_leave_year or date.today().year


def _resolve_env_file(explicit: Optional[str] = None) -> Optional[str]:
    """Determine the environment file to load configuration from."""

    candidates: list[Path] = []

    if explicit:
        candidates.append(Path(explicit).expanduser())

    value = os.getenv("ATTENDANCE_ENV_FILE")
    if value:
        candidates.append(Path(value).expanduser())

    project_root = Path(__file__).resolve().parents[2]
    env_dir = project_root / "env"
    candidates.extend(
        [
            env_dir / "attendance.env",
            env_dir / "attendance.local.env",
            env_dir / "attendance.example.env",
            project_root / ".env",
        ]
    )

    for candidate in candidates:
        if candidate.exists():
            return str(candidate)

    return None


@lru_cache(maxsize=1)
def load_database_settings(env_file: Optional[str] = None) -> DatabaseSettings:
    return DatabaseSettings(_env_file=_resolve_env_file(env_file))


@lru_cache(maxsize=1)
def load_gateway_settings(env_file: Optional[str] = None) -> GatewaySettings:
    return GatewaySettings(_env_file=_resolve_env_file(env_file))


def reset_settings_cache() -> None:
    load_database_settings.cache_clear()  # type: ignore[attr-defined]
    load_gateway_settings.cache_clear()  # type: ignore[attr-defined]
