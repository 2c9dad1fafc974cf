# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Core configuration — all env-driven, zero hardcode.
Single source of truth for every tunable parameter.
"""

import os


def _parse_access_keys(raw: str) -> dict[str, str]:
    """Parse ``Name:key,Name:key`` into a name -> key mapping."""
    keys: dict[str, str] = {}
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" in pair:
            name, key = pair.split(":", 1)
            keys[name.strip()] = key.strip()
    return keys


class Settings:
    """Application settings loaded from environment variables."""

    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "duty-scheduler")
    SERVICE_VERSION: str = os.getenv("SERVICE_VERSION", "1.0.0")
    SERVICE_PORT: int = int(os.getenv("SERVICE_PORT", "8005"))

    STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "memory").lower()
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///duty_scheduler.db")

    MAX_BOOKINGS_PER_MONTH: int = int(os.getenv("MAX_BOOKINGS_PER_MONTH", "2"))

    SEED_TEAM_MEMBERS: bool = (
        os.getenv("SEED_TEAM_MEMBERS", "true").lower() == "true"
    )
    EXPOSE_ACCESS_KEYS: bool = (
        os.getenv("EXPOSE_ACCESS_KEYS", "false").lower() == "true"
    )
    TEAM_ACCESS_KEYS: dict[str, str] = _parse_access_keys(
        os.getenv("TEAM_ACCESS_KEYS", "")
    )

    CORS_ORIGINS: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
