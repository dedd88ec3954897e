import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_WINNERS_LIMIT = 3


def _env_int(name: str, default: int) -> int:
    raw = (os.environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= 1 else default


@dataclass
class Settings:
    """Application settings loaded from environment variables with safe defaults."""

    app_name: str = "Winner Engine"
    env: str = "dev"
    database_url: str = "sqlite+aiosqlite:///./app.db"
    log_level: str = "INFO"
    winners_limit: int = DEFAULT_WINNERS_LIMIT

    @classmethod
    def from_env(cls) -> "Settings":
        """Create Settings from environment variables."""
        return cls(
            app_name=os.getenv("APP_NAME", cls.app_name),
            env=os.getenv("ENV", cls.env),
            database_url=os.getenv("DATABASE_URL") or cls.database_url,
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            winners_limit=_env_int("WINNERS_LIMIT", DEFAULT_WINNERS_LIMIT),
        )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings.from_env()
