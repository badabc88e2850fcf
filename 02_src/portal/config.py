"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "03_data"
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_DB_PATH = DATA_DIR / "portal.db"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DATA_DIR.mkdir(parents=True, exist_ok=True)
LOGS_DIR.mkdir(parents=True, exist_ok=True)


PathLike = Union[str, Path]


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path."""
    if not env_value:
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def _split_origins(raw: str) -> list[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass
class Settings:
    """Runtime settings read from the environment."""

    records_api_url: str = "http://localhost:5000"
    records_api_timeout: float = 10.0
    database_url: str | None = None
    api_host: str = "localhost"
    api_port: int = 8000
    allow_dev_login: bool = True
    cors_origins: list[str] = field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:5174"]
    )

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables, keeping defaults for unset ones."""
        defaults = cls()
        cors = os.getenv("CORS_ORIGINS")
        return cls(
            records_api_url=os.getenv("RECORDS_API_URL", defaults.records_api_url),
            records_api_timeout=float(
                os.getenv("RECORDS_API_TIMEOUT", str(defaults.records_api_timeout))
            ),
            database_url=os.getenv("DATABASE_URL"),
            api_host=os.getenv("API_HOST", defaults.api_host),
            api_port=int(os.getenv("API_PORT", str(defaults.api_port))),
            allow_dev_login=os.getenv("ALLOW_DEV_LOGIN", "true").lower()
            in ("1", "true", "yes"),
            cors_origins=_split_origins(cors) if cors else defaults.cors_origins,
        )
