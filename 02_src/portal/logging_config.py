"""JSON logging for the Absconders Portal.

Records carry the acting officer and the case they touched, so an audit of
the log file can answer "who looked at what" without joining trace events.
"""

import json
import logging
import logging.config
import logging.handlers
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .config import DEFAULT_LOG_PATH

# Attributes lifted from ``extra=`` into top-level JSON keys
CONTEXT_FIELDS = ("user_id", "role", "case_id", "status_code")

# Chatty third-party loggers capped at WARNING
_QUIET_LOGGERS = ("httpx", "httpcore", "aiosqlite", "uvicorn.access")


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with portal context fields when present."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def session_context(session, **fields: Any) -> dict[str, Any]:
    """``extra=`` payload naming the signed-in officer plus any case fields."""
    return {"user_id": session.user.id, "role": session.user.role.value, **fields}


def setup_logging(
    log_level: str | None = None,
    log_file: str | None = None,
) -> None:
    """
    Configure root logging for the portal.

    Args:
        log_level: Level name; defaults to the LOG_LEVEL env var or INFO.
        log_file: Rotating log file; defaults to 04_logs/app.log.
    """
    level = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_file = log_file or str(DEFAULT_LOG_PATH)
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {"()": "portal.logging_config.JSONFormatter"},
            },
            "handlers": {
                "file": {
                    "class": "logging.handlers.RotatingFileHandler",
                    "filename": log_file,
                    "maxBytes": 10 * 1024 * 1024,
                    "backupCount": 5,
                    "formatter": "json",
                    "encoding": "utf-8",
                },
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                    "stream": "ext://sys.stdout",
                },
            },
            "loggers": {name: {"level": "WARNING"} for name in _QUIET_LOGGERS},
            "root": {"level": level, "handlers": ["file", "console"]},
        }
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
