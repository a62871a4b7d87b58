import logging
import os
from logging.config import dictConfig
from typing import Optional

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def configure_logging(level: Optional[str] = None) -> None:
    """Route the app, uvicorn and (optionally) SQL logs through one stream handler.

    ``level`` overrides ``ESSAY_LOG_LEVEL``. ``ESSAY_DEBUG_SQL=1`` turns on
    statement logging from the SQLAlchemy engine.
    """
    resolved = (level or os.getenv("ESSAY_LOG_LEVEL", "INFO")).upper()
    sql_level = "INFO" if os.getenv("ESSAY_DEBUG_SQL", "0") == "1" else "WARNING"

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": DEFAULT_LOG_FORMAT},
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "loggers": {
                **{name: {"handlers": [], "propagate": True} for name in _SERVER_LOGGERS},
                "sqlalchemy.engine": {"level": sql_level},
            },
            "root": {
                "handlers": ["default"],
                "level": resolved,
            },
        }
    )
    logging.getLogger(__name__).debug("Logging configured at %s (sql=%s)", resolved, sql_level)
