import logging
import os
from logging.config import dictConfig

APP_LOGGER = "bepo"


def configure_logging() -> None:
    """
    Console logging for the service.

    LOG_LEVEL sets the root and uvicorn level; BEPO_LOG_LEVEL overrides it for the
    application's own loggers (calculator, settings, dose log) so they can be turned
    up without flooding the output with server and SQL chatter.
    """
    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    app_level = os.environ.get("BEPO_LOG_LEVEL", log_level).upper()
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structured": {
                    "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                    "datefmt": "%Y-%m-%dT%H:%M:%S%z",
                }
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "structured",
                }
            },
            "loggers": {
                APP_LOGGER: {"handlers": ["console"], "level": app_level, "propagate": False},
                "uvicorn": {"handlers": ["console"], "level": log_level, "propagate": False},
                "uvicorn.access": {"handlers": ["console"], "level": log_level, "propagate": False},
                "sqlalchemy.engine": {"level": "WARNING"},
            },
            "root": {"handlers": ["console"], "level": log_level},
        }
    )
    logging.getLogger(APP_LOGGER).debug("Logging configured (root=%s, app=%s)", log_level, app_level)


__all__ = ["APP_LOGGER", "configure_logging"]
