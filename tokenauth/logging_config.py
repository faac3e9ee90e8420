"""
Logging configuration for tokenauth.

Health check requests are dropped from the uvicorn access log by request path.
"""

import logging
import logging.config
from typing import Any, Dict

HEALTH_PATHS = frozenset({"/health", "/healthz"})

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
ACCESS_FORMAT = "%(asctime)s - access - %(message)s"


class HealthCheckFilter(logging.Filter):
    """Drops uvicorn access records for GET requests to health endpoints."""

    def filter(self, record: logging.LogRecord) -> bool:
        # uvicorn access args: (client_addr, method, path, http_version, status_code)
        args = record.args
        if not isinstance(args, tuple) or len(args) < 3:
            return True

        method, path = args[1], str(args[2])
        return not (method == "GET" and path.split("?", 1)[0] in HEALTH_PATHS)


def _stream_handler(formatter: str, **extra: Any) -> Dict[str, Any]:
    return {
        "class": "logging.StreamHandler",
        "formatter": formatter,
        "stream": "ext://sys.stdout",
        **extra,
    }


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """
    Build the dictConfig for the service and uvicorn.

    Args:
        level: Level for tokenauth and root loggers

    Returns:
        Dict suitable for logging.config.dictConfig and uvicorn's log_config
    """
    uvicorn_loggers = {
        name: {"handlers": ["default"], "level": "INFO", "propagate": False}
        for name in ("uvicorn", "uvicorn.error")
    }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"skip_health": {"()": HealthCheckFilter}},
        "formatters": {
            "default": {"format": LOG_FORMAT},
            "access": {"format": ACCESS_FORMAT},
        },
        "handlers": {
            "default": _stream_handler("default"),
            "access": _stream_handler("access", filters=["skip_health"]),
        },
        "loggers": {
            **uvicorn_loggers,
            "uvicorn.access": {"handlers": ["access"], "level": "INFO", "propagate": False},
            "tokenauth": {"handlers": ["default"], "level": level, "propagate": False},
        },
        "root": {"level": level, "handlers": ["default"]},
    }


def configure_logging(level: str = "INFO") -> None:
    """Apply the logging configuration process-wide."""
    logging.config.dictConfig(get_logging_config(level))
