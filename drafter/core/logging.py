import sys
from logging.config import dictConfig
from typing import Any

from drafter.core.config import Settings
from drafter.core.config import settings as default_settings

# Loggers of the model SDK and its HTTP transport; both log every request at INFO
TRANSPORT_LOGGERS = ("openai", "httpx")


def build_logging_config(level: str = "INFO", transport_level: str = "WARNING") -> dict[str, Any]:
    """Build a uvicorn-compatible dictConfig.

    ``level`` applies to the ``drafter`` package, ``transport_level`` to the
    SDK and HTTP client loggers. Server and access logs stay at INFO.
    """
    level = level.upper()
    transport_level = transport_level.upper()
    loggers: dict[str, Any] = {
        "root": {"handlers": ["server"], "level": "INFO", "propagate": False},
        "uvicorn.error": {"handlers": ["server"], "level": "INFO", "propagate": False},
        "uvicorn.access": {"handlers": ["access"], "level": "INFO", "propagate": False},
        "drafter": {"handlers": ["drafter"], "level": level, "propagate": False},
    }
    for name in TRANSPORT_LOGGERS:
        loggers[name] = {"handlers": ["server"], "level": transport_level, "propagate": False}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "server": {
                "()": "uvicorn.logging.DefaultFormatter",
                "fmt": "%(levelprefix)s %(asctime)s [%(name)s] %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "access": {
                "()": "uvicorn.logging.AccessFormatter",
                "fmt": '%(levelprefix)s %(asctime)s "%(request_line)s" %(status_code)s',
            },
            "drafter": {
                "()": "uvicorn.logging.DefaultFormatter",
                "fmt": "%(levelprefix)s %(asctime)s [%(name)s:%(lineno)d] %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "server": {"class": "logging.StreamHandler", "formatter": "server", "stream": sys.stderr},
            "access": {"class": "logging.StreamHandler", "formatter": "access", "stream": sys.stdout},
            "drafter": {"class": "logging.StreamHandler", "formatter": "drafter", "stream": sys.stdout},
        },
        "loggers": loggers,
    }


def setup_logging(config: Settings | None = None) -> None:
    """Configure application-wide logging from the log level settings."""
    config = config or default_settings
    dictConfig(build_logging_config(config.log_level, config.log_transport_level))
