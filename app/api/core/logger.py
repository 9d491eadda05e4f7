import logging
import logging.config
from pathlib import Path
from typing import Optional

from config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s %(module)s:%(lineno)d - %(message)s"

# Third-party namespaces routed through our handlers, with their floor level
LIBRARY_LOGGERS = {
    "uvicorn": "INFO",
    "uvicorn.error": "INFO",
    "uvicorn.access": "INFO",
    "sqlalchemy.engine": "WARNING",
    "httpx": "WARNING",
}


def build_log_config(level: str, log_dir: Optional[Path]) -> dict:
    """
    Build a ``dictConfig`` mapping.

    The console handler is always present. A rotating file handler under
    ``log_dir`` is added when a directory is given.

    Args:
        level (str): Level for the ``app`` logger namespace
        log_dir (Path, optional): Directory for ``storefront.log``

    Returns:
        dict: Logging configuration
    """
    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
            "level": level,
        },
    }
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "default",
            "filename": str(log_dir / "storefront.log"),
            "maxBytes": 10485760,
            "backupCount": 5,
            "level": level,
        }

    targets = list(handlers)
    loggers = {
        name: {"handlers": targets, "level": floor, "propagate": False}
        for name, floor in LIBRARY_LOGGERS.items()
    }
    loggers["app"] = {"handlers": targets, "level": level, "propagate": False}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": {"format": LOG_FORMAT}},
        "handlers": handlers,
        "loggers": loggers,
        "root": {"handlers": ["console"], "level": "WARNING"},
    }


def setup_logging(level: Optional[str] = None):
    """Configure application logging from settings.

    File logging is skipped in the test environment.
    """
    log_dir = None if settings.ENVIRONMENT == "test" else Path(settings.LOG_DIR)
    logging.config.dictConfig(build_log_config((level or settings.LOG_LEVEL).upper(), log_dir))
