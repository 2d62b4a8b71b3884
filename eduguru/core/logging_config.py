# /eduguru/core/logging_config.py

"""Standard-library logging setup: console output plus an append-only error log file."""

import logging
import sys

from .config import settings

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_configured = False


def configure_logging(level: str = None, error_log_path: str = None) -> None:
    """
    Installs a console handler and an ERROR-level file handler on the root
    logger. Calling it more than once is harmless; only the first call
    attaches handlers.
    """
    global _configured
    if _configured:
        return

    root = logging.getLogger()
    root.setLevel(level or settings.log_level)
    formatter = logging.Formatter(_LOG_FORMAT)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    root.addHandler(console)

    path = error_log_path or settings.error_log_path
    if path:
        file_handler = logging.FileHandler(path, mode="a", encoding="utf-8", delay=True)
        file_handler.setLevel(logging.ERROR)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    # Uvicorn's access log duplicates the request middleware.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    _configured = True
