"""Logging configuration for the sector logbook API."""

import logging
from datetime import datetime
from pathlib import Path

from sectorlog.config import LOG_DIR, LOG_LEVEL

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging() -> None:
    """Configure root logging with a console handler and an optional daily file."""
    root_logger = logging.getLogger()
    if getattr(root_logger, "_sectorlog_configured", False):
        return

    formatter = logging.Formatter(_FORMAT, datefmt="%H:%M:%S")

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    log_file = None
    if LOG_DIR:
        logs_dir = Path(LOG_DIR)
        logs_dir.mkdir(parents=True, exist_ok=True)
        log_file = logs_dir / f"sectorlog-{datetime.now().strftime('%Y-%m-%d')}.log"
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

    # Quiet down noisy libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)

    root_logger._sectorlog_configured = True
    logging.getLogger(__name__).info("Logging initialized - file: %s", log_file or "disabled")
