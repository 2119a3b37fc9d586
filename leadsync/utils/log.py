"""Logging helpers for LeadSync."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

PRIMARY_LOG_DIR = Path.home() / ".leadsync" / "logs"
FALLBACK_LOG_DIR = Path("./logs")
LOG_FILENAME = "leadsync.log"
ROOT_LOGGER_NAME = "leadsync"

_LOG_CONFIGURED = False


def _resolve_log_dir(log_dir: Optional[Path] = None) -> Optional[Path]:
    """Return a writable log directory, or None when no file logging is possible."""
    candidates = [log_dir] if log_dir else [PRIMARY_LOG_DIR, FALLBACK_LOG_DIR]
    for directory in candidates:
        try:
            directory.mkdir(parents=True, exist_ok=True)
            return directory
        except (PermissionError, OSError):
            continue
    return None


def configure_logging(log_dir: Optional[Path] = None, level: int = logging.INFO) -> None:
    """Configure the ``leadsync`` logger once with console + rotating file handlers."""
    global _LOG_CONFIGURED
    if _LOG_CONFIGURED:
        return

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    directory = _resolve_log_dir(log_dir)
    if directory is not None:
        file_handler = logging.handlers.RotatingFileHandler(
            directory / LOG_FILENAME, maxBytes=2_000_000, backupCount=3, encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        root_logger.addHandler(file_handler)

    _LOG_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger scoped under the ``leadsync`` namespace.

    Args:
        name: Suffix appended to the package logger name (e.g. ``"batch_ingestor"``)

    Returns:
        Logger named ``leadsync.<name>``
    """
    configure_logging()
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
