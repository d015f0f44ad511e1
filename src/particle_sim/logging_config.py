# MIT License (see LICENSE)
"""Logging setup for particle_sim."""
from __future__ import annotations
import logging
import logging.handlers
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: str = "INFO",
    log_file: str | Path | None = None,
    name: str = "particle_sim",
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path for a rotating log file.
        name: Logger to configure; the package root by default.

    Returns:
        The configured logger.
    """
    numeric = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger(name)
    logger.setLevel(numeric)

    # Repeated calls replace our handlers instead of stacking them.
    for h in list(logger.handlers):
        if getattr(h, "_particle_sim", False):
            logger.removeHandler(h)
            h.close()

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(numeric)
    console_handler.setFormatter(formatter)
    console_handler._particle_sim = True
    logger.addHandler(console_handler)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            path,
            maxBytes=10485760,  # 10MB
            backupCount=5,
        )
        file_handler.setLevel(numeric)
        file_handler.setFormatter(formatter)
        file_handler._particle_sim = True
        logger.addHandler(file_handler)

    return logger
