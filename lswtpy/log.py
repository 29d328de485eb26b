"""
lswtpy.log
==========
Logging setup for scripts that run the LSWT pipeline.

Library modules only call ``logging.getLogger(__name__)``; handlers are
attached once, by the script, through :func:`setup_logger`.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union


def setup_logger(
    name: str = "lswtpy",
    log_file: Optional[Union[str, Path]] = None,
    log_level: str = "INFO",
) -> logging.Logger:
    """Attach a console handler (and optionally a file handler) to ``name``.

    Parameters
    ----------
    name : str
        Logger name. The default covers every ``lswtpy.*`` module logger.
    log_file : str or Path, optional
        If given, DEBUG-level records are also appended to this file.
    log_level : str
        DEBUG, INFO, WARNING, ERROR or CRITICAL.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Calling twice must not duplicate output
    logger.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(logger.level)
    console.setFormatter(logging.Formatter(
        fmt="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    logger.addHandler(console)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - "
                "%(filename)s:%(lineno)d - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


class LoggerContext:
    """Log the start, duration and outcome of one pipeline stage.

    Exceptions are logged and re-raised, never suppressed.

    Example
    -------
    >>> with LoggerContext(logger, "daily aggregation"):
    ...     daily = daily_means(table)
    """

    def __init__(self, logger: logging.Logger, operation: str):
        self.logger = logger
        self.operation = operation
        self.start_time = None

    def __enter__(self):
        self.start_time = datetime.now()
        self.logger.info(f"Starting {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = (datetime.now() - self.start_time).total_seconds()
        if exc_type is not None:
            self.logger.error(
                f"Failed {self.operation} after {duration:.2f}s: {exc_val}"
            )
            return False
        self.logger.info(f"Completed {self.operation} in {duration:.2f}s")
        return False
