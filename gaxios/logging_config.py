"""
Logging configuration for gaxios

The library only emits records on the "gaxios" logger hierarchy and stays
silent unless the application configures logging or calls setup_logging().
"""

import logging
import sys
from pathlib import Path

LIBRARY_LOGGER = "gaxios"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logging.getLogger(LIBRARY_LOGGER).addHandler(logging.NullHandler())


def setup_logging(
    log_file: Path | None = None, verbose: bool = False, level: int = logging.DEBUG
) -> logging.Logger:
    """
    Route library records to the console and/or a file

    Handlers added by an earlier call are replaced, so calling this again
    reconfigures instead of duplicating output.

    Args:
        log_file: Optional file receiving request/response traces at `level`
        verbose: Whether to also print INFO and above to stderr
        level: Minimum level for the file handler

    Returns:
        The "gaxios" logger
    """
    logger = logging.getLogger(LIBRARY_LOGGER)
    for handler in [h for h in logger.handlers if getattr(h, "_gaxios_handler", False)]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    handlers: list[logging.Handler] = []

    if verbose:
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(logging.INFO)
        handlers.append(console)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(level)
        handlers.append(file_handler)

    for handler in handlers:
        handler.setFormatter(formatter)
        handler._gaxios_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    if handlers:
        logger.setLevel(min(h.level for h in handlers))

    return logger


def get_module_logger(module_name: str) -> logging.Logger:
    """
    Get logger for a specific module

    Args:
        module_name: Name of the module (e.g., 'http_client', 'response')

    Returns:
        Logger instance
    """
    return logging.getLogger(f"{LIBRARY_LOGGER}.{module_name}")
