"""Loguru logging setup for asset-guard.

Library modules log through ``from loguru import logger`` and never configure
sinks themselves; the host (or the CLI) calls :func:`setup_logging` once.

Usage:
    from asset_guard.logging_setup import setup_logging

    setup_logging(log_level="DEBUG", log_dir=Path("./logs"))
"""

import sys
from pathlib import Path

from loguru import logger

# Default console format with colors
CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

# Simple format without colors (for file output)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | "
    "{level: <8} | "
    "{name}:{function}:{line} | "
    "{message}"
)


def _not_audit(record) -> bool:
    return not record["extra"].get("audit", False)


def setup_logging(
    log_level: str = "INFO",
    console: bool = True,
    log_dir: Path | None = None,
    serialize_file: bool = False,
    diagnose: bool = False,
) -> None:
    """Configure logging with console and optional file handlers.

    Audit records are excluded from both sinks; they go to the audit sink
    only (see :mod:`asset_guard.audit_logger`).

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        console: Enable console (stderr) output.
        log_dir: Directory for ``asset-guard.log``; None disables file output.
        serialize_file: Use JSON format for file logs.
        diagnose: Show variable values in tracebacks (leaks data, keep off in production).

    Example:
        >>> setup_logging()  # Console only, INFO
        >>> setup_logging(log_level="DEBUG", log_dir=Path("logs"))
    """
    # Remove default handler
    logger.remove()

    if console:
        logger.add(
            sys.stderr,
            format=CONSOLE_FORMAT,
            level=log_level,
            colorize=True,
            backtrace=True,
            diagnose=diagnose,
            filter=_not_audit,
        )

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        logger.add(
            str(log_dir / "asset-guard.log"),
            level=log_level,
            format=FILE_FORMAT,
            rotation="10 MB",
            retention="7 days",
            compression="gz",
            serialize=serialize_file,
            enqueue=True,
            backtrace=True,
            diagnose=diagnose,
            filter=_not_audit,
        )
