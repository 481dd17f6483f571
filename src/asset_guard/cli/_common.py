"""Helpers shared by CLI commands."""

from pathlib import Path

from asset_guard.config import Settings, get_settings
from asset_guard.logging_setup import setup_logging


def load_settings(config: Path | None) -> Settings:
    """Load settings and configure logging from them."""
    settings = get_settings(config) if config else get_settings(_force_reload=True)
    log_dir = Path(settings.logging.log_dir) if settings.logging.log_dir else None
    setup_logging(log_level=settings.logging.log_level, log_dir=log_dir)
    return settings
