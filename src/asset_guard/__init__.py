"""asset-guard: authorization pipeline for asset lifecycle events."""

__version__ = "0.1.0"
