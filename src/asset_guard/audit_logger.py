"""Structured audit logging for dispatch decisions.

Uses a loguru sink for JSONL output with rotation, retention, compression
and thread-safety via ``serialize=True`` and ``enqueue=True``.

Every dispatched lifecycle event is recorded with its paths, verdict and
timing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger


@dataclass
class AuditEntry:
    """A single audit record for one dispatched event."""

    timestamp: str  # ISO 8601 UTC
    event: str
    paths: list[str] = field(default_factory=list)
    outcome: str = "unknown"
    duration_ms: int = 0
    details: dict | None = None


def _audit_filter(record):
    """Loguru filter: only capture messages with audit=True in extra."""
    return record["extra"].get("audit", False)


class AuditLogger:
    """Audit logger writing one JSON line per dispatched event.

    Args:
        log_dir: Directory receiving ``audit.log``; None records nothing
        include_details: Whether per-event details are written
    """

    def __init__(self, log_dir: Path | None = None, include_details: bool = True) -> None:
        self._include_details = include_details
        self._sink_id: int | None = None

        if log_dir is None:
            return

        log_dir.mkdir(parents=True, exist_ok=True)
        self._sink_id = logger.add(
            str(log_dir / "audit.log"),
            filter=_audit_filter,
            serialize=True,
            rotation="10 MB",
            retention="30 days",
            compression="gz",
            enqueue=True,
            level="INFO",
        )

    @property
    def enabled(self) -> bool:
        return self._sink_id is not None

    def log(self, entry: AuditEntry) -> None:
        """Emit an audit entry via loguru with all fields bound."""
        if not self.enabled:
            return

        details = entry.details if self._include_details else None

        logger.bind(
            audit=True,
            event=entry.event,
            paths=entry.paths,
            outcome=entry.outcome,
            duration_ms=entry.duration_ms,
            details=details,
        ).info(
            "audit: {event} -> {outcome} ({duration_ms}ms)",
            event=entry.event,
            outcome=entry.outcome,
            duration_ms=entry.duration_ms,
        )

    def close(self) -> None:
        """Remove the audit sink, flushing queued records first."""
        if self._sink_id is not None:
            try:
                logger.remove(self._sink_id)
            except ValueError:
                pass
            self._sink_id = None
