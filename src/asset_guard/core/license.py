"""License gate for move, delete, status and editability callbacks."""

from typing import Callable

from loguru import logger

from asset_guard.models.types import AssetEvent

from .errors import LicenseError
from .registry import HandlerRegistry

LICENSE_GATED_EVENTS = frozenset(
    {
        AssetEvent.ON_WILL_MOVE_ASSET,
        AssetEvent.ON_WILL_DELETE_ASSET,
        AssetEvent.ON_STATUS_UPDATED,
        AssetEvent.IS_OPEN_FOR_EDIT,
    }
)


class LicenseGate:
    """Guards processor fan-out for license-restricted events.

    The check only fires when a processor actually declares a callback for the
    event, so events nobody listens to never pay for it. A declared callback
    that later fails validation still counts: an unlicensed process is told
    about it instead of silently ignoring the processor.

    Args:
        has_license: Query returning whether the process holds the license
    """

    def __init__(self, has_license: Callable[[], bool]):
        self._has_license = has_license

    def is_licensed(self) -> bool:
        return bool(self._has_license())

    def require(self, event: AssetEvent, registry: HandlerRegistry) -> None:
        """Raise :class:`LicenseError` if ``event`` is gated, declared and unlicensed."""
        if event not in LICENSE_GATED_EVENTS:
            return
        if not registry.declares(event):
            return
        if not self.is_licensed():
            logger.error("License check failed for '{}' callbacks", event)
            raise LicenseError(event)
