"""Exception hierarchy for the asset modification pipeline."""

from asset_guard.models.types import AssetEvent


class AssetGuardError(Exception):
    """Base class for all asset-guard errors."""
    pass


class SignatureMismatchError(AssetGuardError):
    """Raised when a processor callback does not match its event contract.

    Never fatal: the registry logs it and leaves the callback out of dispatch.
    """

    def __init__(self, message: str, module: str, callback: str):
        super().__init__(message)
        self.module = module
        self.callback = callback


class LicenseError(AssetGuardError):
    """Raised when a license-gated event runs without the required license."""

    def __init__(self, event: AssetEvent, message: str | None = None):
        self.event = event
        super().__init__(message or f"'{event}' callbacks require a team license")


class ConfigurationError(AssetGuardError):
    """Raised when settings name an unknown backend or an unimportable module."""
    pass
