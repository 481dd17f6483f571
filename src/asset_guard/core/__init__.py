"""Core functionality package."""

from asset_guard.models.types import (
    AssetDeleteResult,
    AssetEvent,
    AssetMoveResult,
    FileMode,
    RemoveAssetOptions,
    StatusQueryOptions,
    combine_flags,
)

from .collaborators import AutoApproveSaves, NoPendingChangesView, PendingChangesListener, SaveConfirmation
from .dispatcher import AssetModificationDispatcher
from .editability import EditabilityResolver
from .errors import AssetGuardError, ConfigurationError, LicenseError, SignatureMismatchError
from .folders import ReadOnlyFolders
from .license import LicenseGate
from .processor import AssetModificationProcessor, find_processor_types
from .registry import CALLBACK_CONTRACTS, CallbackBinding, HandlerRegistry
from .signature import ANY_RETURN, SignatureValidator

__all__ = [
    "ANY_RETURN",
    "AssetDeleteResult",
    "AssetEvent",
    "AssetGuardError",
    "AssetModificationDispatcher",
    "AssetModificationProcessor",
    "AssetMoveResult",
    "AutoApproveSaves",
    "CALLBACK_CONTRACTS",
    "CallbackBinding",
    "ConfigurationError",
    "EditabilityResolver",
    "FileMode",
    "HandlerRegistry",
    "LicenseError",
    "LicenseGate",
    "NoPendingChangesView",
    "PendingChangesListener",
    "ReadOnlyFolders",
    "RemoveAssetOptions",
    "SaveConfirmation",
    "SignatureMismatchError",
    "SignatureValidator",
    "StatusQueryOptions",
    "combine_flags",
    "find_processor_types",
]
