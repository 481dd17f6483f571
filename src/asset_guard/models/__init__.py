"""Result models and shared enums for asset-guard."""

from .results import EditCheck, SaveOutcome
from .types import (
    AssetDeleteResult,
    AssetEvent,
    AssetMoveResult,
    FileMode,
    RemoveAssetOptions,
    StatusQueryOptions,
    combine_flags,
)

__all__ = [
    "AssetDeleteResult",
    "AssetEvent",
    "AssetMoveResult",
    "EditCheck",
    "FileMode",
    "RemoveAssetOptions",
    "SaveOutcome",
    "StatusQueryOptions",
    "combine_flags",
]
