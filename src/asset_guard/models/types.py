"""Event names, result flags and option enums shared across the pipeline.

Move and delete verdicts are ``IntFlag`` values so that results from several
processors can be merged with bitwise OR. OR is associative and commutative,
which makes the merged verdict independent of processor order.
"""

from enum import Enum, IntFlag, StrEnum
from functools import reduce
from typing import Iterable, TypeVar


class AssetEvent(StrEnum):
    """Lifecycle events a processor can subscribe to.

    The value of each member is the callback name looked up on processors.
    """

    ON_WILL_CREATE_ASSET = "on_will_create_asset"
    ON_WILL_SAVE_ASSETS = "on_will_save_assets"
    ON_WILL_MOVE_ASSET = "on_will_move_asset"
    ON_WILL_DELETE_ASSET = "on_will_delete_asset"
    IS_OPEN_FOR_EDIT = "is_open_for_edit"
    ON_STATUS_UPDATED = "on_status_updated"


class AssetMoveResult(IntFlag):
    """Outcome of a move request."""

    DID_NOT_MOVE = 0
    FAILED_MOVE = 1
    DID_MOVE = 2


class AssetDeleteResult(IntFlag):
    """Outcome of a delete request."""

    DID_NOT_DELETE = 0
    FAILED_DELETE = 1
    DID_DELETE = 2


class RemoveAssetOptions(IntFlag):
    """How a delete should dispose of the asset."""

    MOVE_ASSET_TO_TRASH = 0
    DELETE_ASSETS = 2


class StatusQueryOptions(Enum):
    """Whether a version-control status query may use cached results."""

    FORCE_UPDATE = "force_update"
    USE_CACHED_IF_POSSIBLE = "use_cached_if_possible"


class FileMode(Enum):
    """Storage mode a version-control backend tracks for a file."""

    BINARY = "binary"
    TEXT = "text"


F = TypeVar("F", bound=IntFlag)


def combine_flags(initial: F, results: Iterable[F]) -> F:
    """OR every result into ``initial``.

    Args:
        initial: Starting verdict (usually the "did not" member)
        results: Verdicts to merge

    Returns:
        The union of all flags, typed as ``initial``'s flag class
    """
    flag_type = type(initial)
    return reduce(lambda acc, value: flag_type(acc | value), results, initial)
