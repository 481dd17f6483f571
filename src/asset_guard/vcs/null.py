"""Backend used when no version control is configured."""

from typing import List, Optional, Sequence, Tuple

from asset_guard.models.types import (
    AssetDeleteResult,
    AssetMoveResult,
    FileMode,
    RemoveAssetOptions,
    StatusQueryOptions,
)

from .base import VersionControlBackend


class NullVersionControl(VersionControlBackend):
    """Disabled backend: everything is editable and nothing is ever checked out.

    ``make_editable`` reports failure because there is nothing to check out
    from; the pipeline only calls it for paths something else already
    rejected.
    """

    @property
    def enabled(self) -> bool:
        return False

    def make_editable(self, paths: Sequence[str]) -> Tuple[bool, List[Optional[str]]]:
        return (len(paths) == 0, [None] * len(paths))

    def set_file_mode(self, paths: Sequence[str], mode: FileMode) -> None:
        pass

    def is_open_for_edit(self, path: str, status_options: StatusQueryOptions) -> Tuple[bool, str]:
        return True, ""

    def is_open_for_edit_many(
        self,
        paths: Sequence[str],
        out_not_editable: List[str],
        status_options: StatusQueryOptions,
    ) -> None:
        pass

    def on_will_move(self, source: str, destination: str) -> AssetMoveResult:
        return AssetMoveResult.DID_NOT_MOVE

    def on_will_delete(self, path: str, options: RemoveAssetOptions) -> AssetDeleteResult:
        return AssetDeleteResult.DID_NOT_DELETE
