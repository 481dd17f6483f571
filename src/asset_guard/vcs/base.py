"""Contract every version-control backend satisfies.

The pipeline never talks to a version-control system directly; it calls the
hooks below and combines their answers with processor verdicts. All calls are
blocking. Retries and timeouts, if any, belong to the backend.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from asset_guard.models.types import (
    AssetDeleteResult,
    AssetMoveResult,
    FileMode,
    RemoveAssetOptions,
    StatusQueryOptions,
)


class VersionControlBackend(ABC):
    """Abstract version-control backend."""

    @property
    @abstractmethod
    def enabled(self) -> bool:
        """Whether the backend is active for this project."""

    @abstractmethod
    def make_editable(self, paths: Sequence[str]) -> Tuple[bool, List[Optional[str]]]:
        """Check out ``paths`` for editing.

        Returns:
            ``(all_succeeded, per_path)`` where ``per_path[i]`` is ``paths[i]``
            if it is now editable and ``None`` otherwise
        """

    @abstractmethod
    def set_file_mode(self, paths: Sequence[str], mode: FileMode) -> None:
        """Record the storage mode for ``paths``."""

    @abstractmethod
    def is_open_for_edit(
        self, path: str, status_options: StatusQueryOptions
    ) -> Tuple[bool, str]:
        """Return ``(editable, reason)`` for one path."""

    def is_open_for_edit_many(
        self,
        paths: Sequence[str],
        out_not_editable: List[str],
        status_options: StatusQueryOptions,
    ) -> None:
        """Append every non-editable path of ``paths`` to ``out_not_editable``.

        Backends with a real round-trip cost should override this with a
        single batched query.
        """
        for path in paths:
            editable, _ = self.is_open_for_edit(path, status_options)
            if not editable:
                out_not_editable.append(path)

    @abstractmethod
    def on_will_move(self, source: str, destination: str) -> AssetMoveResult:
        """Give the backend a chance to move (or refuse to move) an asset."""

    @abstractmethod
    def on_will_delete(self, path: str, options: RemoveAssetOptions) -> AssetDeleteResult:
        """Give the backend a chance to delete (or refuse to delete) an asset."""
