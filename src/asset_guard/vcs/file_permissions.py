"""Lock-by-permission backend.

Models the "checkout" workflow many centralized version-control systems use
on disk: files that are not checked out are kept read-only, and checking a
file out means making it writable. A file counts as checked out when its
owner write bit is set. Files that do not exist yet are always editable.

The owner write bit is read from ``os.stat`` rather than ``os.access`` so the
answer does not depend on the calling user (root can write anything).
"""

import os
import stat
from typing import Dict, List, Optional, Sequence, Tuple

from loguru import logger

from asset_guard.models.types import (
    AssetDeleteResult,
    AssetMoveResult,
    FileMode,
    RemoveAssetOptions,
    StatusQueryOptions,
)

from .base import VersionControlBackend


class FilePermissionVersionControl(VersionControlBackend):
    """Backend that treats read-only files as locked.

    Status answers are cached per path. ``USE_CACHED_IF_POSSIBLE`` reuses a
    cached answer, ``FORCE_UPDATE`` always re-reads the file mode.

    Args:
        project_root: Directory relative asset paths are resolved against
    """

    def __init__(self, project_root: str = "."):
        self._project_root = os.path.realpath(os.path.expanduser(project_root))
        self._status_cache: Dict[str, Tuple[bool, str]] = {}
        self._file_modes: Dict[str, FileMode] = {}

    @property
    def enabled(self) -> bool:
        return True

    @property
    def project_root(self) -> str:
        return self._project_root

    def _absolute(self, path: str) -> str:
        if os.path.isabs(path):
            return path
        return os.path.join(self._project_root, path)

    def _key(self, path: str) -> str:
        return os.path.normcase(os.path.normpath(os.path.realpath(self._absolute(path))))

    def _is_locked(self, path: str) -> bool:
        absolute = self._absolute(path)
        try:
            mode = os.stat(absolute).st_mode
        except FileNotFoundError:
            return False
        return not mode & stat.S_IWUSR

    def _query(self, path: str) -> Tuple[bool, str]:
        if self._is_locked(path):
            return False, f"{path} is read-only and must be checked out first"
        return True, ""

    def is_open_for_edit(self, path: str, status_options: StatusQueryOptions) -> Tuple[bool, str]:
        key = self._key(path)
        if status_options is StatusQueryOptions.USE_CACHED_IF_POSSIBLE and key in self._status_cache:
            return self._status_cache[key]
        status = self._query(path)
        self._status_cache[key] = status
        return status

    def make_editable(self, paths: Sequence[str]) -> Tuple[bool, List[Optional[str]]]:
        editable: List[Optional[str]] = []
        for path in paths:
            absolute = self._absolute(path)
            try:
                if self._is_locked(path):
                    mode = os.stat(absolute).st_mode
                    os.chmod(absolute, mode | stat.S_IWUSR)
                    logger.debug("Checked out {}", path)
            except OSError as e:
                logger.warning("Could not check out {}: {}", path, e)
                self._status_cache.pop(self._key(path), None)
                editable.append(None)
                continue
            self._status_cache[self._key(path)] = (True, "")
            editable.append(path)
        return all(p is not None for p in editable), editable

    def set_file_mode(self, paths: Sequence[str], mode: FileMode) -> None:
        for path in paths:
            self._file_modes[self._key(path)] = mode

    def file_mode(self, path: str) -> Optional[FileMode]:
        """Return the mode last recorded for ``path``, if any."""
        return self._file_modes.get(self._key(path))

    def on_will_move(self, source: str, destination: str) -> AssetMoveResult:
        self._status_cache.pop(self._key(source), None)
        self._status_cache.pop(self._key(destination), None)
        if self._is_locked(source):
            logger.info("Refusing to move locked asset {}", source)
            return AssetMoveResult.FAILED_MOVE
        return AssetMoveResult.DID_NOT_MOVE

    def on_will_delete(self, path: str, options: RemoveAssetOptions) -> AssetDeleteResult:
        self._status_cache.pop(self._key(path), None)
        if self._is_locked(path):
            logger.info("Refusing to delete locked asset {}", path)
            return AssetDeleteResult.FAILED_DELETE
        return AssetDeleteResult.DID_NOT_DELETE
