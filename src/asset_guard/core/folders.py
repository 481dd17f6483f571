"""Read-only folder detection.

Asset paths are usually project-relative (``Assets/foo.png``) but absolute
paths are accepted too. Both the configured folders and the queried path are
resolved against the project root, symlinks followed, and compared with
case normalization so ``/foo/bar`` never matches ``/foo/barbaz``.
"""

import os
from typing import List, Optional


def _normalize(path: str, root: str) -> str:
    expanded = os.path.expanduser(path)
    if not os.path.isabs(expanded):
        expanded = os.path.join(root, expanded)
    resolved = os.path.realpath(expanded)
    return os.path.normcase(os.path.normpath(resolved))


class ReadOnlyFolders:
    """Answers whether an asset lives under a read-only folder.

    Args:
        project_root: Directory relative paths are resolved against.
        folders: Folder paths (relative or absolute) whose contents are
            read-only. If empty, nothing is read-only.

    Example:
        folders = ReadOnlyFolders('/work/game', ['Packages/com.vendor.sdk'])
        folders.is_read_only('Packages/com.vendor.sdk/Runtime/a.cs')  # True
        folders.is_read_only('Assets/a.cs')  # False
    """

    def __init__(self, project_root: str = ".", folders: Optional[List[str]] = None):
        self._project_root = os.path.realpath(os.path.expanduser(project_root))
        self._folders = list(folders or [])
        self._resolved: List[str] = [_normalize(f, self._project_root) for f in self._folders]

    @property
    def folders(self) -> List[str]:
        """Configured folders as given."""
        return self._folders.copy()

    @property
    def project_root(self) -> str:
        return self._project_root

    def is_read_only(self, path: str) -> bool:
        """Return True if ``path`` is a read-only folder or lies beneath one."""
        if not path or not self._resolved:
            return False

        normalized = _normalize(path, self._project_root)
        normalized_with_sep = normalized if normalized.endswith(os.sep) else normalized + os.sep

        for folder in self._resolved:
            if normalized == folder:
                return True
            folder_with_sep = folder if folder.endswith(os.sep) else folder + os.sep
            if normalized_with_sep.startswith(folder_with_sep):
                return True
        return False
