"""Version-control backends."""

from .base import VersionControlBackend
from .file_permissions import FilePermissionVersionControl
from .null import NullVersionControl

__all__ = [
    "FilePermissionVersionControl",
    "NullVersionControl",
    "VersionControlBackend",
]
