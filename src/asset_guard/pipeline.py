"""Assembly of a dispatcher from settings, plus the process-wide instance.

:func:`get_dispatcher` builds the dispatcher on first use, under a lock, and
hands the same instance to every caller afterwards. :func:`reset_caches` is
the process-wide cache reset: it drops the instance, and with it the processor
discovery and callback caches, so the next call rediscovers processors.
"""

import threading
from functools import partial
from pathlib import Path

from asset_guard.audit_logger import AuditLogger
from asset_guard.config import Settings, get_settings
from asset_guard.core.collaborators import PendingChangesListener, SaveConfirmation
from asset_guard.core.dispatcher import AssetModificationDispatcher
from asset_guard.core.editability import EditabilityResolver
from asset_guard.core.errors import ConfigurationError
from asset_guard.core.folders import ReadOnlyFolders
from asset_guard.core.license import LicenseGate
from asset_guard.core.processor import find_processor_types
from asset_guard.core.registry import HandlerRegistry
from asset_guard.vcs import FilePermissionVersionControl, NullVersionControl, VersionControlBackend

_lock = threading.Lock()
_dispatcher: AssetModificationDispatcher | None = None


def create_backend(settings: Settings) -> VersionControlBackend:
    """Instantiate the backend named in ``settings.version_control.backend``."""
    name = settings.version_control.backend
    if name == "none":
        return NullVersionControl()
    if name == "file_permissions":
        return FilePermissionVersionControl(settings.version_control.project_root)
    raise ConfigurationError(f"Unknown version-control backend: {name}")


def build_dispatcher(
    settings: Settings | None = None,
    *,
    vcs: VersionControlBackend | None = None,
    save_confirmation: SaveConfirmation | None = None,
    pending_changes: PendingChangesListener | None = None,
) -> AssetModificationDispatcher:
    """Wire a dispatcher and its collaborators from settings.

    Args:
        settings: Settings to use; the cached global settings if omitted
        vcs: Backend overriding the configured one
        save_confirmation: Save dialog collaborator
        pending_changes: Pending-changes view collaborator

    Returns:
        A fully wired dispatcher with its own registry
    """
    settings = settings or get_settings()

    registry = HandlerRegistry(
        partial(
            find_processor_types,
            settings.processors.modules,
            settings.processors.entry_point_group,
        )
    )
    backend = vcs or create_backend(settings)
    folders = ReadOnlyFolders(
        settings.version_control.project_root,
        settings.version_control.read_only_folders,
    )
    license_value = settings.license.has_team_license
    license_gate = LicenseGate(lambda: license_value)

    audit = None
    if settings.logging.audit_enabled and settings.logging.audit_log_dir:
        audit = AuditLogger(Path(settings.logging.audit_log_dir))

    return AssetModificationDispatcher(
        registry=registry,
        vcs=backend,
        editability=EditabilityResolver(registry, backend, folders, license_gate),
        license_gate=license_gate,
        preferences=settings.preferences,
        save_confirmation=save_confirmation,
        pending_changes=pending_changes,
        audit=audit,
    )


def get_dispatcher() -> AssetModificationDispatcher:
    """Return the process-wide dispatcher, building it on first call."""
    global _dispatcher
    dispatcher = _dispatcher
    if dispatcher is not None:
        return dispatcher
    with _lock:
        if _dispatcher is None:
            _dispatcher = build_dispatcher()
        return _dispatcher


def reset_caches() -> None:
    """Forget the process-wide dispatcher and its discovery caches."""
    global _dispatcher
    with _lock:
        if _dispatcher is not None:
            _dispatcher.registry.reset()
            if _dispatcher.audit is not None:
                _dispatcher.audit.close()
        _dispatcher = None
