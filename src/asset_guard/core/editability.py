"""Editability resolution for single paths and batches.

A path is editable when all three stages agree, evaluated in this order:

1. it is not inside a read-only folder,
2. the version-control backend reports it open for edit,
3. every ``is_open_for_edit`` processor callback returns ``True``.

The first stage that rejects a path decides the verdict; later stages are not
consulted for it. Empty paths (``""`` or ``None``) lie outside the managed
tree and are always editable.
"""

from typing import List, Optional, Sequence

from asset_guard.models.results import EditCheck
from asset_guard.models.types import AssetEvent, StatusQueryOptions
from asset_guard.vcs.base import VersionControlBackend

from .folders import ReadOnlyFolders
from .license import LicenseGate
from .registry import CallbackBinding, HandlerRegistry

READ_ONLY_FOLDER_REASON = "Asset is in a read-only folder"


class EditabilityResolver:
    """Combines folder, version-control and processor checks.

    Args:
        registry: Source of ``is_open_for_edit`` processor callbacks
        vcs: Version-control backend
        folders: Read-only folder configuration
        license_gate: Gate consulted before any processor callback runs
    """

    def __init__(
        self,
        registry: HandlerRegistry,
        vcs: VersionControlBackend,
        folders: ReadOnlyFolders,
        license_gate: LicenseGate,
    ):
        self._registry = registry
        self._vcs = vcs
        self._folders = folders
        self._license_gate = license_gate

    def _callbacks(self) -> tuple[CallbackBinding, ...]:
        self._license_gate.require(AssetEvent.IS_OPEN_FOR_EDIT, self._registry)
        return self._registry.resolve(AssetEvent.IS_OPEN_FOR_EDIT)

    @staticmethod
    def _check_callbacks(
        path: str, bindings: Sequence[CallbackBinding], message: str = ""
    ) -> EditCheck:
        for binding in bindings:
            editable, message = binding.invoke(path, message)
            if not editable:
                return EditCheck(editable=False, reason=message)
        return EditCheck(editable=True)

    def is_open_for_edit(
        self,
        path: Optional[str],
        status_options: StatusQueryOptions = StatusQueryOptions.USE_CACHED_IF_POSSIBLE,
    ) -> EditCheck:
        """Resolve editability of one path.

        Args:
            path: Asset path; empty or None is always editable
            status_options: Whether the backend may answer from its cache

        Returns:
            EditCheck carrying the reason of the stage that rejected the path

        Raises:
            LicenseError: If processors declare ``is_open_for_edit`` and the
                process is unlicensed
        """
        if not path:
            return EditCheck(editable=True)

        if self._folders.is_read_only(path):
            return EditCheck(editable=False, reason=READ_ONLY_FOLDER_REASON)

        editable, message = self._vcs.is_open_for_edit(path, status_options)
        if not editable:
            return EditCheck(editable=False, reason=message)

        return self._check_callbacks(path, self._callbacks(), message)

    def is_open_for_edit_many(
        self,
        paths: Optional[Sequence[Optional[str]]],
        out_not_editable: Optional[List[str]] = None,
        status_options: StatusQueryOptions = StatusQueryOptions.USE_CACHED_IF_POSSIBLE,
    ) -> List[str]:
        """Collect every non-editable path of a batch.

        The output list is cleared first. Read-only-folder paths come first,
        then paths the backend rejected, then paths a processor rejected, each
        group in input order and without duplicates. Paths needing a
        version-control answer are sent to the backend in a single batch.

        Args:
            paths: Asset paths; empty or None entries are skipped
            out_not_editable: List to fill; a new one is created if omitted
            status_options: Whether the backend may answer from its cache

        Returns:
            ``out_not_editable`` (or the new list)
        """
        out = out_not_editable if out_not_editable is not None else []
        out.clear()
        if not paths:
            return out

        candidates = list(dict.fromkeys(p for p in paths if p))
        rejected: set[str] = set()

        query: List[str] = []
        for path in candidates:
            if self._folders.is_read_only(path):
                out.append(path)
                rejected.add(path)
            else:
                query.append(path)

        if query:
            vcs_rejected: List[str] = []
            self._vcs.is_open_for_edit_many(query, vcs_rejected, status_options)
            vcs_rejected_set = set(vcs_rejected)
            for path in query:
                if path in vcs_rejected_set:
                    out.append(path)
                    rejected.add(path)

        still_editable = [p for p in candidates if p not in rejected]
        if not still_editable:
            return out

        bindings = self._callbacks()
        if bindings:
            for path in still_editable:
                if not self._check_callbacks(path, bindings):
                    out.append(path)
        return out
