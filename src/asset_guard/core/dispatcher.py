"""Lifecycle event dispatch.

Each entry point is a short linear pipeline: pre-checks, version-control side
effects, processor fan-out, result aggregation, post-processing. Processor
callbacks run synchronously on the caller's thread in registry order. An
exception raised by a processor is not caught here; it reaches the caller
with a note naming the offending callback.
"""

import time
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from loguru import logger

from asset_guard.audit_logger import AuditEntry, AuditLogger
from asset_guard.config import PreferencesConfig
from asset_guard.models.results import EditCheck, SaveOutcome
from asset_guard.models.types import (
    AssetDeleteResult,
    AssetEvent,
    AssetMoveResult,
    FileMode,
    RemoveAssetOptions,
    StatusQueryOptions,
    combine_flags,
)
from asset_guard.vcs.base import VersionControlBackend

from .collaborators import (
    AutoApproveSaves,
    NoPendingChangesView,
    PendingChangesListener,
    SaveConfirmation,
)
from .editability import EditabilityResolver
from .license import LicenseGate
from .registry import HandlerRegistry


class AssetModificationDispatcher:
    """Entry point the asset pipeline calls before touching files.

    Args:
        registry: Processor callback registry
        vcs: Version-control backend
        editability: Editability resolver sharing ``registry`` and ``vcs``
        license_gate: Gate for license-restricted events
        preferences: User preferences consumed read-only
        save_confirmation: Optional save dialog; approves everything if omitted
        pending_changes: Optional listener refreshed on status updates
        audit: Optional audit logger
    """

    def __init__(
        self,
        registry: HandlerRegistry,
        vcs: VersionControlBackend,
        editability: EditabilityResolver,
        license_gate: LicenseGate,
        preferences: PreferencesConfig | None = None,
        save_confirmation: SaveConfirmation | None = None,
        pending_changes: PendingChangesListener | None = None,
        audit: AuditLogger | None = None,
    ):
        self._registry = registry
        self._vcs = vcs
        self._editability = editability
        self._license_gate = license_gate
        self._preferences = preferences or PreferencesConfig()
        self._save_confirmation = save_confirmation or AutoApproveSaves()
        self._pending_changes = pending_changes or NoPendingChangesView()
        self._audit = audit

    @property
    def registry(self) -> HandlerRegistry:
        return self._registry

    @property
    def vcs(self) -> VersionControlBackend:
        return self._vcs

    @property
    def audit(self) -> AuditLogger | None:
        return self._audit

    def _record(
        self,
        event: str,
        paths: Sequence[str],
        outcome: str,
        started: float,
        details: dict | None = None,
    ) -> None:
        if self._audit is None:
            return
        self._audit.log(
            AuditEntry(
                timestamp=datetime.now(timezone.utc).isoformat(),
                event=event,
                paths=list(paths),
                outcome=outcome,
                duration_ms=int((time.monotonic() - started) * 1000),
                details=details,
            )
        )

    # -- create -------------------------------------------------------------

    def on_will_create_asset(self, path: str) -> None:
        """Notify processors that ``path`` is about to be created."""
        started = time.monotonic()
        for binding in self._registry.resolve(AssetEvent.ON_WILL_CREATE_ASSET):
            binding.invoke(path)
        self._record(AssetEvent.ON_WILL_CREATE_ASSET, [path], "notified", started)

    # -- save ---------------------------------------------------------------

    def _should_confirm_save(self, paths: Sequence[str], explicitly_save_asset: bool) -> bool:
        if not paths or not self._preferences.verify_saving_assets:
            return False
        # The user already confirmed a single explicitly saved scene or prefab
        if explicitly_save_asset and len(paths) == 1:
            return not paths[0].endswith(tuple(self._preferences.explicit_save_extensions))
        return True

    @staticmethod
    def _restrict(candidates: Sequence[str], allowed: set[str], source: str) -> List[str]:
        kept = [p for p in dict.fromkeys(candidates) if p in allowed]
        if len(kept) != len(candidates):
            dropped = [p for p in candidates if p not in allowed]
            if dropped:
                logger.warning("{} named paths outside the save request, ignoring: {}", source, dropped)
        return kept

    def on_will_save_assets(
        self, paths: Sequence[str], explicitly_save_asset: bool = False
    ) -> SaveOutcome:
        """Decide which of ``paths`` get written and which get reverted.

        Args:
            paths: Modified assets the pipeline wants to write
            explicitly_save_asset: True when the user saved one asset on purpose

        Returns:
            SaveOutcome whose ``saved`` and ``reverted`` are disjoint subsets
            of ``paths``
        """
        started = time.monotonic()
        requested = list(paths)
        allowed = set(requested)
        to_save: List[str] = list(dict.fromkeys(requested))

        if self._should_confirm_save(requested, explicitly_save_asset):
            approved = self._save_confirmation.confirm(list(to_save))
            if approved is None:
                self._record(AssetEvent.ON_WILL_SAVE_ASSETS, requested, "cancelled", started)
                return SaveOutcome()
            to_save = self._restrict(approved, allowed, "Save confirmation")

        for binding in self._registry.resolve(AssetEvent.ON_WILL_SAVE_ASSETS):
            result = binding.invoke(list(to_save))
            if result is not None:
                to_save = self._restrict(result, allowed, binding.qualname)

        reverted: List[str] = []
        not_editable = self._editability.is_open_for_edit_many(
            to_save, status_options=StatusQueryOptions.FORCE_UPDATE
        )
        if not_editable:
            succeeded, editable = self._vcs.make_editable(not_editable)
            if not succeeded and not self._preferences.overwrite_failed_checkout_assets:
                made_editable = {p for p in editable if p is not None}
                reverted = [p for p in not_editable if p not in made_editable]
                reverted_set = set(reverted)
                to_save = [p for p in to_save if p not in reverted_set]
                logger.info("Could not check out {} asset(s); they will be reverted", len(reverted))

        outcome = SaveOutcome(saved=tuple(to_save), reverted=tuple(reverted))
        self._record(
            AssetEvent.ON_WILL_SAVE_ASSETS,
            requested,
            "saved" if not reverted else "partially_saved",
            started,
            {"saved": list(outcome.saved), "reverted": list(outcome.reverted)},
        )
        return outcome

    # -- move / delete ------------------------------------------------------

    def on_will_move_asset(self, source: str, destination: str) -> AssetMoveResult:
        """Ask the backend, then processors, whether they handle the move.

        Returns ``DID_NOT_MOVE`` without side effects when unlicensed.
        """
        started = time.monotonic()
        result = AssetMoveResult.DID_NOT_MOVE
        if not self._license_gate.is_licensed():
            self._record(AssetEvent.ON_WILL_MOVE_ASSET, [source, destination], "unlicensed", started)
            return result

        result = self._vcs.on_will_move(source, destination)

        self._license_gate.require(AssetEvent.ON_WILL_MOVE_ASSET, self._registry)
        bindings = self._registry.resolve(AssetEvent.ON_WILL_MOVE_ASSET)
        result = combine_flags(result, (b.invoke(source, destination) for b in bindings))

        self._record(
            AssetEvent.ON_WILL_MOVE_ASSET, [source, destination], result.name or str(int(result)), started
        )
        return result

    def on_will_delete_asset(
        self,
        path: str,
        options: RemoveAssetOptions = RemoveAssetOptions.DELETE_ASSETS,
    ) -> AssetDeleteResult:
        """Ask processors, then (only if none acted) the backend, about a delete.

        Returns ``DID_NOT_DELETE`` without side effects when unlicensed.
        """
        started = time.monotonic()
        result = AssetDeleteResult.DID_NOT_DELETE
        if not self._license_gate.is_licensed():
            self._record(AssetEvent.ON_WILL_DELETE_ASSET, [path], "unlicensed", started)
            return result

        self._license_gate.require(AssetEvent.ON_WILL_DELETE_ASSET, self._registry)
        bindings = self._registry.resolve(AssetEvent.ON_WILL_DELETE_ASSET)
        result = combine_flags(result, (b.invoke(path, options) for b in bindings))

        if result == AssetDeleteResult.DID_NOT_DELETE:
            result = self._vcs.on_will_delete(path, options)

        self._record(AssetEvent.ON_WILL_DELETE_ASSET, [path], result.name or str(int(result)), started)
        return result

    # -- status / file mode -------------------------------------------------

    def on_status_updated(self) -> None:
        """Refresh the pending-changes view, then notify processors."""
        started = time.monotonic()
        self._pending_changes.on_status_updated()
        self._license_gate.require(AssetEvent.ON_STATUS_UPDATED, self._registry)
        for binding in self._registry.resolve(AssetEvent.ON_STATUS_UPDATED):
            binding.invoke()
        self._record(AssetEvent.ON_STATUS_UPDATED, [], "notified", started)

    def on_file_mode_changed(self, paths: Sequence[str], mode: FileMode) -> None:
        """Check ``paths`` out and switch them to ``mode``.

        Paths the backend could not check out keep their current mode.
        """
        if not self._vcs.enabled or not paths:
            return
        started = time.monotonic()
        succeeded, editable = self._vcs.make_editable(list(paths))
        targets = list(paths) if succeeded else [p for p in editable if p is not None]
        if targets:
            self._vcs.set_file_mode(targets, mode)
        self._record(
            "on_file_mode_changed",
            list(paths),
            mode.value,
            started,
            {"changed": targets},
        )

    # -- editability --------------------------------------------------------

    def is_open_for_edit(
        self,
        path: Optional[str],
        status_options: StatusQueryOptions = StatusQueryOptions.USE_CACHED_IF_POSSIBLE,
    ) -> EditCheck:
        """See :meth:`EditabilityResolver.is_open_for_edit`."""
        return self._editability.is_open_for_edit(path, status_options)

    def is_open_for_edit_many(
        self,
        paths: Optional[Sequence[Optional[str]]],
        out_not_editable: Optional[List[str]] = None,
        status_options: StatusQueryOptions = StatusQueryOptions.USE_CACHED_IF_POSSIBLE,
    ) -> List[str]:
        """See :meth:`EditabilityResolver.is_open_for_edit_many`."""
        return self._editability.is_open_for_edit_many(paths, out_not_editable, status_options)
