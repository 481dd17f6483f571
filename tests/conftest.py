"""Shared fixtures: a scriptable version-control backend and pipeline wiring."""

from typing import List, Optional, Sequence, Tuple

import pytest
from loguru import logger

from asset_guard.config import PreferencesConfig
from asset_guard.core import (
    AssetDeleteResult,
    AssetModificationDispatcher,
    AssetMoveResult,
    EditabilityResolver,
    FileMode,
    HandlerRegistry,
    LicenseGate,
    ReadOnlyFolders,
    RemoveAssetOptions,
    StatusQueryOptions,
)
from asset_guard.vcs import VersionControlBackend


class RecordingVersionControl(VersionControlBackend):
    """Backend whose answers are set by the test and whose calls are recorded."""

    def __init__(self, enabled: bool = True):
        self._enabled = enabled
        self.locked: dict[str, str] = {}  # path -> reason
        self.uncheckoutable: set[str] = set()
        self.move_result = AssetMoveResult.DID_NOT_MOVE
        self.delete_result = AssetDeleteResult.DID_NOT_DELETE
        self.calls: list[tuple] = []
        self.file_modes: dict[str, FileMode] = {}

    @property
    def enabled(self) -> bool:
        return self._enabled

    def make_editable(self, paths: Sequence[str]) -> Tuple[bool, List[Optional[str]]]:
        self.calls.append(("make_editable", list(paths)))
        result: List[Optional[str]] = []
        for path in paths:
            if path in self.uncheckoutable:
                result.append(None)
            else:
                self.locked.pop(path, None)
                result.append(path)
        return all(p is not None for p in result), result

    def set_file_mode(self, paths: Sequence[str], mode: FileMode) -> None:
        self.calls.append(("set_file_mode", list(paths), mode))
        for path in paths:
            self.file_modes[path] = mode

    def is_open_for_edit(self, path: str, status_options: StatusQueryOptions) -> Tuple[bool, str]:
        self.calls.append(("is_open_for_edit", path, status_options))
        if path in self.locked:
            return False, self.locked[path]
        return True, ""

    def is_open_for_edit_many(
        self,
        paths: Sequence[str],
        out_not_editable: List[str],
        status_options: StatusQueryOptions,
    ) -> None:
        self.calls.append(("is_open_for_edit_many", list(paths), status_options))
        out_not_editable.extend(p for p in paths if p in self.locked)

    def on_will_move(self, source: str, destination: str) -> AssetMoveResult:
        self.calls.append(("on_will_move", source, destination))
        return self.move_result

    def on_will_delete(self, path: str, options: RemoveAssetOptions) -> AssetDeleteResult:
        self.calls.append(("on_will_delete", path, options))
        return self.delete_result

    def call_names(self) -> list[str]:
        return [c[0] for c in self.calls]


class Pipeline:
    """Bundle of wired components for one test."""

    def __init__(
        self,
        processors: Sequence[type] = (),
        licensed: bool = True,
        read_only_folders: Sequence[str] = (),
        project_root: str = "/project",
        preferences: PreferencesConfig | None = None,
        save_confirmation=None,
        pending_changes=None,
        vcs: RecordingVersionControl | None = None,
    ):
        self.discover_calls = 0
        self.license = {"value": licensed}
        self.vcs = vcs or RecordingVersionControl()

        def discover():
            self.discover_calls += 1
            return list(processors)

        self.registry = HandlerRegistry(discover)
        self.gate = LicenseGate(lambda: self.license["value"])
        self.folders = ReadOnlyFolders(project_root, list(read_only_folders))
        self.resolver = EditabilityResolver(self.registry, self.vcs, self.folders, self.gate)
        self.dispatcher = AssetModificationDispatcher(
            registry=self.registry,
            vcs=self.vcs,
            editability=self.resolver,
            license_gate=self.gate,
            preferences=preferences,
            save_confirmation=save_confirmation,
            pending_changes=pending_changes,
        )


@pytest.fixture
def make_pipeline():
    """Factory building a fresh Pipeline per call."""
    return Pipeline


@pytest.fixture
def log_messages():
    """Capture loguru messages emitted during the test as (level, text) pairs."""
    messages: list[tuple[str, str]] = []
    sink_id = logger.add(
        lambda m: messages.append((m.record["level"].name, m.record["message"])),
        level="DEBUG",
    )
    yield messages
    logger.remove(sink_id)


@pytest.fixture
def make_vcs():
    """Factory for a standalone RecordingVersionControl."""
    return RecordingVersionControl
