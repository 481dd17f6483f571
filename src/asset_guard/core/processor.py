"""Processor base class and the discovery primitive.

An asset modification processor is a class exposing any subset of the
callbacks below as ``staticmethod`` or ``classmethod``. Processors are never
instantiated. Subclassing :class:`AssetModificationProcessor` is enough for
discovery once the defining module has been imported; third-party packages
can also publish processor classes under the ``asset_guard.processors``
entry-point group.

Callback contract (exact annotations are required)::

    on_will_create_asset(path: str) -> None
    on_will_save_assets(paths: list[str]) -> list[str] | None
    on_will_move_asset(source: str, destination: str) -> AssetMoveResult
    on_will_delete_asset(path: str, options: RemoveAssetOptions) -> AssetDeleteResult
    is_open_for_edit(path: str, message: str) -> tuple[bool, str]
    on_status_updated() -> None
"""

import importlib
from importlib.metadata import entry_points
from typing import Iterable, Sequence

from loguru import logger

from .errors import ConfigurationError

DEFAULT_ENTRY_POINT_GROUP = "asset_guard.processors"


class AssetModificationProcessor:
    """Marker base class for processors. Defines no callbacks itself."""


def _walk_subclasses(base: type) -> list[type]:
    found: list[type] = []
    for subclass in base.__subclasses__():
        found.append(subclass)
        found.extend(_walk_subclasses(subclass))
    return found


def _load_entry_point_processors(group: str) -> list[type]:
    processors: list[type] = []
    for entry_point in entry_points(group=group):
        loaded = entry_point.load()
        if not isinstance(loaded, type):
            logger.warning(
                "Entry point {} in group {} is not a class, ignoring", entry_point.name, group
            )
            continue
        processors.append(loaded)
    return processors


def find_processor_types(
    modules: Iterable[str] = (),
    entry_point_group: str | None = DEFAULT_ENTRY_POINT_GROUP,
    base: type = AssetModificationProcessor,
) -> Sequence[type]:
    """Locate processor classes.

    Imports each configured module (so its subclasses get registered), loads
    the entry-point group, then walks subclasses of ``base`` depth-first in
    definition order. Duplicates keep their first position.

    Args:
        modules: Dotted module names to import before walking subclasses
        entry_point_group: Entry-point group to load, or None to skip
        base: Marker base class

    Returns:
        Tuple of processor classes in discovery order

    Raises:
        ConfigurationError: If a configured module cannot be imported
    """
    for module_name in modules:
        try:
            importlib.import_module(module_name)
        except ImportError as e:
            raise ConfigurationError(f"Cannot import processor module '{module_name}': {e}") from e

    candidates: list[type] = []
    if entry_point_group:
        candidates.extend(_load_entry_point_processors(entry_point_group))
    candidates.extend(_walk_subclasses(base))

    return tuple(dict.fromkeys(candidates))
