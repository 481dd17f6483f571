"""Lazily built, process-lifetime registry of processor callbacks.

The registry runs discovery once, then resolves and caches the validated
callback list per event. Both caches are built at most once under a lock;
readers that arrive during the first build wait for it and then see the
completed tuple, never a partial one. :meth:`HandlerRegistry.reset` is the
only way to invalidate them.
"""

import inspect
import threading
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from loguru import logger

from asset_guard.models.types import AssetDeleteResult, AssetEvent, AssetMoveResult, RemoveAssetOptions

from .signature import ANY_RETURN, SignatureValidator, describe_callback


@dataclass(frozen=True)
class CallbackContract:
    """Expected parameter annotations and return annotation for an event."""

    param_types: tuple[Any, ...]
    return_type: Any = ANY_RETURN


CALLBACK_CONTRACTS: dict[AssetEvent, CallbackContract] = {
    AssetEvent.ON_WILL_CREATE_ASSET: CallbackContract((str,)),
    AssetEvent.ON_WILL_SAVE_ASSETS: CallbackContract((list[str],)),
    AssetEvent.ON_WILL_MOVE_ASSET: CallbackContract((str, str), AssetMoveResult),
    AssetEvent.ON_WILL_DELETE_ASSET: CallbackContract((str, RemoveAssetOptions), AssetDeleteResult),
    AssetEvent.IS_OPEN_FOR_EDIT: CallbackContract((str, str), tuple[bool, str]),
    AssetEvent.ON_STATUS_UPDATED: CallbackContract((), None),
}


@dataclass(frozen=True)
class CallbackBinding:
    """A validated callback of one processor for one event."""

    event: AssetEvent
    processor: type
    param_types: tuple[Any, ...]
    return_type: Any
    callback: Callable[..., Any]

    @property
    def qualname(self) -> str:
        module, qualname = describe_callback(self.callback)
        return f"{module}.{qualname}"

    def invoke(self, *args: Any) -> Any:
        """Call the processor callback.

        Exceptions raised by the processor propagate unchanged, with a note
        naming the event and callback attached for diagnosis.
        """
        try:
            return self.callback(*args)
        except Exception as e:
            e.add_note(f"raised by processor callback {self.qualname} during '{self.event}'")
            raise


def find_static_callback(processor: type, name: str) -> Callable[..., Any] | None:
    """Return the class-level callback ``name`` of ``processor``, if any.

    Only ``staticmethod`` and ``classmethod`` attributes the class declares
    itself qualify. Inherited callbacks belong to the base class, which is
    discovered on its own; instance methods and plain attributes are ignored.
    """
    if name not in vars(processor):
        return None
    raw = inspect.getattr_static(processor, name)
    if isinstance(raw, (staticmethod, classmethod)):
        return getattr(processor, name)
    return None


class HandlerRegistry:
    """Discovers processors once and caches validated bindings per event.

    Args:
        discover: Zero-argument callable returning processor classes
        validator: Signature validator (a default one is created if omitted)
    """

    def __init__(
        self,
        discover: Callable[[], Sequence[type]],
        validator: SignatureValidator | None = None,
    ):
        self._discover = discover
        self._validator = validator or SignatureValidator()
        self._lock = threading.RLock()
        self._processors: tuple[type, ...] | None = None
        self._bindings: dict[AssetEvent, tuple[CallbackBinding, ...]] = {}
        self._declared: dict[AssetEvent, bool] = {}

    def processors(self) -> tuple[type, ...]:
        """Return discovered processor classes, running discovery on first use."""
        processors = self._processors
        if processors is not None:
            return processors
        with self._lock:
            if self._processors is None:
                self._processors = tuple(self._discover())
                logger.debug("Discovered {} asset modification processor(s)", len(self._processors))
            return self._processors

    def resolve(self, event: AssetEvent) -> tuple[CallbackBinding, ...]:
        """Return the validated bindings for ``event`` in discovery order."""
        bindings = self._bindings.get(event)
        if bindings is not None:
            return bindings
        with self._lock:
            if event not in self._bindings:
                self._build(event)
            return self._bindings[event]

    def declares(self, event: AssetEvent) -> bool:
        """Whether any processor declares a callback for ``event``, valid or not."""
        declared = self._declared.get(event)
        if declared is not None:
            return declared
        with self._lock:
            if event not in self._bindings:
                self._build(event)
            return self._declared[event]

    def reset(self) -> None:
        """Drop every cache; the next call re-runs discovery."""
        with self._lock:
            self._processors = None
            self._bindings = {}
            self._declared = {}

    def _build(self, event: AssetEvent) -> None:
        contract = CALLBACK_CONTRACTS[event]
        bindings: list[CallbackBinding] = []
        declared = False
        for processor in self.processors():
            callback = find_static_callback(processor, event.value)
            if callback is None:
                continue
            declared = True
            if not self._validator.validate(contract.param_types, contract.return_type, callback):
                continue
            bindings.append(
                CallbackBinding(
                    event=event,
                    processor=processor,
                    param_types=contract.param_types,
                    return_type=contract.return_type,
                    callback=callback,
                )
            )
        # _declared must be published before _bindings
        self._declared[event] = declared
        self._bindings[event] = tuple(bindings)
