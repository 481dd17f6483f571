"""Tests for HandlerRegistry discovery, validation and caching."""

import threading
import time

from asset_guard.core import AssetEvent, AssetMoveResult, HandlerRegistry
from asset_guard.core.registry import find_static_callback


class CreateProcessor:
    @staticmethod
    def on_will_create_asset(path: str) -> None:
        pass


class MoveProcessor:
    @staticmethod
    def on_will_move_asset(source: str, destination: str) -> AssetMoveResult:
        return AssetMoveResult.DID_MOVE


class BrokenMoveProcessor:
    @staticmethod
    def on_will_move_asset(source: str) -> AssetMoveResult:
        return AssetMoveResult.DID_MOVE


class InstanceMethodProcessor:
    def on_will_create_asset(self, path: str) -> None:
        pass


class ClassMethodProcessor:
    @classmethod
    def on_will_create_asset(cls, path: str) -> None:
        pass


class InheritedProcessor(CreateProcessor):
    pass


class OverridingProcessor(CreateProcessor):
    @staticmethod
    def on_will_create_asset(path: str) -> None:
        pass


class KeywordOnlyMoveProcessor:
    @staticmethod
    def on_will_move_asset(source: str, *, destination: str) -> AssetMoveResult:
        return AssetMoveResult.DID_MOVE


class ShadowingProcessor(CreateProcessor):
    on_will_create_asset = None


class TestFindStaticCallback:
    """Only static and class methods count as callbacks."""

    def test_static_method_found(self):
        assert find_static_callback(CreateProcessor, "on_will_create_asset") is not None

    def test_classmethod_found(self):
        assert find_static_callback(ClassMethodProcessor, "on_will_create_asset") is not None

    def test_instance_method_ignored(self):
        assert find_static_callback(InstanceMethodProcessor, "on_will_create_asset") is None

    def test_missing_callback(self):
        assert find_static_callback(MoveProcessor, "on_will_create_asset") is None

    def test_inherited_static_method_not_rebound(self):
        assert find_static_callback(InheritedProcessor, "on_will_create_asset") is None

    def test_overriding_static_method_found(self):
        assert find_static_callback(OverridingProcessor, "on_will_create_asset") is not None

    def test_shadowed_attribute_ignored(self):
        assert find_static_callback(ShadowingProcessor, "on_will_create_asset") is None


class TestResolve:
    """Resolution filters and orders bindings."""

    def test_bindings_follow_discovery_order(self):
        registry = HandlerRegistry(lambda: [ClassMethodProcessor, MoveProcessor, CreateProcessor])

        bindings = registry.resolve(AssetEvent.ON_WILL_CREATE_ASSET)

        assert [b.processor for b in bindings] == [ClassMethodProcessor, CreateProcessor]
        assert all(b.event is AssetEvent.ON_WILL_CREATE_ASSET for b in bindings)

    def test_modules_without_callback_are_skipped_silently(self, log_messages):
        registry = HandlerRegistry(lambda: [CreateProcessor])

        assert registry.resolve(AssetEvent.ON_WILL_MOVE_ASSET) == ()
        assert not [m for m in log_messages if m[0] == "WARNING"]

    def test_invalid_callback_skipped_with_warning(self, log_messages):
        registry = HandlerRegistry(lambda: [BrokenMoveProcessor, MoveProcessor])

        bindings = registry.resolve(AssetEvent.ON_WILL_MOVE_ASSET)

        assert [b.processor for b in bindings] == [MoveProcessor]
        warnings = [text for level, text in log_messages if level == "WARNING"]
        assert any("BrokenMoveProcessor.on_will_move_asset" in w for w in warnings)

    def test_base_and_subclass_bind_once(self):
        registry = HandlerRegistry(lambda: [CreateProcessor, InheritedProcessor])

        bindings = registry.resolve(AssetEvent.ON_WILL_CREATE_ASSET)

        assert [b.processor for b in bindings] == [CreateProcessor]

    def test_keyword_only_callback_skipped(self, log_messages):
        registry = HandlerRegistry(lambda: [KeywordOnlyMoveProcessor, MoveProcessor])

        bindings = registry.resolve(AssetEvent.ON_WILL_MOVE_ASSET)

        assert [b.processor for b in bindings] == [MoveProcessor]
        assert any("kind mismatch" in text for level, text in log_messages if level == "WARNING")

    def test_binding_records_contract(self):
        registry = HandlerRegistry(lambda: [MoveProcessor])

        (binding,) = registry.resolve(AssetEvent.ON_WILL_MOVE_ASSET)

        assert binding.param_types == (str, str)
        assert binding.return_type is AssetMoveResult
        assert binding.invoke("a", "b") == AssetMoveResult.DID_MOVE
        assert binding.qualname.endswith("MoveProcessor.on_will_move_asset")

    def test_declares_counts_invalid_callbacks(self):
        registry = HandlerRegistry(lambda: [BrokenMoveProcessor])

        assert registry.resolve(AssetEvent.ON_WILL_MOVE_ASSET) == ()
        assert registry.declares(AssetEvent.ON_WILL_MOVE_ASSET) is True
        assert registry.declares(AssetEvent.ON_WILL_DELETE_ASSET) is False


class TestCaching:
    """Discovery runs once; resolution is cached per event."""

    def test_repeated_resolve_returns_identical_sequence(self):
        calls = []

        def discover():
            calls.append(1)
            return [CreateProcessor, ClassMethodProcessor]

        registry = HandlerRegistry(discover)

        first = registry.resolve(AssetEvent.ON_WILL_CREATE_ASSET)
        second = registry.resolve(AssetEvent.ON_WILL_CREATE_ASSET)
        registry.resolve(AssetEvent.ON_WILL_MOVE_ASSET)

        assert first is second
        assert len(calls) == 1

    def test_reset_reruns_discovery(self):
        calls = []

        def discover():
            calls.append(1)
            return [CreateProcessor]

        registry = HandlerRegistry(discover)
        registry.resolve(AssetEvent.ON_WILL_CREATE_ASSET)
        registry.reset()
        registry.resolve(AssetEvent.ON_WILL_CREATE_ASSET)

        assert len(calls) == 2

    def test_concurrent_first_calls_build_once(self):
        calls = []

        def slow_discover():
            calls.append(1)
            time.sleep(0.05)
            return [CreateProcessor]

        registry = HandlerRegistry(slow_discover)
        results = []

        def worker():
            results.append(registry.resolve(AssetEvent.ON_WILL_CREATE_ASSET))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(calls) == 1
        assert len(results) == 8
        assert all(r is results[0] for r in results)
        assert len(results[0]) == 1
