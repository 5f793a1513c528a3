# tests/plugins/test_instantiator.py
"""Tests for pluggable class instantiation and lazy memoization."""

import threading
from typing import Any

import pytest

from streamsconfig.contracts import PluggableRole, SerdeInstantiationError
from streamsconfig.plugins.instantiator import LazyInstance, instantiate
from streamsconfig.plugins.serdes import StringSerde
from streamsconfig.plugins.timestamps import FailOnInvalidTimestamp, TimestampExtractor


class RecordingExtractor(TimestampExtractor):
    def __init__(self) -> None:
        self.configs: dict[str, Any] | None = None

    def configure(self, configs: dict[str, Any]) -> None:
        self.configs = configs

    def extract(self, record: Any, partition_time: int) -> int:
        return partition_time


class NeedsArguments:
    def __init__(self, required: int) -> None:
        self.required = required


class TestInstantiate:
    def test_builds_from_dotted_path(self) -> None:
        serde = instantiate("streamsconfig.plugins.serdes.StringSerde", PluggableRole.KEY_SERDE, {})
        assert isinstance(serde, StringSerde)

    def test_serde_configure_receives_direction(self) -> None:
        configs = {"key.deserializer.encoding": "latin-1", "deserializer.encoding": "utf-16"}

        key_serde = instantiate(StringSerde, PluggableRole.KEY_SERDE, configs)
        value_serde = instantiate(StringSerde, PluggableRole.VALUE_SERDE, configs)

        assert key_serde.deserializer_encoding == "latin-1"
        assert value_serde.deserializer_encoding == "utf-16"

    def test_extractor_configure_is_optional(self) -> None:
        extractor = instantiate(FailOnInvalidTimestamp, PluggableRole.TIMESTAMP_EXTRACTOR, {"a": 1})
        assert isinstance(extractor, FailOnInvalidTimestamp)

    def test_extractor_configure_called_with_copy(self) -> None:
        configs = {"a": 1}

        extractor = instantiate(RecordingExtractor, PluggableRole.TIMESTAMP_EXTRACTOR, configs)

        assert extractor.configs == {"a": 1}
        assert extractor.configs is not configs

    def test_unknown_class_wrapped(self) -> None:
        with pytest.raises(SerdeInstantiationError) as exc_info:
            instantiate("no.such.Serde", PluggableRole.VALUE_SERDE, {})

        assert str(exc_info.value) == "Failed to configure value serde class no.such.Serde"
        assert isinstance(exc_info.value.__cause__, ImportError)

    def test_constructor_arguments_unsupported(self) -> None:
        with pytest.raises(SerdeInstantiationError, match="timestamp extractor") as exc_info:
            instantiate(NeedsArguments, PluggableRole.TIMESTAMP_EXTRACTOR, {})

        assert isinstance(exc_info.value.__cause__, TypeError)

    def test_class_without_serde_interface_wrapped(self) -> None:
        """A serde slot requires configure(configs, is_key)."""
        with pytest.raises(SerdeInstantiationError) as exc_info:
            instantiate(object, PluggableRole.KEY_SERDE, {})

        assert exc_info.value.class_name == "builtins.object"

    def test_bad_encoding_fails_in_configure(self) -> None:
        with pytest.raises(SerdeInstantiationError) as exc_info:
            instantiate(StringSerde, PluggableRole.VALUE_SERDE, {"serializer.encoding": "no-such-codec"})

        assert isinstance(exc_info.value.__cause__, LookupError)


class TestLazyInstance:
    def test_factory_not_called_until_get(self) -> None:
        calls: list[int] = []
        lazy = LazyInstance(lambda: calls.append(1) or "value")

        assert calls == []
        assert not lazy.built
        assert lazy.get() == "value"
        assert lazy.built

    def test_result_memoized(self) -> None:
        calls: list[int] = []

        def factory() -> object:
            calls.append(1)
            return object()

        lazy = LazyInstance(factory)

        assert lazy.get() is lazy.get()
        assert len(calls) == 1

    def test_failures_not_cached(self) -> None:
        attempts: list[int] = []

        def factory() -> str:
            attempts.append(1)
            if len(attempts) == 1:
                raise RuntimeError("first attempt fails")
            return "ok"

        lazy = LazyInstance(factory)

        with pytest.raises(RuntimeError):
            lazy.get()
        assert not lazy.built
        assert lazy.get() == "ok"

    def test_concurrent_first_calls_build_once(self) -> None:
        calls: list[int] = []
        gate = threading.Event()

        def factory() -> object:
            gate.wait(timeout=5)
            calls.append(1)
            return object()

        lazy = LazyInstance(factory)
        results: list[object] = []
        threads = [threading.Thread(target=lambda: results.append(lazy.get())) for _ in range(8)]
        for thread in threads:
            thread.start()
        gate.set()
        for thread in threads:
            thread.join(timeout=5)

        assert len(calls) == 1
        assert len(results) == 8
        assert all(result is results[0] for result in results)
