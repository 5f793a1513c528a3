# src/streamsconfig/plugins/serdes.py
"""Serializer/deserializer pairs usable as default key and value serdes.

Only the small built-in set needed for sensible defaults lives here. Any
class with a no-argument constructor and the Serde methods can be named in
`default.key.serde` / `default.value.serde`; it is built and configured by
plugins/instantiator.py.

configure() receives the full original property set plus whether the serde
is used for keys or values, so one class can read direction-specific
settings (e.g. a different encoding for keys and values).
"""

import codecs
import struct
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class Serde(ABC):
    """Base class for key/value serdes."""

    def configure(self, configs: Mapping[str, Any], is_key: bool) -> None:  # noqa: B027 - optional hook
        """Read settings before first use. Default: nothing to configure."""

    @abstractmethod
    def serialize(self, topic: str, data: Any) -> bytes | None:
        """Convert data to bytes. None stays None."""

    @abstractmethod
    def deserialize(self, topic: str, data: bytes | None) -> Any:
        """Convert bytes back to data. None stays None."""


class ByteArraySerde(Serde):
    """Pass-through serde for raw bytes."""

    def serialize(self, topic: str, data: Any) -> bytes | None:
        if data is None:
            return None
        return bytes(data)

    def deserialize(self, topic: str, data: bytes | None) -> Any:
        return data


class StringSerde(Serde):
    """Text serde with configurable encodings.

    Encoding lookup, most specific first:
        {key|value}.serializer.encoding, then serializer.encoding
        {key|value}.deserializer.encoding, then deserializer.encoding
    Falls back to utf-8. Unknown encodings fail in configure().
    """

    def __init__(self) -> None:
        self.serializer_encoding = "utf-8"
        self.deserializer_encoding = "utf-8"

    def configure(self, configs: Mapping[str, Any], is_key: bool) -> None:
        direction = "key" if is_key else "value"
        self.serializer_encoding = self._lookup(configs, direction, "serializer", self.serializer_encoding)
        self.deserializer_encoding = self._lookup(configs, direction, "deserializer", self.deserializer_encoding)

    @staticmethod
    def _lookup(configs: Mapping[str, Any], direction: str, side: str, fallback: str) -> str:
        encoding = configs.get(f"{direction}.{side}.encoding")
        if encoding is None:
            encoding = configs.get(f"{side}.encoding")
        if encoding is None:
            return fallback
        if not isinstance(encoding, str):
            raise TypeError(f"{side} encoding must be a string, got {type(encoding).__name__}")
        # Raises LookupError for unknown encodings
        codecs.lookup(encoding)
        return encoding

    def serialize(self, topic: str, data: Any) -> bytes | None:
        if data is None:
            return None
        return str(data).encode(self.serializer_encoding)

    def deserialize(self, topic: str, data: bytes | None) -> Any:
        if data is None:
            return None
        return data.decode(self.deserializer_encoding)


class LongSerde(Serde):
    """Signed 64-bit integers as 8 big-endian bytes."""

    _FORMAT = struct.Struct(">q")

    def serialize(self, topic: str, data: Any) -> bytes | None:
        if data is None:
            return None
        return self._FORMAT.pack(data)

    def deserialize(self, topic: str, data: bytes | None) -> Any:
        if data is None:
            return None
        if len(data) != self._FORMAT.size:
            raise ValueError(f"Size of data received by LongSerde is not {self._FORMAT.size}")
        (value,) = self._FORMAT.unpack(data)
        return value
