# src/streamsconfig/plugins/timestamps.py
"""Timestamp extractors usable as `default.timestamp.extractor`.

An extractor returns the event time (epoch milliseconds) of a record. Records
are external to this package; any object with an integer `timestamp`
attribute works.
"""

import time
from abc import ABC, abstractmethod
from typing import Any

from streamsconfig.core.logging import get_logger

logger = get_logger(__name__)


class InvalidTimestampError(ValueError):
    """Raised when a record carries a negative (invalid) timestamp."""

    def __init__(self, timestamp: int) -> None:
        self.timestamp = timestamp
        super().__init__(
            f"Input record has invalid (negative) timestamp {timestamp}. "
            "Use a different timestamp extractor to process records without embedded timestamps."
        )


class TimestampExtractor(ABC):
    """Base class for timestamp extractors."""

    @abstractmethod
    def extract(self, record: Any, partition_time: int) -> int:
        """Return the timestamp of record in milliseconds."""


class FailOnInvalidTimestamp(TimestampExtractor):
    """Use the embedded timestamp; a negative one is an error."""

    def extract(self, record: Any, partition_time: int) -> int:
        timestamp: int = record.timestamp
        if timestamp < 0:
            raise InvalidTimestampError(timestamp)
        return timestamp


class LogAndSkipOnInvalidTimestamp(TimestampExtractor):
    """Use the embedded timestamp; a negative one is logged and returned as-is so the record is dropped."""

    def extract(self, record: Any, partition_time: int) -> int:
        timestamp: int = record.timestamp
        if timestamp < 0:
            logger.warning("Skipping record due to invalid timestamp", timestamp=timestamp, partition_time=partition_time)
        return timestamp


class WallclockTimestampExtractor(TimestampExtractor):
    """Ignore the record and use processing time."""

    def extract(self, record: Any, partition_time: int) -> int:
        return time.time_ns() // 1_000_000
