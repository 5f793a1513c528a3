# src/streamsconfig/contracts/config/__init__.py
"""Configuration contracts subpackage.

This subpackage contains:
- Default registries (defaults.py) - numeric limits, role naming, internal keys

NOTE: Schema classes (ConfigKey, ConfigSchema) and the client catalogs are NOT
      here. Import them from streamsconfig.core to keep contracts a leaf.
"""

from streamsconfig.contracts.config.defaults import (
    GLOBAL_CONSUMER_CLIENT_ID_SUFFIX,
    INT_MAX,
    INT_MIN,
    LEAVE_GROUP_ON_CLOSE_CONFIG,
    LONG_MAX,
    LONG_MIN,
    NON_GROUP_AUTO_OFFSET_RESET,
    RESTORE_CONSUMER_CLIENT_ID_SUFFIX,
    STREAMS_PARTITION_ASSIGNOR,
)

__all__ = [
    "GLOBAL_CONSUMER_CLIENT_ID_SUFFIX",
    "INT_MAX",
    "INT_MIN",
    "LEAVE_GROUP_ON_CLOSE_CONFIG",
    "LONG_MAX",
    "LONG_MIN",
    "NON_GROUP_AUTO_OFFSET_RESET",
    "RESTORE_CONSUMER_CLIENT_ID_SUFFIX",
    "STREAMS_PARTITION_ASSIGNOR",
]
