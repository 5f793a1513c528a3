"""Shared contracts: enums, errors, and value types.

This package is a leaf. It imports nothing from streamsconfig.core or
streamsconfig.plugins, so every layer can depend on it.
"""

from streamsconfig.contracts.enums import (
    AdjustmentKind,
    ConfigScope,
    ConfigType,
    Importance,
    PluggableRole,
    ProcessingGuarantee,
    Role,
    RoleFamily,
)
from streamsconfig.contracts.errors import (
    ConfigurationError,
    MissingConfigurationError,
    SerdeInstantiationError,
    StreamsConfigError,
)
from streamsconfig.contracts.types import Password

__all__ = [
    "AdjustmentKind",
    "ConfigScope",
    "ConfigType",
    "ConfigurationError",
    "Importance",
    "MissingConfigurationError",
    "Password",
    "PluggableRole",
    "ProcessingGuarantee",
    "Role",
    "RoleFamily",
    "SerdeInstantiationError",
    "StreamsConfigError",
]
