# src/streamsconfig/contracts/errors.py
"""Exception taxonomy for configuration resolution.

Two failure families are surfaced to callers:

1. ConfigurationError: a supplied value cannot be used. Raised at
   construction for malformed input, or when a role is resolved for
   violations that only make sense for that role (guarantee bounds).
2. SerdeInstantiationError: a pluggable class could not be built or
   configured. Raised on first use of the pluggable component, never at
   construction.

Nothing here is retried or recovered internally.
"""

from typing import Any

from streamsconfig.contracts.enums import PluggableRole


class StreamsConfigError(Exception):
    """Base class for every error raised by streamsconfig."""

    pass


class ConfigurationError(StreamsConfigError, ValueError):
    """Raised when a configuration value is missing, malformed, or out of range.

    Attributes:
        key: Configuration key the value was supplied for
        value: The offending value as supplied (None when missing)
        reason: The violated constraint, or None for a bare message
    """

    def __init__(
        self,
        key: str,
        value: Any = None,
        reason: str | None = None,
        *,
        message: str | None = None,
    ) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        if message is None:
            if reason is None:
                message = f"Invalid value {value} for configuration {key}"
            else:
                message = f"Invalid value {value} for configuration {key}: {reason}"
        super().__init__(message)


class MissingConfigurationError(ConfigurationError):
    """Raised when a required key (one with no default) is absent."""

    def __init__(self, key: str) -> None:
        super().__init__(
            key,
            None,
            "no default value",
            message=f'Missing required configuration "{key}" which has no default value.',
        )


class SerdeInstantiationError(StreamsConfigError):
    """Raised when a pluggable class fails to load, construct, or configure.

    The underlying exception is chained as __cause__.

    Attributes:
        role: Pluggable slot that was being filled
        class_name: Fully qualified name of the failing class
    """

    def __init__(self, role: PluggableRole, class_name: str) -> None:
        self.role = role
        self.class_name = class_name
        super().__init__(f"Failed to configure {role.value} class {class_name}")
