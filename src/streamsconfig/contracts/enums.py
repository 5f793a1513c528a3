"""All kinds, roles, and modes used across subsystem boundaries.

Every value here is part of the compatibility surface: role and scope names
appear in log events and error messages, and guarantee values are the literal
strings users put in their properties.
"""

from enum import StrEnum


class ConfigType(StrEnum):
    """Semantic type of a schema entry.

    Drives coercion of raw property values (see core/coercion.py).
    """

    STRING = "string"
    INT = "int"
    LONG = "long"
    BOOLEAN = "boolean"
    CLASS = "class"
    LIST = "list"
    PASSWORD = "password"


class Importance(StrEnum):
    """Documentation-only importance of a schema entry."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ProcessingGuarantee(StrEnum):
    """Top-level delivery semantics selected by `processing.guarantee`."""

    AT_LEAST_ONCE = "at_least_once"
    EXACTLY_ONCE = "exactly_once"


class ConfigScope(StrEnum):
    """Where a configuration value applies.

    STREAMS is the top-level parsed configuration; the others are the
    client families that resolved role maps are built for.
    """

    STREAMS = "streams"
    CONSUMER = "consumer"
    PRODUCER = "producer"
    ADMIN = "admin"


class RoleFamily(StrEnum):
    """Client type a role is built for. Roles of one family share a prefix."""

    CONSUMER = "consumer"
    PRODUCER = "producer"
    ADMIN = "admin"

    @property
    def scope(self) -> ConfigScope:
        return ConfigScope(self.value)


class Role(StrEnum):
    """Internal client a resolved configuration map is built for.

    Values:
        MAIN_CONSUMER: Group member that reads input topics
        RESTORE_CONSUMER: Non-group consumer that restores state stores
        GLOBAL_CONSUMER: Non-group consumer that maintains global tables
        PRODUCER: Writes output and changelog records
        ADMIN: Creates and inspects internal topics
    """

    MAIN_CONSUMER = "main_consumer"
    RESTORE_CONSUMER = "restore_consumer"
    GLOBAL_CONSUMER = "global_consumer"
    PRODUCER = "producer"
    ADMIN = "admin"

    @property
    def family(self) -> RoleFamily:
        if self is Role.PRODUCER:
            return RoleFamily.PRODUCER
        if self is Role.ADMIN:
            return RoleFamily.ADMIN
        return RoleFamily.CONSUMER


class PluggableRole(StrEnum):
    """Slot a user-supplied class is instantiated for.

    The value is the human-readable description used in error messages.
    """

    KEY_SERDE = "key serde"
    VALUE_SERDE = "value serde"
    TIMESTAMP_EXTRACTOR = "timestamp extractor"


class AdjustmentKind(StrEnum):
    """Category of a guarantee-driven adjustment.

    FORCE: Always wins, any explicit user value is discarded
    SOFT_DEFAULT: Fallback used only when no layer supplied a value
    UPPER_BOUND: Explicit user values above the bound are rejected
    """

    FORCE = "force"
    SOFT_DEFAULT = "soft_default"
    UPPER_BOUND = "upper_bound"
