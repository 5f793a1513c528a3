# src/streamsconfig/core/prefixes.py
"""Prefix namespaces and the layered resolver built on them.

Users scope a client setting by prefixing its key:

    max.poll.records=100                 every consumer
    consumer.max.poll.records=200        every consumer (family layer)
    main.consumer.max.poll.records=300   the main consumer only (role layer)

For a role, layers are merged lowest precedence first: unprefixed, family
prefix, then role prefix. The last layer that supplies a key wins and each
key resolves as a whole; there is no field-level merging within a value.

A key survives a layer only if the role's target client understands it,
or if it is unknown to every schema (an opaque custom property, forwarded
verbatim). A key that belongs to some other schema is dropped even when
it is set under the role's own prefix.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Final

from streamsconfig.contracts.enums import Role, RoleFamily
from streamsconfig.core.schema import ConfigSchema

CONSUMER_PREFIX: Final = "consumer."
MAIN_CONSUMER_PREFIX: Final = "main.consumer."
RESTORE_CONSUMER_PREFIX: Final = "restore.consumer."
GLOBAL_CONSUMER_PREFIX: Final = "global.consumer."
PRODUCER_PREFIX: Final = "producer."
ADMIN_CLIENT_PREFIX: Final = "admin."
TOPIC_PREFIX: Final = "topic."

UNPREFIXED: Final = ""

# Every namespace a raw key can live in. Keys under any of these are never
# treated as custom properties in their prefixed form.
KNOWN_PREFIXES: Final[tuple[str, ...]] = (
    CONSUMER_PREFIX,
    MAIN_CONSUMER_PREFIX,
    RESTORE_CONSUMER_PREFIX,
    GLOBAL_CONSUMER_PREFIX,
    PRODUCER_PREFIX,
    ADMIN_CLIENT_PREFIX,
    TOPIC_PREFIX,
)

FAMILY_PREFIXES: Final[dict[RoleFamily, str]] = {
    RoleFamily.CONSUMER: CONSUMER_PREFIX,
    RoleFamily.PRODUCER: PRODUCER_PREFIX,
    RoleFamily.ADMIN: ADMIN_CLIENT_PREFIX,
}

# Only the consumer roles have a namespace narrower than their family's.
ROLE_PREFIXES: Final[dict[Role, str]] = {
    Role.MAIN_CONSUMER: MAIN_CONSUMER_PREFIX,
    Role.RESTORE_CONSUMER: RESTORE_CONSUMER_PREFIX,
    Role.GLOBAL_CONSUMER: GLOBAL_CONSUMER_PREFIX,
}


def consumer_prefix(key: str) -> str:
    """Key scoped to every consumer role."""
    return CONSUMER_PREFIX + key


def main_consumer_prefix(key: str) -> str:
    """Key scoped to the main consumer only."""
    return MAIN_CONSUMER_PREFIX + key


def restore_consumer_prefix(key: str) -> str:
    """Key scoped to the restore consumer only."""
    return RESTORE_CONSUMER_PREFIX + key


def global_consumer_prefix(key: str) -> str:
    """Key scoped to the global consumer only."""
    return GLOBAL_CONSUMER_PREFIX + key


def producer_prefix(key: str) -> str:
    """Key scoped to the producer."""
    return PRODUCER_PREFIX + key


def admin_client_prefix(key: str) -> str:
    """Key scoped to the admin client."""
    return ADMIN_CLIENT_PREFIX + key


def topic_prefix(key: str) -> str:
    """Key scoped to internal topic creation."""
    return TOPIC_PREFIX + key


def role_layers(role: Role) -> tuple[str, ...]:
    """Prefixes applied for role, lowest precedence first."""
    layers = [UNPREFIXED, FAMILY_PREFIXES[role.family]]
    if role in ROLE_PREFIXES:
        layers.append(ROLE_PREFIXES[role])
    return tuple(layers)


def has_known_prefix(key: str) -> bool:
    return key.startswith(KNOWN_PREFIXES)


@dataclass(frozen=True, slots=True)
class LayeredValues:
    """Outcome of merging prefix layers for one role.

    values holds raw (uncoerced) values. provenance records which layer
    (prefix, "" for unprefixed) supplied each key.
    """

    role: Role
    values: dict[str, Any] = field(default_factory=dict)
    provenance: dict[str, str] = field(default_factory=dict)

    def explicit(self, key: str) -> bool:
        """True when some layer supplied key."""
        return key in self.values


class PrefixResolver:
    """Computes de-prefixed, layered views of a read-only raw property set.

    Args:
        raw: The raw property set. Never mutated.
        known_keys: Every key recognized by any schema. Raw keys outside this
            set and outside every known prefix are custom properties.
    """

    def __init__(self, raw: Mapping[str, Any], known_keys: frozenset[str]) -> None:
        self._raw = raw
        self._known_keys = known_keys

    def is_custom(self, key: str) -> bool:
        """True for an opaque custom property: unknown everywhere and unprefixed."""
        return key not in self._known_keys and not has_known_prefix(key)

    def with_prefix(self, prefix: str, *, strip: bool = True) -> dict[str, Any]:
        """Every raw key under prefix, unfiltered."""
        if strip:
            return {key[len(prefix) :]: value for key, value in self._raw.items() if key.startswith(prefix)}
        return {key: value for key, value in self._raw.items() if key.startswith(prefix)}

    def _layer(self, prefix: str, target_schema: ConfigSchema) -> dict[str, Any]:
        # A stripped key is kept on the same terms as an unprefixed one.
        return {key: value for key, value in self.with_prefix(prefix).items() if key in target_schema or self.is_custom(key)}

    def resolve(self, role: Role, target_schema: ConfigSchema) -> LayeredValues:
        """Merge the role's layers, last writer wins.

        Args:
            role: Role being resolved (selects the layers)
            target_schema: Schema of the client the role is built for

        Returns:
            Raw merged values plus per-key provenance
        """
        result = LayeredValues(role=role)
        for prefix in role_layers(role):
            for key, value in self._layer(prefix, target_schema).items():
                result.values[key] = value
                result.provenance[key] = prefix
        return result
