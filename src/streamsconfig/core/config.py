# src/streamsconfig/core/config.py
"""Streams configuration façade.

StreamsConfig turns one flat property set into the configuration of every
internal client. Construction validates; each role accessor then runs

    prefix layering -> guarantee cascade -> role fields

and returns a freshly allocated dict the caller owns. Role accessors and
the lazy plugin accessors are safe to call from several threads: the raw
properties and parsed values are read-only after construction.

Example:
    config = StreamsConfig({"application.id": "orders", "bootstrap.servers": "broker:9092"})
    consumer = config.get_main_consumer_configs("orders", "orders-client", 0)
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Final

from streamsconfig.contracts.config.defaults import (
    GLOBAL_CONSUMER_CLIENT_ID_SUFFIX,
    LEAVE_GROUP_ON_CLOSE_CONFIG,
    NON_GROUP_AUTO_OFFSET_RESET,
    RESTORE_CONSUMER_CLIENT_ID_SUFFIX,
    STREAMS_PARTITION_ASSIGNOR,
)
from streamsconfig.contracts.enums import ConfigScope, ConfigType, PluggableRole, ProcessingGuarantee, Role, RoleFamily
from streamsconfig.contracts.errors import ConfigurationError
from streamsconfig.core.catalog import (
    ADMIN_SCHEMA,
    APPLICATION_ID_CONFIG,
    APPLICATION_SERVER_CONFIG,
    AUTO_OFFSET_RESET_CONFIG,
    BATCH_SIZE_CONFIG,
    CLIENT_ID_CONFIG,
    CONSUMER_SCHEMA,
    DEFAULT_KEY_SERDE_CLASS_CONFIG,
    DEFAULT_TIMESTAMP_EXTRACTOR_CLASS_CONFIG,
    DEFAULT_VALUE_SERDE_CLASS_CONFIG,
    DEPRECATED_KEYS,
    ENABLE_AUTO_COMMIT_CONFIG,
    GROUP_ID_CONFIG,
    GROUP_INSTANCE_ID_CONFIG,
    KNOWN_KEYS,
    NUM_STANDBY_REPLICAS_CONFIG,
    PARTITION_ASSIGNMENT_STRATEGY_CONFIG,
    PROCESSING_GUARANTEE_CONFIG,
    PRODUCER_SCHEMA,
    REPLICATION_FACTOR_CONFIG,
    RETRIES_CONFIG,
    RETRY_BACKOFF_MS_CONFIG,
    SEGMENT_BYTES_CONFIG,
    STREAMS_SCHEMA,
    UPGRADE_FROM_CONFIG,
    WINDOW_STORE_CHANGE_LOG_ADDITIONAL_RETENTION_MS_CONFIG,
)
from streamsconfig.core.coercion import coerce_value
from streamsconfig.core.guarantee import GuaranteeCascade, matches_forced
from streamsconfig.core.logging import get_logger
from streamsconfig.core.prefixes import (
    ADMIN_CLIENT_PREFIX,
    FAMILY_PREFIXES,
    ROLE_PREFIXES,
    TOPIC_PREFIX,
    UNPREFIXED,
    PrefixResolver,
    admin_client_prefix,
    topic_prefix,
)
from streamsconfig.core.schema import ConfigSchema
from streamsconfig.plugins.instantiator import LazyInstance, instantiate

logger = get_logger(__name__)

FAMILY_SCHEMAS: Final[dict[RoleFamily, ConfigSchema]] = {
    RoleFamily.CONSUMER: CONSUMER_SCHEMA,
    RoleFamily.PRODUCER: PRODUCER_SCHEMA,
    RoleFamily.ADMIN: ADMIN_SCHEMA,
}

# Role fields users may not configure. A differing user value is discarded
# with a warning. Other role fields (client ids, group membership of non-group
# consumers) are replaced silently because they are derived, not chosen.
NON_CONFIGURABLE_KEYS: Final[dict[RoleFamily, frozenset[str]]] = {
    RoleFamily.CONSUMER: frozenset({ENABLE_AUTO_COMMIT_CONFIG}),
    RoleFamily.PRODUCER: frozenset(),
    RoleFamily.ADMIN: frozenset(),
}

# Streams values the main consumer carries for the partition assignor.
ASSIGNOR_KEYS: Final[tuple[str, ...]] = (
    REPLICATION_FACTOR_CONFIG,
    NUM_STANDBY_REPLICAS_CONFIG,
    APPLICATION_SERVER_CONFIG,
    UPGRADE_FROM_CONFIG,
    WINDOW_STORE_CHANGE_LOG_ADDITIONAL_RETENTION_MS_CONFIG,
)

# Role fields whose value means "remove the key".
_ABSENT: Final = None


def _detach_value(value: Any) -> Any:
    if isinstance(value, list):
        return [_detach_value(item) for item in value]
    if isinstance(value, dict):
        return {key: _detach_value(item) for key, item in value.items()}
    if isinstance(value, set):
        return set(value)
    return value


def _detach(values: Mapping[str, Any]) -> dict[str, Any]:
    """Copy values so neither side sees the other's mutations, nested lists and dicts included."""
    return {key: _detach_value(value) for key, value in values.items()}


class StreamsConfig:
    """Validated stream-processing configuration and its per-role views.

    Args:
        props: Flat property set. Copied; later changes to props have no effect.

    Raises:
        MissingConfigurationError: If application.id or bootstrap.servers is absent
        ConfigurationError: If any recognized value fails coercion or validation
    """

    def __init__(self, props: Mapping[str, Any]) -> None:
        self._originals: Mapping[str, Any] = MappingProxyType(_detach(props))
        self._resolver = PrefixResolver(self._originals, KNOWN_KEYS)

        values = STREAMS_SCHEMA.parse(self._originals)
        self._guarantee = ProcessingGuarantee(values[PROCESSING_GUARANTEE_CONFIG])
        self._cascade = GuaranteeCascade(self._guarantee)

        explicit = {key: values[key] for key in self._originals if key in STREAMS_SCHEMA}
        values.update(self._cascade.apply(ConfigScope.STREAMS, explicit))
        self._values: Mapping[str, Any] = MappingProxyType(values)

        self._validate_client_values()
        self._warn_deprecated()

        self._key_serde: LazyInstance[Any] = LazyInstance(
            lambda: instantiate(self._values[DEFAULT_KEY_SERDE_CLASS_CONFIG], PluggableRole.KEY_SERDE, self.originals())
        )
        self._value_serde: LazyInstance[Any] = LazyInstance(
            lambda: instantiate(self._values[DEFAULT_VALUE_SERDE_CLASS_CONFIG], PluggableRole.VALUE_SERDE, self.originals())
        )
        self._timestamp_extractor: LazyInstance[Any] = LazyInstance(
            lambda: instantiate(
                self._values[DEFAULT_TIMESTAMP_EXTRACTOR_CLASS_CONFIG],
                PluggableRole.TIMESTAMP_EXTRACTOR,
                self.originals(),
            )
        )

        logger.debug(
            "Streams configuration constructed",
            application_id=self._values[APPLICATION_ID_CONFIG],
            processing_guarantee=self._guarantee.value,
        )

    # =========================================================================
    # Construction checks
    # =========================================================================

    def _validate_client_values(self) -> None:
        """Coerce every raw value that a client family will receive.

        Keys superseded for the family (forced by the guarantee or
        non-configurable) are skipped: they are replaced, never used.
        """
        for family, schema in FAMILY_SCHEMAS.items():
            skipped = self._cascade.forced_keys(family.scope) | NON_CONFIGURABLE_KEYS[family]
            prefixes = [UNPREFIXED, FAMILY_PREFIXES[family]]
            prefixes.extend(prefix for role, prefix in ROLE_PREFIXES.items() if role.family is family)
            for prefix in prefixes:
                for key, value in self._resolver.with_prefix(prefix).items():
                    if key in schema and key not in skipped:
                        schema.coerce(key, value)

    def _warn_deprecated(self) -> None:
        for key, message in DEPRECATED_KEYS.items():
            if key in self._originals:
                logger.warning(message, key=key)

    # =========================================================================
    # Top-level access
    # =========================================================================

    @property
    def processing_guarantee(self) -> ProcessingGuarantee:
        return self._guarantee

    @property
    def eos_enabled(self) -> bool:
        return self._guarantee is ProcessingGuarantee.EXACTLY_ONCE

    def originals(self) -> dict[str, Any]:
        """The raw properties as supplied, as a new dict."""
        return _detach(self._originals)

    def originals_with_prefix(self, prefix: str, *, strip: bool = True) -> dict[str, Any]:
        """Raw properties under prefix, with the prefix removed unless strip=False."""
        return _detach(self._resolver.with_prefix(prefix, strip=strip))

    def values(self) -> dict[str, Any]:
        """Typed value of every Streams key, as a new dict."""
        return _detach(self._values)

    def get(self, key: str) -> Any:
        """Typed value of a Streams key.

        Raises:
            ConfigurationError: If key is not a Streams key
        """
        if key not in self._values:
            raise ConfigurationError(key, message=f"Unknown configuration '{key}'")
        return _detach_value(self._values[key])

    # =========================================================================
    # Role resolution
    # =========================================================================

    def _resolve(self, role: Role, role_fields: Mapping[str, Any]) -> dict[str, Any]:
        """Run layering, the guarantee cascade, and role fields for one role.

        Args:
            role: Role being resolved
            role_fields: Values that always win for this role. _ABSENT removes the key.

        Returns:
            Fresh resolved map

        Raises:
            ConfigurationError: If a value exceeds a guarantee bound
        """
        family = role.family
        schema = FAMILY_SCHEMAS[family]
        layered = self._resolver.resolve(role, schema)
        superseded = self._cascade.forced_keys(family.scope) | frozenset(role_fields)

        explicit: dict[str, Any] = {}
        for key, value in layered.values.items():
            if key in schema and key not in superseded:
                explicit[key] = schema.coerce(key, value)
            else:
                explicit[key] = value

        resolved = schema.value_defaults()
        resolved.update(self._cascade.apply(family.scope, explicit))

        non_configurable = NON_CONFIGURABLE_KEYS[family]
        for key, value in role_fields.items():
            if key in non_configurable and layered.explicit(key) and not matches_forced(layered.values[key], value):
                logger.warning(
                    "User value for non-configurable setting ignored",
                    role=role.value,
                    key=key,
                    supplied=layered.values[key],
                    source=layered.provenance[key] or "unprefixed",
                    forced=value,
                )
            if value is _ABSENT:
                resolved.pop(key, None)
            else:
                resolved[key] = value

        logger.debug("Role configuration resolved", role=role.value, keys=len(resolved))
        return _detach(resolved)

    def _consumer_fields(self, client_id: str) -> dict[str, Any]:
        return {
            CLIENT_ID_CONFIG: client_id,
            ENABLE_AUTO_COMMIT_CONFIG: False,
        }

    def get_main_consumer_configs(self, group_id: str, client_id: str, thread_idx: int) -> dict[str, Any]:
        """Configuration of the group-member consumer of one stream thread.

        Args:
            group_id: Consumer group id (normally the application id)
            client_id: Base client id of the thread
            thread_idx: Index of the thread, appended to group.instance.id

        Raises:
            ConfigurationError: If topic.segment.bytes is smaller than the producer batch size
        """
        role_fields = self._consumer_fields(client_id)
        role_fields[GROUP_ID_CONFIG] = group_id
        role_fields[LEAVE_GROUP_ON_CLOSE_CONFIG] = False
        resolved = self._resolve(Role.MAIN_CONSUMER, role_fields)

        # Static membership ids must stay unique across threads of one instance.
        instance_id = resolved.get(GROUP_INSTANCE_ID_CONFIG)
        if instance_id is not None:
            resolved[GROUP_INSTANCE_ID_CONFIG] = f"{instance_id}-{thread_idx}"

        resolved[PARTITION_ASSIGNMENT_STRATEGY_CONFIG] = [STREAMS_PARTITION_ASSIGNOR]
        resolved[APPLICATION_ID_CONFIG] = group_id
        for key in ASSIGNOR_KEYS:
            resolved[key] = self._values[key]

        admin = self._admin_retry_settings()
        resolved[admin_client_prefix(RETRIES_CONFIG)] = admin[RETRIES_CONFIG]
        resolved[admin_client_prefix(RETRY_BACKOFF_MS_CONFIG)] = admin[RETRY_BACKOFF_MS_CONFIG]

        topic_settings = self._resolver.with_prefix(TOPIC_PREFIX, strip=False)
        self._check_segment_size(topic_settings)
        resolved.update(_detach(topic_settings))
        return resolved

    def _check_segment_size(self, topic_settings: Mapping[str, Any]) -> None:
        segment_key = topic_prefix(SEGMENT_BYTES_CONFIG)
        if segment_key not in topic_settings:
            return
        batch = self._resolver.resolve(Role.PRODUCER, PRODUCER_SCHEMA).values.get(BATCH_SIZE_CONFIG)
        if batch is None:
            return
        segment_size = coerce_value(segment_key, ConfigType.LONG, topic_settings[segment_key])
        batch_size = PRODUCER_SCHEMA.coerce(BATCH_SIZE_CONFIG, batch)
        if segment_size < batch_size:
            raise ConfigurationError(
                segment_key,
                topic_settings[segment_key],
                f"Specified topic segment size {segment_size} is smaller than the configured producer's batch size "
                f"{batch_size}, this will cause produced batch not able to be appended to the topic",
            )

    def get_restore_consumer_configs(self, client_id: str) -> dict[str, Any]:
        """Configuration of the non-group consumer that restores state stores."""
        return self._resolve(Role.RESTORE_CONSUMER, self._non_group_fields(client_id + RESTORE_CONSUMER_CLIENT_ID_SUFFIX))

    def get_global_consumer_configs(self, client_id: str) -> dict[str, Any]:
        """Configuration of the non-group consumer that maintains global tables."""
        return self._resolve(Role.GLOBAL_CONSUMER, self._non_group_fields(client_id + GLOBAL_CONSUMER_CLIENT_ID_SUFFIX))

    def _non_group_fields(self, client_id: str) -> dict[str, Any]:
        role_fields = self._consumer_fields(client_id)
        role_fields[GROUP_ID_CONFIG] = _ABSENT
        role_fields[GROUP_INSTANCE_ID_CONFIG] = _ABSENT
        role_fields[AUTO_OFFSET_RESET_CONFIG] = NON_GROUP_AUTO_OFFSET_RESET
        return role_fields

    def get_producer_configs(self, client_id: str) -> dict[str, Any]:
        """Configuration of the producer.

        Raises:
            ConfigurationError: If max.in.flight.requests.per.connection exceeds
                the bound of the active guarantee
        """
        return self._resolve(Role.PRODUCER, {CLIENT_ID_CONFIG: client_id})

    def get_admin_configs(self, client_id: str) -> dict[str, Any]:
        """Configuration of the admin client.

        retries and retry.backoff.ms come from the admin prefix when set there,
        otherwise from the top-level Streams values (defaults included).
        """
        resolved = self._resolve(Role.ADMIN, {CLIENT_ID_CONFIG: client_id})
        resolved.update(self._admin_retry_settings())
        return resolved

    def _admin_retry_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        admin_values = self._resolver.with_prefix(ADMIN_CLIENT_PREFIX)
        for key in (RETRIES_CONFIG, RETRY_BACKOFF_MS_CONFIG):
            if key in admin_values:
                settings[key] = ADMIN_SCHEMA.coerce(key, admin_values[key])
            else:
                settings[key] = self._values[key]
        return settings

    # =========================================================================
    # Pluggable classes
    # =========================================================================

    def default_key_serde(self) -> Any:
        """Configured instance of default.key.serde, built on first call.

        Raises:
            SerdeInstantiationError: If the class cannot be loaded, built, or configured
        """
        return self._key_serde.get()

    def default_value_serde(self) -> Any:
        """Configured instance of default.value.serde, built on first call.

        Raises:
            SerdeInstantiationError: If the class cannot be loaded, built, or configured
        """
        return self._value_serde.get()

    def default_timestamp_extractor(self) -> Any:
        """Configured instance of default.timestamp.extractor, built on first call.

        Raises:
            SerdeInstantiationError: If the class cannot be loaded, built, or configured
        """
        return self._timestamp_extractor.get()
