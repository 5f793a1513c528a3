# src/streamsconfig/core/catalog.py
"""Schema catalogs for the Streams layer and for each client family.

Four schemas are defined here, once, at import time:

- STREAMS_SCHEMA: top-level keys understood by the stream-processing
  application itself (identity, threading, serdes, guarantee, ...)
- CONSUMER_SCHEMA / PRODUCER_SCHEMA / ADMIN_SCHEMA: keys understood by the
  external clients that resolved role maps are handed to

Key names are a compatibility surface: the client schemas must match the
names the external clients accept, and renaming a key breaks them.

The client schemas carry the CLIENTS' own defaults. Streams-specific
preferences for client settings (e.g. a larger max.poll.records) are not
defaults of the client schema; they are soft defaults in core/guarantee.py.
"""

from typing import Final

from streamsconfig.contracts.config.defaults import INT_MAX
from streamsconfig.contracts.enums import ConfigType, Importance, ProcessingGuarantee
from streamsconfig.core.schema import NO_DEFAULT, ConfigKey, ConfigSchema
from streamsconfig.core.validators import NonEmptyList, NonEmptyString, Range, ValidString
from streamsconfig.plugins.serdes import ByteArraySerde
from streamsconfig.plugins.timestamps import FailOnInvalidTimestamp

H = Importance.HIGH
M = Importance.MEDIUM
L = Importance.LOW

# =============================================================================
# Key names shared by more than one schema
# =============================================================================

BOOTSTRAP_SERVERS_CONFIG: Final = "bootstrap.servers"
CLIENT_ID_CONFIG: Final = "client.id"
RETRIES_CONFIG: Final = "retries"
RETRY_BACKOFF_MS_CONFIG: Final = "retry.backoff.ms"
REQUEST_TIMEOUT_MS_CONFIG: Final = "request.timeout.ms"
METRICS_NUM_SAMPLES_CONFIG: Final = "metrics.num.samples"
RECEIVE_BUFFER_CONFIG: Final = "receive.buffer.bytes"
SEND_BUFFER_CONFIG: Final = "send.buffer.bytes"

# =============================================================================
# Streams keys
# =============================================================================

APPLICATION_ID_CONFIG: Final = "application.id"
APPLICATION_SERVER_CONFIG: Final = "application.server"
BUILT_IN_METRICS_VERSION_CONFIG: Final = "built.in.metrics.version"
COMMIT_INTERVAL_MS_CONFIG: Final = "commit.interval.ms"
DEFAULT_KEY_SERDE_CLASS_CONFIG: Final = "default.key.serde"
DEFAULT_VALUE_SERDE_CLASS_CONFIG: Final = "default.value.serde"
DEFAULT_TIMESTAMP_EXTRACTOR_CLASS_CONFIG: Final = "default.timestamp.extractor"
METRICS_RECORDING_LEVEL_CONFIG: Final = "metrics.recording.level"
NUM_STANDBY_REPLICAS_CONFIG: Final = "num.standby.replicas"
NUM_STREAM_THREADS_CONFIG: Final = "num.stream.threads"
PARTITION_GROUPER_CLASS_CONFIG: Final = "partition.grouper"
PROCESSING_GUARANTEE_CONFIG: Final = "processing.guarantee"
REPLICATION_FACTOR_CONFIG: Final = "replication.factor"
TOPOLOGY_OPTIMIZATION_CONFIG: Final = "topology.optimization"
UPGRADE_FROM_CONFIG: Final = "upgrade.from"
WINDOW_STORE_CHANGE_LOG_ADDITIONAL_RETENTION_MS_CONFIG: Final = "windowstore.changelog.additional.retention.ms"

METRICS_LATEST: Final = "latest"
METRICS_0100_TO_24: Final = "0.10.0-2.4"
NO_OPTIMIZATION: Final = "none"
OPTIMIZE: Final = "all"

# =============================================================================
# Client keys
# =============================================================================

GROUP_ID_CONFIG: Final = "group.id"
GROUP_INSTANCE_ID_CONFIG: Final = "group.instance.id"
ENABLE_AUTO_COMMIT_CONFIG: Final = "enable.auto.commit"
AUTO_OFFSET_RESET_CONFIG: Final = "auto.offset.reset"
ISOLATION_LEVEL_CONFIG: Final = "isolation.level"
MAX_POLL_RECORDS_CONFIG: Final = "max.poll.records"
PARTITION_ASSIGNMENT_STRATEGY_CONFIG: Final = "partition.assignment.strategy"

ENABLE_IDEMPOTENCE_CONFIG: Final = "enable.idempotence"
MAX_IN_FLIGHT_REQUESTS_PER_CONNECTION: Final = "max.in.flight.requests.per.connection"
DELIVERY_TIMEOUT_MS_CONFIG: Final = "delivery.timeout.ms"
LINGER_MS_CONFIG: Final = "linger.ms"
BATCH_SIZE_CONFIG: Final = "batch.size"
BUFFER_MEMORY_CONFIG: Final = "buffer.memory"

READ_COMMITTED: Final = "read_committed"
READ_UNCOMMITTED: Final = "read_uncommitted"

# Topic-level key checked against the producer batch size.
SEGMENT_BYTES_CONFIG: Final = "segment.bytes"

# Deprecated keys and the warning logged when a user supplies one.
DEPRECATED_KEYS: Final[dict[str, str]] = {
    PARTITION_GROUPER_CLASS_CONFIG: (
        f"Configuration parameter `{PARTITION_GROUPER_CLASS_CONFIG}` is deprecated and will be removed in 3.0.0 release."
    ),
}


STREAMS_SCHEMA: Final[ConfigSchema] = (
    ConfigSchema("streams")
    # HIGH
    .define(
        APPLICATION_ID_CONFIG,
        ConfigType.STRING,
        NO_DEFAULT,
        NonEmptyString(),
        H,
        "Identifier for the stream processing application; used as the consumer group id and internal topic prefix.",
    )
    .define(BOOTSTRAP_SERVERS_CONFIG, ConfigType.LIST, NO_DEFAULT, NonEmptyList(), H, "host:port pairs of the initial brokers.")
    .define(REPLICATION_FACTOR_CONFIG, ConfigType.INT, 1, Range.at_least(1), H, "Replication factor for internal topics.")
    .define("state.dir", ConfigType.STRING, "/tmp/kafka-streams", None, H, "Directory location for state stores.")
    # MEDIUM
    .define("cache.max.bytes.buffering", ConfigType.LONG, 10 * 1024 * 1024, Range.at_least(0), M)
    .define(CLIENT_ID_CONFIG, ConfigType.STRING, "", None, M, "Prefix of the client ids of every internal client.")
    .define(DEFAULT_KEY_SERDE_CLASS_CONFIG, ConfigType.CLASS, ByteArraySerde, None, M)
    .define(DEFAULT_VALUE_SERDE_CLASS_CONFIG, ConfigType.CLASS, ByteArraySerde, None, M)
    .define(DEFAULT_TIMESTAMP_EXTRACTOR_CLASS_CONFIG, ConfigType.CLASS, FailOnInvalidTimestamp, None, M)
    .define("max.task.idle.ms", ConfigType.LONG, 0, None, M)
    .define(NUM_STANDBY_REPLICAS_CONFIG, ConfigType.INT, 0, Range.at_least(0), M)
    .define(NUM_STREAM_THREADS_CONFIG, ConfigType.INT, 1, Range.at_least(1), M)
    .define(
        PROCESSING_GUARANTEE_CONFIG,
        ConfigType.STRING,
        ProcessingGuarantee.AT_LEAST_ONCE.value,
        ValidString.in_(*(g.value for g in ProcessingGuarantee)),
        M,
        "Processing guarantee: at_least_once or exactly_once.",
    )
    .define("security.protocol", ConfigType.STRING, "PLAINTEXT", None, M)
    .define(TOPOLOGY_OPTIMIZATION_CONFIG, ConfigType.STRING, NO_OPTIMIZATION, ValidString.in_(NO_OPTIMIZATION, OPTIMIZE), M)
    # LOW
    .define(APPLICATION_SERVER_CONFIG, ConfigType.STRING, "", None, L)
    .define("buffered.records.per.partition", ConfigType.INT, 1000, None, L)
    .define(
        BUILT_IN_METRICS_VERSION_CONFIG,
        ConfigType.STRING,
        METRICS_LATEST,
        ValidString.in_(METRICS_0100_TO_24, METRICS_LATEST),
        L,
    )
    .define(
        COMMIT_INTERVAL_MS_CONFIG,
        ConfigType.LONG,
        30_000,
        Range.at_least(0),
        L,
        "Frequency of progress commits. Defaults to 100 under exactly_once.",
    )
    .define("connections.max.idle.ms", ConfigType.LONG, 9 * 60 * 1000, None, M)
    .define("metadata.max.age.ms", ConfigType.LONG, 5 * 60 * 1000, Range.at_least(0), L)
    .define("metric.reporters", ConfigType.LIST, "", None, L)
    .define(METRICS_NUM_SAMPLES_CONFIG, ConfigType.INT, 2, Range.at_least(1), L)
    .define(METRICS_RECORDING_LEVEL_CONFIG, ConfigType.STRING, "INFO", ValidString.in_("INFO", "DEBUG"), L)
    .define("metrics.sample.window.ms", ConfigType.LONG, 30_000, Range.at_least(0), L)
    .define(PARTITION_GROUPER_CLASS_CONFIG, ConfigType.CLASS, None, None, L, "Deprecated.")
    .define("poll.ms", ConfigType.LONG, 100, None, L)
    .define(RECEIVE_BUFFER_CONFIG, ConfigType.INT, 32 * 1024, Range.at_least(-1), L)
    .define("reconnect.backoff.ms", ConfigType.LONG, 50, Range.at_least(0), L)
    .define("reconnect.backoff.max.ms", ConfigType.LONG, 1000, Range.at_least(0), L)
    .define(RETRIES_CONFIG, ConfigType.INT, 0, Range.between(0, INT_MAX), L)
    .define(RETRY_BACKOFF_MS_CONFIG, ConfigType.LONG, 100, Range.at_least(0), L)
    .define(REQUEST_TIMEOUT_MS_CONFIG, ConfigType.INT, 40 * 1000, Range.at_least(0), L)
    .define("rocksdb.config.setter", ConfigType.CLASS, None, None, L)
    .define(SEND_BUFFER_CONFIG, ConfigType.INT, 128 * 1024, Range.at_least(-1), L)
    .define("state.cleanup.delay.ms", ConfigType.LONG, 10 * 60 * 1000, None, L)
    .define(
        UPGRADE_FROM_CONFIG,
        ConfigType.STRING,
        None,
        ValidString.in_(None, "0.10.0", "0.10.1", "0.10.2", "0.11.0", "1.0", "1.1", "2.0", "2.1", "2.2", "2.3"),
        L,
    )
    .define(WINDOW_STORE_CHANGE_LOG_ADDITIONAL_RETENTION_MS_CONFIG, ConfigType.LONG, 24 * 60 * 60 * 1000, None, L)
    .freeze()
)


def _common_client_keys(*, request_timeout_ms: int, receive_buffer_bytes: int) -> list[ConfigKey]:
    """Keys every client family understands, with that family's defaults."""
    return [
        ConfigKey(name=BOOTSTRAP_SERVERS_CONFIG, type=ConfigType.LIST, default=NO_DEFAULT, importance=H),
        ConfigKey(name=CLIENT_ID_CONFIG, type=ConfigType.STRING, default="", importance=M),
        ConfigKey(name="client.dns.lookup", type=ConfigType.STRING, default="default", importance=M),
        ConfigKey(name="metadata.max.age.ms", type=ConfigType.LONG, default=5 * 60 * 1000, validator=Range.at_least(0), importance=L),
        ConfigKey(name=SEND_BUFFER_CONFIG, type=ConfigType.INT, default=128 * 1024, validator=Range.at_least(-1), importance=M),
        ConfigKey(
            name=RECEIVE_BUFFER_CONFIG,
            type=ConfigType.INT,
            default=receive_buffer_bytes,
            validator=Range.at_least(-1),
            importance=M,
        ),
        ConfigKey(name="reconnect.backoff.ms", type=ConfigType.LONG, default=50, validator=Range.at_least(0), importance=L),
        ConfigKey(name="reconnect.backoff.max.ms", type=ConfigType.LONG, default=1000, validator=Range.at_least(0), importance=L),
        ConfigKey(name=RETRY_BACKOFF_MS_CONFIG, type=ConfigType.LONG, default=100, validator=Range.at_least(0), importance=L),
        ConfigKey(name="metrics.sample.window.ms", type=ConfigType.LONG, default=30_000, validator=Range.at_least(0), importance=L),
        ConfigKey(name=METRICS_NUM_SAMPLES_CONFIG, type=ConfigType.INT, default=2, validator=Range.at_least(1), importance=L),
        ConfigKey(
            name=METRICS_RECORDING_LEVEL_CONFIG,
            type=ConfigType.STRING,
            default="INFO",
            validator=ValidString.in_("INFO", "DEBUG"),
            importance=L,
        ),
        ConfigKey(name="metric.reporters", type=ConfigType.LIST, default="", importance=L),
        ConfigKey(
            name=REQUEST_TIMEOUT_MS_CONFIG,
            type=ConfigType.INT,
            default=request_timeout_ms,
            validator=Range.at_least(0),
            importance=M,
        ),
        ConfigKey(name="connections.max.idle.ms", type=ConfigType.LONG, default=9 * 60 * 1000, importance=M),
        ConfigKey(name="security.protocol", type=ConfigType.STRING, default="PLAINTEXT", importance=M),
        ConfigKey(name="sasl.mechanism", type=ConfigType.STRING, default="GSSAPI", importance=M),
        ConfigKey(name="sasl.jaas.config", type=ConfigType.PASSWORD, default=None, importance=M),
        ConfigKey(name="ssl.key.password", type=ConfigType.PASSWORD, default=None, importance=H),
        ConfigKey(name="ssl.keystore.location", type=ConfigType.STRING, default=None, importance=H),
        ConfigKey(name="ssl.keystore.password", type=ConfigType.PASSWORD, default=None, importance=H),
        ConfigKey(name="ssl.truststore.location", type=ConfigType.STRING, default=None, importance=H),
        ConfigKey(name="ssl.truststore.password", type=ConfigType.PASSWORD, default=None, importance=H),
    ]


CONSUMER_SCHEMA: Final[ConfigSchema] = (
    ConfigSchema("consumer")
    .include(*_common_client_keys(request_timeout_ms=30_000, receive_buffer_bytes=64 * 1024))
    .define(GROUP_ID_CONFIG, ConfigType.STRING, None, None, H)
    .define(GROUP_INSTANCE_ID_CONFIG, ConfigType.STRING, None, None, M)
    .define("session.timeout.ms", ConfigType.INT, 10_000, None, H)
    .define("heartbeat.interval.ms", ConfigType.INT, 3_000, None, H)
    .define(
        PARTITION_ASSIGNMENT_STRATEGY_CONFIG,
        ConfigType.LIST,
        "org.apache.kafka.clients.consumer.RangeAssignor",
        None,
        M,
    )
    .define("max.partition.fetch.bytes", ConfigType.INT, 1024 * 1024, Range.at_least(0), H)
    .define("fetch.min.bytes", ConfigType.INT, 1, Range.at_least(0), H)
    .define("fetch.max.bytes", ConfigType.INT, 50 * 1024 * 1024, Range.at_least(0), M)
    .define("fetch.max.wait.ms", ConfigType.INT, 500, Range.at_least(0), L)
    .define(ENABLE_AUTO_COMMIT_CONFIG, ConfigType.BOOLEAN, True, None, M)
    .define("auto.commit.interval.ms", ConfigType.INT, 5_000, Range.at_least(0), L)
    .define(AUTO_OFFSET_RESET_CONFIG, ConfigType.STRING, "latest", ValidString.in_("latest", "earliest", "none"), M)
    .define("check.crcs", ConfigType.BOOLEAN, True, None, L)
    .define("key.deserializer", ConfigType.CLASS, NO_DEFAULT, None, H)
    .define("value.deserializer", ConfigType.CLASS, NO_DEFAULT, None, H)
    .define("default.api.timeout.ms", ConfigType.INT, 60_000, Range.at_least(0), M)
    .define("interceptor.classes", ConfigType.LIST, "", None, L)
    .define(MAX_POLL_RECORDS_CONFIG, ConfigType.INT, 500, Range.at_least(1), M)
    .define("max.poll.interval.ms", ConfigType.INT, 300_000, Range.at_least(1), M)
    .define("exclude.internal.topics", ConfigType.BOOLEAN, True, None, M)
    .define(ISOLATION_LEVEL_CONFIG, ConfigType.STRING, READ_UNCOMMITTED, ValidString.in_(READ_COMMITTED, READ_UNCOMMITTED), M)
    .define("allow.auto.create.topics", ConfigType.BOOLEAN, True, None, M)
    .define("client.rack", ConfigType.STRING, "", None, L)
    .freeze()
)


PRODUCER_SCHEMA: Final[ConfigSchema] = (
    ConfigSchema("producer")
    .include(*_common_client_keys(request_timeout_ms=30_000, receive_buffer_bytes=32 * 1024))
    .define("acks", ConfigType.STRING, "1", ValidString.in_("all", "-1", "0", "1"), H)
    .define(BUFFER_MEMORY_CONFIG, ConfigType.LONG, 32 * 1024 * 1024, Range.at_least(0), H)
    .define("compression.type", ConfigType.STRING, "none", ValidString.in_("none", "gzip", "snappy", "lz4", "zstd"), H)
    .define(RETRIES_CONFIG, ConfigType.INT, INT_MAX, Range.between(0, INT_MAX), H)
    .define(BATCH_SIZE_CONFIG, ConfigType.INT, 16 * 1024, Range.at_least(0), M)
    .define(LINGER_MS_CONFIG, ConfigType.LONG, 0, Range.at_least(0), M)
    .define(DELIVERY_TIMEOUT_MS_CONFIG, ConfigType.INT, 120_000, Range.at_least(0), M)
    .define("max.request.size", ConfigType.INT, 1024 * 1024, Range.at_least(0), M)
    .define("max.block.ms", ConfigType.LONG, 60_000, Range.at_least(0), M)
    .define(MAX_IN_FLIGHT_REQUESTS_PER_CONNECTION, ConfigType.INT, 5, Range.at_least(1), L)
    .define("key.serializer", ConfigType.CLASS, NO_DEFAULT, None, H)
    .define("value.serializer", ConfigType.CLASS, NO_DEFAULT, None, H)
    .define("partitioner.class", ConfigType.CLASS, None, None, M)
    .define("interceptor.classes", ConfigType.LIST, "", None, L)
    .define(ENABLE_IDEMPOTENCE_CONFIG, ConfigType.BOOLEAN, False, None, L)
    .define("transaction.timeout.ms", ConfigType.INT, 60_000, None, L)
    .define("transactional.id", ConfigType.STRING, None, None, L)
    .freeze()
)


ADMIN_SCHEMA: Final[ConfigSchema] = (
    ConfigSchema("admin")
    .include(*_common_client_keys(request_timeout_ms=120_000, receive_buffer_bytes=64 * 1024))
    .define(RETRIES_CONFIG, ConfigType.INT, 5, Range.at_least(0), L)
    .define("default.api.timeout.ms", ConfigType.INT, 60_000, Range.at_least(0), M)
    .freeze()
)


CLIENT_SCHEMAS: Final[tuple[ConfigSchema, ...]] = (CONSUMER_SCHEMA, PRODUCER_SCHEMA, ADMIN_SCHEMA)

# Every key recognized anywhere. A raw key outside this set (and outside every
# known prefix) is an opaque custom property.
KNOWN_KEYS: Final[frozenset[str]] = STREAMS_SCHEMA.names().union(*(schema.names() for schema in CLIENT_SCHEMAS))
