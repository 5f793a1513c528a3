# tests/core/test_config_schema.py
"""Tests for ConfigKey, ConfigSchema, validators and the built-in catalogs."""

import pytest
from pydantic import ValidationError

from streamsconfig.contracts import ConfigType, ConfigurationError, Importance, MissingConfigurationError
from streamsconfig.core.catalog import (
    ADMIN_SCHEMA,
    CONSUMER_SCHEMA,
    KNOWN_KEYS,
    PRODUCER_SCHEMA,
    STREAMS_SCHEMA,
)
from streamsconfig.core.schema import NO_DEFAULT, ConfigKey, ConfigSchema
from streamsconfig.core.validators import NonEmptyList, NonEmptyString, Range, ValidString
from streamsconfig.plugins.serdes import ByteArraySerde


def _schema() -> ConfigSchema:
    return (
        ConfigSchema("test")
        .define("name", ConfigType.STRING, NO_DEFAULT, NonEmptyString(), Importance.HIGH)
        .define("retries", ConfigType.INT, "3", Range.at_least(0), Importance.LOW)
        .define("mode", ConfigType.STRING, "fast", ValidString.in_("fast", "safe"))
        .define("optional", ConfigType.STRING, None)
    )


class TestConfigKey:
    def test_default_is_coerced_at_definition(self) -> None:
        key = ConfigKey(name="retries", type=ConfigType.INT, default="3")
        assert key.default == 3

    def test_bad_default_rejected_at_definition(self) -> None:
        """A schema with an invalid default is a programming error."""
        with pytest.raises(ValidationError, match="invalid default"):
            ConfigKey(name="retries", type=ConfigType.INT, default=-1, validator=Range.at_least(0))

    @pytest.mark.parametrize("name", ["", "  ", " padded"])
    def test_rejects_bad_names(self, name: str) -> None:
        with pytest.raises(ValidationError):
            ConfigKey(name=name, type=ConfigType.STRING)

    def test_required_and_value_default(self) -> None:
        required = ConfigKey(name="a", type=ConfigType.STRING)
        optional = ConfigKey(name="b", type=ConfigType.STRING, default=None)
        defaulted = ConfigKey(name="c", type=ConfigType.STRING, default="x")

        assert required.required and not required.has_value_default
        assert not optional.required and not optional.has_value_default
        assert defaulted.has_value_default

    def test_is_frozen(self) -> None:
        key = ConfigKey(name="a", type=ConfigType.STRING)
        with pytest.raises(ValidationError):
            key.name = "b"  # type: ignore[misc]


class TestConfigSchemaDefinition:
    def test_duplicate_name_raises(self) -> None:
        schema = ConfigSchema("dup").define("a", ConfigType.STRING, None)
        with pytest.raises(ValueError, match="defined twice"):
            schema.define("a", ConfigType.INT, 0)

    def test_frozen_schema_rejects_new_keys(self) -> None:
        schema = ConfigSchema("frozen").freeze()
        with pytest.raises(RuntimeError, match="frozen"):
            schema.define("a", ConfigType.STRING, None)

    def test_preserves_definition_order(self) -> None:
        assert [key.name for key in _schema()] == ["name", "retries", "mode", "optional"]

    def test_value_defaults_skips_required_and_none(self) -> None:
        assert _schema().value_defaults() == {"retries": 3, "mode": "fast"}


class TestConfigSchemaParse:
    def test_present_keys_are_coerced(self) -> None:
        values = _schema().parse({"name": " app ", "retries": "7"})

        assert values == {"name": "app", "retries": 7, "mode": "fast", "optional": None}

    def test_missing_required_key(self) -> None:
        with pytest.raises(MissingConfigurationError) as exc_info:
            _schema().parse({"retries": 1})

        assert exc_info.value.key == "name"

    def test_unknown_keys_are_ignored(self) -> None:
        values = _schema().parse({"name": "app", "custom.thing": object()})
        assert "custom.thing" not in values

    def test_validator_failure_names_constraint(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            _schema().parse({"name": "app", "retries": -5})

        assert str(exc_info.value) == "Invalid value -5 for configuration retries: Value must be at least 0"

    def test_valid_string_message_lists_choices(self) -> None:
        with pytest.raises(ConfigurationError, match="String must be one of: fast, safe"):
            _schema().parse({"name": "app", "mode": "slow"})

    def test_empty_required_string_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="String must be non-empty"):
            _schema().parse({"name": "   "})


class TestValidators:
    def test_range_between_upper_bound(self) -> None:
        with pytest.raises(ConfigurationError, match="Value must be no more than 5"):
            Range.between(0, 5).ensure_valid("k", 6)

    def test_range_rejects_none(self) -> None:
        with pytest.raises(ConfigurationError, match="non-null"):
            Range.at_least(0).ensure_valid("k", None)

    def test_range_open_ends(self) -> None:
        Range.at_least(-1).ensure_valid("k", 2**62)
        Range(max=0).ensure_valid("k", -(2**62))

    def test_range_rejects_bool_and_float(self) -> None:
        """Range sees coerced integers only; anything else is a type error, not a bound error."""
        for value in (True, 1.5):
            with pytest.raises(ConfigurationError, match="Value must be an integer"):
                Range.at_least(0).ensure_valid("k", value)

    def test_valid_string_is_exact_match(self) -> None:
        with pytest.raises(ConfigurationError, match="String must be one of: fast, safe"):
            ValidString.in_("fast", "safe").ensure_valid("k", "FAST")

    def test_valid_string_may_allow_none(self) -> None:
        ValidString.in_(None, "a").ensure_valid("k", None)
        with pytest.raises(ConfigurationError, match="String must be one of: null, a"):
            ValidString.in_(None, "a").ensure_valid("k", "b")

    def test_non_empty_list(self) -> None:
        NonEmptyList().ensure_valid("k", ["a"])
        with pytest.raises(ConfigurationError):
            NonEmptyList().ensure_valid("k", [])
        with pytest.raises(ConfigurationError):
            NonEmptyList().ensure_valid("k", ["a", ""])


class TestCatalogs:
    def test_streams_requires_identity_and_bootstrap(self) -> None:
        assert STREAMS_SCHEMA["application.id"].required
        assert STREAMS_SCHEMA["bootstrap.servers"].required

    def test_streams_defaults(self) -> None:
        assert STREAMS_SCHEMA.default("commit.interval.ms") == 30_000
        assert STREAMS_SCHEMA.default("default.key.serde") is ByteArraySerde
        assert STREAMS_SCHEMA.default("processing.guarantee") == "at_least_once"
        assert STREAMS_SCHEMA.default("metric.reporters") == []

    def test_client_schemas_carry_client_defaults(self) -> None:
        """Streams preferences live in the guarantee table, not in client defaults."""
        assert CONSUMER_SCHEMA.default("max.poll.records") == 500
        assert CONSUMER_SCHEMA.default("auto.offset.reset") == "latest"
        assert PRODUCER_SCHEMA.default("linger.ms") == 0
        assert ADMIN_SCHEMA.default("retries") == 5

    def test_streams_only_keys_are_not_client_keys(self) -> None:
        for schema in (CONSUMER_SCHEMA, PRODUCER_SCHEMA, ADMIN_SCHEMA):
            assert "application.id" not in schema
            assert "num.stream.threads" not in schema

    def test_known_keys_cover_every_schema(self) -> None:
        for schema in (STREAMS_SCHEMA, CONSUMER_SCHEMA, PRODUCER_SCHEMA, ADMIN_SCHEMA):
            assert schema.names() <= KNOWN_KEYS

    def test_catalogs_are_frozen(self) -> None:
        with pytest.raises(RuntimeError):
            CONSUMER_SCHEMA.define("new.key", ConfigType.STRING, None)
