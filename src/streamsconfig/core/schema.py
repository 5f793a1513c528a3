# src/streamsconfig/core/schema.py
"""Configuration schema as data.

A ConfigSchema is an ordered catalog of ConfigKey definitions. Validation,
defaults, and coercion are all driven from the catalog, so no per-field
accessor logic exists anywhere else.

Schemas are built once at import time (see core/catalog.py) and frozen.
Frozen schemas are never mutated, which makes them safe for unsynchronized
concurrent reads.

Example:
    schema = (
        ConfigSchema("example")
        .define("retries", ConfigType.INT, 0, Range.at_least(0), Importance.LOW)
        .define("application.id", ConfigType.STRING, importance=Importance.HIGH)
        .freeze()
    )
    values = schema.parse({"application.id": "app", "retries": "3"})
    values["retries"]  # 3
"""

from collections.abc import Iterator, Mapping
from typing import Any, Final

from pydantic import BaseModel, field_validator, model_validator

from streamsconfig.contracts.enums import ConfigType, Importance
from streamsconfig.contracts.errors import ConfigurationError, MissingConfigurationError
from streamsconfig.core.coercion import coerce_value
from streamsconfig.core.validators import Validator


class _NoDefault:
    """Sentinel type for keys that must be supplied by the user."""

    _instance: "_NoDefault | None" = None

    def __new__(cls) -> "_NoDefault":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_DEFAULT"

    def __reduce__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT: Final = _NoDefault()


class ConfigKey(BaseModel):
    """Definition of one recognized configuration key.

    The default is stored already coerced. A default that does not coerce
    or that fails its own validator is a programming error and is rejected
    when the key is defined.
    """

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    name: str
    type: ConfigType
    default: Any = NO_DEFAULT
    validator: Validator | None = None
    importance: Importance = Importance.MEDIUM
    documentation: str = ""

    @field_validator("name")
    @classmethod
    def validate_name_not_empty(cls, v: str) -> str:
        """Key names are used verbatim as map keys and must be meaningful."""
        if not v or not v.strip() or v != v.strip():
            raise ValueError(f"config key name must be non-empty without surrounding whitespace, got {v!r}")
        return v

    @model_validator(mode="before")
    @classmethod
    def _coerce_default(cls, data: Any) -> Any:
        """Coerce and validate the default before the model is frozen."""
        if not isinstance(data, dict):
            return data
        default = data.get("default", NO_DEFAULT)
        if default is NO_DEFAULT or default is None:
            return data

        name = str(data.get("name", ""))
        config_type = ConfigType(data["type"])
        validator = data.get("validator")
        try:
            coerced = coerce_value(name, config_type, default)
            if validator is not None:
                validator.ensure_valid(name, coerced)
        except ConfigurationError as e:
            raise ValueError(f"invalid default for {name}: {e}") from e
        return {**data, "default": coerced}

    @property
    def required(self) -> bool:
        """True when the key has no default and must be supplied."""
        return self.default is NO_DEFAULT

    @property
    def has_value_default(self) -> bool:
        """True when the default is an actual value (not required, not None)."""
        return self.default is not NO_DEFAULT and self.default is not None

    def coerce(self, value: Any) -> Any:
        """Coerce a raw value to this key's type and run its validator.

        Raises:
            ConfigurationError: If coercion or validation fails
        """
        coerced = coerce_value(self.name, self.type, value)
        if self.validator is not None:
            self.validator.ensure_valid(self.name, coerced)
        return coerced


class ConfigSchema:
    """Ordered, name-unique catalog of ConfigKey definitions."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._keys: dict[str, ConfigKey] = {}
        self._frozen = False

    def define(
        self,
        name: str,
        type: ConfigType,
        default: Any = NO_DEFAULT,
        validator: Validator | None = None,
        importance: Importance = Importance.MEDIUM,
        documentation: str = "",
    ) -> "ConfigSchema":
        """Register a key and return the schema for chaining.

        Raises:
            ValueError: If the name is already defined (duplicate names are bugs)
            RuntimeError: If the schema has been frozen
            pydantic.ValidationError: If the definition itself is invalid
        """
        key = ConfigKey(
            name=name,
            type=type,
            default=default,
            validator=validator,
            importance=importance,
            documentation=documentation,
        )
        return self.include(key)

    def include(self, *keys: ConfigKey) -> "ConfigSchema":
        """Register already-built keys (shared between several schemas)."""
        if self._frozen:
            raise RuntimeError(f"Schema '{self.name}' is frozen; keys cannot be added after startup")
        for key in keys:
            if key.name in self._keys:
                raise ValueError(f"Configuration '{key.name}' is defined twice in schema '{self.name}'")
            self._keys[key.name] = key
        return self

    def freeze(self) -> "ConfigSchema":
        self._frozen = True
        return self

    def __contains__(self, name: object) -> bool:
        return name in self._keys

    def __getitem__(self, name: str) -> ConfigKey:
        return self._keys[name]

    def __iter__(self) -> Iterator[ConfigKey]:
        return iter(self._keys.values())

    def __len__(self) -> int:
        return len(self._keys)

    def names(self) -> frozenset[str]:
        return frozenset(self._keys)

    def coerce(self, name: str, value: Any) -> Any:
        """Coerce and validate a single value for a defined key."""
        return self._keys[name].coerce(value)

    def default(self, name: str) -> Any:
        return self._keys[name].default

    def value_defaults(self) -> dict[str, Any]:
        """Defaults of every key whose default is an actual value."""
        return {key.name: key.default for key in self._keys.values() if key.has_value_default}

    def parse(self, raw: Mapping[str, Any]) -> dict[str, Any]:
        """Produce the typed value of every key in the schema.

        Present keys are coerced and validated. Absent keys take their
        default. Keys in raw that the schema does not define are ignored.

        Raises:
            MissingConfigurationError: If a required key is absent
            ConfigurationError: If a present value fails coercion or validation
        """
        values: dict[str, Any] = {}
        for key in self._keys.values():
            if key.name in raw:
                values[key.name] = key.coerce(raw[key.name])
            elif key.required:
                raise MissingConfigurationError(key.name)
            else:
                values[key.name] = key.default
        return values
