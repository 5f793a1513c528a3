# src/streamsconfig/core/coercion.py
"""Type coercion for raw configuration values.

Raw properties arrive as strings (typical for file-sourced input) or as
already-typed Python objects (typical for programmatic input). Coercion maps
both to the single Python representation declared by the schema entry:

    STRING   -> str (surrounding whitespace removed)
    INT      -> int within the signed 32-bit range
    LONG     -> int within the signed 64-bit range
    BOOLEAN  -> bool
    CLASS    -> a Python class
    LIST     -> list[str]
    PASSWORD -> Password

bool is rejected wherever a number is expected even though it is an int
subclass, and floats are never truncated into integers. None passes through
unchanged so validators decide whether it is acceptable.
"""

import importlib
import inspect
from typing import Annotated, Any, Final

from pydantic import ConfigDict, Field, StrictInt, StringConstraints, TypeAdapter, ValidationError

from streamsconfig.contracts.config.defaults import INT_MAX, INT_MIN, LONG_MAX, LONG_MIN
from streamsconfig.contracts.enums import ConfigType
from streamsconfig.contracts.errors import ConfigurationError
from streamsconfig.contracts.types import Password


def resolve_class(name: str) -> type:
    """Import a class from a dotted path.

    Accepts both ``package.module.ClassName`` and ``package.module:ClassName``.

    Raises:
        ImportError: If the module cannot be imported or has no such attribute
        TypeError: If the attribute is not a class
    """
    if ":" in name:
        module_name, _, attr_path = name.partition(":")
    else:
        module_name, _, attr_path = name.rpartition(".")
    if not module_name or not attr_path:
        raise ImportError(f"{name!r} is not a dotted class path")

    module = importlib.import_module(module_name)
    obj: Any = module
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise ImportError(f"{module_name} has no attribute {attr_path!r}") from e

    if not inspect.isclass(obj):
        raise TypeError(f"{name!r} resolves to {type(obj).__name__}, not a class")
    return obj


def qualified_name(cls: type) -> str:
    """Dotted path that resolve_class() maps back to cls."""
    return f"{cls.__module__}.{cls.__qualname__}"


# bool is excluded by StrictInt; floats are never truncated.
_INT32: Final = TypeAdapter(Annotated[StrictInt, Field(ge=INT_MIN, le=INT_MAX)])
_INT64: Final = TypeAdapter(Annotated[StrictInt, Field(ge=LONG_MIN, le=LONG_MAX)])

_STRING_LIST: Final = TypeAdapter(
    list[Annotated[str, StringConstraints(strip_whitespace=True)]],
    config=ConfigDict(coerce_numbers_to_str=True),
)


def _coerce_integer(key: str, value: Any, config_type: ConfigType) -> int:
    adapter, width = (_INT32, "32-bit") if config_type is ConfigType.INT else (_INT64, "64-bit")

    candidate = value
    if isinstance(value, str):
        try:
            candidate = int(value.strip())
        except ValueError:
            raise ConfigurationError(key, value, f"String value could not be parsed as {width} integer") from None

    try:
        return adapter.validate_python(candidate)
    except ValidationError as e:
        if e.errors()[0]["type"] == "int_type":
            reason = f"Expected value to be a {width} integer, but it was a {type(value).__name__}"
        else:
            reason = f"Value does not fit in a {width} integer"
        raise ConfigurationError(key, value, reason) from None


def _coerce_boolean(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    raise ConfigurationError(key, value, "Expected value to be either true or false")


def _coerce_list(key: str, value: Any) -> list[str]:
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return []
        return [item.strip() for item in stripped.split(",")]
    if isinstance(value, list | tuple):
        try:
            return _STRING_LIST.validate_python(value)
        except ValidationError:
            raise ConfigurationError(key, value, "List entries must be strings or numbers") from None
    raise ConfigurationError(key, value, "Expected a comma separated list.")


def _coerce_class(key: str, value: Any) -> type:
    if inspect.isclass(value):
        return value
    if isinstance(value, str):
        name = value.strip()
        try:
            return resolve_class(name)
        except (ImportError, TypeError):
            raise ConfigurationError(key, value, f"Class {name} could not be found.") from None
    raise ConfigurationError(key, value, "Expected a class or a dotted class path.")


def coerce_value(key: str, config_type: ConfigType, value: Any) -> Any:
    """Convert a raw value to the representation declared by config_type.

    Args:
        key: Configuration key (for error messages)
        config_type: Declared semantic type of the key
        value: Raw value as supplied by the caller

    Returns:
        The coerced value, or None when value is None

    Raises:
        ConfigurationError: If value cannot be represented as config_type
    """
    if value is None:
        return None

    if config_type is ConfigType.STRING:
        if isinstance(value, str):
            return value.strip()
        raise ConfigurationError(key, value, f"Expected value to be a string, but it was a {type(value).__name__}")

    if config_type is ConfigType.PASSWORD:
        if isinstance(value, Password):
            return value
        if isinstance(value, str):
            return Password(value)
        raise ConfigurationError(key, value, f"Expected value to be a string, but it was a {type(value).__name__}")

    if config_type in (ConfigType.INT, ConfigType.LONG):
        return _coerce_integer(key, value, config_type)

    if config_type is ConfigType.BOOLEAN:
        return _coerce_boolean(key, value)

    if config_type is ConfigType.LIST:
        return _coerce_list(key, value)

    if config_type is ConfigType.CLASS:
        return _coerce_class(key, value)

    raise AssertionError(f"Unhandled config type: {config_type!r}")
