# src/streamsconfig/core/validators.py
"""Value validators attached to schema entries.

Validators run after coercion, so they only ever see the declared Python
type (or None). Each constraint is expressed as a pydantic type; pydantic's
ValidationError is translated into a ConfigurationError naming the key, the
supplied value, and the violated constraint.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated, Any, Literal

from pydantic import Field, StrictInt, StringConstraints, TypeAdapter, ValidationError

from streamsconfig.contracts.errors import ConfigurationError


@lru_cache(maxsize=None)
def _bounded_int(min: int | None, max: int | None) -> TypeAdapter[int]:
    return TypeAdapter(Annotated[StrictInt, Field(ge=min, le=max)])


@lru_cache(maxsize=None)
def _one_of(allowed: tuple[str | None, ...]) -> TypeAdapter[Any]:
    return TypeAdapter(Literal[allowed])  # type: ignore[valid-type]


_NON_BLANK: TypeAdapter[str] = TypeAdapter(Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)])
_NON_BLANK_ITEMS: TypeAdapter[list[str]] = TypeAdapter(Annotated[list[Annotated[str, StringConstraints(min_length=1)]], Field(min_length=1)])


class Validator(ABC):
    """Constraint over a coerced configuration value."""

    @abstractmethod
    def ensure_valid(self, key: str, value: Any) -> None:
        """Raise ConfigurationError if value violates the constraint."""


@dataclass(frozen=True, slots=True)
class Range(Validator):
    """Inclusive numeric bounds. Either side may be open."""

    min: int | None = None
    max: int | None = None

    @classmethod
    def at_least(cls, min: int) -> "Range":
        return cls(min=min)

    @classmethod
    def between(cls, min: int, max: int) -> "Range":
        return cls(min=min, max=max)

    def ensure_valid(self, key: str, value: Any) -> None:
        if value is None:
            raise ConfigurationError(key, value, "Value must be non-null")
        try:
            _bounded_int(self.min, self.max).validate_python(value)
        except ValidationError as e:
            kind = e.errors()[0]["type"]
            if kind == "greater_than_equal":
                raise ConfigurationError(key, value, f"Value must be at least {self.min}") from None
            if kind == "less_than_equal":
                raise ConfigurationError(key, value, f"Value must be no more than {self.max}") from None
            raise ConfigurationError(key, value, "Value must be an integer") from None

    def __str__(self) -> str:
        if self.max is None:
            return f"[{self.min},...]"
        if self.min is None:
            return f"[...,{self.max}]"
        return f"[{self.min},...,{self.max}]"


@dataclass(frozen=True, slots=True)
class ValidString(Validator):
    """Value must be one of a fixed set. None is allowed only if listed."""

    allowed: tuple[str | None, ...]

    @classmethod
    def in_(cls, *allowed: str | None) -> "ValidString":
        return cls(allowed=tuple(allowed))

    def ensure_valid(self, key: str, value: Any) -> None:
        try:
            _one_of(self.allowed).validate_python(value)
        except ValidationError:
            raise ConfigurationError(key, value, f"String must be one of: {self._render()}") from None

    def _render(self) -> str:
        return ", ".join("null" if item is None else item for item in self.allowed)

    def __str__(self) -> str:
        return f"[{self._render()}]"


@dataclass(frozen=True, slots=True)
class NonEmptyString(Validator):
    """Value must contain at least one non-whitespace character."""

    def ensure_valid(self, key: str, value: Any) -> None:
        try:
            _NON_BLANK.validate_python(value)
        except ValidationError:
            raise ConfigurationError(key, value, "String must be non-empty") from None

    def __str__(self) -> str:
        return "non-empty string"


@dataclass(frozen=True, slots=True)
class NonEmptyList(Validator):
    """List must contain at least one entry and no empty entries."""

    def ensure_valid(self, key: str, value: Any) -> None:
        if not value:
            raise ConfigurationError(key, value, "List must contain at least one entry")
        try:
            _NON_BLANK_ITEMS.validate_python(value)
        except ValidationError:
            raise ConfigurationError(key, value, "List entries must be non-empty") from None

    def __str__(self) -> str:
        return "non-empty list"
