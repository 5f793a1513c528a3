"""Value types produced by coercion.

PASSWORD entries are wrapped so that secrets never leak through repr(),
str(), or structured log output.
"""

from typing import Final

HIDDEN: Final[str] = "[hidden]"


class Password:
    """Secret configuration value.

    Compares by value so resolved maps stay structurally comparable, but
    renders as a fixed placeholder everywhere else.
    """

    __slots__ = ("_value",)

    def __init__(self, value: str) -> None:
        self._value = value

    def value(self) -> str:
        """Return the secret itself."""
        return self._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Password):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return HIDDEN

    __str__ = __repr__
