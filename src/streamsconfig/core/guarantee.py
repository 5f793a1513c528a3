# src/streamsconfig/core/guarantee.py
"""Guarantee-driven adjustments to resolved configuration.

The processing guarantee changes what a correct client configuration looks
like. Every such change is one row of ADJUSTMENTS, in one of three kinds:

    SOFT_DEFAULT  used only when no layer supplied the key
    FORCE         always wins; an explicit user value is discarded
    UPPER_BOUND   explicit user values above the bound are rejected

Rows with guarantee=None apply under every guarantee (the Streams layer's
own preferences for client settings). The table is the whole cascade: new
guarantees or new forced settings are added here, not in the resolver.

Bound checks run when a role is resolved, not at construction. A bad
producer setting therefore surfaces when producer configs are requested.
"""

from dataclasses import dataclass
from typing import Any, Final

from streamsconfig.contracts.config.defaults import INT_MAX
from streamsconfig.contracts.enums import AdjustmentKind, ConfigScope, ProcessingGuarantee
from streamsconfig.contracts.errors import ConfigurationError
from streamsconfig.core.catalog import (
    AUTO_OFFSET_RESET_CONFIG,
    COMMIT_INTERVAL_MS_CONFIG,
    DELIVERY_TIMEOUT_MS_CONFIG,
    ENABLE_IDEMPOTENCE_CONFIG,
    ISOLATION_LEVEL_CONFIG,
    LINGER_MS_CONFIG,
    MAX_IN_FLIGHT_REQUESTS_PER_CONNECTION,
    MAX_POLL_RECORDS_CONFIG,
    READ_COMMITTED,
    RETRIES_CONFIG,
)
from streamsconfig.core.logging import get_logger

logger = get_logger(__name__)

SOFT_DEFAULT = AdjustmentKind.SOFT_DEFAULT
FORCE = AdjustmentKind.FORCE
UPPER_BOUND = AdjustmentKind.UPPER_BOUND
EOS = ProcessingGuarantee.EXACTLY_ONCE


@dataclass(frozen=True, slots=True)
class Adjustment:
    """One guarantee-driven change to a scope's configuration.

    guarantee=None means the row applies under every guarantee.
    """

    kind: AdjustmentKind
    scope: ConfigScope
    key: str
    value: Any
    guarantee: ProcessingGuarantee | None = None

    def applies_to(self, scope: ConfigScope, guarantee: ProcessingGuarantee) -> bool:
        return self.scope is scope and (self.guarantee is None or self.guarantee is guarantee)


ADJUSTMENTS: Final[tuple[Adjustment, ...]] = (
    # Streams preferences for client settings, any guarantee
    Adjustment(SOFT_DEFAULT, ConfigScope.CONSUMER, MAX_POLL_RECORDS_CONFIG, 1000),
    Adjustment(SOFT_DEFAULT, ConfigScope.CONSUMER, AUTO_OFFSET_RESET_CONFIG, "earliest"),
    Adjustment(SOFT_DEFAULT, ConfigScope.PRODUCER, LINGER_MS_CONFIG, 100),
    # Exactly-once
    Adjustment(SOFT_DEFAULT, ConfigScope.STREAMS, COMMIT_INTERVAL_MS_CONFIG, 100, EOS),
    Adjustment(SOFT_DEFAULT, ConfigScope.PRODUCER, DELIVERY_TIMEOUT_MS_CONFIG, INT_MAX, EOS),
    Adjustment(SOFT_DEFAULT, ConfigScope.PRODUCER, RETRIES_CONFIG, INT_MAX, EOS),
    Adjustment(FORCE, ConfigScope.CONSUMER, ISOLATION_LEVEL_CONFIG, READ_COMMITTED, EOS),
    Adjustment(FORCE, ConfigScope.PRODUCER, ENABLE_IDEMPOTENCE_CONFIG, True, EOS),
    Adjustment(UPPER_BOUND, ConfigScope.PRODUCER, MAX_IN_FLIGHT_REQUESTS_PER_CONNECTION, 5, EOS),
)


def matches_forced(supplied: Any, forced: Any) -> bool:
    """True when a user-supplied value says the same as the forced one.

    Superseded values are never coerced, so "true" and True count as equal.
    """
    if supplied == forced:
        return True
    return isinstance(supplied, str) and supplied.strip().lower() == str(forced).lower()


class GuaranteeCascade:
    """Applies ADJUSTMENTS for one processing guarantee.

    Args:
        guarantee: Guarantee selected by `processing.guarantee`
        adjustments: Adjustment table, ADJUSTMENTS unless overridden in tests
    """

    def __init__(
        self,
        guarantee: ProcessingGuarantee,
        adjustments: tuple[Adjustment, ...] = ADJUSTMENTS,
    ) -> None:
        self.guarantee = guarantee
        self._adjustments = adjustments

    def _rows(self, scope: ConfigScope, kind: AdjustmentKind) -> list[Adjustment]:
        return [a for a in self._adjustments if a.kind is kind and a.applies_to(scope, self.guarantee)]

    def soft_defaults(self, scope: ConfigScope) -> dict[str, Any]:
        return {a.key: a.value for a in self._rows(scope, SOFT_DEFAULT)}

    def forced(self, scope: ConfigScope) -> dict[str, Any]:
        return {a.key: a.value for a in self._rows(scope, FORCE)}

    def forced_keys(self, scope: ConfigScope) -> frozenset[str]:
        """Keys whose explicit user values are superseded in scope."""
        return frozenset(self.forced(scope))

    def upper_bounds(self, scope: ConfigScope) -> dict[str, Any]:
        return {a.key: a.value for a in self._rows(scope, UPPER_BOUND)}

    def check_bounds(self, scope: ConfigScope, explicit: dict[str, Any]) -> None:
        """Reject explicit values above an active upper bound.

        Raises:
            ConfigurationError: If an explicit value exceeds its bound
        """
        for key, bound in self.upper_bounds(scope).items():
            if key in explicit and explicit[key] is not None and explicit[key] > bound:
                raise ConfigurationError(
                    key,
                    explicit[key],
                    f"Can't exceed {bound} when {self.guarantee.value.replace('_', '-')} processing is enabled",
                )

    def apply(self, scope: ConfigScope, explicit: dict[str, Any]) -> dict[str, Any]:
        """Layer soft defaults, explicit values and forced values for scope.

        Args:
            scope: Scope being resolved
            explicit: Values some layer supplied (coerced, except forced keys)

        Returns:
            New dict: soft defaults for absent keys, then explicit, then forced

        Raises:
            ConfigurationError: If an explicit value exceeds an upper bound
        """
        self.check_bounds(scope, explicit)

        result = self.soft_defaults(scope)
        result.update(explicit)
        for key, value in self.forced(scope).items():
            if key in explicit and not matches_forced(explicit[key], value):
                logger.warning(
                    "User value superseded by processing guarantee",
                    key=key,
                    supplied=explicit[key],
                    forced=value,
                    guarantee=self.guarantee.value,
                )
            result[key] = value
        return result
