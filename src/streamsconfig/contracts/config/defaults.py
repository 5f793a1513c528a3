# src/streamsconfig/contracts/config/defaults.py
"""Default value registries for resolved client configuration.

Three categories of values live here:

1. Numeric limits: the representable ranges of INT and LONG entries. Used
   by coercion and by guarantee adjustments that mean "never time out".

2. Role naming: client id suffixes and the assignor identity that the main
   consumer is always configured with.

3. Internal keys: settings the clients understand but users are not meant
   to set. They are forced by role derivation, never by user input.

Guarantee-driven adjustments (soft defaults, forced overrides, bounds) are
NOT here. They live in core/guarantee.py as a single table so the cascade
can be read in one place.
"""

from typing import Final

# =============================================================================
# NUMERIC LIMITS
# =============================================================================

INT_MIN: Final[int] = -(2**31)
INT_MAX: Final[int] = 2**31 - 1
LONG_MIN: Final[int] = -(2**63)
LONG_MAX: Final[int] = 2**63 - 1

# =============================================================================
# ROLE NAMING
# =============================================================================

RESTORE_CONSUMER_CLIENT_ID_SUFFIX: Final[str] = "-restore-consumer"
GLOBAL_CONSUMER_CLIENT_ID_SUFFIX: Final[str] = "-global-consumer"

# Assignor the main consumer always uses. The assignment algorithm itself is
# an external collaborator; only its identity travels in the resolved map.
STREAMS_PARTITION_ASSIGNOR: Final[str] = "org.apache.kafka.streams.processor.internals.StreamsPartitionAssignor"

# =============================================================================
# INTERNAL KEYS
# =============================================================================

# Group members must not send a leave-group request on close, otherwise a
# rolling restart triggers one rebalance per thread.
LEAVE_GROUP_ON_CLOSE_CONFIG: Final[str] = "internal.leave.group.on.close"

# Non-group consumers (restore, global) must fail rather than silently jump
# to another offset when their position is out of range.
NON_GROUP_AUTO_OFFSET_RESET: Final[str] = "none"
