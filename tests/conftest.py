# tests/conftest.py
"""Shared test fixtures.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import os
from typing import Any

import pytest
from hypothesis import Phase, Verbosity, settings

# =============================================================================
# Hypothesis Configuration
# =============================================================================

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Load profile from environment, default to "ci"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Property sets
# =============================================================================

APPLICATION_ID = "streams-config-test"
BOOTSTRAP_SERVERS = "localhost:9092"


def minimal_props(**extra: Any) -> dict[str, Any]:
    """Smallest valid property set, plus extra keys.

    Dotted keys cannot be keyword arguments, so callers usually update the
    returned dict instead.
    """
    props: dict[str, Any] = {
        "application.id": APPLICATION_ID,
        "bootstrap.servers": BOOTSTRAP_SERVERS,
    }
    props.update(extra)
    return props


@pytest.fixture
def props() -> dict[str, Any]:
    """Fresh minimal property set each test may mutate."""
    return minimal_props()


@pytest.fixture
def eos_props(props: dict[str, Any]) -> dict[str, Any]:
    """Minimal property set with exactly-once processing enabled."""
    props["processing.guarantee"] = "exactly_once"
    return props
