# tests/property/core/test_coercion_properties.py
"""Property-based tests for value coercion.

- Integer strings coerce to the same int as the int itself, within range
- Out-of-range integers are always rejected, never truncated
- LIST coercion of a joined list returns the trimmed items
"""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from streamsconfig.contracts import ConfigType, ConfigurationError
from streamsconfig.contracts.config.defaults import INT_MAX, INT_MIN
from streamsconfig.core.coercion import coerce_value
from tests.property.settings import STANDARD_SETTINGS

int32 = st.integers(min_value=INT_MIN, max_value=INT_MAX)
outside_int32 = st.one_of(st.integers(max_value=INT_MIN - 1), st.integers(min_value=INT_MAX + 1))
list_items = st.lists(
    st.text(alphabet=st.characters(whitelist_categories=("L", "N"), whitelist_characters="-_:."), min_size=1, max_size=12),
    min_size=1,
    max_size=6,
)


class TestIntegerCoercionProperties:
    @given(value=int32, padding=st.sampled_from(["", " ", "\t"]))
    @STANDARD_SETTINGS
    def test_string_and_int_agree(self, value: int, padding: str) -> None:
        assert coerce_value("k", ConfigType.INT, f"{padding}{value}{padding}") == coerce_value("k", ConfigType.INT, value) == value

    @given(value=outside_int32)
    @STANDARD_SETTINGS
    def test_out_of_range_rejected(self, value: int) -> None:
        for raw in (value, str(value)):
            try:
                coerce_value("k", ConfigType.INT, raw)
            except ConfigurationError as e:
                assert e.key == "k"
            else:
                raise AssertionError(f"{raw!r} accepted as INT")


class TestListCoercionProperties:
    @given(items=list_items, separator=st.sampled_from([",", ", ", " ,"]))
    @STANDARD_SETTINGS
    def test_joined_list_splits_back(self, items: list[str], separator: str) -> None:
        assert coerce_value("k", ConfigType.LIST, separator.join(items)) == items
