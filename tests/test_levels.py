"""Tests for support and resistance detection."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from marketpulse.analysis.levels import find_resistances, find_supports

LOWS = [10.0, 9.0, 8.0, 9.0, 10.0, 11.0, 7.0, 11.0, 12.0, 13.0]
HIGHS = [20.0, 21.0, 22.0, 21.0, 20.0, 19.0, 23.0, 19.0, 18.0, 17.0]


class TestSupports:
    """Tests for find_supports."""

    def test_local_minima_nearest_first(self):
        assert find_supports(LOWS, 15.0) == [8.0, 7.0]

    def test_synthetic_levels_fill_in(self):
        levels = find_supports(LOWS, 7.5)

        assert levels == pytest.approx([7.125, 7.0, 6.75])

    def test_level_at_price_is_excluded(self):
        levels = find_supports(LOWS, 8.0)

        assert 8.0 not in levels
        assert all(level < 8.0 for level in levels)

    def test_short_series_uses_offsets(self):
        assert find_supports([5.0, 4.0, 3.0], 100.0) == pytest.approx([95.0, 90.0, 85.0])


class TestResistances:
    """Tests for find_resistances."""

    def test_local_maxima_nearest_first(self):
        assert find_resistances(HIGHS, 15.0) == [22.0, 23.0]

    def test_synthetic_levels_fill_in(self):
        levels = find_resistances(HIGHS, 22.5)

        assert levels == pytest.approx([23.0, 23.625, 24.75])


class TestLevelOrdering:
    """
    **Feature: indicator-engine, Property: level ordering**

    *For any* lows/highs and price, supports are strictly below price and
    descending, resistances strictly above and ascending, at most three each.
    """

    @given(
        values=st.lists(st.floats(min_value=0.01, max_value=1000.0), min_size=0, max_size=60),
        price=st.floats(min_value=0.01, max_value=1000.0),
    )
    @settings(max_examples=100, deadline=None)
    def test_ordering(self, values: list[float], price: float):
        supports = find_supports(values, price)
        resistances = find_resistances(values, price)

        assert len(supports) <= 3
        assert len(resistances) <= 3
        assert all(level < price for level in supports)
        assert all(level > price for level in resistances)
        assert supports == sorted(supports, reverse=True)
        assert resistances == sorted(resistances)
        assert len(set(supports)) == len(supports)
