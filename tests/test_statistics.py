"""
Tests for summary statistic helpers.
"""

import pytest
from propscope.calculations import statistics


class TestMedian:
    def test_even_count_averages_middle(self):
        assert statistics.median([10, 20, 30, 40]) == 25

    def test_odd_count_takes_middle(self):
        assert statistics.median([10, 20, 30]) == 20

    def test_unsorted_input(self):
        assert statistics.median([40, 10, 30, 20]) == 25

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            statistics.median([])


class TestMode:
    def test_tie_reports_all(self):
        """Every value tied at the top frequency is reported."""
        assert statistics.mode([5, 5, 5, 7, 7, 7]) == [5, 7]
        assert statistics.format_mode(statistics.mode([5, 5, 5, 7, 7, 7])) == "5, 7"

    def test_all_distinct_has_no_mode(self):
        assert statistics.mode([1, 2, 3]) == []
        assert statistics.format_mode(statistics.mode([1, 2, 3])) == "N/A"

    def test_single_value_has_no_mode(self):
        assert statistics.mode([2500]) == []

    def test_single_winner(self):
        assert statistics.mode([2500, 2500, 2800]) == [2500]

    def test_sorted_ascending(self):
        assert statistics.mode([9, 9, 3, 3, 6]) == [3, 9]

    def test_format_fractional(self):
        assert statistics.format_mode([2500.5, 2600]) == "2500.5, 2600"


class TestQuartiles:
    def test_linear_interpolation(self):
        """Position (n - 1) * q interpolates between neighbours."""
        result = statistics.quartiles([10, 20, 30, 40])
        assert result.worst == pytest.approx(17.5)
        assert result.current == pytest.approx(25)
        assert result.best == pytest.approx(32.5)

    def test_exact_positions(self):
        result = statistics.quartiles([1, 2, 3, 4, 5])
        assert (result.worst, result.current, result.best) == (2, 3, 4)

    def test_requires_more_than_three_samples(self):
        assert statistics.quartiles([50, 60, 70]) is None

    @pytest.mark.parametrize(
        "values",
        [[65, 40, 90, 55], [1, 1, 1, 1], [80, 20, 35, 50, 75, 10, 95], [3.5, 2.25, 9, 4.75, 4.75]],
    )
    def test_monotonic(self, values):
        result = statistics.quartiles(values)
        assert result.worst <= result.current <= result.best


class TestMean:
    def test_mean(self):
        assert statistics.mean([2500, 2500, 2800]) == pytest.approx(2600)

    def test_empty_is_zero(self):
        assert statistics.mean([]) == 0
