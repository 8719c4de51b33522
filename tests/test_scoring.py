# -*- coding: utf-8 -*-
"""
Tests for word count accuracy scoring.
"""
import pytest

from copy_formatter.scoring import calculate_word_count_accuracy, word_count_status


class TestCalculateWordCountAccuracy:
    """Tests for calculate_word_count_accuracy."""

    @pytest.mark.parametrize(
        "actual,expected",
        [
            (100, 100),
            (102, 100),
            (98, 100),
            (105, 95),
            (110, 85),
            (115, 75),
            (80, 65),
            (130, 50),
            (150, 30),
            (106, 85),
            (111, 75),
            (151, 0),
            (300, 0),
            (0, 0),
        ],
    )
    def test_breakpoints(self, actual, expected):
        """Scores follow the percent-difference breakpoints, bounds inclusive."""
        assert calculate_word_count_accuracy(actual, 100) == expected

    def test_non_positive_target_is_perfect(self):
        """A zero or negative target always scores 100."""
        assert calculate_word_count_accuracy(37, 0) == 100
        assert calculate_word_count_accuracy(37, -5) == 100

    def test_monotonic_in_distance(self):
        """Moving away from the target never raises the score."""
        scores = [calculate_word_count_accuracy(200 + offset, 200) for offset in range(0, 150, 3)]
        assert scores == sorted(scores, reverse=True)

    def test_symmetric(self):
        """Over and under by the same amount score the same."""
        assert calculate_word_count_accuracy(120, 100) == calculate_word_count_accuracy(80, 100)


class TestWordCountStatus:
    """Tests for word_count_status."""

    def test_no_target(self):
        """No status without a positive target."""
        assert word_count_status(120, None) is None
        assert word_count_status(120, 0) is None

    def test_perfect(self):
        """Within ten words is perfect."""
        status = word_count_status(105, 100)

        assert status.level == "perfect"
        assert status.message == "Perfect"
        assert status.difference == 5

    def test_close(self):
        """Within fifty words is close."""
        status = word_count_status(140, 100)

        assert status.level == "close"
        assert status.message == "40 words over"

    def test_near(self):
        """Within twenty percent is near."""
        status = word_count_status(460, 400)

        assert status.level == "near"
        assert status.message == "60 words over"
        assert status.percent_difference == pytest.approx(15.0)

    def test_far(self):
        """Beyond that the percentage is shown."""
        status = word_count_status(100, 200)

        assert status.level == "far"
        assert status.message == "100 words under (50%)"
        assert status.difference == -100
