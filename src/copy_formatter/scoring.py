# -*- coding: utf-8 -*-
"""
Word count accuracy scoring.
"""
from dataclasses import dataclass
from typing import Literal

# (max percent difference, score), checked in ascending order
ACCURACY_BREAKPOINTS = [
    (2, 100),
    (5, 95),
    (10, 85),
    (15, 75),
    (20, 65),
    (30, 50),
    (50, 30),
]

# Absolute differences shown as "Perfect" / plain "N words over"
PERFECT_WORD_MARGIN = 10
CLOSE_WORD_MARGIN = 50
NEAR_PERCENT_MARGIN = 20


def calculate_word_count_accuracy(actual: int, target: int) -> int:
    """
    Score how close a word count is to its target, from 0 to 100.

    A target of zero or less means there is nothing to miss, so the
    score is 100.
    """
    if target <= 0:
        return 100

    percent_difference = abs(actual - target) * 100 / target

    for max_percent, score in ACCURACY_BREAKPOINTS:
        if percent_difference <= max_percent:
            return score
    return 0


@dataclass
class WordCountStatus:
    """Display bucket for a word count badge."""

    level: Literal["perfect", "close", "near", "far"]
    message: str
    difference: int
    percent_difference: float


def word_count_status(actual: int, target: int | None) -> WordCountStatus | None:
    """Describe how far a word count is from its target, for display."""
    if not target or target <= 0:
        return None

    difference = actual - target
    distance = abs(difference)
    percent_difference = distance * 100 / target
    direction = "over" if difference > 0 else "under"

    if distance <= PERFECT_WORD_MARGIN:
        return WordCountStatus("perfect", "Perfect", difference, percent_difference)
    if distance <= CLOSE_WORD_MARGIN:
        return WordCountStatus("close", f"{distance} words {direction}", difference, percent_difference)
    if percent_difference <= NEAR_PERCENT_MARGIN:
        return WordCountStatus("near", f"{distance} words {direction}", difference, percent_difference)
    return WordCountStatus(
        "far",
        f"{distance} words {direction} ({percent_difference:.0f}%)",
        difference,
        percent_difference,
    )
