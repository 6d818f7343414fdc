"""Shared odds conversion and EV math helpers."""

from __future__ import annotations

import math


def implied_prob_from_decimal(price: float | None) -> float | None:
    """Convert decimal odds to implied probability."""
    if price is None or price <= 1.0:
        return None
    return 1.0 / price


def no_vig_probability(price: float, opposite_price: float) -> float:
    """De-margin one side of a two-way decimal quote.

    Returns ``nan`` when both implied probabilities vanish; callers treat that
    as unavailable and substitute their own default.
    """
    a = 1.0 / price
    b = 1.0 / abs(opposite_price)
    total = a + b
    if total > 0:
        return a / total
    return math.nan


def normalize_prob_pair(over_prob: float, under_prob: float) -> tuple[float, float]:
    """Normalize an over/under implied-probability pair to no-vig."""
    total = over_prob + under_prob
    if total <= 0:
        return 0.5, 0.5
    return over_prob / total, under_prob / total


def hold_from_decimal_pair(price: float, opposite_price: float) -> float | None:
    """Bookmaker margin carried by a two-way decimal quote."""
    a = implied_prob_from_decimal(price)
    b = implied_prob_from_decimal(abs(opposite_price))
    if a is None or b is None:
        return None
    return (a + b) - 1.0


def ev_from_prob_and_decimal(probability: float | None, price: float | None) -> float | None:
    """Compute 1-unit expected value from hit probability and decimal price."""
    if probability is None or probability <= 0 or probability >= 1:
        return None
    if price is None or price <= 1.0:
        return None
    return (probability * (price - 1.0)) - (1.0 - probability)
