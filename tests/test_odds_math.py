from __future__ import annotations

import math

import pytest

from goal_card.odds_math import (
    ev_from_prob_and_decimal,
    hold_from_decimal_pair,
    implied_prob_from_decimal,
    no_vig_probability,
    normalize_prob_pair,
)


@pytest.mark.parametrize(
    ("price", "expected"),
    [
        (2.0, 0.5),
        (4.0, 0.25),
        (1.0, None),
        (0.5, None),
        (None, None),
    ],
)
def test_implied_prob_from_decimal(price: float | None, expected: float | None) -> None:
    assert implied_prob_from_decimal(price) == expected


@pytest.mark.parametrize(
    ("price", "opposite_price"),
    [(1.18, 4.60), (1.62, 2.23), (1.01, 30.0), (2.0, 2.0), (11.0, 1.05)],
)
def test_no_vig_probability_is_bounded_and_complementary(
    price: float, opposite_price: float
) -> None:
    forward = no_vig_probability(price, opposite_price)
    backward = no_vig_probability(opposite_price, price)

    assert 0.0 < forward < 1.0
    assert forward + backward == pytest.approx(1.0)


def test_no_vig_probability_removes_margin() -> None:
    assert no_vig_probability(1.18, 4.60) == pytest.approx(4.60 / 5.78)
    assert no_vig_probability(1.9, 1.9) == pytest.approx(0.5)


def test_no_vig_probability_uses_absolute_opposite_price() -> None:
    assert no_vig_probability(1.5, -3.0) == pytest.approx(no_vig_probability(1.5, 3.0))


def test_no_vig_probability_degenerate_pair_is_nan() -> None:
    assert math.isnan(no_vig_probability(math.inf, math.inf))


def test_normalize_prob_pair_handles_zero_total() -> None:
    assert normalize_prob_pair(0.0, 0.0) == (0.5, 0.5)


def test_normalize_prob_pair_normalizes_values() -> None:
    over, under = normalize_prob_pair(0.55, 0.6)

    assert round(over + under, 6) == 1.0
    assert over == pytest.approx(0.4782608695652174)


def test_hold_from_decimal_pair() -> None:
    assert hold_from_decimal_pair(1.9, 1.9) == pytest.approx(0.0526315789)
    assert hold_from_decimal_pair(1.0, 1.9) is None


def test_ev_from_prob_and_decimal() -> None:
    assert ev_from_prob_and_decimal(0.5, 2.1) == pytest.approx(0.05)


@pytest.mark.parametrize("probability,price", [(None, 2.0), (0.0, 2.0), (1.0, 2.0), (0.55, 1.0)])
def test_ev_from_prob_and_decimal_invalid_inputs(
    probability: float | None, price: float | None
) -> None:
    assert ev_from_prob_and_decimal(probability, price) is None
