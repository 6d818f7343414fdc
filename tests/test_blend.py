import pytest

from goal_card.blend import (
    COVERAGE_MAX,
    COVERAGE_MIN,
    WeightedCard,
    blend_cards,
    coverage_for_weight_sum,
)
from goal_card.outcomes import OUTCOME_KEYS


def _flat(value: float) -> dict[str, float]:
    return {key: value for key in OUTCOME_KEYS}


def _card(vector: dict[str, float], weight: float, source: str = "src") -> WeightedCard:
    return WeightedCard(vector=vector, weight=weight, source=source)


def test_single_card_blend_is_identity() -> None:
    vector = {key: 0.5 + idx * 0.05 for idx, key in enumerate(OUTCOME_KEYS)}

    result = blend_cards([_card(vector, 0.4)])

    assert result.vector == vector
    assert result.disagreement == 0.0
    assert result.coverage == COVERAGE_MIN
    assert result.has_signal is True


def test_weighted_consensus() -> None:
    result = blend_cards([_card(_flat(0.8), 0.4), _card(_flat(0.6), 0.2)])

    for key in OUTCOME_KEYS:
        assert result.vector[key] == pytest.approx((0.8 * 0.4 + 0.6 * 0.2) / 0.6)


def test_zero_weight_card_does_not_move_consensus_but_counts_for_disagreement() -> None:
    result = blend_cards([_card(_flat(0.8), 0.4), _card(_flat(0.56), 0.0, "failed")])

    assert result.vector == _flat(0.8)
    assert result.disagreement == pytest.approx(1.0)


def test_disagreement_ignores_weights() -> None:
    light = blend_cards([_card(_flat(0.70), 1.0), _card(_flat(0.82), 0.01)])
    heavy = blend_cards([_card(_flat(0.70), 0.01), _card(_flat(0.82), 1.0)])

    assert light.disagreement == pytest.approx(0.5)
    assert heavy.disagreement == pytest.approx(light.disagreement)


def test_all_zero_weights_collapse_to_zero_consensus() -> None:
    result = blend_cards([_card(_flat(0.7), 0.0), _card(_flat(0.7), 0.0)])

    assert result.vector == _flat(0.0)
    assert result.has_signal is False
    assert result.coverage == pytest.approx(1.0 / 1.4)


def test_missing_keys_count_as_zero() -> None:
    partial = {"O15": 0.9}

    result = blend_cards([_card(partial, 1.0)])

    assert result.vector["O15"] == 0.9
    assert result.vector["U45"] == 0.0


def test_coverage_is_monotone_and_bounded() -> None:
    sums = [0.0, 0.2, 0.4, 0.56, 0.8, 1.0, 1.2, 1.33, 1.4, 2.0, 10.0]
    values = [coverage_for_weight_sum(value) for value in sums]

    assert values == sorted(values)
    assert all(COVERAGE_MIN <= value <= COVERAGE_MAX for value in values)
    assert values[0] == COVERAGE_MIN
    assert values[-1] == COVERAGE_MAX


def test_more_sources_raise_coverage() -> None:
    anchor = _card(_flat(0.8), 0.4)
    one = blend_cards([anchor, _card(_flat(0.7), 0.35)])
    two = blend_cards([anchor, _card(_flat(0.7), 0.35), _card(_flat(0.7), 0.45)])

    assert one.coverage == pytest.approx(0.75 / 1.4)
    assert two.coverage == pytest.approx(1.2 / 1.4)


def test_p_card_adds_coverage() -> None:
    p_card = blend_cards([_card(_flat(0.8), 0.7)]).p_card()

    assert list(p_card) == [*OUTCOME_KEYS, "coverage"]
    assert p_card["coverage"] == pytest.approx(0.5)


def test_blend_requires_cards() -> None:
    with pytest.raises(ValueError, match="at least one card"):
        blend_cards([])


def test_negative_card_weight_rejected() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        _card(_flat(0.5), -1.0)


def test_infinite_card_weight_rejected() -> None:
    with pytest.raises(ValueError, match="finite"):
        _card(_flat(0.5), float("inf"))
