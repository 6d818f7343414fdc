import pytest

from goal_card.outcomes import OUTCOME_KEYS
from goal_card.priors import (
    NEUTRAL_TEMPO,
    ProviderPrior,
    neutral_prior,
    prior_from_payload,
    prior_to_vector,
)


def test_baseline_prior_returns_base_constants() -> None:
    vector = prior_to_vector(ProviderPrior(source="base", tempo=2.45, weight=1.0))

    assert list(vector) == list(OUTCOME_KEYS)
    assert vector["O15"] == pytest.approx(0.78)
    assert vector["O25"] == pytest.approx(0.60)
    assert vector["U35"] == pytest.approx(0.72)
    assert vector["U45"] == pytest.approx(0.79)
    assert vector["HT_O05"] == pytest.approx(0.74)
    assert vector["HOME_O15"] == pytest.approx(0.66)
    assert vector["AWAY_O05"] == pytest.approx(0.62)


def test_tempo_adjustment_is_capped() -> None:
    fast = prior_to_vector(ProviderPrior(source="fast", tempo=9.0))
    slow = prior_to_vector(ProviderPrior(source="slow", tempo=0.0))

    assert fast["HT_O05"] == pytest.approx(0.74 + 0.06 * 0.4)
    assert slow["HT_O05"] == pytest.approx(0.74 - 0.06 * 0.4)
    assert fast["O15"] == pytest.approx(0.78 + 0.06)
    assert slow["U35"] == pytest.approx(0.72 + 0.06 * 0.6)


def test_extreme_ratings_are_clamped() -> None:
    strong = prior_to_vector(
        ProviderPrior(
            source="extreme",
            tempo=9.0,
            home_attack_rel=40.0,
            away_attack_rel=40.0,
            home_defense_rel=-40.0,
            away_defense_rel=-40.0,
        )
    )

    assert strong["O15"] == 0.97
    assert strong["O25"] == 0.93
    assert strong["U35"] == 0.35
    assert strong["U45"] == 0.55
    assert strong["HOME_O15"] == 0.95
    assert strong["AWAY_O05"] == 0.95


def test_provider_style_prior() -> None:
    vector = prior_to_vector(
        ProviderPrior(
            source="football-data.org",
            tempo=2.55,
            home_attack_rel=1.08,
            away_attack_rel=0.95,
            home_defense_rel=0.95,
            away_defense_rel=1.05,
            weight=0.35,
        )
    )
    tempo_adj = (2.55 - 2.45) * 0.06

    assert vector["O15"] == pytest.approx(0.78 + tempo_adj + 0.02 * (1.08 - 1.05))
    assert vector["O25"] == pytest.approx(0.60 + 0.8 * tempo_adj + 0.02 * (1.08 + 0.95 - 2.0))
    assert vector["HOME_O15"] == pytest.approx(0.66 + 0.05 * 0.08 - 0.03 * 0.05)
    assert vector["AWAY_O05"] == pytest.approx(0.62 - 0.04 * 0.05 + 0.02 * 0.05)


def test_neutral_prior_has_zero_weight() -> None:
    prior = neutral_prior("API-Football", note="error: boom")

    assert prior.weight == 0.0
    assert prior.tempo == NEUTRAL_TEMPO
    assert prior.note == "error: boom"


def test_negative_weight_rejected() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        ProviderPrior(source="bad", tempo=2.5, weight=-0.1)


def test_prior_from_payload_overlays_fields() -> None:
    fallback = ProviderPrior(source="feed", tempo=2.6, weight=0.2, note="configured")

    prior = prior_from_payload(
        {"tempo": "2.9", "homeAttackRel": 1.2, "weight": 0.5, "awayDefenseRel": None},
        fallback=fallback,
    )

    assert prior.source == "feed"
    assert prior.tempo == 2.9
    assert prior.home_attack_rel == 1.2
    assert prior.away_defense_rel == 1.0
    assert prior.weight == 0.5
    assert prior.note == "configured"


@pytest.mark.parametrize(
    "payload",
    [
        {"tempo": 2.6, "weight": float("inf")},
        {"tempo": "inf"},
        {"tempo": 2.6, "homeAttackRel": float("nan")},
        {"tempo": 2.6, "weight": "1e999"},
    ],
)
def test_prior_from_payload_rejects_non_finite_numbers(payload: dict) -> None:
    fallback = ProviderPrior(source="feed", tempo=2.6, weight=0.2)

    with pytest.raises(ValueError, match="invalid prior payload"):
        prior_from_payload(payload, fallback=fallback)


def test_infinite_weight_rejected() -> None:
    with pytest.raises(ValueError, match="finite"):
        ProviderPrior(source="bad", tempo=2.5, weight=float("inf"))
