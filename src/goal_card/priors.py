"""Provider strength priors and their conversion into outcome probabilities.

The conversion is a fixed linear heuristic anchored at league-average
baselines. Each outcome is clamped to its own valid range.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from goal_card.outcomes import ProbabilityVector, clamp, make_vector
from goal_card.util.parsing import safe_float, safe_text

BASELINE_TEMPO = 2.45
NEUTRAL_TEMPO = 2.55

PRIOR_FIELDS = (
    "tempo",
    "homeAttackRel",
    "awayAttackRel",
    "homeDefenseRel",
    "awayDefenseRel",
)


@dataclass(frozen=True)
class ProviderPrior:
    """Team-strength and tempo ratings reported by one provider.

    Ratings are relative to league average (1.0). Attack above 1.0 is
    stronger; defense below 1.0 is stronger.
    """

    source: str
    tempo: float
    home_attack_rel: float = 1.0
    away_attack_rel: float = 1.0
    home_defense_rel: float = 1.0
    away_defense_rel: float = 1.0
    weight: float = 0.0
    note: str = ""

    def __post_init__(self) -> None:
        if not math.isfinite(self.weight) or self.weight < 0:
            raise ValueError(
                f"prior weight must be finite and non-negative: {self.source}={self.weight}"
            )


def neutral_prior(source: str, *, note: str = "") -> ProviderPrior:
    """League-average prior carried by failed or zero-weight providers."""
    return ProviderPrior(source=source, tempo=NEUTRAL_TEMPO, weight=0.0, note=note)


def _finite(value: float, *, name: str) -> float:
    if not math.isfinite(value):
        raise ValueError(f"invalid prior payload: {name}={value}")
    return value


def prior_from_payload(
    payload: dict[str, Any], *, fallback: ProviderPrior
) -> ProviderPrior:
    """Overlay camelCase prior fields from a provider payload onto a fallback.

    Non-finite numbers raise `ValueError`; unparseable ones keep the fallback.
    """
    values = {
        "tempo": fallback.tempo,
        "homeAttackRel": fallback.home_attack_rel,
        "awayAttackRel": fallback.away_attack_rel,
        "homeDefenseRel": fallback.home_defense_rel,
        "awayDefenseRel": fallback.away_defense_rel,
    }
    for name in PRIOR_FIELDS:
        parsed = safe_float(payload.get(name))
        if parsed is not None:
            values[name] = _finite(parsed, name=name)
    weight = safe_float(payload.get("weight"))
    if weight is not None:
        weight = _finite(weight, name="weight")
    note = safe_text(payload.get("note")) or fallback.note
    return ProviderPrior(
        source=fallback.source,
        tempo=values["tempo"],
        home_attack_rel=values["homeAttackRel"],
        away_attack_rel=values["awayAttackRel"],
        home_defense_rel=values["homeDefenseRel"],
        away_defense_rel=values["awayDefenseRel"],
        weight=max(0.0, weight) if weight is not None else fallback.weight,
        note=note,
    )


def prior_to_vector(prior: ProviderPrior) -> ProbabilityVector:
    """Convert tempo and team strengths into rough totals probabilities."""
    home_att = prior.home_attack_rel
    away_att = prior.away_attack_rel
    home_def = prior.home_defense_rel
    away_def = prior.away_defense_rel

    # +-6pp to overs
    tempo_adj = clamp((prior.tempo - BASELINE_TEMPO) * 0.06, -0.06, 0.06)
    return make_vector(
        {
            "O15": clamp(0.78 + tempo_adj + 0.02 * (home_att - away_def), 0.55, 0.97),
            "O25": clamp(
                0.60 + tempo_adj * 0.8 + 0.02 * (home_att + away_att - home_def - away_def),
                0.38,
                0.93,
            ),
            "U35": clamp(0.76 - tempo_adj * 0.6 - 0.02 * (home_att + away_att), 0.35, 0.96),
            "U45": clamp(0.82 - tempo_adj * 0.5 - 0.015 * (home_att + away_att), 0.55, 0.98),
            "HT_O05": clamp(0.74 + tempo_adj * 0.4, 0.42, 0.95),
            "HOME_O15": clamp(
                0.66 + 0.05 * (home_att - 1) - 0.03 * (away_def - 1), 0.30, 0.95
            ),
            "AWAY_O05": clamp(
                0.62 + 0.04 * (away_att - 1) - 0.02 * (home_def - 1), 0.25, 0.95
            ),
        }
    )
