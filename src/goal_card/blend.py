"""Weighted consensus over probability vectors, with coverage and disagreement."""

from __future__ import annotations

from collections.abc import Sequence
import math
from dataclasses import dataclass
from statistics import fmean, pstdev

from goal_card.outcomes import OUTCOME_KEYS, ProbabilityVector, clamp, make_vector

COVERAGE_WEIGHT_SCALE = 1.4
COVERAGE_MIN = 0.40
COVERAGE_MAX = 0.95
DISAGREEMENT_SCALE = 0.12


@dataclass(frozen=True)
class WeightedCard:
    """One source's probability vector and its raw blend weight."""

    vector: ProbabilityVector
    weight: float
    source: str
    note: str = ""

    def __post_init__(self) -> None:
        if not math.isfinite(self.weight) or self.weight < 0:
            raise ValueError(
                f"card weight must be finite and non-negative: {self.source}={self.weight}"
            )


@dataclass(frozen=True)
class BlendResult:
    vector: ProbabilityVector
    coverage: float
    disagreement: float
    weight_sum: float

    @property
    def has_signal(self) -> bool:
        """False when every card carried zero weight and the consensus is all-zero."""
        return self.weight_sum > 0

    def p_card(self) -> dict[str, float]:
        out: dict[str, float] = dict(self.vector)
        out["coverage"] = self.coverage
        return out


def coverage_for_weight_sum(weight_sum: float) -> float:
    """Heuristic confidence from total raw weight, independent of normalization."""
    return clamp(weight_sum / COVERAGE_WEIGHT_SCALE, COVERAGE_MIN, COVERAGE_MAX)


def disagreement_for_vectors(vectors: Sequence[ProbabilityVector]) -> float:
    """Mean per-outcome population stdev across unweighted vectors, scaled to [0, 1]."""
    per_key = [pstdev([vector.get(key, 0.0) for vector in vectors]) for key in OUTCOME_KEYS]
    return clamp(fmean(per_key) / DISAGREEMENT_SCALE, 0.0, 1.0)


def blend_cards(cards: Sequence[WeightedCard]) -> BlendResult:
    """Blend weighted cards into one consensus vector.

    A zero total weight is treated as 1 for normalization, so an all-zero-weight
    input produces an all-zero consensus (see `BlendResult.has_signal`).
    """
    if not cards:
        raise ValueError("blend requires at least one card")
    raw_sum = sum(card.weight for card in cards)
    weight_sum = raw_sum or 1.0
    normalized = [card.weight / weight_sum for card in cards]

    consensus: dict[str, float] = {}
    for key in OUTCOME_KEYS:
        total = 0.0
        for card, weight in zip(cards, normalized, strict=True):
            total += card.vector.get(key, 0.0) * weight
        consensus[key] = total

    return BlendResult(
        vector=make_vector(consensus),
        coverage=coverage_for_weight_sum(weight_sum),
        disagreement=disagreement_for_vectors([card.vector for card in cards]),
        weight_sum=raw_sum,
    )
