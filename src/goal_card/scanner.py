"""Evaluate candidate quotes against their odds bands."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from goal_card.bands import CandidateDecision, decide
from goal_card.odds_math import no_vig_probability
from goal_card.outcomes import clamp, outcome_for_label
from goal_card.quotes import OddsQuote
from goal_card.runtime_config import ScannerConfig


@dataclass(frozen=True)
class ScanResult:
    decisions: tuple[CandidateDecision, ...]
    shortlist: tuple[CandidateDecision, ...]
    near_misses: tuple[CandidateDecision, ...]


def heuristic_blend(p_nv: float, config: ScannerConfig) -> float:
    """Placeholder user-model blend around the no-vig probability.

    The user estimate is the no-vig probability plus a fixed bias; the market
    side is the no-vig probability itself. The mix is kept inside a window
    around no-vig.
    """
    p_user = clamp(p_nv + config.user_bias, 0.01, 0.99)
    p_blend = config.user_weight * p_user + config.assist_weight * p_nv
    return clamp(p_blend, p_nv - config.clamp_below, p_nv + config.clamp_above)


def blended_probability_for(
    quote: OddsQuote,
    p_nv: float,
    *,
    p_card: Mapping[str, float] | None,
    config: ScannerConfig,
) -> float:
    if p_card is not None:
        key = outcome_for_label(quote.label)
        if key is not None and key in p_card:
            return float(p_card[key])
    return heuristic_blend(p_nv, config)


def scan_quotes(
    quotes: Sequence[OddsQuote],
    *,
    p_card: Mapping[str, float] | None = None,
    config: ScannerConfig | None = None,
) -> ScanResult:
    """Decide every quote, then rank passes by edge and misses by shortfall."""
    resolved = config or ScannerConfig()
    decisions: list[CandidateDecision] = []
    for quote in quotes:
        if not quote.is_valid():
            continue
        p_nv = no_vig_probability(quote.price, quote.opposite_price)
        blended = blended_probability_for(quote, p_nv, p_card=p_card, config=resolved)
        decisions.append(decide(quote, no_vig_probability=p_nv, blended_probability=blended))

    shortlist = sorted((row for row in decisions if row.passes), key=lambda row: -row.edge)
    near_misses = sorted((row for row in decisions if not row.passes), key=lambda row: row.shortfall)
    limit = max(0, resolved.near_miss_limit)
    return ScanResult(
        decisions=tuple(decisions),
        shortlist=tuple(shortlist),
        near_misses=tuple(near_misses[:limit]),
    )
