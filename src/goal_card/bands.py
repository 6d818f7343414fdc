"""Odds-band thresholds and the pass/fail rule for candidate bets."""

from __future__ import annotations

from dataclasses import dataclass

from goal_card.odds_math import ev_from_prob_and_decimal
from goal_card.quotes import OddsQuote


@dataclass(frozen=True)
class OddsBand:
    """Price bucket with its own minimum blended probability and edge."""

    band_id: str
    min_price: float | None
    max_price: float | None
    min_blended_probability: float
    min_edge: float

    def contains(self, price: float) -> bool:
        if self.min_price is None or self.max_price is None:
            return False
        return self.min_price <= price <= self.max_price


ODDS_BANDS: tuple[OddsBand, ...] = (
    OddsBand("micro", 1.11, 1.17, 0.90, 0.10),
    OddsBand("1.18–1.30", 1.18, 1.30, 0.79, 0.04),
    OddsBand("1.31–1.35", 1.31, 1.35, 0.78, 0.03),
    OddsBand("1.36–1.45", 1.36, 1.45, 0.78, 0.03),
)
OUTSIDE_BAND = OddsBand("outside", None, None, 0.78, 0.10)


@dataclass(frozen=True)
class CandidateDecision:
    quote: OddsQuote
    no_vig_probability: float
    blended_probability: float
    edge: float
    band: OddsBand
    passes: bool
    shortfall: float
    expected_value: float | None = None

    def to_row(self) -> dict[str, object]:
        return {
            "label": self.quote.label,
            "price": self.quote.price,
            "opposite_price": self.quote.opposite_price,
            "p_nv": self.no_vig_probability,
            "p_blend": self.blended_probability,
            "edge": self.edge,
            "band": self.band.band_id,
            "min_p": self.band.min_blended_probability,
            "min_edge": self.band.min_edge,
            "passes": self.passes,
            "shortfall": self.shortfall,
            "ev": self.expected_value,
        }


def band_for_price(price: float) -> OddsBand:
    """Classify a decimal price; bounds are inclusive and gaps fall outside."""
    for band in ODDS_BANDS:
        if band.contains(price):
            return band
    return OUTSIDE_BAND


def shortfall_for(
    band: OddsBand, *, blended_probability: float, edge: float
) -> float:
    """Distance to passing, summed across the probability and edge thresholds."""
    probability_gap = max(0.0, band.min_blended_probability - blended_probability)
    edge_gap = max(0.0, band.min_edge - edge)
    return probability_gap + edge_gap


def decide(
    quote: OddsQuote, *, no_vig_probability: float, blended_probability: float
) -> CandidateDecision:
    band = band_for_price(quote.price)
    edge = blended_probability - no_vig_probability
    passes = blended_probability >= band.min_blended_probability and edge >= band.min_edge
    shortfall = (
        0.0
        if passes
        else shortfall_for(band, blended_probability=blended_probability, edge=edge)
    )
    return CandidateDecision(
        quote=quote,
        no_vig_probability=no_vig_probability,
        blended_probability=blended_probability,
        edge=edge,
        band=band,
        passes=passes,
        shortfall=shortfall,
        expected_value=ev_from_prob_and_decimal(blended_probability, quote.price),
    )
