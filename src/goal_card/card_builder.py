"""Assemble the blended p_card from a bookmaker anchor and provider priors."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Any

from goal_card.blend import BlendResult, WeightedCard, blend_cards
from goal_card.odds_math import no_vig_probability
from goal_card.outcomes import ANCHOR_MARKET_LABELS, clamp, make_vector, sample_pct, to_pct
from goal_card.priors import ProviderPrior, neutral_prior, prior_to_vector
from goal_card.providers.base import PriorProvider, RoutingHints
from goal_card.quotes import OddsQuote, find_quote

logger = logging.getLogger(__name__)

ANCHOR_SOURCE = "bookmaker-no-vig"
ANCHOR_NOTE = "Anchor from provided odds."
DEFAULT_ANCHOR_WEIGHT = 0.40
DEFAULT_PROVIDER_TIMEOUT_S = 6.0

ANCHOR_DEFAULTS: dict[str, float] = {
    "O15": 0.82,
    "O25": 0.62,
    "U35": 0.72,
    "U45": 0.78,
    "HOME_O15": 0.70,
    "AWAY_O05": 0.66,
}


@dataclass(frozen=True)
class CardRequest:
    quotes: tuple[OddsQuote, ...]
    fixture: str = ""
    home: str = ""
    away: str = ""
    hints: RoutingHints = field(default_factory=RoutingHints)

    def fixture_label(self) -> str:
        if self.fixture:
            return self.fixture
        return f"{self.home or 'Home'} vs {self.away or 'Away'}"


@dataclass(frozen=True)
class ProviderOutcome:
    """Settled result of one provider call: a prior, a skip, or an error."""

    source: str
    prior: ProviderPrior | None = None
    error: str | None = None

    @property
    def skipped(self) -> bool:
        return self.prior is None and self.error is None


@dataclass(frozen=True)
class CardReport:
    fixture: str
    blend: BlendResult
    cards: tuple[WeightedCard, ...]
    provider_count: int
    reasons: tuple[tuple[str, str], ...]

    def sources(self) -> list[dict[str, Any]]:
        return [
            {
                "name": card.source,
                "weight": card.weight,
                "sample": sample_pct(card.vector),
                "note": card.note,
            }
            for card in self.cards
        ]

    def to_payload(self) -> dict[str, Any]:
        return {
            "fixture": self.fixture,
            "p_card": self.blend.p_card(),
            "sources": self.sources(),
            "disagreement": self.blend.disagreement,
            "reasons": [{"key": key, "note": note} for key, note in self.reasons],
        }


def _anchor_probability(quotes: Sequence[OddsQuote], key: str) -> float:
    quote = find_quote(quotes, ANCHOR_MARKET_LABELS[key])
    if quote is None:
        return ANCHOR_DEFAULTS[key]
    value = no_vig_probability(quote.price, quote.opposite_price)
    if not math.isfinite(value):
        return ANCHOR_DEFAULTS[key]
    return value


def whole_pct(value: float) -> int:
    """Percent rounded half up, so 0.125 reads as 13."""
    return math.floor(value * 100 + 0.5)


def build_anchor_card(
    quotes: Sequence[OddsQuote], *, weight: float = DEFAULT_ANCHOR_WEIGHT
) -> WeightedCard:
    """Bookmaker no-vig card; missing or degenerate markets use static defaults."""
    values = {key: _anchor_probability(quotes, key) for key in ANCHOR_DEFAULTS}
    values["HT_O05"] = clamp(0.70 * values["O15"] + 0.05, 0.40, 0.95)
    return WeightedCard(
        vector=make_vector(values),
        weight=weight,
        source=ANCHOR_SOURCE,
        note=ANCHOR_NOTE,
    )


def card_for_outcome(outcome: ProviderOutcome) -> WeightedCard | None:
    """Fold a provider outcome into a card; failures become zero-weight neutral cards."""
    if outcome.error is not None:
        neutral = neutral_prior(outcome.source)
        return WeightedCard(
            vector=prior_to_vector(neutral),
            weight=0.0,
            source=outcome.source,
            note=f"error: {outcome.error}",
        )
    prior = outcome.prior
    if prior is None:
        return None
    if not prior.weight:
        return WeightedCard(
            vector=prior_to_vector(neutral_prior(prior.source)),
            weight=0.0,
            source=prior.source,
            note=prior.note,
        )
    return WeightedCard(
        vector=prior_to_vector(prior),
        weight=prior.weight,
        source=prior.source,
        note=prior.note,
    )


def _settle(provider: PriorProvider, future: Future[ProviderPrior | None]) -> ProviderOutcome:
    if not future.done():
        future.cancel()
        logger.warning("provider=%s timed out", provider.name)
        return ProviderOutcome(source=provider.name, error="timed out")
    try:
        prior = future.result()
    except Exception as exc:
        logger.warning("provider=%s failed: %s", provider.name, exc)
        return ProviderOutcome(source=provider.name, error=str(exc) or "fetch failed")
    if prior is None:
        logger.debug("provider=%s skipped", provider.name)
    return ProviderOutcome(source=provider.name, prior=prior)


def fetch_provider_outcomes(
    providers: Sequence[PriorProvider],
    hints: RoutingHints,
    *,
    timeout_s: float = DEFAULT_PROVIDER_TIMEOUT_S,
    max_workers: int = 4,
) -> list[ProviderOutcome]:
    """Call every provider concurrently; results keep provider order."""
    if not providers:
        return []
    executor = ThreadPoolExecutor(
        max_workers=max(1, min(max_workers, len(providers))),
        thread_name_prefix="goal-card-provider",
    )
    try:
        futures = [executor.submit(provider.fetch_prior, hints) for provider in providers]
        wait(futures, timeout=timeout_s)
        return [
            _settle(provider, future) for provider, future in zip(providers, futures, strict=True)
        ]
    finally:
        executor.shutdown(wait=False, cancel_futures=True)


class CardBuilder:
    """Blend the bookmaker anchor with whatever providers are configured."""

    def __init__(
        self,
        providers: Sequence[PriorProvider] = (),
        *,
        anchor_weight: float = DEFAULT_ANCHOR_WEIGHT,
        timeout_s: float = DEFAULT_PROVIDER_TIMEOUT_S,
        max_workers: int = 4,
    ) -> None:
        self.providers = tuple(providers)
        self.anchor_weight = anchor_weight
        self.timeout_s = timeout_s
        self.max_workers = max_workers

    def build(self, request: CardRequest) -> CardReport:
        anchor = build_anchor_card(request.quotes, weight=self.anchor_weight)
        outcomes = fetch_provider_outcomes(
            self.providers,
            request.hints,
            timeout_s=self.timeout_s,
            max_workers=self.max_workers,
        )
        cards = [anchor]
        for outcome in outcomes:
            card = card_for_outcome(outcome)
            if card is not None:
                cards.append(card)
        provider_count = sum(1 for outcome in outcomes if not outcome.skipped)

        blend = blend_cards(cards)
        reasons = (
            ("anchor", "Anchored on bookmaker no-vig from provided odds."),
            ("providers", f"Blended {provider_count} extra provider(s)."),
            ("coverage", f"Coverage {to_pct(blend.coverage)} (weights normalized)."),
            ("disagree", f"Disagreement {whole_pct(blend.disagreement)}% (lower is better)."),
        )
        return CardReport(
            fixture=request.fixture_label(),
            blend=blend,
            cards=tuple(cards),
            provider_count=provider_count,
            reasons=reasons,
        )
