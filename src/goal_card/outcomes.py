"""Fixed goal-total outcome set shared by every probability vector."""

from __future__ import annotations

from collections.abc import Mapping

OUTCOME_KEYS: tuple[str, ...] = (
    "O15",
    "O25",
    "U35",
    "U45",
    "HT_O05",
    "HOME_O15",
    "AWAY_O05",
)

SAMPLE_KEYS: tuple[str, ...] = ("O15", "O25", "U35", "U45")

# Market labels consumed by the bookmaker anchor, keyed by outcome.
ANCHOR_MARKET_LABELS: dict[str, str] = {
    "O15": "FT Over 1.5",
    "O25": "FT Over 2.5",
    "U35": "FT Under 3.5",
    "U45": "FT Under 4.5",
    "HOME_O15": "Home Over 1.5",
    "AWAY_O05": "Away Over 0.5",
}

# Scanner labels that can be read straight off a blended card.
CARD_MARKET_LABELS: dict[str, str] = {
    **ANCHOR_MARKET_LABELS,
    "HT_O05": "HT Over 0.5",
}

ProbabilityVector = dict[str, float]


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def normalize_label(label: str) -> str:
    """Case and whitespace-insensitive market label key."""
    return label.strip().lower()


def outcome_for_label(label: str) -> str | None:
    """Resolve a scanner market label to its outcome key, if any."""
    wanted = normalize_label(label)
    for key, market_label in CARD_MARKET_LABELS.items():
        if normalize_label(market_label) == wanted:
            return key
    return None


def make_vector(values: Mapping[str, float]) -> ProbabilityVector:
    """Project a mapping onto the outcome set in canonical order."""
    missing = [key for key in OUTCOME_KEYS if key not in values]
    if missing:
        raise ValueError(f"probability vector missing outcomes: {','.join(missing)}")
    return {key: float(values[key]) for key in OUTCOME_KEYS}


def to_pct(value: float) -> str:
    return f"{value * 100:.1f}%"


def sample_pct(vector: Mapping[str, float]) -> dict[str, str]:
    """Percent strings for the headline totals of one vector."""
    return {key: to_pct(float(vector.get(key, 0.0))) for key in SAMPLE_KEYS}
