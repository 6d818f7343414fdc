"""Two-way odds quotes: request-row validation, text parsing and label lookup."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from goal_card.outcomes import normalize_label
from goal_card.util.parsing import safe_float, safe_text

_PIPE_RE = re.compile(r"\s*\|\s*")

# Accepted spellings for the two price fields of a request market row.
PRICE_FIELDS = ("odds", "price")
OPPOSITE_PRICE_FIELDS = ("opp", "oppositePrice", "opposite_price")


class RequestValidationError(ValueError):
    """Raised when a card request is malformed."""


@dataclass(frozen=True)
class OddsQuote:
    """One side of a two-outcome market together with its complement price."""

    label: str
    price: float
    opposite_price: float

    @property
    def key(self) -> str:
        return normalize_label(self.label)

    def is_valid(self) -> bool:
        return self.price > 1.0 and self.opposite_price > 1.0


def _first_present(row: dict[str, Any], names: Sequence[str]) -> Any:
    for name in names:
        if name in row:
            return row[name]
    return None


def quote_from_row(row: Any, *, index: int) -> OddsQuote | None:
    """Build a quote from one request row; invalid prices yield None."""
    if not isinstance(row, dict):
        raise RequestValidationError(f"Invalid market row at index {index}.")
    label = safe_text(row.get("label"))
    if not label:
        raise RequestValidationError(f"Invalid market row at index {index}.")
    price = safe_float(_first_present(row, PRICE_FIELDS))
    opposite = safe_float(_first_present(row, OPPOSITE_PRICE_FIELDS))
    if price is None or opposite is None:
        return None
    quote = OddsQuote(label=label, price=price, opposite_price=abs(opposite))
    if not quote.is_valid():
        return None
    return quote


def quotes_from_rows(rows: Any) -> list[OddsQuote]:
    """Validate the `markets` array of a card request.

    Rows whose prices are missing or not above 1.0 are excluded; structurally
    broken rows reject the whole request.
    """
    if not isinstance(rows, list) or not rows:
        raise RequestValidationError("No markets provided.")
    quotes: list[OddsQuote] = []
    for index, row in enumerate(rows):
        quote = quote_from_row(row, index=index)
        if quote is not None:
            quotes.append(quote)
    return quotes


def parse_quote_text(text: str) -> list[OddsQuote]:
    """Parse pasted `Market | Odds | Opp` lines into valid quotes."""
    quotes: list[OddsQuote] = []
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        parts = _PIPE_RE.split(line)
        if len(parts) < 3:
            continue
        label = parts[0].strip()
        price = safe_float(parts[1])
        opposite = safe_float(parts[2])
        if not label or price is None or opposite is None:
            continue
        quote = OddsQuote(label=label, price=price, opposite_price=abs(opposite))
        if quote.is_valid():
            quotes.append(quote)
    return quotes


def find_quote(quotes: Iterable[OddsQuote], label: str) -> OddsQuote | None:
    """Return the first quote whose label matches, ignoring case and padding."""
    wanted = normalize_label(label)
    for quote in quotes:
        if quote.key == wanted:
            return quote
    return None
