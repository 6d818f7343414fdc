"""Transport-free handler for p_card requests."""

from __future__ import annotations

import logging
from typing import Any

from goal_card.card_builder import CardBuilder, CardRequest
from goal_card.providers.base import RoutingHints
from goal_card.quotes import RequestValidationError, quotes_from_rows
from goal_card.util.parsing import safe_int, safe_text

logger = logging.getLogger(__name__)

STATUS_OK = 200
STATUS_BAD_REQUEST = 400
GENERIC_ERROR = "Bad request"


def parse_card_request(payload: Any) -> CardRequest:
    """Validate a decoded request body into a `CardRequest`."""
    if not isinstance(payload, dict):
        raise RequestValidationError("No markets provided.")
    quotes = quotes_from_rows(payload.get("markets"))
    home = safe_text(payload.get("home"))
    away = safe_text(payload.get("away"))
    fixture = safe_text(payload.get("fixture"))
    hints = RoutingHints(
        home=home,
        away=away,
        league_code=safe_text(payload.get("leagueCode")),
        league_id=safe_int(payload.get("leagueId")),
        fixture_key=safe_text(payload.get("fixtureKey")) or fixture,
    )
    return CardRequest(
        quotes=tuple(quotes),
        fixture=fixture,
        home=home,
        away=away,
        hints=hints,
    )


def handle_card_request(payload: Any, builder: CardBuilder) -> tuple[int, dict[str, Any]]:
    """Return `(status, body)`; every failure maps to a client error."""
    try:
        request = parse_card_request(payload)
        report = builder.build(request)
    except RequestValidationError as exc:
        return STATUS_BAD_REQUEST, {"error": str(exc)}
    except Exception:
        logger.exception("p_card request failed")
        return STATUS_BAD_REQUEST, {"error": GENERIC_ERROR}
    return STATUS_OK, report.to_payload()
