from __future__ import annotations

import pytest

from goal_card.card_builder import CardBuilder
from goal_card.service import handle_card_request, parse_card_request


class ExplodingBuilder:
    def build(self, request):
        raise RuntimeError("internal detail")


def test_anchor_only_request() -> None:
    status, body = handle_card_request(
        {"markets": [{"label": "FT Over 1.5", "odds": 1.18, "opp": 4.60}]},
        CardBuilder(),
    )

    assert status == 200
    assert len(body["sources"]) == 1
    assert body["disagreement"] == 0.0
    assert body["p_card"]["O15"] == pytest.approx(4.60 / 5.78)


@pytest.mark.parametrize("payload", [{"markets": []}, {}, {"markets": "FT Over 1.5"}, []])
def test_missing_markets_is_client_error(payload: object) -> None:
    status, body = handle_card_request(payload, CardBuilder())

    assert status == 400
    assert body == {"error": "No markets provided."}
    assert "p_card" not in body


def test_malformed_row_is_client_error() -> None:
    status, body = handle_card_request({"markets": [42]}, CardBuilder())

    assert status == 400
    assert body == {"error": "Invalid market row at index 0."}


def test_internal_fault_is_generic_client_error(caplog: pytest.LogCaptureFixture) -> None:
    status, body = handle_card_request(
        {"markets": [{"label": "FT Over 1.5", "odds": 1.18, "opp": 4.60}]},
        ExplodingBuilder(),  # type: ignore[arg-type]
    )

    assert status == 400
    assert body == {"error": "Bad request"}
    assert "p_card request failed" in caplog.text


def test_parse_card_request_routing_hints() -> None:
    request = parse_card_request(
        {
            "fixture": "Marseille vs PSG",
            "home": "Marseille",
            "away": "PSG",
            "leagueCode": "FRA1",
            "leagueId": "61",
            "markets": [{"label": "FT Over 2.5", "odds": 1.62, "opp": 2.23}],
        }
    )

    assert request.fixture_label() == "Marseille vs PSG"
    assert request.hints.league_code == "FRA1"
    assert request.hints.league_id == 61
    assert request.hints.fixture_key == "Marseille vs PSG"
    assert request.quotes[0].label == "FT Over 2.5"


def test_fixture_label_falls_back_to_teams() -> None:
    request = parse_card_request(
        {"home": "Lens", "markets": [{"label": "FT Over 2.5", "odds": 1.62, "opp": 2.23}]}
    )

    assert request.fixture_label() == "Lens vs Away"
