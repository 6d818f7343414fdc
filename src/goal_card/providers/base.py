from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from goal_card.priors import ProviderPrior


class ProviderError(RuntimeError):
    """Raised when a configured provider was attempted and failed."""


@dataclass(frozen=True)
class RoutingHints:
    """Fixture identifiers a provider may use to locate its priors."""

    home: str = ""
    away: str = ""
    league_code: str = ""
    league_id: int | None = None
    fixture_key: str = ""

    def query_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if self.home:
            params["home"] = self.home
        if self.away:
            params["away"] = self.away
        if self.league_code:
            params["leagueCode"] = self.league_code
        if self.league_id is not None:
            params["leagueId"] = self.league_id
        if self.fixture_key:
            params["fixtureKey"] = self.fixture_key
        return params


class PriorProvider(Protocol):
    name: str

    def fetch_prior(self, hints: RoutingHints) -> ProviderPrior | None:
        """Return a prior, or None when the provider is not configured."""
        raise NotImplementedError
