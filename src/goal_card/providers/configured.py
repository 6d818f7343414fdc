"""Configuration-driven prior provider backed by an optional HTTP endpoint."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from goal_card.priors import ProviderPrior, prior_from_payload
from goal_card.providers.base import ProviderError, RoutingHints
from goal_card.runtime_config import ProviderConfig

logger = logging.getLogger(__name__)

USER_AGENT = "goal-card/0.1.0"


def baseline_prior(config: ProviderConfig) -> ProviderPrior:
    return ProviderPrior(
        source=config.source,
        tempo=config.tempo,
        home_attack_rel=config.home_attack_rel,
        away_attack_rel=config.away_attack_rel,
        home_defense_rel=config.home_defense_rel,
        away_defense_rel=config.away_defense_rel,
        weight=config.weight,
        note=config.note,
    )


class ConfiguredPriorProvider:
    """Prior provider gated on a credential.

    With a `url`, the endpoint is called first; a JSON object carrying prior
    fields overrides the configured ratings, any other successful payload keeps
    them. Without a `url`, the configured ratings are returned directly.
    """

    def __init__(
        self,
        config: ProviderConfig,
        *,
        credential: str,
        timeout_s: float = 6.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.config = config
        self.name = config.source
        self._credential = credential.strip()
        self._timeout_s = timeout_s
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self._credential)

    def _headers(self) -> dict[str, str]:
        headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
        headers.update(dict(self.config.headers))
        if self.config.auth_header:
            headers[self.config.auth_header] = self._credential
        return headers

    def _get_json(self, hints: RoutingHints) -> Any:
        url = self.config.url
        try:
            with httpx.Client(timeout=self._timeout_s, transport=self._transport) as client:
                response = client.get(url, headers=self._headers(), params=hints.query_params())
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as exc:
            raise ProviderError(
                f"{exc.response.status_code} {exc.response.reason_phrase}".strip()
            ) from exc
        except httpx.TimeoutException as exc:
            raise ProviderError(f"timed out after {self._timeout_s:g}s") from exc
        except httpx.HTTPError as exc:
            raise ProviderError(f"transport error: {exc}") from exc
        except ValueError as exc:
            raise ProviderError("invalid JSON payload") from exc

    def fetch_prior(self, hints: RoutingHints) -> ProviderPrior | None:
        if not self.enabled:
            logger.debug("provider=%s skipped: no credential", self.name)
            return None
        fallback = baseline_prior(self.config)
        if not self.config.url:
            return fallback
        payload = self._get_json(hints)
        if isinstance(payload, dict) and "tempo" in payload:
            try:
                return prior_from_payload(payload, fallback=fallback)
            except ValueError as exc:
                raise ProviderError(str(exc)) from exc
        return fallback
