from __future__ import annotations

import httpx

from goal_card.providers.base import PriorProvider
from goal_card.providers.configured import ConfiguredPriorProvider
from goal_card.runtime_config import RuntimeConfig
from goal_card.settings import Settings


def build_providers(
    runtime: RuntimeConfig,
    settings: Settings,
    *,
    transport: httpx.BaseTransport | None = None,
) -> list[PriorProvider]:
    """Materialize configured providers with their credentials resolved."""
    providers: list[PriorProvider] = []
    for config in runtime.providers:
        providers.append(
            ConfiguredPriorProvider(
                config,
                credential=settings.credential(config.credential),
                timeout_s=runtime.provider_timeout_s,
                transport=transport,
            )
        )
    return providers


def provider_status(runtime: RuntimeConfig, settings: Settings) -> list[dict[str, object]]:
    """Describe each configured provider without touching the network."""
    rows: list[dict[str, object]] = []
    for config in runtime.providers:
        rows.append(
            {
                "source": config.source,
                "credential": config.credential,
                "enabled": bool(settings.credential(config.credential)),
                "weight": config.weight,
                "url": config.url,
            }
        )
    return rows
