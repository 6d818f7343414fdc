from goal_card.providers.base import PriorProvider, ProviderError, RoutingHints
from goal_card.providers.configured import ConfiguredPriorProvider
from goal_card.providers.registry import build_providers, provider_status

__all__ = [
    "ConfiguredPriorProvider",
    "PriorProvider",
    "ProviderError",
    "RoutingHints",
    "build_providers",
    "provider_status",
]
