"""Game Price Resolver — Resolution Façade"""

from gameprice.resolution.outcome import (
    Rejected,
    ResolutionOutcome,
    ResolutionStrategy,
    Resolved,
)
from gameprice.resolution.resolver import GamePriceResolver, resolve
from gameprice.resolution.strategies import (
    fallback_playstation_listing,
    live_playstation_listing,
    live_steam_listing,
)

__all__ = [
    "GamePriceResolver",
    "Rejected",
    "ResolutionOutcome",
    "ResolutionStrategy",
    "Resolved",
    "fallback_playstation_listing",
    "live_playstation_listing",
    "live_steam_listing",
    "resolve",
]
