"""Game Price Resolver — API clients."""

from gameprice.pipeline.steam import SteamClient, parse_app_details

__all__ = ["SteamClient", "parse_app_details"]
