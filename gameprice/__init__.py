"""
Game Price Resolver

Turns a Steam or PlayStation Store URL, or a bare product code, into a
normalized ProductListing priced under the shop's markdown policy.
"""

from gameprice.errors import (
    IdentifierNotFound,
    ResolutionFailed,
    ScrapeFailed,
    UnsupportedStore,
    UpstreamUnavailable,
)
from gameprice.models.listing import Platform, ProductListing, ProductType
from gameprice.resolution import GamePriceResolver, resolve

__version__ = "0.1.0"

__all__ = [
    "GamePriceResolver",
    "IdentifierNotFound",
    "Platform",
    "ProductListing",
    "ProductType",
    "ResolutionFailed",
    "ScrapeFailed",
    "UnsupportedStore",
    "UpstreamUnavailable",
    "resolve",
]
