"""
Models package: exports the listing and identifier value types.
"""

from gameprice.models.listing import (
    NormalizedUrl,
    Platform,
    PlatformIdentifier,
    ProductListing,
    ProductType,
    StorefrontData,
)

__all__ = [
    "NormalizedUrl",
    "Platform",
    "PlatformIdentifier",
    "ProductListing",
    "ProductType",
    "StorefrontData",
]
