"""
Game Price Resolver — Error Kinds

Every failure a resolution can end in. ScrapeFailed never reaches a
caller: the PlayStation fallback absorbs it. Unexpected Steam-path
errors surface as the bare ResolutionFailed base.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gameprice.models.listing import Platform


class ResolutionFailed(Exception):
    """Base class for all resolution errors. The message is user-facing."""


class UnsupportedStore(ResolutionFailed):
    """Input matches neither the Steam nor the PlayStation grammar."""

    def __init__(self, raw_input: str) -> None:
        self.raw_input = raw_input
        super().__init__("Unsupported store URL")


class IdentifierNotFound(ResolutionFailed):
    """The platform was recognised but no product identifier could be extracted."""

    def __init__(self, platform: Platform, raw_input: str) -> None:
        self.platform = platform
        self.raw_input = raw_input
        super().__init__(f"Could not extract {platform.value} identifier from input")


class UpstreamUnavailable(ResolutionFailed):
    """The Steam app-details API failed or reported a non-success payload."""


class ScrapeFailed(ResolutionFailed):
    """The PlayStation product page could not be fetched."""
