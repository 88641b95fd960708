"""
Game Price Resolver — Resolution Outcome

A resolution ends in exactly one of two terminal states:

- Resolved: a listing, tagged with the strategy that produced it
  ("live" from the storefront, or the PlayStation "fallback").
- Rejected: the ResolutionFailed that stopped it.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Union

from gameprice.errors import ResolutionFailed
from gameprice.models.listing import ProductListing


class ResolutionStrategy(str, Enum):
    LIVE = "live"
    FALLBACK = "fallback"


class Resolved(NamedTuple):
    listing: ProductListing
    strategy: ResolutionStrategy = ResolutionStrategy.LIVE


class Rejected(NamedTuple):
    error: ResolutionFailed


ResolutionOutcome = Union[Resolved, Rejected]
