# Top-level API for swap_router (integer-domain).
"""
Top-level API for swap_router (integer-domain).

This module exposes the stable, production-facing interface:
  - Trade: aggregate of quoted legs across V2 / V3 / mixed / V4 routes
  - Route and its facades (RouteV2, RouteV3, RouteV4, MixedRoute)
  - Pool collaborators: Pair, Pool, V4Pool
  - Quoting entry points: quote_route, quote_legs, QuoteConfig

Core data types (currencies, amounts, prices) are exact int / Fraction and
live in `swap_router.core`.
"""

from __future__ import annotations

from .trade import Trade
from .routes import (
    Route,
    IRoute,
    RouteFacade,
    RouteV2,
    RouteV3,
    RouteV4,
    MixedRoute,
    path_currency,
)
from .pools import Pair, Pool, V4Pool
from .quoting import QuoteConfig, quote_route, quote_legs

# Core data types re-exported for convenience.
from .core import (
    Token,
    NativeCurrency,
    CurrencyAmount,
    Price,
    Percent,
    TradeType,
    Protocol,
    Leg,
    Swap,
    TradeAmounts,
    FeeAmount,
    TradeError,
    RouteError,
)

__all__ = [
    # aggregate
    "Trade",
    # routes
    "Route",
    "IRoute",
    "RouteFacade",
    "RouteV2",
    "RouteV3",
    "RouteV4",
    "MixedRoute",
    "path_currency",
    # pools
    "Pair",
    "Pool",
    "V4Pool",
    # quoting
    "QuoteConfig",
    "quote_route",
    "quote_legs",
    # core data types
    "Token",
    "NativeCurrency",
    "CurrencyAmount",
    "Price",
    "Percent",
    "TradeType",
    "Protocol",
    "Leg",
    "Swap",
    "TradeAmounts",
    "FeeAmount",
    "TradeError",
    "RouteError",
]
