"""
Core datatypes used by the trade engine.

These datatypes are intentionally minimal and immutable so that quoting and
aggregation logic can remain deterministic and testable.

Notes:
- Amounts are CurrencyAmount (exact rationals in raw units).
- `route` fields hold route facades (see routes.py); typed loosely here so the
  core package stays free of engine imports.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .amounts import CurrencyAmount


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class TradeType(Enum):
    """Which side of the trade is fixed by the caller."""
    EXACT_INPUT = "EXACT_INPUT"
    EXACT_OUTPUT = "EXACT_OUTPUT"


class Protocol(Enum):
    """AMM protocol family of a route."""
    V2 = "V2"
    V3 = "V3"
    MIXED = "MIXED"
    V4 = "V4"


#: Canonical order of protocol groups inside a Trade.
PROTOCOL_ORDER = (Protocol.V2, Protocol.V3, Protocol.MIXED, Protocol.V4)


# ---------------------------------------------------------------------------
# Legs and swaps
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Leg:
    """An unquoted leg: a route plus the caller-fixed amount (input or output)."""

    route: Any
    amount: CurrencyAmount


@dataclass(frozen=True)
class Swap:
    """A resolved leg.

    `input_amount` is tagged with the route's declared input currency and
    `output_amount` with its declared output currency.
    """

    route: Any
    input_amount: CurrencyAmount
    output_amount: CurrencyAmount


@dataclass(frozen=True)
class TradeAmounts:
    """Trade totals plus the portions that cross the native boundary.

    `input_amount_native` / `output_amount_native` are None unless the trade's
    input / output currency is native.
    """

    input_amount: CurrencyAmount
    output_amount: CurrencyAmount
    input_amount_native: Optional[CurrencyAmount] = None
    output_amount_native: Optional[CurrencyAmount] = None


__all__ = [
    "TradeType",
    "Protocol",
    "PROTOCOL_ORDER",
    "Leg",
    "Swap",
    "TradeAmounts",
]
