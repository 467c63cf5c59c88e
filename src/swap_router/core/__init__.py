"""
Swap Router Core
================

Unified exports for integer-domain primitives and utilities.
All arithmetic is exact (int / Fraction); rounding happens only where a raw
on-chain amount is required.
Decimal helpers are provided *only* for I/O formatting.
"""

# NOTE:
#   The `core` package defines the currency, amount and price primitives used
#   across the engine. Decimal functions exist only for display.

# Integer-domain constants
from .constants import (
    MAX_UINT256,
    BIPS_BASE,
    PIPS_BASE,
    PAIR_FEE_KEEP_NUM,
    PAIR_FEE_DEN,
    FeeAmount,
    TICK_SPACINGS,
    ADDRESS_ZERO,
)

# Currencies
from .currency import (
    Token,
    NativeCurrency,
    Currency,
    WRAPPED_NATIVE,
    is_wrapped_native,
    same_wrapped,
    currency_key,
)

# Amount primitives
from .amounts import (
    CurrencyAmount,
    Ratio,
    sum_amounts,
)

# Price-like ratios
from .price import (
    Price,
    Percent,
    ZERO_PERCENT,
    ONE_HUNDRED_PERCENT,
)

# Decimal formatting helpers (non-core arithmetic)
from .fmt import (
    DEFAULT_DECIMAL_PRECISION,
    fmt_dec,
    fmt_significant,
    fmt_fixed,
)

# Core datatypes for quoting/aggregation
from .datatypes import (
    TradeType,
    Protocol,
    PROTOCOL_ORDER,
    Leg,
    Swap,
    TradeAmounts,
)

# Ordering utilities
from .ordering import (
    protocol_rank,
    stable_sort_by_protocol,
    first_duplicate,
)

# Core exceptions
from .exc import (
    AmountDomainError,
    InvariantViolation,
    TradeError,
    RouteError,
    InsufficientReservesError,
    InsufficientInputAmountError,
)

__all__ = [
    # constants
    "MAX_UINT256",
    "BIPS_BASE",
    "PIPS_BASE",
    "PAIR_FEE_KEEP_NUM",
    "PAIR_FEE_DEN",
    "FeeAmount",
    "TICK_SPACINGS",
    "ADDRESS_ZERO",
    # currency
    "Token",
    "NativeCurrency",
    "Currency",
    "WRAPPED_NATIVE",
    "is_wrapped_native",
    "same_wrapped",
    "currency_key",
    # amounts
    "CurrencyAmount",
    "Ratio",
    "sum_amounts",
    # price
    "Price",
    "Percent",
    "ZERO_PERCENT",
    "ONE_HUNDRED_PERCENT",
    # fmt
    "DEFAULT_DECIMAL_PRECISION",
    "fmt_dec",
    "fmt_significant",
    "fmt_fixed",
    # datatypes
    "TradeType",
    "Protocol",
    "PROTOCOL_ORDER",
    "Leg",
    "Swap",
    "TradeAmounts",
    # ordering
    "protocol_rank",
    "stable_sort_by_protocol",
    "first_duplicate",
    # exceptions
    "AmountDomainError",
    "InvariantViolation",
    "TradeError",
    "RouteError",
    "InsufficientReservesError",
    "InsufficientInputAmountError",
]
