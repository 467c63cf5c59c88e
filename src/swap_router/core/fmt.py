"""
Formatting helpers (non-core arithmetic).

Core arithmetic uses integer/rational types. Decimal here is only for
formatting and convenience (e.g., tests, logs, display).
"""

from decimal import Decimal, getcontext, localcontext, ROUND_HALF_UP
from fractions import Fraction

from .exc import AmountDomainError

# Debug printing control (formatting layer)
DEBUG_FMT = False

def _dbg(msg: str) -> None:
    if DEBUG_FMT:
        print(msg)


# ---------------------------------------------------------------------------
# Global Decimal precision (formatting only)
# ---------------------------------------------------------------------------

#: Default global precision (number of significant digits) for Decimal-based
#: formatting. This does not affect core arithmetic which uses integers.
DEFAULT_DECIMAL_PRECISION: int = 28
getcontext().prec = DEFAULT_DECIMAL_PRECISION


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def fmt_dec(x: Decimal, places: int = 18) -> str:
    """Format a Decimal in scientific notation with fixed fractional digits.

    The output is stable for logs and tests, e.g.:
      Decimal('1')        -> '1.000000000000000000E+0'
      Decimal('123456')   -> '1.234560000000000000E+5'
    """
    return format(x, f".{places}E")


def _round_half_up(fr: Fraction) -> int:
    sign = -1 if fr < 0 else 1
    a = abs(fr)
    return sign * ((2 * a.numerator + a.denominator) // (2 * a.denominator))


def fmt_significant(fr: Fraction, significant_digits: int = 6) -> str:
    """Render `fr` rounded half-up to `significant_digits`, trailing zeros stripped.

      Fraction(100, 3)  (5 digits) -> '33.333'
      Fraction(10, 33)*100 (3)     -> '30.3'
      Fraction(30)      (5 digits) -> '30'
    """
    if significant_digits <= 0:
        raise AmountDomainError("significant_digits must be > 0")
    if fr == 0:
        return "0"
    with localcontext() as ctx:
        ctx.prec = significant_digits
        ctx.rounding = ROUND_HALF_UP
        d = Decimal(fr.numerator) / Decimal(fr.denominator)
        d = d.normalize()
    _dbg(f"fmt_significant: {fr} -> {d}")
    return format(d, "f")


def fmt_fixed(fr: Fraction, decimal_places: int = 4) -> str:
    """Render `fr` rounded half-up to exactly `decimal_places` fractional digits."""
    if decimal_places < 0:
        raise AmountDomainError("decimal_places must be >= 0")
    q = _round_half_up(fr * (10 ** decimal_places))
    return format(Decimal(f"{q}E-{decimal_places}"), "f")


# ---------------------------------------------------------------------------
# Logging/display conversion helpers for amounts
# ---------------------------------------------------------------------------

def amount_to_decimal(a) -> Decimal:
    """Convert a CurrencyAmount into whole currency units for logging/printing only."""
    if a is None:
        raise AmountDomainError("amount_to_decimal(): received None")
    if a.numerator < 0:
        raise AmountDomainError("amount_to_decimal(): negative amount in non-negative domain")
    return (Decimal(a.numerator) / Decimal(a.denominator)).scaleb(-a.currency.decimals)


def fmt_exact(a) -> str:
    """Exact whole-unit rendering of the truncated raw amount (no rounding)."""
    decimals = a.currency.decimals
    return format(Decimal(f"{a.quotient}E-{decimals}"), "f")


__all__ = [
    "DEFAULT_DECIMAL_PRECISION",
    "fmt_dec",
    "fmt_significant",
    "fmt_fixed",
    "amount_to_decimal",
    "fmt_exact",
]
