"""
Amount primitive: CurrencyAmount (currency-tagged rational quantity of raw units).

- Raw units: integers in the currency's smallest unit (wei-style) at the IO boundary.
- Intermediate values stay exact rationals (numerator / denominator); nothing is
  rounded until a caller asks for `quotient`.
- Non-negative domain: negative amounts are rejected at input; subtraction that
  would go below zero raises InvariantViolation.
- Currency tagging: arithmetic across different currencies fails fast.

# Alignment notes:
# - quotient truncates toward zero (floor in the non-negative domain); callers that
#   need to round IN amounts up use `_ceil_div` on raw integers instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import Union

from .constants import MAX_UINT256
from .currency import Currency, same_wrapped
from .exc import AmountDomainError, InvariantViolation

# Debug printing control
DEBUG_AMOUNTS = False

def _dbg(msg: str) -> None:
    if DEBUG_AMOUNTS:
        print(msg)


# ----------------------------
# Integer rounding helpers (centralised)
# ----------------------------

def _ceil_div(a: int, b: int) -> int:
    if a < 0 or b <= 0:
        raise AmountDomainError("_ceil_div expects a>=0 and b>0")
    return 0 if a == 0 else -(-a // b)


def _floor_div(a: int, b: int) -> int:
    if a < 0 or b <= 0:
        raise AmountDomainError("_floor_div expects a>=0 and b>0")
    return a // b


Ratio = Union[int, Fraction]


def _as_fraction(k: Ratio) -> Fraction:
    if isinstance(k, Fraction):
        return k
    if isinstance(k, int):
        return Fraction(k)
    # Percent / Price expose as_fraction()
    as_fraction = getattr(k, "as_fraction", None)
    if as_fraction is None:
        raise AmountDomainError(f"unsupported ratio type: {type(k).__name__}")
    return as_fraction()


# ----------------------------
# CurrencyAmount
# ----------------------------

@dataclass(frozen=True, eq=False)
class CurrencyAmount:
    """Exact rational amount of `currency`, in raw units (non-negative domain)."""
    currency: Currency
    numerator: int
    denominator: int = 1

    def __post_init__(self):
        if self.denominator == 0:
            raise ZeroDivisionError("CurrencyAmount denominator must be non-zero")
        if self.denominator < 0 or self.numerator < 0:
            raise AmountDomainError("CurrencyAmount must be >= 0")
        if self.numerator // self.denominator > MAX_UINT256:
            raise AmountDomainError("CurrencyAmount exceeds MAX_UINT256")

    # ------------- constructors -------------

    @classmethod
    def from_raw_amount(cls, currency: Currency, raw_amount: int) -> "CurrencyAmount":
        if not isinstance(raw_amount, int):
            raise AmountDomainError("raw amount must be int")
        return cls(currency, raw_amount, 1)

    @classmethod
    def from_fractional_amount(cls, currency: Currency, numerator: int, denominator: int) -> "CurrencyAmount":
        return cls(currency, numerator, denominator)

    @classmethod
    def zero(cls, currency: Currency) -> "CurrencyAmount":
        return cls(currency, 0, 1)

    @classmethod
    def _from_fraction(cls, currency: Currency, fr: Fraction) -> "CurrencyAmount":
        return cls(currency, fr.numerator, fr.denominator)

    # ------------- conversions -------------

    def as_fraction(self) -> Fraction:
        return Fraction(self.numerator, self.denominator)

    @property
    def quotient(self) -> int:
        """Whole raw units, truncated toward zero."""
        return _floor_div(self.numerator, self.denominator)

    @property
    def remainder(self) -> Fraction:
        return self.as_fraction() - self.quotient

    @property
    def wrapped(self) -> "CurrencyAmount":
        """Same value tagged with the wrapped form of the currency."""
        if self.currency.is_token:
            return self
        return CurrencyAmount(self.currency.wrapped, self.numerator, self.denominator)

    def retag(self, currency: Currency) -> "CurrencyAmount":
        """Re-tag between a native currency and its wrapped token (1:1)."""
        if currency == self.currency:
            return self
        if not same_wrapped(currency, self.currency):
            raise AmountDomainError(f"cannot re-tag {self.currency!r} as {currency!r}")
        return CurrencyAmount(currency, self.numerator, self.denominator)

    def to_decimal(self) -> Decimal:
        """Decimal representation in whole currency units (display/logs only)."""
        from .fmt import amount_to_decimal
        return amount_to_decimal(self)

    def to_exact(self) -> str:
        from .fmt import fmt_exact
        return fmt_exact(self)

    def to_significant(self, significant_digits: int = 6) -> str:
        from .fmt import fmt_significant
        return fmt_significant(self.as_fraction() / (10 ** self.currency.decimals), significant_digits)

    def to_fixed(self, decimal_places: int | None = None) -> str:
        from .fmt import fmt_fixed
        places = self.currency.decimals if decimal_places is None else decimal_places
        if places > self.currency.decimals:
            raise AmountDomainError("to_fixed: more decimal places than the currency supports")
        return fmt_fixed(self.as_fraction() / (10 ** self.currency.decimals), places)

    # ------------- predicates -------------

    def is_zero(self) -> bool:
        return self.numerator == 0

    def _check_currency(self, other: "CurrencyAmount") -> None:
        if not isinstance(other, CurrencyAmount):
            raise AmountDomainError("CurrencyAmount arithmetic requires CurrencyAmount operands")
        if other.currency != self.currency:
            raise AmountDomainError(
                f"currency mismatch: {self.currency!r} vs {other.currency!r}"
            )

    # ------------- comparisons -------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CurrencyAmount):
            return NotImplemented
        return self.currency == other.currency and self.as_fraction() == other.as_fraction()

    def __hash__(self) -> int:
        return hash((self.currency, self.as_fraction()))

    def __lt__(self, other: "CurrencyAmount") -> bool:
        self._check_currency(other)
        return self.as_fraction() < other.as_fraction()

    def __le__(self, other: "CurrencyAmount") -> bool:
        self._check_currency(other)
        return self.as_fraction() <= other.as_fraction()

    def __gt__(self, other: "CurrencyAmount") -> bool:
        self._check_currency(other)
        return self.as_fraction() > other.as_fraction()

    def __ge__(self, other: "CurrencyAmount") -> bool:
        self._check_currency(other)
        return self.as_fraction() >= other.as_fraction()

    # ------------- arithmetic (exact) -------------

    def __add__(self, other: "CurrencyAmount") -> "CurrencyAmount":
        self._check_currency(other)
        return CurrencyAmount._from_fraction(self.currency, self.as_fraction() + other.as_fraction())

    def __sub__(self, other: "CurrencyAmount") -> "CurrencyAmount":
        self._check_currency(other)
        diff = self.as_fraction() - other.as_fraction()
        if diff < 0:
            raise InvariantViolation("subtraction underflow would produce negative amount")
        return CurrencyAmount._from_fraction(self.currency, diff)

    def multiply(self, k: Ratio) -> "CurrencyAmount":
        """Multiply by a non-negative int/Fraction (or Percent); result stays exact."""
        fr = _as_fraction(k)
        if fr < 0:
            raise AmountDomainError(f"negative multiplier not allowed: k={fr}")
        return CurrencyAmount._from_fraction(self.currency, self.as_fraction() * fr)

    def divide(self, k: Ratio) -> "CurrencyAmount":
        """Divide by a positive int/Fraction (or Percent); result stays exact."""
        fr = _as_fraction(k)
        if fr == 0:
            raise ZeroDivisionError("division by zero ratio")
        if fr < 0:
            raise AmountDomainError(f"negative divisor not allowed: k={fr}")
        return CurrencyAmount._from_fraction(self.currency, self.as_fraction() / fr)

    def mul_down(self, k: Ratio) -> "CurrencyAmount":
        """Multiply by a ratio and truncate to whole raw units (OUT-side rounding)."""
        fr = self.multiply(k)
        _dbg(f"mul_down: {self.as_fraction()} * {_as_fraction(k)} -> {fr.quotient}")
        return CurrencyAmount.from_raw_amount(self.currency, fr.quotient)

    def mul_up(self, k: Ratio) -> "CurrencyAmount":
        """Multiply by a ratio and round up to whole raw units (IN-side rounding)."""
        fr = self.multiply(k)
        raw = _ceil_div(fr.numerator, fr.denominator)
        _dbg(f"mul_up: {self.as_fraction()} * {_as_fraction(k)} -> {raw}")
        return CurrencyAmount.from_raw_amount(self.currency, raw)

    def __repr__(self) -> str:
        value = self.numerator if self.denominator == 1 else f"{self.numerator}/{self.denominator}"
        return f"CurrencyAmount({value} {getattr(self.currency, 'symbol', None) or self.currency!r})"


def sum_amounts(currency: Currency, amounts) -> CurrencyAmount:
    """Currency-checked exact sum; an empty iterable sums to zero of `currency`."""
    total = CurrencyAmount.zero(currency)
    for a in amounts:
        total = total + a
    return total


__all__ = [
    "CurrencyAmount",
    "Ratio",
    "sum_amounts",
]
