"""
Price (currency-tagged ratio) and Percent utilities.

Alignment notes:
- A Price is quote-per-base in *raw* units: numerator / denominator, where
  `denominator` raw base units trade for `numerator` raw quote units.
- Base/quote ordering is part of the value: `multiply` requires the quote of
  the left operand to be the base of the right one, and `invert` swaps them.
- No Decimal is used in core math; everything is an exact Fraction. Decimal
  appears only in `to_significant` / `to_fixed` (display).
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Union

from .amounts import CurrencyAmount
from .currency import Currency
from .exc import AmountDomainError


@dataclass(frozen=True, eq=False)
class Price:
    """Price of `base_currency` denominated in `quote_currency`."""

    base_currency: Currency
    quote_currency: Currency
    denominator: int
    numerator: int

    def __post_init__(self):
        if self.denominator == 0:
            raise ZeroDivisionError("Price denominator must be non-zero")

    @classmethod
    def from_amounts(cls, base_amount: CurrencyAmount, quote_amount: CurrencyAmount) -> "Price":
        """Build the price implied by trading `base_amount` for `quote_amount`."""
        fr = quote_amount.as_fraction() / base_amount.as_fraction()
        return cls(base_amount.currency, quote_amount.currency, fr.denominator, fr.numerator)

    def as_fraction(self) -> Fraction:
        return Fraction(self.numerator, self.denominator)

    def invert(self) -> "Price":
        return Price(self.quote_currency, self.base_currency, self.numerator, self.denominator)

    def multiply(self, other: "Price") -> "Price":
        if self.quote_currency != other.base_currency:
            raise AmountDomainError("TOKEN: price multiplication requires quote == other.base")
        fr = self.as_fraction() * other.as_fraction()
        return Price(self.base_currency, other.quote_currency, fr.denominator, fr.numerator)

    def quote(self, amount: CurrencyAmount) -> CurrencyAmount:
        """Exact amount of quote currency for `amount` of base currency."""
        if amount.currency != self.base_currency:
            raise AmountDomainError("TOKEN: quoted amount must be in the base currency")
        fr = amount.as_fraction() * self.as_fraction()
        return CurrencyAmount.from_fractional_amount(self.quote_currency, fr.numerator, fr.denominator)

    @property
    def adjusted_for_decimals(self) -> Fraction:
        """Price in whole units (decimals applied), for display."""
        scale = Fraction(10 ** self.base_currency.decimals, 10 ** self.quote_currency.decimals)
        return self.as_fraction() * scale

    def to_significant(self, significant_digits: int = 6) -> str:
        from .fmt import fmt_significant
        return fmt_significant(self.adjusted_for_decimals, significant_digits)

    def to_fixed(self, decimal_places: int = 4) -> str:
        from .fmt import fmt_fixed
        return fmt_fixed(self.adjusted_for_decimals, decimal_places)

    # Ordering: only meaningful for the same base/quote pair.
    def _check_pair(self, other: "Price") -> None:
        if self.base_currency != other.base_currency or self.quote_currency != other.quote_currency:
            raise AmountDomainError("prices with different base/quote are not comparable")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Price):
            return NotImplemented
        return (
            self.base_currency == other.base_currency
            and self.quote_currency == other.quote_currency
            and self.as_fraction() == other.as_fraction()
        )

    def __hash__(self) -> int:
        return hash((self.base_currency, self.quote_currency, self.as_fraction()))

    def __lt__(self, other: "Price") -> bool:
        self._check_pair(other)
        return self.as_fraction() < other.as_fraction()

    def __gt__(self, other: "Price") -> bool:
        self._check_pair(other)
        return self.as_fraction() > other.as_fraction()

    def __repr__(self) -> str:
        b = getattr(self.base_currency, "symbol", None) or self.base_currency
        q = getattr(self.quote_currency, "symbol", None) or self.quote_currency
        return f"Price({self.numerator}/{self.denominator} {q} per {b})"


@dataclass(frozen=True, eq=False)
class Percent:
    """Ratio numerator/denominator rendered as a percentage (x100) for display."""

    numerator: int
    denominator: int = 1

    def __post_init__(self):
        if self.denominator == 0:
            raise ZeroDivisionError("Percent denominator must be non-zero")

    @classmethod
    def from_fraction(cls, fr: Fraction) -> "Percent":
        return cls(fr.numerator, fr.denominator)

    def as_fraction(self) -> Fraction:
        return Fraction(self.numerator, self.denominator)

    def is_negative(self) -> bool:
        return self.as_fraction() < 0

    def to_significant(self, significant_digits: int = 5) -> str:
        from .fmt import fmt_significant
        return fmt_significant(self.as_fraction() * 100, significant_digits)

    def to_fixed(self, decimal_places: int = 2) -> str:
        from .fmt import fmt_fixed
        return fmt_fixed(self.as_fraction() * 100, decimal_places)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Percent):
            return self.as_fraction() == other.as_fraction()
        if isinstance(other, (int, Fraction)):
            return self.as_fraction() == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.as_fraction())

    def __lt__(self, other: Union["Percent", Fraction, int]) -> bool:
        return self.as_fraction() < _ratio(other)

    def __gt__(self, other: Union["Percent", Fraction, int]) -> bool:
        return self.as_fraction() > _ratio(other)

    def __repr__(self) -> str:
        return f"Percent({self.to_significant()}%)"


def _ratio(x) -> Fraction:
    if isinstance(x, Percent):
        return x.as_fraction()
    return Fraction(x)


ZERO_PERCENT = Percent(0)
ONE_HUNDRED_PERCENT = Percent(1)


__all__ = [
    "Price",
    "Percent",
    "ZERO_PERCENT",
    "ONE_HUNDRED_PERCENT",
]
