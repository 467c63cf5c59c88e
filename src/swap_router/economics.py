"""
Trade economics (pure functions over amounts, prices and swaps).

- Execution price: realised quote-per-base from the aggregated raw amounts.
- Price impact: loss against the routes' mid prices, with transfer taxes
  removed from both sides so that a taxed token does not read as impact.
- Slippage bounds: truncated raw amounts (never more OUT / more IN than the
  exact bound).

All math is exact (Fraction); the only rounding is the final raw truncation of
slippage bounds.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Iterable, Union

from .core import (
    BIPS_BASE,
    ZERO_PERCENT,
    Currency,
    CurrencyAmount,
    Percent,
    Price,
    Swap,
    TradeError,
    TradeType,
    sum_amounts,
)

# Debug printing control
DEBUG_ECONOMICS = False

def _dbg(msg: str) -> None:
    if DEBUG_ECONOMICS:
        print(f"[ECON] {msg}")


Tolerance = Union[Percent, Fraction, int]


def _tolerance(slippage_tolerance: Tolerance) -> Fraction:
    if isinstance(slippage_tolerance, Percent):
        fr = slippage_tolerance.as_fraction()
    else:
        fr = Fraction(slippage_tolerance)
    if fr < 0:
        raise TradeError("SLIPPAGE_TOLERANCE")
    return fr


# ---------------------------------------------------------------------------
# Prices
# ---------------------------------------------------------------------------

def execution_price(input_amount: CurrencyAmount, output_amount: CurrencyAmount) -> Price:
    """Raw output per raw input, from whole-unit amounts."""
    return Price(
        input_amount.currency,
        output_amount.currency,
        input_amount.quotient,
        output_amount.quotient,
    )


def input_tax(currency: Currency) -> Percent:
    """Sell-side transfer tax charged when `currency` is paid into a pool."""
    if currency.is_native or not currency.sell_fee_bps:
        return ZERO_PERCENT
    return Percent(currency.sell_fee_bps, BIPS_BASE)


def output_tax(currency: Currency) -> Percent:
    """Buy-side transfer tax charged when `currency` is taken out of a pool."""
    if currency.is_native or not currency.buy_fee_bps:
        return ZERO_PERCENT
    return Percent(currency.buy_fee_bps, BIPS_BASE)


def price_impact(
    swaps: Iterable[Swap],
    output_amount: CurrencyAmount,
    in_tax: Percent = ZERO_PERCENT,
    out_tax: Percent = ZERO_PERCENT,
) -> Percent:
    """(spot - pre-tax output) / spot, where spot prices post-tax input at mid.

    Same formula for EXACT_INPUT and EXACT_OUTPUT trades. A zero spot output
    yields a zero impact.
    """
    keep_in = 1 - in_tax.as_fraction()
    spot = sum_amounts(
        output_amount.currency,
        (s.route.mid_price.quote(s.input_amount.multiply(keep_in)) for s in swaps),
    )
    if spot.is_zero():
        return ZERO_PERCENT
    pre_tax_out = output_amount.divide(1 - out_tax.as_fraction())
    spot_fr = spot.as_fraction()
    impact = (spot_fr - pre_tax_out.as_fraction()) / spot_fr
    _dbg(f"price_impact: spot={spot_fr} pre_tax_out={pre_tax_out.as_fraction()} impact={impact}")
    return Percent.from_fraction(impact)


# ---------------------------------------------------------------------------
# Slippage bounds
# ---------------------------------------------------------------------------

def minimum_amount_out(
    trade_type: TradeType,
    slippage_tolerance: Tolerance,
    amount_out: CurrencyAmount,
) -> CurrencyAmount:
    """Least OUT acceptable at `slippage_tolerance`: floor(out / (1 + tol))."""
    tol = _tolerance(slippage_tolerance)
    if trade_type is TradeType.EXACT_OUTPUT:
        return amount_out
    bound = CurrencyAmount.from_raw_amount(amount_out.currency, amount_out.quotient).mul_down(1 / (1 + tol))
    _dbg(f"minimum_amount_out: {amount_out.quotient} tol={tol} -> {bound.quotient}")
    return bound


def maximum_amount_in(
    trade_type: TradeType,
    slippage_tolerance: Tolerance,
    amount_in: CurrencyAmount,
) -> CurrencyAmount:
    """Most IN acceptable at `slippage_tolerance`: floor(in * (1 + tol))."""
    tol = _tolerance(slippage_tolerance)
    if trade_type is TradeType.EXACT_INPUT:
        return amount_in
    bound = CurrencyAmount.from_raw_amount(amount_in.currency, amount_in.quotient).mul_down(1 + tol)
    _dbg(f"maximum_amount_in: {amount_in.quotient} tol={tol} -> {bound.quotient}")
    return bound


def worst_execution_price(
    trade_type: TradeType,
    slippage_tolerance: Tolerance,
    input_amount: CurrencyAmount,
    output_amount: CurrencyAmount,
) -> Price:
    """Price at the slippage bounds (max IN, min OUT)."""
    max_in = maximum_amount_in(trade_type, slippage_tolerance, input_amount)
    min_out = minimum_amount_out(trade_type, slippage_tolerance, output_amount)
    return Price(max_in.currency, min_out.currency, max_in.quotient, min_out.quotient)


__all__ = [
    "Tolerance",
    "execution_price",
    "input_tax",
    "output_tax",
    "price_impact",
    "minimum_amount_out",
    "maximum_amount_in",
    "worst_execution_price",
]
