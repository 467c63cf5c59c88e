"""Trade aggregate: quoted legs across V2 / V3 / mixed / V4 routes as one trade.

Construction validates cross-leg invariants once, in this order, stopping at
the first failure:
  SWAPS                  at least one leg
  INPUT_CURRENCY_MATCH   every leg declares the same input currency
  OUTPUT_CURRENCY_MATCH  every leg declares the same output currency
  POOLS_DUPLICATED       no pool identity is used twice, in any protocol
  TRADE_TYPE             no mixed route on an EXACT_OUTPUT trade

Native and wrapped-native count as different currencies in the match checks.
Totals are exact sums; derived economics are computed on first read and cached
for the lifetime of the trade.
"""
from __future__ import annotations

from functools import cached_property
from typing import Iterable, List, Optional, Sequence, Tuple

from .core import (
    CurrencyAmount,
    Percent,
    Price,
    Protocol,
    Swap,
    TradeAmounts,
    TradeError,
    TradeType,
    first_duplicate,
    stable_sort_by_protocol,
    sum_amounts,
)
from . import boundary, economics
from .economics import Tolerance
from .quoting import QuoteConfig, as_leg, quote_legs, quote_route
from .routes import FACADES, IRoute, as_route

# Debug printing control
DEBUG_TRADE = False

def _dbg(msg: str) -> None:
    if DEBUG_TRADE:
        print(f"[TRADE] {msg}")


def _as_swap(item, protocol: Protocol) -> Swap:
    """Accept a Swap or a (route, input_amount, output_amount) triple."""
    if isinstance(item, Swap):
        route, input_amount, output_amount = item.route, item.input_amount, item.output_amount
    else:
        route, input_amount, output_amount = item
    return Swap(as_route(route, FACADES[protocol]), input_amount, output_amount)


class Trade:
    """Immutable aggregate of resolved swaps sharing one input and one output currency."""

    def __init__(
        self,
        *,
        trade_type: TradeType,
        v2_routes: Iterable = (),
        v3_routes: Iterable = (),
        mixed_routes: Iterable = (),
        v4_routes: Iterable = (),
    ) -> None:
        grouped = (
            (Protocol.V2, v2_routes),
            (Protocol.V3, v3_routes),
            (Protocol.MIXED, mixed_routes),
            (Protocol.V4, v4_routes),
        )
        swaps = [_as_swap(item, protocol) for protocol, items in grouped for item in items]
        self._trade_type = trade_type
        self._swaps: Tuple[Swap, ...] = tuple(
            stable_sort_by_protocol(swaps, get_protocol=lambda s: s.route.protocol)
        )
        self._validate()

        first = self._swaps[0].route
        self._input_amount = sum_amounts(first.input, (s.input_amount for s in self._swaps))
        self._output_amount = sum_amounts(first.output, (s.output_amount for s in self._swaps))
        _dbg(
            f"trade {trade_type.value}: swaps={len(self._swaps)} "
            f"in={self._input_amount!r} out={self._output_amount!r}"
        )

    def _validate(self) -> None:
        swaps = self._swaps
        if not swaps:
            raise TradeError("SWAPS", "a trade needs at least one swap")

        input_currency = swaps[0].route.input
        for s in swaps:
            if s.route.input != input_currency or s.input_amount.currency != input_currency:
                raise TradeError("INPUT_CURRENCY_MATCH")

        output_currency = swaps[0].route.output
        for s in swaps:
            if s.route.output != output_currency or s.output_amount.currency != output_currency:
                raise TradeError("OUTPUT_CURRENCY_MATCH")

        dup = first_duplicate(swaps, get_identities=lambda s: [p.pool_id for p in s.route.pools])
        if dup is not None:
            raise TradeError("POOLS_DUPLICATED", f"{dup!r}")

        if self._trade_type is TradeType.EXACT_OUTPUT and any(
            s.route.protocol is Protocol.MIXED for s in swaps
        ):
            raise TradeError("TRADE_TYPE", "mixed routes support EXACT_INPUT only")

    # ----------------------------
    # Factories (quote, then aggregate)
    # ----------------------------

    @classmethod
    def _from_swaps(cls, swaps: Sequence[Swap], trade_type: TradeType) -> "Trade":
        by_protocol = {p: [] for p in FACADES}
        for s in swaps:
            by_protocol[s.route.protocol].append(s)
        return cls(
            trade_type=trade_type,
            v2_routes=by_protocol[Protocol.V2],
            v3_routes=by_protocol[Protocol.V3],
            mixed_routes=by_protocol[Protocol.MIXED],
            v4_routes=by_protocol[Protocol.V4],
        )

    @classmethod
    async def from_route(cls, route, amount: CurrencyAmount, trade_type: TradeType) -> "Trade":
        """Quote a single route and wrap the resulting swap in a Trade."""
        swap = await quote_route(route, amount, trade_type)
        return cls._from_swaps([swap], trade_type)

    @classmethod
    async def from_routes(
        cls,
        v2_legs: Iterable,
        v3_legs: Iterable,
        trade_type: TradeType,
        mixed_legs: Iterable = (),
        v4_legs: Iterable = (),
        *,
        config: Optional[QuoteConfig] = None,
    ) -> "Trade":
        """Quote every leg (route, amount) and aggregate the swaps.

        Mixed legs on an EXACT_OUTPUT trade are rejected before any quoting.
        """
        mixed_legs = list(mixed_legs)
        if mixed_legs and trade_type is TradeType.EXACT_OUTPUT:
            raise TradeError("TRADE_TYPE", "mixed routes support EXACT_INPUT only")

        grouped = (
            (Protocol.V2, v2_legs),
            (Protocol.V3, v3_legs),
            (Protocol.MIXED, mixed_legs),
            (Protocol.V4, v4_legs),
        )
        legs = []
        for protocol, group in grouped:
            for item in group:
                leg = as_leg(item)
                legs.append((as_route(leg.route, FACADES[protocol]), leg.amount))
        swaps = await quote_legs(legs, trade_type, config=config)
        return cls._from_swaps(swaps, trade_type)

    # ----------------------------
    # Read access
    # ----------------------------

    @property
    def trade_type(self) -> TradeType:
        return self._trade_type

    @property
    def swaps(self) -> Tuple[Swap, ...]:
        return self._swaps

    @property
    def routes(self) -> List[IRoute]:
        return [s.route for s in self._swaps]

    @property
    def input_amount(self) -> CurrencyAmount:
        return self._input_amount

    @property
    def output_amount(self) -> CurrencyAmount:
        return self._output_amount

    @cached_property
    def amounts(self) -> TradeAmounts:
        return TradeAmounts(
            input_amount=self._input_amount,
            output_amount=self._output_amount,
            input_amount_native=boundary.input_amount_native(self._input_amount.currency, self._swaps),
            output_amount_native=boundary.output_amount_native(self._output_amount.currency, self._swaps),
        )

    # ----------------------------
    # Economics
    # ----------------------------

    @cached_property
    def execution_price(self) -> Price:
        return economics.execution_price(self._input_amount, self._output_amount)

    @cached_property
    def input_tax(self) -> Percent:
        return economics.input_tax(self._input_amount.currency)

    @cached_property
    def output_tax(self) -> Percent:
        return economics.output_tax(self._output_amount.currency)

    @cached_property
    def price_impact(self) -> Percent:
        return economics.price_impact(self._swaps, self._output_amount, self.input_tax, self.output_tax)

    def minimum_amount_out(
        self, slippage_tolerance: Tolerance, amount_out: Optional[CurrencyAmount] = None
    ) -> CurrencyAmount:
        """Least output accepted at `slippage_tolerance` (EXACT_OUTPUT: unchanged)."""
        if amount_out is None:
            amount_out = self._output_amount
        return economics.minimum_amount_out(self._trade_type, slippage_tolerance, amount_out)

    def maximum_amount_in(
        self, slippage_tolerance: Tolerance, amount_in: Optional[CurrencyAmount] = None
    ) -> CurrencyAmount:
        """Most input spent at `slippage_tolerance` (EXACT_INPUT: unchanged)."""
        if amount_in is None:
            amount_in = self._input_amount
        return economics.maximum_amount_in(self._trade_type, slippage_tolerance, amount_in)

    def worst_execution_price(self, slippage_tolerance: Tolerance) -> Price:
        return economics.worst_execution_price(
            self._trade_type, slippage_tolerance, self._input_amount, self._output_amount
        )

    # ----------------------------
    # Native / wrapped boundary
    # ----------------------------

    @cached_property
    def native_input_routes(self) -> List[IRoute]:
        return boundary.native_input_routes(self._swaps)

    @cached_property
    def weth_input_routes(self) -> List[IRoute]:
        return boundary.weth_input_routes(self._swaps)

    @cached_property
    def number_of_input_wraps(self) -> int:
        return boundary.number_of_input_wraps(self._input_amount.currency, self._swaps)

    @cached_property
    def number_of_input_unwraps(self) -> int:
        return boundary.number_of_input_unwraps(self._input_amount.currency, self._swaps)

    @cached_property
    def native_output_routes(self) -> List[IRoute]:
        return boundary.native_output_routes(self._swaps)

    @cached_property
    def weth_output_routes(self) -> List[IRoute]:
        return boundary.weth_output_routes(self._swaps)

    @cached_property
    def number_of_output_wraps(self) -> int:
        return boundary.number_of_output_wraps(self._output_amount.currency, self._swaps)

    @cached_property
    def number_of_output_unwraps(self) -> int:
        return boundary.number_of_output_unwraps(self._output_amount.currency, self._swaps)

    def __repr__(self) -> str:
        return (
            f"Trade({self._trade_type.value}, swaps={len(self._swaps)}, "
            f"in={self._input_amount!r}, out={self._output_amount!r})"
        )


__all__ = [
    "DEBUG_TRADE",
    "Trade",
]
