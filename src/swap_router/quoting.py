from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .core import CurrencyAmount, Leg, Protocol, Swap, TradeError, TradeType
from .routes import IRoute, path_currency, wrap_route

# Debug printing control
DEBUG_QUOTING = False

def _dbg(msg: str) -> None:
    if DEBUG_QUOTING:
        print(f"[QUOTING] {msg}")


@dataclass(frozen=True)
class QuoteConfig:
    """Quoting configuration.

    concurrent: if True, legs are quoted as one task each and joined with a
    barrier; otherwise one after another in leg order. Results and failures
    are the same in both modes.
    """
    concurrent: bool = True


# ----------------------------
# Helpers
# ----------------------------

async def _resolve(result) -> Tuple[CurrencyAmount, object]:
    """Pool quotes are plain tuples (pairs) or awaitables (tick-based pools)."""
    if inspect.isawaitable(result):
        return await result
    return result


def as_leg(leg) -> Leg:
    """Accept a Leg or a (route, amount) pair."""
    if isinstance(leg, Leg):
        return leg
    route, amount = leg
    return Leg(route, amount)


# ----------------------------
# Single route
# ----------------------------

async def quote_route(route, amount: CurrencyAmount, trade_type: TradeType) -> Swap:
    """Resolve one leg into a Swap.

    EXACT_INPUT walks the pools start to end, EXACT_OUTPUT end to start. Before
    each hop the running amount is re-tagged to the currency the pool holds;
    the final amount is re-tagged to the route's declared boundary currency.
    """
    facade: IRoute = wrap_route(route)
    if facade.protocol is Protocol.MIXED and trade_type is not TradeType.EXACT_INPUT:
        raise TradeError("TRADE_TYPE", "mixed routes support EXACT_INPUT only")

    if trade_type is TradeType.EXACT_INPUT:
        if amount.currency != facade.input:
            raise TradeError("INPUT", f"{amount.currency!r} != route input {facade.input!r}")
        current = amount
        for i, pool in enumerate(facade.pools):
            current = current.retag(path_currency(current.currency, pool))
            current, _ = await _resolve(pool.get_output_amount(current))
            _dbg(f"fwd hop {i} {pool.pool_id}: -> {current!r}")
        return Swap(facade, amount, current.retag(facade.output))

    if trade_type is TradeType.EXACT_OUTPUT:
        if amount.currency != facade.output:
            raise TradeError("OUTPUT", f"{amount.currency!r} != route output {facade.output!r}")
        current = amount
        for i, pool in reversed(list(enumerate(facade.pools))):
            current = current.retag(path_currency(current.currency, pool))
            current, _ = await _resolve(pool.get_input_amount(current))
            _dbg(f"rev hop {i} {pool.pool_id}: <- {current!r}")
        return Swap(facade, current.retag(facade.input), amount)

    raise TradeError("TRADE_TYPE", f"unknown trade type {trade_type!r}")


# ----------------------------
# Leg batches
# ----------------------------

async def quote_legs(
    legs: Iterable,
    trade_type: TradeType,
    *,
    config: Optional[QuoteConfig] = None,
) -> List[Swap]:
    """Quote every leg; result order equals leg order.

    Concurrent mode starts one task per leg and waits for all of them. The
    first failure cancels the tasks still running and propagates unchanged.
    """
    cfg = config or QuoteConfig()
    pending = [as_leg(leg) for leg in legs]
    if not pending:
        return []

    if not cfg.concurrent:
        swaps = []
        for leg in pending:
            swaps.append(await quote_route(leg.route, leg.amount, trade_type))
        return swaps

    tasks = [asyncio.ensure_future(quote_route(leg.route, leg.amount, trade_type)) for leg in pending]
    _dbg(f"quote_legs: {len(tasks)} tasks ({trade_type.value})")
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for t in tasks:
            if not t.done():
                t.cancel()
        # let cancelled tasks unwind before the failure propagates
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


__all__ = [
    "DEBUG_QUOTING",
    "QuoteConfig",
    "as_leg",
    "quote_route",
    "quote_legs",
]
