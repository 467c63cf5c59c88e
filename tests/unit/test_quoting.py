import asyncio

import pytest

from swap_router.core import (
    CurrencyAmount,
    FeeAmount,
    InsufficientInputAmountError,
    Leg,
    TradeError,
    TradeType,
)
from swap_router.pools import Pool
from swap_router.quoting import QuoteConfig, as_leg, quote_legs, quote_route
from swap_router.routes import MixedRoute, Route, RouteV2, RouteV3


def amt(c, n):
    return CurrencyAmount.from_raw_amount(c, n)


# -----------------------------
# Single route
# -----------------------------

@pytest.mark.asyncio
async def test_exact_in_walks_forward(market):
    r = RouteV3.from_pools([market.pool_0_1, market.pool_1_2], market.token0, market.token2)
    s = await quote_route(r, amt(market.token0, 100), TradeType.EXACT_INPUT)
    print(f"[fwd] 100 t0 -> {s.output_amount.quotient} t2")
    # 100 -> 99 t1 -> 81 t2
    assert s.input_amount == amt(market.token0, 100)
    assert s.output_amount == amt(market.token2, 81)
    assert s.route is r


@pytest.mark.asyncio
async def test_exact_out_walks_backward(market):
    r = RouteV2.from_pools([market.pair_weth_0, market.pair_0_1], market.weth, market.token1)
    s = await quote_route(r, amt(market.token1, 100), TradeType.EXACT_OUTPUT)
    print(f"[rev] 100 t1 <- {s.input_amount.quotient} weth")
    # 100 t1 <- 102 t0 <- 104 weth
    assert s.input_amount == amt(market.weth, 104)
    assert s.output_amount == amt(market.token1, 100)


@pytest.mark.asyncio
async def test_native_boundary_is_retagged(market):
    r = RouteV2.from_pools([market.pair_weth_0, market.pair_0_1], market.ETHER, market.token1)
    s = await quote_route(r, amt(market.token1, 100), TradeType.EXACT_OUTPUT)
    assert s.input_amount == amt(market.ETHER, 104)
    fwd = await quote_route(r, amt(market.ETHER, 100), TradeType.EXACT_INPUT)
    print(f"[native] 100 ETH -> {fwd.output_amount.quotient} t1")
    assert fwd.input_amount.currency == market.ETHER
    assert fwd.output_amount == amt(market.token1, 96)


@pytest.mark.asyncio
async def test_plain_route_is_wrapped(market):
    s = await quote_route(Route([market.pool_0_1], market.token0, market.token1), amt(market.token0, 1000), TradeType.EXACT_INPUT)
    assert isinstance(s.route, RouteV3)
    assert s.output_amount == amt(market.token1, 987)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "trade_type,side,code",
    [
        (TradeType.EXACT_INPUT, "output", "INPUT"),
        (TradeType.EXACT_OUTPUT, "input", "OUTPUT"),
    ],
)
async def test_amount_currency_must_match_route(market, trade_type, side, code):
    r = RouteV3.from_pools([market.pool_0_1], market.token0, market.token1)
    wrong = amt(getattr(r, side), 10)
    with pytest.raises(TradeError) as ei:
        await quote_route(r, wrong, trade_type)
    print(f"[mismatch] {trade_type.value} -> {ei.value.code}")
    assert ei.value.code == code


@pytest.mark.asyncio
async def test_native_and_wrapped_amounts_do_not_match(market):
    r = RouteV3.from_pools([market.pool_weth_0], market.ETHER, market.token0)
    with pytest.raises(TradeError) as ei:
        await quote_route(r, amt(market.weth, 10), TradeType.EXACT_INPUT)
    assert ei.value.code == "INPUT"


@pytest.mark.asyncio
async def test_mixed_exact_out_rejected_first(market):
    m = MixedRoute.from_pools([market.pair_0_1, market.pool_1_2], market.token0, market.token2)
    # currency is wrong too; the trade type check wins
    with pytest.raises(TradeError) as ei:
        await quote_route(m, amt(market.token0, 10), TradeType.EXACT_OUTPUT)
    assert ei.value.code == "TRADE_TYPE"


@pytest.mark.asyncio
async def test_unknown_trade_type(market):
    r = RouteV3.from_pools([market.pool_0_1], market.token0, market.token1)
    with pytest.raises(TradeError) as ei:
        await quote_route(r, amt(market.token0, 10), "EXACT_SOMETHING")
    assert ei.value.code == "TRADE_TYPE"


# -----------------------------
# Leg batches
# -----------------------------

def test_as_leg_accepts_pairs(market):
    r = RouteV3.from_pools([market.pool_0_1], market.token0, market.token1)
    a = amt(market.token0, 1)
    assert as_leg((r, a)) == Leg(r, a)
    leg = Leg(r, a)
    assert as_leg(leg) is leg


@pytest.mark.asyncio
async def test_results_follow_leg_order_not_completion_order(market):
    t0, t1 = market.token0, market.token1
    finished = []

    async def slow(pool):
        await asyncio.sleep(0.05)
        finished.append("slow")

    async def fast(pool):
        finished.append("fast")

    slow_pool = Pool(amt(t0, 100000), amt(t1, 100000), FeeAmount.MEDIUM, state_provider=slow)
    fast_pool = Pool(amt(t0, 100000), amt(t1, 100000), FeeAmount.LOW, state_provider=fast)
    legs = [
        (RouteV3.from_pools([slow_pool], t0, t1), amt(t0, 1000)),
        (RouteV3.from_pools([fast_pool], t0, t1), amt(t0, 1000)),
    ]
    swaps = await quote_legs(legs, TradeType.EXACT_INPUT)
    print("[order] finished:", finished, "results:", [s.route.pools[0].fee for s in swaps])
    assert finished == ["fast", "slow"]
    assert [s.route.pools[0].fee for s in swaps] == [FeeAmount.MEDIUM, FeeAmount.LOW]


@pytest.mark.asyncio
async def test_failure_cancels_pending_legs(market):
    t0, t1 = market.token0, market.token1
    cancelled = []

    async def hang(pool):
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.append(pool.pool_id)
            raise

    hanging = Pool(amt(t0, 100000), amt(t1, 100000), FeeAmount.LOW, state_provider=hang)
    legs = [
        (RouteV3.from_pools([hanging], t0, t1), amt(t0, 1000)),
        # 1 raw unit rounds to zero output
        (RouteV3.from_pools([market.pool_0_1], t0, t1), amt(t0, 1)),
    ]
    with pytest.raises(InsufficientInputAmountError):
        await quote_legs(legs, TradeType.EXACT_INPUT)
    print("[cancel]", cancelled)
    assert cancelled == [hanging.pool_id]


@pytest.mark.asyncio
async def test_sequential_mode_matches_concurrent(market):
    legs = [
        (RouteV3.from_pools([market.pool_0_1], market.token0, market.token1), amt(market.token0, 1000)),
        (RouteV2.from_pools([market.pair_0_2, market.pair_1_2], market.token0, market.token1), amt(market.token0, 500)),
    ]
    a = await quote_legs(legs, TradeType.EXACT_INPUT)
    b = await quote_legs(legs, TradeType.EXACT_INPUT, config=QuoteConfig(concurrent=False))
    assert a == b
    assert await quote_legs([], TradeType.EXACT_INPUT) == []
