from __future__ import annotations

from types import SimpleNamespace

import pytest

# Import project primitives
from swap_router.core import (
    WRAPPED_NATIVE,
    CurrencyAmount,
    FeeAmount,
    NativeCurrency,
    Token,
)
from swap_router.pools import Pair, Pool, V4Pool


# -----------------------------
# Test helpers (pure functions)
# -----------------------------

def amt(currency, raw: int) -> CurrencyAmount:
    """Raw-unit amount shorthand."""
    return CurrencyAmount.from_raw_amount(currency, raw)


def _addr(n: int) -> str:
    return "0x" + f"{n:040x}"


def v2_style_pool(reserve_a, reserve_b, fee=FeeAmount.MEDIUM, **kw) -> Pool:
    """Concentrated-liquidity pool whose virtual reserves equal the given amounts."""
    return Pool(reserve_a, reserve_b, fee, **kw)


def build_market() -> SimpleNamespace:
    """Tokens and pools on chain 1 used across the suite.

    Reserves mirror a small reference market: 1:1 pools around token0/token1,
    a 12000:10000 token1/token2 leg (mid 5/6), and taxed tokens paired with WETH.
    """
    m = SimpleNamespace()
    m.ETHER = NativeCurrency.on_chain(1)
    m.weth = WRAPPED_NATIVE[1]
    m.token0 = Token(1, _addr(1), 18, "t0", "token0")
    m.token1 = Token(1, _addr(2), 18, "t1", "token1")
    m.token2 = Token(1, _addr(3), 18, "t2", "token2")
    m.token3 = Token(1, _addr(4), 18, "t3", "token3")
    m.token4_tax = Token(1, _addr(5), 18, "t4", "token4", buy_fee_bps=100, sell_fee_bps=100)
    m.token5_tax = Token(1, _addr(6), 18, "t5", "token5", buy_fee_bps=500, sell_fee_bps=500)

    t0, t1, t2, t3, weth, eth = m.token0, m.token1, m.token2, m.token3, m.weth, m.ETHER

    # V3 pools
    m.pool_0_1 = v2_style_pool(amt(t0, 100000), amt(t1, 100000))
    m.pool_0_2 = v2_style_pool(amt(t0, 100000), amt(t2, 110000))
    m.pool_1_2 = v2_style_pool(amt(t1, 12000), amt(t2, 10000))
    m.pool_0_3 = v2_style_pool(amt(t0, 10000), amt(t3, 10000))
    m.pool_weth_0 = v2_style_pool(amt(weth, 100000), amt(t0, 100000))
    m.pool_weth_1 = v2_style_pool(amt(weth, 100000), amt(t1, 100000))
    m.pool_weth_2 = v2_style_pool(amt(weth, 100000), amt(t2, 100000))

    # V2 pairs
    m.pair_0_1 = Pair(amt(t0, 12000), amt(t1, 12000))
    m.pair_1_2 = Pair(amt(t1, 12000), amt(t2, 10000))
    m.pair_0_2 = Pair(amt(t0, 10000), amt(t2, 12000))
    m.pair_2_3 = Pair(amt(t2, 10000), amt(t3, 10000))
    m.pair_weth_0 = Pair(amt(weth, 10000), amt(t0, 10000))
    m.pair_weth_1 = Pair(amt(weth, 10000), amt(t1, 10000))
    m.pair_weth_2 = Pair(amt(weth, 10000), amt(t2, 10000))
    m.pair_tax_output = Pair(amt(weth, 100000), amt(m.token4_tax, 100000))
    m.pair_tax_input = Pair(amt(m.token5_tax, 100000), amt(weth, 100000))

    # V4 pools (deep, 1:1)
    deep = 10 ** 13
    m.pool_v4_1_eth = V4Pool(amt(t1, deep), amt(eth, deep), FeeAmount.MEDIUM, 60)
    m.pool_v4_0_eth = V4Pool(amt(t0, deep), amt(eth, deep), FeeAmount.MEDIUM, 60)
    m.pool_v4_1_weth = V4Pool(amt(t1, deep), amt(weth, deep), FeeAmount.MEDIUM, 60)
    return m


# -----------------------------
# Pytest fixtures
# -----------------------------

@pytest.fixture()
def market() -> SimpleNamespace:
    return build_market()
