import pytest

from swap_router.core import (
    CurrencyAmount,
    FeeAmount,
    InsufficientInputAmountError,
    InsufficientReservesError,
    Price,
)
from swap_router.pools import Pair, Pool, V4Pool


def amt(c, n):
    return CurrencyAmount.from_raw_amount(c, n)


# -----------------------------
# Construction & identity
# -----------------------------

def test_reserves_sorted_by_address(market):
    p = Pair(amt(market.token1, 5), amt(market.token0, 7))
    print("[sort]", p.token0.symbol, p.token1.symbol)
    assert p.token0 == market.token0 and p.reserve0 == amt(market.token0, 7)
    assert p.token1 == market.token1 and p.reserve1 == amt(market.token1, 5)


def test_native_sorts_first_in_v4(market):
    p = market.pool_v4_0_eth
    assert p.token0 == market.ETHER
    assert p.token1 == market.token0
    assert p.pool_id[1] == "0x" + "0" * 40


@pytest.mark.parametrize("cls", [Pair, Pool])
def test_token_only_pools_reject_native(market, cls):
    with pytest.raises(ValueError):
        cls(amt(market.ETHER, 10), amt(market.token0, 10))


def test_same_currency_and_cross_chain_rejected(market):
    with pytest.raises(ValueError, match="ADDRESSES"):
        Pair(amt(market.token0, 1), amt(market.token0, 1))
    from swap_router.core import WRAPPED_NATIVE
    with pytest.raises(ValueError, match="CHAIN_IDS"):
        Pair(amt(market.token0, 1), amt(WRAPPED_NATIVE[10], 1))


def test_pool_identities_are_distinct(market):
    t0, t1 = market.token0, market.token1
    ids = {
        market.pair_0_1.pool_id,
        market.pool_0_1.pool_id,
        Pool(amt(t0, 1), amt(t1, 1), FeeAmount.LOW).pool_id,
        V4Pool(amt(t0, 1), amt(t1, 1)).pool_id,
        V4Pool(amt(t0, 1), amt(t1, 1), FeeAmount.MEDIUM, 10).pool_id,
    }
    print("[pool-ids]", sorted(map(str, ids)))
    assert len(ids) == 5


def test_identity_ignores_reserves_and_case(market):
    t0, t1 = market.token0, market.token1
    a = Pool(amt(t0, 1), amt(t1, 1))
    b = Pool(amt(t0, 500), amt(t1, 9))
    assert a.pool_id == b.pool_id and a != b
    h1 = V4Pool(amt(t0, 1), amt(t1, 1), hooks="0x" + "AB" * 20)
    h2 = V4Pool(amt(t0, 1), amt(t1, 1), hooks="0x" + "ab" * 20)
    assert h1.pool_id == h2.pool_id


def test_v4_tick_spacing_defaults_from_fee(market):
    p = V4Pool(amt(market.token0, 1), amt(market.ETHER, 1), FeeAmount.LOW)
    assert p.tick_spacing == 10
    with pytest.raises(ValueError):
        V4Pool(amt(market.token0, 1), amt(market.ETHER, 1), 1234)


def test_price_of(market):
    p = market.pair_1_2  # 12000 t1 / 10000 t2
    assert p.price_of(market.token1) == Price(market.token1, market.token2, 12000, 10000)
    assert p.price_of(market.token2).as_fraction() == market.pool_1_2.price_of(market.token2).as_fraction()


# -----------------------------
# V2 pair quoting
# -----------------------------

def test_pair_exact_in_constant_product(market):
    t0, t1 = market.token0, market.token1
    pair = Pair(amt(t0, 100000), amt(t1, 100000))
    out, nxt = pair.get_output_amount(amt(t0, 1000))
    print(f"[pair-out] 1000 t0 -> {out.quotient} t1")
    assert out == amt(t1, 987)
    assert nxt.reserve_of(t0) == amt(t0, 101000)
    assert nxt.reserve_of(t1) == amt(t1, 99013)
    # the quoted pair is untouched
    assert pair.reserve0 == amt(t0, 100000)


def test_pair_exact_out_rounds_up(market):
    inp, _ = market.pair_0_1.get_input_amount(amt(market.token1, 1000))
    print(f"[pair-in] 1000 t1 <- {inp.quotient} t0")
    assert inp == amt(market.token0, 1095)


def test_pair_output_tax(market):
    out, _ = market.pair_tax_output.get_output_amount(amt(market.weth, 100))
    print(f"[pair-buy-tax] 100 weth -> {out.quotient} t4")
    assert out == amt(market.token4_tax, 98)
    inp, _ = market.pair_tax_output.get_input_amount(amt(market.token4_tax, 98))
    assert inp == amt(market.weth, 100)


def test_pair_input_tax(market):
    out, _ = market.pair_tax_input.get_output_amount(amt(market.token5_tax, 100))
    print(f"[pair-sell-tax] 100 t5 -> {out.quotient} weth")
    assert out == amt(market.weth, 94)


def test_pair_errors(market):
    with pytest.raises(InsufficientInputAmountError) as ei:
        market.pair_0_1.get_output_amount(amt(market.token0, 0))
    assert ei.value.pool_id == market.pair_0_1.pool_id
    with pytest.raises(InsufficientReservesError):
        market.pair_0_1.get_input_amount(amt(market.token1, 12000))
    empty = Pair(amt(market.token0, 0), amt(market.token1, 10))
    with pytest.raises(InsufficientReservesError):
        empty.get_output_amount(amt(market.token0, 1))


# -----------------------------
# V3 / V4 pool quoting (async)
# -----------------------------

@pytest.mark.asyncio
async def test_pool_exact_in_matches_curve(market):
    out, nxt = await market.pool_0_1.get_output_amount(amt(market.token0, 1000))
    print(f"[pool-out] 1000 t0 -> {out.quotient} t1")
    assert out == amt(market.token1, 987)
    assert nxt.reserve_of(market.token0) == amt(market.token0, 101000)
    assert nxt.fee == market.pool_0_1.fee


@pytest.mark.asyncio
async def test_pool_exact_out_and_reserves(market):
    inp, _ = await market.pool_0_1.get_input_amount(amt(market.token1, 987))
    print(f"[pool-in] 987 t1 <- {inp.quotient} t0")
    # the inverse of the exact-in quote never asks for more than was paid
    assert inp.quotient <= 1000
    out, _ = await market.pool_0_1.get_output_amount(inp)
    assert out.quotient >= 987
    with pytest.raises(InsufficientReservesError):
        await market.pool_0_1.get_input_amount(amt(market.token1, 100000))


@pytest.mark.asyncio
async def test_pool_zero_output_rejected(market):
    with pytest.raises(InsufficientInputAmountError):
        await market.pool_0_1.get_output_amount(amt(market.token0, 1))


@pytest.mark.asyncio
async def test_state_provider_awaited_before_quote(market):
    seen = []

    async def provider(pool):
        seen.append(pool.pool_id)

    t0, t1 = market.token0, market.token1
    pool = Pool(amt(t0, 100000), amt(t1, 100000), state_provider=provider)
    _, nxt = await pool.get_output_amount(amt(t0, 1000))
    await nxt.get_input_amount(amt(t0, 10))
    print("[provider]", seen)
    assert seen == [pool.pool_id, pool.pool_id]
    assert nxt.state_provider is provider


@pytest.mark.asyncio
async def test_v4_native_quote(market):
    out, nxt = await market.pool_v4_0_eth.get_output_amount(amt(market.ETHER, 1000))
    print(f"[v4-out] 1000 ETH -> {out.quotient} t0")
    assert out == amt(market.token0, 996)
    assert isinstance(nxt, V4Pool)
    assert nxt.pool_id == market.pool_v4_0_eth.pool_id
