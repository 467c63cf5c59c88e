"""
Pool collaborators (constant product with fee on input): **pool math only**.

Three liquidity sources share one reserve-based model:
  - Pair   : constant-product pair (V2). 0.3% fee kept as 997/1000. Synchronous.
             Transfer-fee aware: the input token's sell fee is taken before the
             curve, the output token's buy fee after it.
  - Pool   : concentrated-liquidity pool (V3), modelled on its virtual reserves.
             Fee in pips. Quoting is a coroutine: it first awaits the pool's
             liquidity-state loader (tick data), then runs the curve.
  - V4Pool : singleton-manager pool (V4). Like Pool, but either side may be the
             native currency, and the pool key adds tick spacing and hooks.

Every quote returns `(amount, next_pool)`: the quoted amount and a new pool
carrying the post-swap reserves. Pools are never mutated.

Rounding: OUT amounts floor, IN amounts are floor + 1 (never under-pay).
"""
from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional, Tuple

from .core import (
    ADDRESS_ZERO,
    BIPS_BASE,
    PAIR_FEE_DEN,
    PAIR_FEE_KEEP_NUM,
    PIPS_BASE,
    TICK_SPACINGS,
    AmountDomainError,
    Currency,
    CurrencyAmount,
    FeeAmount,
    InsufficientInputAmountError,
    InsufficientReservesError,
    Price,
    Protocol,
    currency_key,
)

# --- Debug utilities (toggleable) ---
DEBUG_POOLS = False

def _dbg(msg: str) -> None:
    if DEBUG_POOLS:
        print(f"[POOLS] {msg}")


StateProvider = Callable[["Pool"], Awaitable[None]]


# ---------------------------------------------------------------------------
# Integer curve helpers
# ---------------------------------------------------------------------------

def _cp_out(dx: int, x: int, y: int, keep_num: int, den: int) -> int:
    """Constant-product OUT for IN `dx` with fee kept as keep_num/den (floored)."""
    dx_eff = dx * keep_num
    return (dx_eff * y) // (x * den + dx_eff)


def _cp_in(dy: int, x: int, y: int, keep_num: int, den: int) -> int:
    """Constant-product IN needed for OUT `dy` (floor + 1). Requires dy < y."""
    return (x * dy * den) // ((y - dy) * keep_num) + 1


def _after_fee_bps(raw: int, bps: Optional[int]) -> int:
    """Amount left after a transfer fee of `bps` (floored)."""
    if not bps:
        return raw
    return raw * (BIPS_BASE - bps) // BIPS_BASE


def _before_fee_bps(raw: int, bps: Optional[int]) -> int:
    """Gross amount that nets at least `raw` after a transfer fee of `bps`."""
    if not bps:
        return raw
    return raw * BIPS_BASE // (BIPS_BASE - bps) + 1


# ---------------------------------------------------------------------------
# Shared reserve model
# ---------------------------------------------------------------------------

class _ReservePool:
    """Two-currency reserve pool; currencies sorted by address (native first)."""

    protocol: Protocol

    def __init__(self, reserve_a: CurrencyAmount, reserve_b: CurrencyAmount) -> None:
        ca, cb = reserve_a.currency, reserve_b.currency
        if ca.chain_id != cb.chain_id:
            raise ValueError("CHAIN_IDS")
        if currency_key(ca) == currency_key(cb):
            raise ValueError("ADDRESSES")
        if currency_key(ca) < currency_key(cb):
            self.reserve0, self.reserve1 = reserve_a, reserve_b
        else:
            self.reserve0, self.reserve1 = reserve_b, reserve_a

    # --- identity / shape ---

    @property
    def token0(self) -> Currency:
        return self.reserve0.currency

    @property
    def token1(self) -> Currency:
        return self.reserve1.currency

    @property
    def chain_id(self) -> int:
        return self.token0.chain_id

    @property
    def pool_id(self) -> tuple:
        raise NotImplementedError

    def involves_currency(self, currency: Currency) -> bool:
        return currency == self.token0 or currency == self.token1

    def other(self, currency: Currency) -> Currency:
        if currency == self.token0:
            return self.token1
        if currency == self.token1:
            return self.token0
        raise AmountDomainError(f"TOKEN: {currency!r} not in pool {self.pool_id}")

    def reserve_of(self, currency: Currency) -> CurrencyAmount:
        if currency == self.token0:
            return self.reserve0
        if currency == self.token1:
            return self.reserve1
        raise AmountDomainError(f"TOKEN: {currency!r} not in pool {self.pool_id}")

    def price_of(self, currency: Currency) -> Price:
        """Marginal price of `currency` in terms of the other pool currency."""
        base = self.reserve_of(currency)
        quote = self.reserve_of(self.other(currency))
        return Price(base.currency, quote.currency, base.quotient, quote.quotient)

    # --- helpers for subclasses ---

    def _sides(self, currency: Currency) -> Tuple[CurrencyAmount, CurrencyAmount]:
        r_in = self.reserve_of(currency)
        return r_in, self.reserve_of(self.other(currency))

    def _check_reserves(self, requested) -> None:
        if self.reserve0.quotient == 0 or self.reserve1.quotient == 0:
            raise InsufficientReservesError(self.pool_id, requested)

    def _evolve(self, reserve_a: CurrencyAmount, reserve_b: CurrencyAmount) -> "_ReservePool":
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _ReservePool):
            return NotImplemented
        return (
            self.pool_id == other.pool_id
            and self.reserve0 == other.reserve0
            and self.reserve1 == other.reserve1
        )

    def __hash__(self) -> int:
        return hash(self.pool_id)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.reserve0!r}, {self.reserve1!r})"


# ---------------------------------------------------------------------------
# V2 pair
# ---------------------------------------------------------------------------

class Pair(_ReservePool):
    """Constant-product pair of two tokens (0.3% fee, transfer-fee aware)."""

    protocol = Protocol.V2

    def __init__(self, reserve_a: CurrencyAmount, reserve_b: CurrencyAmount) -> None:
        super().__init__(reserve_a, reserve_b)
        if not (self.token0.is_token and self.token1.is_token):
            raise ValueError("Pair currencies must be tokens")

    @property
    def pool_id(self) -> tuple:
        return ("V2", self.token0.address.lower(), self.token1.address.lower())

    def _evolve(self, reserve_a, reserve_b) -> "Pair":
        return Pair(reserve_a, reserve_b)

    def get_output_amount(self, amount_in: CurrencyAmount) -> Tuple[CurrencyAmount, "Pair"]:
        """OUT for exact IN (floored), plus the post-swap pair."""
        self._check_reserves(amount_in)
        r_in, r_out = self._sides(amount_in.currency)
        out_currency = r_out.currency

        dx = _after_fee_bps(amount_in.quotient, amount_in.currency.sell_fee_bps)
        dy = _cp_out(dx, r_in.quotient, r_out.quotient, PAIR_FEE_KEEP_NUM, PAIR_FEE_DEN)
        if dy == 0:
            raise InsufficientInputAmountError(self.pool_id, amount_in)
        dy_net = _after_fee_bps(dy, out_currency.buy_fee_bps)
        if dy_net == 0:
            raise InsufficientInputAmountError(self.pool_id, amount_in)
        _dbg(f"pair out: in={amount_in.quotient} dx={dx} dy={dy} net={dy_net} x={r_in.quotient} y={r_out.quotient}")

        amount_out = CurrencyAmount.from_raw_amount(out_currency, dy_net)
        next_pair = self._evolve(
            r_in + CurrencyAmount.from_raw_amount(r_in.currency, dx),
            r_out - amount_out,
        )
        return amount_out, next_pair

    def get_input_amount(self, amount_out: CurrencyAmount) -> Tuple[CurrencyAmount, "Pair"]:
        """IN required for exact OUT (floor + 1), plus the post-swap pair."""
        r_out, r_in = self._sides(amount_out.currency)
        in_currency = r_in.currency

        dy_gross = _before_fee_bps(amount_out.quotient, amount_out.currency.buy_fee_bps)
        if self.reserve0.quotient == 0 or self.reserve1.quotient == 0 or dy_gross >= r_out.quotient:
            raise InsufficientReservesError(self.pool_id, amount_out)
        dx = _cp_in(dy_gross, r_in.quotient, r_out.quotient, PAIR_FEE_KEEP_NUM, PAIR_FEE_DEN)
        dx_gross = _before_fee_bps(dx, in_currency.sell_fee_bps)
        _dbg(f"pair in: out={amount_out.quotient} dy_gross={dy_gross} dx={dx} gross={dx_gross}")

        amount_in = CurrencyAmount.from_raw_amount(in_currency, dx_gross)
        next_pair = self._evolve(
            r_in + CurrencyAmount.from_raw_amount(in_currency, dx),
            r_out - amount_out,
        )
        return amount_in, next_pair


# ---------------------------------------------------------------------------
# Concentrated-liquidity pools (V3 / V4)
# ---------------------------------------------------------------------------

class Pool(_ReservePool):
    """Concentrated-liquidity pool of two tokens, quoted on virtual reserves.

    `state_provider`, when given, is awaited before every quote with the pool as
    its argument; it stands for loading initialised ticks from a data source.
    """

    protocol = Protocol.V3

    def __init__(
        self,
        reserve_a: CurrencyAmount,
        reserve_b: CurrencyAmount,
        fee: int = FeeAmount.MEDIUM,
        *,
        state_provider: Optional[StateProvider] = None,
    ) -> None:
        super().__init__(reserve_a, reserve_b)
        if fee < 0 or fee >= PIPS_BASE:
            raise ValueError(f"fee must satisfy 0 <= fee < {PIPS_BASE}, got {fee}")
        self.fee = int(fee)
        self.state_provider = state_provider
        self._validate_currencies()

    def _validate_currencies(self) -> None:
        if not (self.token0.is_token and self.token1.is_token):
            raise ValueError("Pool currencies must be tokens")

    @property
    def pool_id(self) -> tuple:
        return ("V3", self.token0.address.lower(), self.token1.address.lower(), self.fee)

    def _evolve(self, reserve_a, reserve_b) -> "Pool":
        return Pool(reserve_a, reserve_b, self.fee, state_provider=self.state_provider)

    async def _load_state(self) -> None:
        if self.state_provider is not None:
            await self.state_provider(self)
        else:
            await asyncio.sleep(0)

    async def get_output_amount(self, amount_in: CurrencyAmount) -> Tuple[CurrencyAmount, "Pool"]:
        """OUT for exact IN (floored), plus the post-swap pool."""
        await self._load_state()
        self._check_reserves(amount_in)
        r_in, r_out = self._sides(amount_in.currency)

        dy = _cp_out(amount_in.quotient, r_in.quotient, r_out.quotient, PIPS_BASE - self.fee, PIPS_BASE)
        if dy == 0:
            raise InsufficientInputAmountError(self.pool_id, amount_in)
        _dbg(f"{self.protocol.value} out: in={amount_in.quotient} out={dy} fee={self.fee}")

        amount_out = CurrencyAmount.from_raw_amount(r_out.currency, dy)
        return amount_out, self._evolve(r_in + amount_in, r_out - amount_out)

    async def get_input_amount(self, amount_out: CurrencyAmount) -> Tuple[CurrencyAmount, "Pool"]:
        """IN required for exact OUT (floor + 1), plus the post-swap pool."""
        await self._load_state()
        self._check_reserves(amount_out)
        r_out, r_in = self._sides(amount_out.currency)
        if amount_out.quotient >= r_out.quotient:
            raise InsufficientReservesError(self.pool_id, amount_out)

        dx = _cp_in(amount_out.quotient, r_in.quotient, r_out.quotient, PIPS_BASE - self.fee, PIPS_BASE)
        _dbg(f"{self.protocol.value} in: out={amount_out.quotient} in={dx} fee={self.fee}")

        amount_in = CurrencyAmount.from_raw_amount(r_in.currency, dx)
        return amount_in, self._evolve(r_in + amount_in, r_out - amount_out)


class V4Pool(Pool):
    """Singleton-manager pool; either currency may be native.

    Identity is the pool key: (currency0, currency1, fee, tick_spacing, hooks).
    """

    protocol = Protocol.V4

    def __init__(
        self,
        reserve_a: CurrencyAmount,
        reserve_b: CurrencyAmount,
        fee: int = FeeAmount.MEDIUM,
        tick_spacing: Optional[int] = None,
        hooks: str = ADDRESS_ZERO,
        *,
        state_provider: Optional[StateProvider] = None,
    ) -> None:
        if tick_spacing is None:
            tick_spacing = TICK_SPACINGS.get(fee)
            if tick_spacing is None:
                raise ValueError(f"no default tick spacing for fee {fee}")
        if tick_spacing <= 0:
            raise ValueError("tick_spacing must be > 0")
        self.tick_spacing = int(tick_spacing)
        self.hooks = hooks
        super().__init__(reserve_a, reserve_b, fee, state_provider=state_provider)

    def _validate_currencies(self) -> None:
        # native currencies allowed
        return None

    @property
    def pool_id(self) -> tuple:
        return (
            "V4",
            currency_key(self.token0),
            currency_key(self.token1),
            self.fee,
            self.tick_spacing,
            self.hooks.lower(),
        )

    def _evolve(self, reserve_a, reserve_b) -> "V4Pool":
        return V4Pool(
            reserve_a,
            reserve_b,
            self.fee,
            self.tick_spacing,
            self.hooks,
            state_provider=self.state_provider,
        )


__all__ = [
    "DEBUG_POOLS",
    "StateProvider",
    "Pair",
    "Pool",
    "V4Pool",
]
