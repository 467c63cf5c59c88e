"""
Currency primitives: NativeCurrency (chain gas currency) and Token (contract currency).

- Token identity is (chain_id, address); address comparison is case-insensitive.
- NativeCurrency identity is the chain alone.
- A native currency and its wrapped token are *distinct* currencies even though
  they are exchangeable 1:1; conversion between the two is explicit (`wrapped`).
- Transfer-fee tokens carry buy/sell fees in basis points, applied by the
  issuing contract on transfer out of / into a pool.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, Optional, Union

from .constants import ADDRESS_ZERO, BIPS_BASE

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def _validate_address(address: str) -> str:
    if not isinstance(address, str) or not _ADDRESS_RE.match(address):
        raise ValueError(f"{address!r} is not a valid address")
    return address


def _validate_fee_bps(name: str, bps: Optional[int]) -> None:
    if bps is None:
        return
    if bps < 0 or bps >= BIPS_BASE:
        raise ValueError(f"{name} must satisfy 0 <= bps < {BIPS_BASE}, got {bps}")


# ----------------------------
# Token
# ----------------------------

@dataclass(frozen=True, eq=False)
class Token:
    """Fungible-token contract currency on a given chain."""
    chain_id: int
    address: str
    decimals: int
    symbol: Optional[str] = None
    name: Optional[str] = None
    buy_fee_bps: Optional[int] = None
    sell_fee_bps: Optional[int] = None

    is_native = False
    is_token = True

    def __post_init__(self):
        _validate_address(self.address)
        if self.decimals < 0 or self.decimals >= 255:
            raise ValueError(f"decimals out of range: {self.decimals}")
        _validate_fee_bps("buy_fee_bps", self.buy_fee_bps)
        _validate_fee_bps("sell_fee_bps", self.sell_fee_bps)

    @property
    def wrapped(self) -> "Token":
        return self

    @property
    def has_transfer_fee(self) -> bool:
        return bool(self.buy_fee_bps) or bool(self.sell_fee_bps)

    def sorts_before(self, other: "Token") -> bool:
        """Return True if this token's address sorts before `other` (pool token0 rule)."""
        if self.chain_id != other.chain_id:
            raise ValueError("CHAIN_IDS")
        if self.address.lower() == other.address.lower():
            raise ValueError("ADDRESSES")
        return self.address.lower() < other.address.lower()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return False
        return self.chain_id == other.chain_id and self.address.lower() == other.address.lower()

    def __hash__(self) -> int:
        return hash(("token", self.chain_id, self.address.lower()))

    def __repr__(self) -> str:
        return f"Token({self.symbol or self.address}, chain={self.chain_id})"


# ----------------------------
# Native currency
# ----------------------------

@dataclass(frozen=True, eq=False)
class NativeCurrency:
    """Intrinsic gas-paying currency of a chain (not a token contract)."""
    chain_id: int
    decimals: int = 18
    symbol: Optional[str] = "ETH"
    name: Optional[str] = "Ether"
    wrapped_token: Optional[Token] = field(default=None, repr=False)

    is_native = True
    is_token = False

    buy_fee_bps = None
    sell_fee_bps = None

    @classmethod
    def on_chain(cls, chain_id: int) -> "NativeCurrency":
        return _native_on_chain(chain_id)

    @property
    def wrapped(self) -> Token:
        if self.wrapped_token is not None:
            return self.wrapped_token
        token = WRAPPED_NATIVE.get(self.chain_id)
        if token is None:
            raise ValueError(f"no wrapped native token registered for chain {self.chain_id}")
        return token

    @property
    def address(self) -> str:
        return ADDRESS_ZERO

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NativeCurrency) and self.chain_id == other.chain_id

    def __hash__(self) -> int:
        return hash(("native", self.chain_id))

    def __repr__(self) -> str:
        return f"NativeCurrency({self.symbol}, chain={self.chain_id})"


Currency = Union[NativeCurrency, Token]


# ---------------------------------------------------------------------------
# Wrapped-native registry
# ---------------------------------------------------------------------------

WRAPPED_NATIVE: Dict[int, Token] = {
    1: Token(1, "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2", 18, "WETH", "Wrapped Ether"),
    10: Token(10, "0x4200000000000000000000000000000000000006", 18, "WETH", "Wrapped Ether"),
    8453: Token(8453, "0x4200000000000000000000000000000000000006", 18, "WETH", "Wrapped Ether"),
    42161: Token(42161, "0x82aF49447D8a07e3bd95BD0d56f35241523fBab1", 18, "WETH", "Wrapped Ether"),
    11155111: Token(11155111, "0xfFf9976782d46CC05630D1f6eBAb18b2324d6B14", 18, "WETH", "Wrapped Ether"),
}


@lru_cache(maxsize=None)
def _native_on_chain(chain_id: int) -> NativeCurrency:
    return NativeCurrency(chain_id)


def is_wrapped_native(currency: Currency) -> bool:
    """True iff `currency` is the registered wrapped form of its chain's native currency."""
    if currency.is_native:
        return False
    return WRAPPED_NATIVE.get(currency.chain_id) == currency


def same_wrapped(a: Currency, b: Currency) -> bool:
    """True if `a` and `b` are the same currency or native/wrapped counterparts."""
    if a == b:
        return True
    try:
        return a.wrapped == b.wrapped
    except ValueError:
        return False


def currency_key(currency: Currency) -> str:
    """Sort/identity key: lowercase address, zero address for native."""
    return currency.address.lower()


__all__ = [
    "Token",
    "NativeCurrency",
    "Currency",
    "WRAPPED_NATIVE",
    "is_wrapped_native",
    "same_wrapped",
    "currency_key",
]
