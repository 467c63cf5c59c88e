"""
Swap Router Core Constants (integer domain)
===========================================

Only integer constants live here. Decimal-based display helpers live in
`fmt.py`; the wrapped-native registry lives in `currency.py`.
"""

# NOTE: Fee denominators differ per protocol: pairs use a per-mille curve fee,
#       pools and singleton pools express fees in pips (1e-6).

from enum import IntEnum

# ---------------------------------------------------------------------------
# Amount bounds
# ---------------------------------------------------------------------------

#: Largest raw amount representable on-chain (uint256).
MAX_UINT256: int = (1 << 256) - 1


# ---------------------------------------------------------------------------
# Basis points / pips
# ---------------------------------------------------------------------------

#: Denominator for basis-point quantities (transfer fees, tolerances).
BIPS_BASE: int = 10_000

#: Denominator for pool fees expressed in pips (hundredths of a bip).
PIPS_BASE: int = 1_000_000

#: Constant-product pair fee: 0.3% deducted from the input (997 / 1000 kept).
PAIR_FEE_KEEP_NUM: int = 997
PAIR_FEE_DEN: int = 1_000


class FeeAmount(IntEnum):
    """Standard concentrated-liquidity fee tiers, in pips."""
    LOWEST = 100
    LOW = 500
    MEDIUM = 3_000
    HIGH = 10_000


#: Tick spacing per standard fee tier.
TICK_SPACINGS = {
    FeeAmount.LOWEST: 1,
    FeeAmount.LOW: 10,
    FeeAmount.MEDIUM: 60,
    FeeAmount.HIGH: 200,
}

#: Address used for the native currency and for hook-less singleton pools.
ADDRESS_ZERO: str = "0x0000000000000000000000000000000000000000"


__all__ = [
    "MAX_UINT256",
    "BIPS_BASE",
    "PIPS_BASE",
    "PAIR_FEE_KEEP_NUM",
    "PAIR_FEE_DEN",
    "FeeAmount",
    "TICK_SPACINGS",
    "ADDRESS_ZERO",
]
