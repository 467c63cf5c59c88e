"""
Core exception types for swap_router.core.

These are dependency-free and may be imported by all core modules.
"""

__all__ = [
    "AmountDomainError",
    "InvariantViolation",
    "TradeError",
    "RouteError",
    "InsufficientReservesError",
    "InsufficientInputAmountError",
]


class AmountDomainError(Exception):
    """Raised when inputs violate the non-negative domain or basic preconditions."""
    pass


class InvariantViolation(Exception):
    """Raised when arithmetic or guards would break core invariants."""
    pass


class _CodedError(Exception):
    """Base for terminal rejections that carry a short stable code.

    The code is the first token of the message so callers may match on either
    `err.code` or `str(err)`.
    """

    def __init__(self, code: str, detail: str | None = None):
        super().__init__(code if not detail else f"{code}: {detail}")
        self.code = code
        self.detail = detail


class TradeError(_CodedError):
    """Raised when a trade cannot be quoted, aggregated or bounded.

    Codes
    -----
    INPUT / OUTPUT
        Supplied amount's currency does not match the route's declared input/output.
    INPUT_CURRENCY_MATCH / OUTPUT_CURRENCY_MATCH
        Legs disagree on the declared input/output currency.
    POOLS_DUPLICATED
        The same pool identity is consumed by more than one leg.
    TRADE_TYPE
        A mixed route combined with EXACT_OUTPUT.
    SLIPPAGE_TOLERANCE
        Negative slippage tolerance.
    SWAPS
        No legs at all.
    """


class RouteError(_CodedError):
    """Raised when a route cannot be built (PATH, CHAIN_IDS, INPUT, OUTPUT, POOLS, PROTOCOL)."""


class InsufficientReservesError(Exception):
    """Raised when a pool cannot serve a request without draining its reserves.

    Attributes
    ----------
    pool_id : Any
        Identity of the pool that rejected the quote.
    requested : Any
        The requested amount (domain object), for context.
    """

    def __init__(self, pool_id, requested=None):
        super().__init__(f"Insufficient reserves in pool {pool_id} for {requested}")
        self.pool_id = pool_id
        self.requested = requested


class InsufficientInputAmountError(Exception):
    """Raised when a quote rounds down to a zero output."""

    def __init__(self, pool_id, amount_in=None):
        super().__init__(f"Input {amount_in} too small to produce output in pool {pool_id}")
        self.pool_id = pool_id
        self.amount_in = amount_in
