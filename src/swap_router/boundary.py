"""
Native / wrapped-native boundary classification.

A trade declares one input and one output currency, but each route enters its
first pool with the currency that pool holds (`path_input`) and leaves its last
pool with `path_output`. Where the declared currency is native and a route's
path uses the wrapped token (or the reverse), the executor has to wrap or
unwrap at that boundary. This module only counts and sums; it encodes nothing.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from .core import Currency, CurrencyAmount, Swap, is_wrapped_native, sum_amounts


# ----------------------------
# Input side
# ----------------------------

def native_input_routes(swaps: Sequence[Swap]) -> List:
    """Routes whose first pool takes the native currency."""
    return [s.route for s in swaps if s.route.path_input.is_native]


def weth_input_routes(swaps: Sequence[Swap]) -> List:
    """Routes whose first pool takes the chain's wrapped native token."""
    return [s.route for s in swaps if is_wrapped_native(s.route.path_input)]


def number_of_input_wraps(input_currency: Currency, swaps: Sequence[Swap]) -> int:
    """Native in, wrapped path: one wrap per such route."""
    if not input_currency.is_native:
        return 0
    return len(weth_input_routes(swaps))


def number_of_input_unwraps(input_currency: Currency, swaps: Sequence[Swap]) -> int:
    """Wrapped in, native path: one unwrap per such route."""
    if not is_wrapped_native(input_currency):
        return 0
    return len(native_input_routes(swaps))


def input_amount_native(input_currency: Currency, swaps: Sequence[Swap]) -> Optional[CurrencyAmount]:
    """Portion of a native input that enters pools as native; None unless input is native."""
    if not input_currency.is_native:
        return None
    return sum_amounts(
        input_currency,
        (s.input_amount for s in swaps if s.route.path_input.is_native),
    )


# ----------------------------
# Output side
# ----------------------------

def native_output_routes(swaps: Sequence[Swap]) -> List:
    """Routes whose last pool emits the native currency."""
    return [s.route for s in swaps if s.route.path_output.is_native]


def weth_output_routes(swaps: Sequence[Swap]) -> List:
    """Routes whose last pool emits the chain's wrapped native token."""
    return [s.route for s in swaps if is_wrapped_native(s.route.path_output)]


def number_of_output_wraps(output_currency: Currency, swaps: Sequence[Swap]) -> int:
    """Wrapped out, native path: one wrap per such route."""
    if not is_wrapped_native(output_currency):
        return 0
    return len(native_output_routes(swaps))


def number_of_output_unwraps(output_currency: Currency, swaps: Sequence[Swap]) -> int:
    """Native out, wrapped path: one unwrap per such route."""
    if not output_currency.is_native:
        return 0
    return len(weth_output_routes(swaps))


def output_amount_native(output_currency: Currency, swaps: Sequence[Swap]) -> Optional[CurrencyAmount]:
    """Portion of a native output that leaves pools as native; None unless output is native."""
    if not output_currency.is_native:
        return None
    return sum_amounts(
        output_currency,
        (s.output_amount for s in swaps if s.route.path_output.is_native),
    )


__all__ = [
    "native_input_routes",
    "weth_input_routes",
    "number_of_input_wraps",
    "number_of_input_unwraps",
    "input_amount_native",
    "native_output_routes",
    "weth_output_routes",
    "number_of_output_wraps",
    "number_of_output_unwraps",
    "output_amount_native",
]
