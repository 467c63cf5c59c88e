"""Routes: ordered pool paths between a declared input and output currency.

A `Route` is the protocol-native path. Each pool sees the currency it actually
holds: a native input entering a pool that holds only the wrapped token enters
as the wrapped token, and vice versa for singleton pools holding native. The
declared `input` / `output` stay what the caller asked for; `path_input` /
`path_output` are what the first / last pool sees.

Route facades (`RouteV2`, `RouteV3`, `RouteV4`, `MixedRoute`) wrap a Route and
add its protocol tag. Wrapping never mutates the route.
"""
from __future__ import annotations

from fractions import Fraction
from functools import cached_property
from typing import Iterable, Tuple
from typing import Protocol as Interface, runtime_checkable

from .core import (
    Currency,
    Price,
    Protocol,
    RouteError,
    same_wrapped,
)

# Debug printing control
DEBUG_ROUTES = False

def _dbg(msg: str) -> None:
    if DEBUG_ROUTES:
        print(f"[ROUTES] {msg}")


def path_currency(currency: Currency, pool) -> Currency:
    """Return `currency` as `pool` knows it.

    Exact match first; otherwise the pool currency that is the native/wrapped
    counterpart of `currency`. Raises RouteError("PATH") when neither exists.
    """
    if pool.involves_currency(currency):
        return currency
    for c in (pool.token0, pool.token1):
        if same_wrapped(c, currency):
            return c
    raise RouteError("PATH", f"{currency!r} not reachable in pool {pool.pool_id}")


# ---------------------------------------------------------------------------
# Route
# ---------------------------------------------------------------------------

class Route:
    """Ordered pools from `input` to `output` (all on one chain)."""

    def __init__(self, pools: Iterable, input: Currency, output: Currency) -> None:
        pools = tuple(pools)
        if not pools:
            raise RouteError("POOLS")
        chain_id = pools[0].chain_id
        if any(p.chain_id != chain_id for p in pools):
            raise RouteError("CHAIN_IDS")
        if input.chain_id != chain_id or output.chain_id != chain_id:
            raise RouteError("CHAIN_IDS", "boundary currency on another chain")

        try:
            first = path_currency(input, pools[0])
        except RouteError:
            raise RouteError("INPUT", f"{input!r} not in first pool {pools[0].pool_id}") from None

        # path[i] is what pool i receives (as pool i knows it) for i == 0,
        # and what pool i-1 emits for i > 0.
        path = [first]
        entries = []
        for pool in pools:
            entry = path_currency(path[-1], pool)
            entries.append(entry)
            path.append(pool.other(entry))

        if not same_wrapped(path[-1], output):
            raise RouteError("OUTPUT", f"path ends in {path[-1]!r}, expected {output!r}")

        self.pools = pools
        self.input = input
        self.output = output
        self.path: Tuple[Currency, ...] = tuple(path)
        self.entries: Tuple[Currency, ...] = tuple(entries)
        _dbg(f"route built: {[getattr(c, 'symbol', c) for c in self.path]}")

    @property
    def chain_id(self) -> int:
        return self.pools[0].chain_id

    @property
    def path_input(self) -> Currency:
        return self.path[0]

    @property
    def path_output(self) -> Currency:
        return self.path[-1]

    @cached_property
    def mid_price(self) -> Price:
        """Product of each pool's marginal price along the path."""
        fr = Fraction(1)
        for pool, entry in zip(self.pools, self.entries):
            fr *= pool.price_of(entry).as_fraction()
        return Price(self.input, self.output, fr.denominator, fr.numerator)

    @property
    def pool_ids(self) -> Tuple[tuple, ...]:
        return tuple(p.pool_id for p in self.pools)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Route):
            return NotImplemented
        return (
            self.pool_ids == other.pool_ids
            and self.input == other.input
            and self.output == other.output
        )

    def __hash__(self) -> int:
        return hash((self.pool_ids, self.input, self.output))

    def __repr__(self) -> str:
        syms = " -> ".join(str(getattr(c, "symbol", None) or c) for c in self.path)
        return f"Route({syms})"


# ---------------------------------------------------------------------------
# Facades
# ---------------------------------------------------------------------------

@runtime_checkable
class IRoute(Interface):
    """Capability set every route variant exposes to aggregation and economics."""

    protocol: Protocol

    @property
    def pools(self) -> Tuple: ...

    @property
    def input(self) -> Currency: ...

    @property
    def output(self) -> Currency: ...

    @property
    def path(self) -> Tuple[Currency, ...]: ...

    @property
    def path_input(self) -> Currency: ...

    @property
    def path_output(self) -> Currency: ...

    @property
    def mid_price(self) -> Price: ...

    @property
    def chain_id(self) -> int: ...


class RouteFacade:
    """Protocol-tagged, read-only view over a Route."""

    protocol: Protocol
    accepted: Tuple[Protocol, ...] = ()

    def __init__(self, route: Route) -> None:
        if not isinstance(route, Route):
            raise TypeError(f"{type(self).__name__} wraps a Route, got {type(route).__name__}")
        for pool in route.pools:
            if pool.protocol not in self.accepted:
                raise RouteError(
                    "PROTOCOL",
                    f"{type(self).__name__} cannot hold a {pool.protocol.value} pool",
                )
        self.route = route

    @classmethod
    def from_pools(cls, pools: Iterable, input: Currency, output: Currency) -> "RouteFacade":
        return cls(Route(pools, input, output))

    # --- delegated read access ---

    @property
    def pools(self) -> Tuple:
        return self.route.pools

    @property
    def input(self) -> Currency:
        return self.route.input

    @property
    def output(self) -> Currency:
        return self.route.output

    @property
    def path(self) -> Tuple[Currency, ...]:
        return self.route.path

    @property
    def path_input(self) -> Currency:
        return self.route.path_input

    @property
    def path_output(self) -> Currency:
        return self.route.path_output

    @property
    def mid_price(self) -> Price:
        return self.route.mid_price

    @property
    def chain_id(self) -> int:
        return self.route.chain_id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RouteFacade):
            return NotImplemented
        return self.protocol is other.protocol and self.route == other.route

    def __hash__(self) -> int:
        return hash((self.protocol, self.route))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.route!r})"


class RouteV2(RouteFacade):
    protocol = Protocol.V2
    accepted = (Protocol.V2,)


class RouteV3(RouteFacade):
    protocol = Protocol.V3
    accepted = (Protocol.V3,)


class RouteV4(RouteFacade):
    protocol = Protocol.V4
    accepted = (Protocol.V4,)


class MixedRoute(RouteFacade):
    """Any mixture of pool protocols (a single protocol is allowed too)."""
    protocol = Protocol.MIXED
    accepted = (Protocol.V2, Protocol.V3, Protocol.V4)


FACADES = {
    Protocol.V2: RouteV2,
    Protocol.V3: RouteV3,
    Protocol.MIXED: MixedRoute,
    Protocol.V4: RouteV4,
}


def as_route(route, facade: type) -> IRoute:
    """View `route` through `facade`.

    A plain Route is wrapped, a facade of another kind is re-wrapped, and any
    other object already implementing IRoute with the facade's protocol is
    accepted unchanged.
    """
    if isinstance(route, facade):
        return route
    if isinstance(route, RouteFacade):
        return facade(route.route)
    if isinstance(route, Route):
        return facade(route)
    if isinstance(route, IRoute) and route.protocol is facade.protocol:
        return route
    raise TypeError(f"expected a Route or {facade.__name__}, got {type(route).__name__}")


def wrap_route(route) -> IRoute:
    """Facade for `route`: kept as-is if already one, else inferred from its pools."""
    if isinstance(route, RouteFacade):
        return route
    if isinstance(route, Route):
        protocols = {p.protocol for p in route.pools}
        if len(protocols) == 1:
            return FACADES[protocols.pop()](route)
        return MixedRoute(route)
    if isinstance(route, IRoute):
        return route
    raise TypeError(f"expected a Route or route facade, got {type(route).__name__}")


__all__ = [
    "path_currency",
    "Route",
    "IRoute",
    "RouteFacade",
    "RouteV2",
    "RouteV3",
    "RouteV4",
    "MixedRoute",
    "FACADES",
    "as_route",
    "wrap_route",
]
