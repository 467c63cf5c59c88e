"""
Ordering utilities (protocol-group ranking and identity uniqueness).

Key behaviours:
- Stable sort by protocol group rank (V2, V3, MIXED, V4); items inside one
  group keep their insertion order.
- Identity scan: report the first identity consumed more than once across an
  ordered collection of items, each of which may carry several identities.

Notes:
- Pure functions over callables; no knowledge of pools or routes.
- Python's built-in sort is stable, so equal ranks retain insertion order.
"""

from __future__ import annotations

from typing import Callable, Hashable, Iterable, List, Optional, Sequence, TypeVar

from .datatypes import PROTOCOL_ORDER, Protocol

# Debug printing control
DEBUG_ORDERING = False

def _dbg(msg: str) -> None:
    if DEBUG_ORDERING:
        print(msg)

T = TypeVar("T")


def protocol_rank(protocol: Protocol) -> int:
    """Position of `protocol` in the canonical group order."""
    return PROTOCOL_ORDER.index(protocol)


def stable_sort_by_protocol(
    items: Iterable[T],
    *,
    get_protocol: Callable[[T], Protocol],
) -> List[T]:
    """Stable sort by protocol group rank (ascending)."""
    return sorted(items, key=lambda x: protocol_rank(get_protocol(x)))


def first_duplicate(
    items: Iterable[T],
    *,
    get_identities: Callable[[T], Sequence[Hashable]],
) -> Optional[Hashable]:
    """Return the first identity seen twice, or None when all are unique.

    Identities are compared across items *and* within a single item.
    """
    seen = set()
    for item in items:
        for ident in get_identities(item):
            if ident in seen:
                _dbg(f"first_duplicate: {ident!r}")
                return ident
            seen.add(ident)
    return None


__all__ = [
    "protocol_rank",
    "stable_sort_by_protocol",
    "first_duplicate",
]
