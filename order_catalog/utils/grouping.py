"""
Ordered group-by helpers.

Groups keep the order in which their key was first seen, and values inside
a group keep their arrival order.
"""

from typing import Callable, Dict, Hashable, Iterable, List, TypeVar

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


def group_by(
    rows: Iterable[T],
    key: Callable[[T], K],
    value: Callable[[T], V] = lambda row: row,
) -> Dict[K, List[V]]:
    """
    Partition rows by key preserving first-seen and arrival order.

    Args:
        rows: Rows to partition
        key: Function computing the group key of a row
        value: Function computing the value stored for a row

    Returns:
        Dict mapping each key to the list of its values
    """
    groups: Dict[K, List[V]] = {}
    for row in rows:
        groups.setdefault(key(row), []).append(value(row))
    return groups
