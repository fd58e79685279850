"""
Batched child loader.

Loads the children of many parents with one IN-list query per batch of
parent keys, then indexes the children by parent key in memory.
"""

import logging
from typing import Awaitable, Callable, Dict, Hashable, Iterable, Iterator, List, Sequence, TypeVar

from order_catalog.utils.grouping import group_by

logger = logging.getLogger(__name__)

C = TypeVar("C")
K = TypeVar("K", bound=Hashable)


def chunked(keys: Sequence[K], size: int) -> Iterator[List[K]]:
    """
    Split keys into consecutive chunks of at most ``size`` elements.

    Raises:
        ValueError: If size is lower than 1
    """
    if size < 1:
        raise ValueError(f"Batch size must be >= 1, got {size}")
    for start in range(0, len(keys), size):
        yield list(keys[start : start + size])


async def load_in_batches(
    keys: Iterable[K],
    batch_size: int,
    fetch: Callable[[List[K]], Awaitable[Sequence[C]]],
    key_of: Callable[[C], K],
) -> Dict[K, List[C]]:
    """
    Fetch the children of ``keys`` in batches and group them by parent key.

    Args:
        keys: Parent keys; duplicates are ignored, order is preserved
        batch_size: Maximum number of keys per fetch call
        fetch: Coroutine returning the children for a list of keys
        key_of: Function returning the parent key of a child

    Returns:
        Dict with one entry per requested key, in request order; parents
        without children map to an empty list

    Raises:
        ValueError: If batch_size is lower than 1
    """
    unique_keys = list(dict.fromkeys(keys))
    children: Dict[K, List[C]] = {key: [] for key in unique_keys}

    for batch_number, batch in enumerate(chunked(unique_keys, batch_size), start=1):
        fetched = await fetch(batch)
        logger.debug(f"Batch {batch_number}: {len(batch)} keys -> {len(fetched)} children")
        for key, values in group_by(fetched, key_of).items():
            children.setdefault(key, []).extend(values)

    return children
