"""Ordered concurrent fan-out for blocking API calls."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')

# Maximum parallel threads for batch fetches
MAX_WORKERS = 10


def fan_out(func: Callable[[T], R], items: Iterable[T], max_workers: int = MAX_WORKERS) -> List[R]:
    """Call func on every item concurrently and return results in input order.

    Results land in the slot of their input regardless of completion order.
    The first exception (in input order) propagates and the whole call
    fails; no partial result list is returned.

    Args:
        func: Blocking function to run for each item
        items: Inputs, one request each
        max_workers: Upper bound on concurrent threads

    Returns:
        List of results aligned with items
    """
    items = list(items)
    if not items:
        return []
    if len(items) == 1:
        return [func(items[0])]

    workers = min(max_workers, len(items))
    logger.debug(f"Fanning out {len(items)} requests over {workers} threads")
    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(func, items))
