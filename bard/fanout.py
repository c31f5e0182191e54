from __future__ import annotations

import concurrent.futures
from typing import Callable, Dict, List, Optional, Sequence, TypeVar

T = TypeVar("T")
R = TypeVar("R")


def gather_indexed(fn: Callable[[T], R], items: Sequence[T], max_workers: Optional[int] = None) -> List[R]:
    """Run ``fn`` over ``items`` concurrently and return results in input order.

    Each result is written to the slot of the item that produced it, so the
    order of completion never leaks into the output. The first failure is
    re-raised after calls that have not started yet are cancelled.
    """
    if not items:
        return []
    workers = min(max_workers or len(items), len(items))
    slots: List[Optional[R]] = [None] * len(items)
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        futures: Dict[concurrent.futures.Future, int] = {
            executor.submit(fn, item): index for index, item in enumerate(items)
        }
        try:
            for future in concurrent.futures.as_completed(futures):
                slots[futures[future]] = future.result()
        except BaseException:
            for future in futures:
                future.cancel()
            raise
    return slots  # type: ignore[return-value]
