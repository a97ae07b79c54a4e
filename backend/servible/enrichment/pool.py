import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Sequence, TypeVar

T = TypeVar("T")
R = TypeVar("R")


def parallel_map(items: Sequence[T], fn: Callable[[T], R], concurrency: int) -> List[R]:
    """
    Apply ``fn`` to every item with at most ``concurrency`` calls in flight.

    A fixed set of workers pulls the next index from a shared cursor, so
    results keep the input order. ``fn`` is expected to handle its own
    failures; anything it raises propagates to the caller.
    """
    items = list(items)
    if not items:
        return []

    results: List[R] = [None] * len(items)  # type: ignore[list-item]
    lock = threading.Lock()
    cursor = {"next": 0}

    def worker() -> None:
        while True:
            with lock:
                index = cursor["next"]
                if index >= len(items):
                    return
                cursor["next"] = index + 1
            results[index] = fn(items[index])

    workers = max(1, min(concurrency, len(items)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="enrichment") as executor:
        futures = [executor.submit(worker) for _ in range(workers)]
        for future in futures:
            future.result()

    return results
