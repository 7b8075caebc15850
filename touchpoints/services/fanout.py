"""
Concurrent fan-out for independent collection queries

Each aggregator issues a few reads against disjoint collections. They run on a
shared thread pool and are joined before the view is built. A read that fails
with StorageError degrades to its fallback value instead of failing the view.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, Tuple

from touchpoints.core.config import settings
from touchpoints.core.errors import StorageError

logger = logging.getLogger(__name__)

executor = ThreadPoolExecutor(
    max_workers=settings.QUERY_WORKERS,
    thread_name_prefix="touchpoints-query",
)


def gather(tasks: Dict[str, Tuple[Callable[[], Any], Any]]) -> Dict[str, Any]:
    """
    Run each task concurrently and collect results by name

    Args:
        tasks: name -> (zero-arg callable, fallback used on StorageError)

    Returns:
        name -> result or fallback
    """
    futures = {name: executor.submit(fn) for name, (fn, _) in tasks.items()}
    results: Dict[str, Any] = {}
    for name, future in futures.items():
        try:
            results[name] = future.result()
        except StorageError as e:
            logger.warning(f"Query {name} degraded to fallback: {e.message}")
            results[name] = tasks[name][1]
    return results
