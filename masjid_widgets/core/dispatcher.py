"""
Runs widget fetches on worker threads and hands results back through one queue.
"""
import logging
import threading
import time
from queue import Empty, Queue
from typing import Any, Callable, Dict, Iterator, Optional, Tuple


class FetchDispatcher:
    """Fire-and-forget fetch threads; results are drained on the caller's thread.

    Nothing coordinates between fetches. Two fetches for the same cache key are
    both applied in arrival order, so the later response wins.
    """

    def __init__(self):
        self.logger = logging.getLogger("FetchDispatcher")

    def _run_job(self, name: str, job: Callable[[], Any], result_queue: Queue) -> None:
        try:
            result = job()
        except Exception as e:
            self.logger.exception(f"Fetch job {name} failed: {e}")
            result = e
        result_queue.put((name, result))

    def run(self, jobs: Dict[str, Callable[[], Any]],
            wait: Optional[float] = None) -> Iterator[Tuple[str, Any]]:
        """Start every job at once and yield (name, result) as each one finishes.

        A job that raises yields the exception object as its result. With a wait
        budget (seconds), draining stops once it is spent; jobs still running are
        left to finish on their own and their results are dropped.
        """
        result_queue: Queue = Queue()
        for name, job in jobs.items():
            thread = threading.Thread(
                target=self._run_job,
                args=(name, job, result_queue),
                name=f"fetch-{name}",
                daemon=True,
            )
            thread.start()
            self.logger.debug(f"Started fetch thread for {name}")

        pending = set(jobs)
        deadline = time.monotonic() + wait if wait is not None else None
        while pending:
            remaining = None if deadline is None else max(deadline - time.monotonic(), 0)
            try:
                name, result = result_queue.get(timeout=remaining)
            except Empty:
                self.logger.warning(f"Gave up waiting after {wait}s for: {', '.join(sorted(pending))}")
                return
            pending.discard(name)
            yield name, result
