"""Reader/writer executor that serialises mutating store operations.

:class:`BarrierExecutor` runs callables on a
:class:`~concurrent.futures.ThreadPoolExecutor` and admits them through a
ticket-ordered gate:

- Work starts in the order it was submitted.
- Plain (read) work may overlap with other reads.
- Barrier (write) work waits for everything submitted before it to finish,
  runs alone, and holds back everything submitted after it.

The returned future is resolved while the work still holds its slot in the
gate, so done-callbacks of consecutive barriers fire in submission order and
no reader ever observes a write in progress.
"""

from __future__ import annotations

import itertools
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional, TypeVar

T = TypeVar("T")


class BarrierExecutor:
    """Thread-pool executor with concurrent reads and exclusive, ordered writes.

    Args:
        max_workers: Worker threads in the underlying pool.
        thread_name_prefix: Prefix for worker thread names.

    Example::

        with BarrierExecutor() as executor:
            executor.submit(write_file, data, barrier=True)
            snapshot = executor.submit(read_file).result()
    """

    def __init__(self, max_workers: Optional[int] = None, thread_name_prefix: str = "feed-store") -> None:
        self._pool: Optional[ThreadPoolExecutor] = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix=thread_name_prefix
        )
        self._gate = threading.Condition()
        self._tickets = itertools.count()
        self._next_start = 0
        self._readers = 0
        self._writing = False
        self._pending = 0

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> BarrierExecutor:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def submit(self, fn: Callable[..., T], *args: Any, barrier: bool = False) -> Future[T]:
        """Schedule ``fn(*args)`` and return a future for its result.

        Args:
            fn: The callable to run on a worker thread.
            *args: Positional arguments for *fn*.
            barrier: Run exclusively, after all earlier work and before
                all later work.

        Raises:
            RuntimeError: If the executor has been closed.
        """
        future: Future[T] = Future()
        with self._gate:
            if self._pool is None:
                raise RuntimeError("Cannot submit to a closed BarrierExecutor")
            ticket = next(self._tickets)
            self._pending += 1
            # Pool queue order must match ticket order so that every ticket a
            # worker waits on has already been picked up by another worker.
            self._pool.submit(self._run, ticket, barrier, future, fn, args)
        return future

    def close(self) -> None:
        """Wait for submitted work to finish and release the worker threads.

        Work submitted by done-callbacks while closing is still run.  Must not
        be called from a done-callback of this executor's futures.
        """
        with self._gate:
            self._gate.wait_for(lambda: self._pending == 0)
            pool, self._pool = self._pool, None
        if pool is not None:
            pool.shutdown(wait=True)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _run(
        self,
        ticket: int,
        barrier: bool,
        future: Future[Any],
        fn: Callable[..., Any],
        args: tuple[Any, ...],
    ) -> None:
        self._acquire(ticket, barrier)
        try:
            if not future.set_running_or_notify_cancel():
                return
            try:
                result = fn(*args)
            except Exception as exc:
                future.set_exception(exc)
            else:
                future.set_result(result)
        finally:
            self._release(barrier)

    def _acquire(self, ticket: int, barrier: bool) -> None:
        with self._gate:
            if barrier:
                self._gate.wait_for(
                    lambda: self._next_start == ticket and not self._writing and self._readers == 0
                )
                self._writing = True
            else:
                self._gate.wait_for(lambda: self._next_start == ticket and not self._writing)
                self._readers += 1
            self._next_start += 1
            self._gate.notify_all()

    def _release(self, barrier: bool) -> None:
        with self._gate:
            if barrier:
                self._writing = False
            else:
                self._readers -= 1
            self._pending -= 1
            self._gate.notify_all()
