"""Bounded work queue and the fixed-size worker pool that drains it."""

from __future__ import annotations

import logging
import queue
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Generic, TypeVar

from .outcome import ErrorKind, FileOutcome, RunSummary
from .walker import WorkItem

logger = logging.getLogger("lice.pool")

T = TypeVar("T")

_CLOSED = object()


class QueueClosed(Exception):
    """Raised when putting onto a queue that has been closed."""


class WorkQueue(Generic[T]):
    """Blocking FIFO with a terminal closed state.

    ``put`` blocks while the queue is full.  ``get`` blocks while it is
    empty and still open, and returns None once it is closed and drained.
    Meant for a single producer and any number of consumers.
    """

    def __init__(self, maxsize: int = 0) -> None:
        self._queue: queue.Queue = queue.Queue(maxsize)
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def put(self, item: T) -> None:
        if self._closed.is_set():
            raise QueueClosed("put() on a closed WorkQueue")
        self._queue.put(item)

    def close(self) -> None:
        if self._closed.is_set():
            return
        self._closed.set()
        self._queue.put(_CLOSED)

    def get(self) -> T | None:
        item = self._queue.get()
        if item is _CLOSED:
            # Hand the marker on so every other consumer wakes up too.
            self._queue.put(_CLOSED)
            return None
        return item


class OutcomeCollector:
    """Thread-safe sink for per-file outcomes."""

    def __init__(self, on_outcome: Callable[[FileOutcome], None] | None = None) -> None:
        self.summary = RunSummary()
        self._on_outcome = on_outcome
        self._lock = threading.Lock()

    def __call__(self, outcome: FileOutcome) -> None:
        with self._lock:
            self.summary.outcomes.append(outcome)
        if self._on_outcome is not None:
            self._on_outcome(outcome)


Handler = Callable[[WorkItem], FileOutcome]


def run_item(handler: Handler, item: WorkItem) -> FileOutcome:
    """Invoke *handler*, turning any unexpected exception into a failed outcome."""
    try:
        return handler(item)
    except Exception as exc:
        logger.exception("Unexpected error processing %s", item.path)
        return FileOutcome.failed(item.path, ErrorKind.INTERNAL_ERROR, f"unexpected error: {exc}")


def deliver(sink: Callable[[FileOutcome], None], outcome: FileOutcome) -> None:
    """Pass *outcome* to *sink*; a failing sink is logged, never propagated."""
    try:
        sink(outcome)
    except Exception:
        logger.exception("Failed to record outcome for %s", outcome.path)


class WorkerPool:
    """``jobs`` threads, each pulling items until the queue is closed and drained.

    Items taken after *stop* is set are discarded unprocessed, so a
    producer blocked on a full queue is always released.
    """

    def __init__(
        self,
        jobs: int,
        work: WorkQueue[WorkItem],
        handler: Handler,
        sink: Callable[[FileOutcome], None],
        *,
        stop: threading.Event | None = None,
    ) -> None:
        if jobs < 1:
            raise ValueError(f"jobs must be >= 1, got {jobs}")
        self.jobs = jobs
        self.work = work
        self.handler = handler
        self.sink = sink
        self.stop = stop or threading.Event()
        self._executor: ThreadPoolExecutor | None = None
        self._futures: list[Future[int]] = []

    def _worker(self) -> int:
        processed = 0
        while True:
            item = self.work.get()
            if item is None:
                break
            if self.stop.is_set():
                continue
            deliver(self.sink, run_item(self.handler, item))
            processed += 1
        return processed

    def start(self) -> None:
        if self._executor is not None:
            raise RuntimeError("WorkerPool already started")
        self._executor = ThreadPoolExecutor(max_workers=self.jobs, thread_name_prefix="lice-worker")
        self._futures = [self._executor.submit(self._worker) for _ in range(self.jobs)]
        logger.debug("Started %d worker threads", self.jobs)

    def join(self) -> int:
        """Wait for every worker to exit; return the number of items processed."""
        if self._executor is None:
            return 0
        try:
            return sum(f.result() for f in self._futures)
        except KeyboardInterrupt:
            # Drop whatever is still queued instead of draining it.
            self.stop.set()
            raise
        finally:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> WorkerPool:
        self.start()
        return self

    def __exit__(self, *args: object) -> None:
        self.work.close()
        self.join()
