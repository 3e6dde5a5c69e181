"""Engine – wires the walker, the work queue and the worker pool together."""

from __future__ import annotations

import logging
import threading
from typing import Callable

from .config import LiceConfig
from .header import golden_header
from .outcome import FileOutcome, RunSummary
from .pool import OutcomeCollector, WorkerPool, WorkQueue, deliver, run_item
from .rewriter import apply
from .walker import TreeWalker, WorkItem

logger = logging.getLogger("lice.engine")


class LiceEngine:
    """Apply the configured license header to every file under the targets."""

    def __init__(
        self,
        cfg: LiceConfig,
        *,
        on_outcome: Callable[[FileOutcome], None] | None = None,
    ) -> None:
        self.cfg = cfg
        self.on_outcome = on_outcome
        self._stop = threading.Event()

    def process(self, item: WorkItem) -> FileOutcome:
        """Run the detector/rewriter for one work item."""
        golden = golden_header(self.cfg.license_text, item.style)
        return apply(item.path, golden, item.style, dry_run=self.cfg.check)

    def cancel(self) -> None:
        """Stop after the items currently being written; queued items are dropped."""
        self._stop.set()

    @property
    def cancelled(self) -> bool:
        return self._stop.is_set()

    def _produce(self, walker: TreeWalker, emit: Callable[[WorkItem], None]) -> None:
        try:
            for item in walker:
                if self._stop.is_set():
                    break
                emit(item)
        except KeyboardInterrupt:
            logger.warning("Interrupted, finishing files already in progress")
            self.cancel()

    def run(self) -> RunSummary:
        walker = TreeWalker(self.cfg.targets, self.cfg.excludes, stop=self._stop)
        collector = OutcomeCollector(self.on_outcome)

        if self.cfg.jobs == 1:
            logger.info("Running in single-threaded mode")
            self._produce(walker, lambda item: deliver(collector, run_item(self.process, item)))
        else:
            logger.info("Starting %d worker threads", self.cfg.jobs)
            work: WorkQueue[WorkItem] = WorkQueue(self.cfg.queue_size)
            with WorkerPool(self.cfg.jobs, work, self.process, collector, stop=self._stop):
                self._produce(walker, work.put)

        summary = collector.summary
        summary.missing_targets.extend(walker.missing_targets)
        summary.cancelled = self._stop.is_set()
        logger.debug("Walk stats: %s", walker.stats)
        return summary
