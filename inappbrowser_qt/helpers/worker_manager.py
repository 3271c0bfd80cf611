from collections.abc import Callable
import logging
import traceback

from PySide6.QtCore import QThreadPool

from inappbrowser_qt.workers import Worker

logger = logging.getLogger(__name__)


class WorkerManager:
    """Task runner for BrowserController: blocking work on a pool, callbacks on the UI thread."""

    def __init__(
        self,
        thread_pool: QThreadPool,
        on_default_error: Callable[[str], None] | None = None,
    ) -> None:
        self.thread_pool = thread_pool
        self.on_default_error = on_default_error
        self.accepting = True

    def submit(
        self,
        fn: Callable[[], object],
        on_result: Callable[[object], None],
        on_error: Callable[[str], None] | None = None,
    ) -> bool:
        if not self.accepting:
            logger.debug("Dropping background task submitted after shutdown")
            return False
        active_error_handler = on_error or self._on_worker_error

        def _deliver(payload: object) -> None:
            if not self.accepting:
                return
            try:
                on_result(payload)
            except Exception:
                active_error_handler(traceback.format_exc())

        def _fail(trace_text: str) -> None:
            if self.accepting:
                active_error_handler(trace_text)

        worker = Worker(fn)
        worker.signals.result.connect(_deliver)
        worker.signals.error.connect(_fail)
        self.thread_pool.start(worker)
        return True

    def shutdown(self, wait_ms: int = 0) -> bool:
        """Stop delivering callbacks and drop queued tasks; returns True when the pool is idle."""
        self.accepting = False
        self.thread_pool.clear()
        return self.thread_pool.waitForDone(wait_ms)

    def _on_worker_error(self, trace_text: str) -> None:
        logger.error("Background task failed:\n%s", trace_text)
        if self.on_default_error is not None:
            self.on_default_error(trace_text)


__all__ = ["WorkerManager"]
