import logging
import traceback

from PySide6.QtCore import QObject, QRunnable, Signal, Slot

logger = logging.getLogger(__name__)


class WorkerSignals(QObject):
    result = Signal(object)
    error = Signal(str)


class Worker(QRunnable):
    """Runs one blocking call (PDF probe or download) on the pool.

    Signals are queued to the thread that owns ``signals``, so results arrive on
    the UI thread.
    """

    def __init__(self, fn):
        super().__init__()
        self.fn = fn
        self.signals = WorkerSignals()

    @Slot()
    def run(self):
        try:
            payload = self.fn()
        except Exception:
            trace_text = traceback.format_exc()
            logger.debug("Worker task raised:\n%s", trace_text)
            self.signals.error.emit(trace_text)
            return
        self.signals.result.emit(payload)
