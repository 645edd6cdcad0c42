import time
from typing import Iterable

from PySide6.QtCore import QThread, Signal

from ...utils.logger import get_logger
from ..settings.config import WORKER_SHUTDOWN_TIMEOUT_MS
from .operations import OperationKind
from .pipeline import TransformOutcome, TransformPipeline

logger = get_logger(__name__)


class TransformWorkerThread(QThread):
    """
    Background thread for one polish/translate run.

    Every hotkey firing gets its own worker, so runs never block the GUI
    thread or each other.

    Signals:
        completed: Emitted with the TransformOutcome when the run returns
        error: Emitted when the run raises unexpectedly (error_message)
    """

    completed = Signal(object)
    error = Signal(str)

    def __init__(
        self,
        pipeline: TransformPipeline,
        kind: OperationKind,
        parent=None,
    ):
        super().__init__(parent)
        self._pipeline = pipeline
        self._kind = kind

    @property
    def kind(self) -> OperationKind:
        return self._kind

    def run(self):
        start_time = time.time()

        try:
            outcome: TransformOutcome = self._pipeline.run(self._kind)
        except Exception as e:
            logger.exception(f"Background {self._kind.value} error: {e}")
            self.error.emit(str(e))
            return

        duration = time.time() - start_time
        logger.debug(
            f"{self._kind.value} run finished in {duration:.2f}s: {outcome.status.value}"
        )
        self.completed.emit(outcome)


def wait_for_workers(
    workers: Iterable[TransformWorkerThread],
    timeout_ms: int = WORKER_SHUTDOWN_TIMEOUT_MS,
) -> int:
    """Wait a bounded time for each worker; returns how many are still running."""
    still_running = 0
    for worker in workers:
        if not worker.wait(timeout_ms):
            logger.warning(
                f"{worker.kind.value} run still in progress after {timeout_ms} ms, not waiting"
            )
            still_running += 1
    return still_running
