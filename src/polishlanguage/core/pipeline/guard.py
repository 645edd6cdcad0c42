"""
Per-operation busy/idle state.

Overlapping runs of the same operation are counted rather than flagged, so one
run finishing never clears the "busy" signal of another still in flight.
"""

import threading
from typing import Callable, Dict, List

from ...utils.logger import get_logger
from .operations import OperationKind

logger = get_logger(__name__)

BusyListener = Callable[[OperationKind, bool], None]


class InvocationGuard:
    """
    Tracks in-flight runs per operation kind.

    Listeners are called with (kind, busy) on idle -> busy and busy -> idle
    transitions only. They run on the thread that caused the transition, and
    each transition is delivered before the next count change is made.
    """

    def __init__(self, allow_overlap: bool = True):
        self.allow_overlap = allow_overlap
        self._lock = threading.Lock()
        # Held across a count change and its listener calls. Reentrant so a
        # listener may itself enter or exit
        self._notify_lock = threading.RLock()
        self._counts: Dict[OperationKind, int] = {kind: 0 for kind in OperationKind}
        self._listeners: List[BusyListener] = []

    def add_listener(self, listener: BusyListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: BusyListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def try_enter(self, kind: OperationKind) -> bool:
        """Enter unless overlapping runs are disallowed and one is in flight."""
        return self._increment(kind, reject_if_busy=not self.allow_overlap)

    def enter(self, kind: OperationKind) -> None:
        self._increment(kind, reject_if_busy=False)

    def _increment(self, kind: OperationKind, reject_if_busy: bool) -> bool:
        with self._notify_lock:
            with self._lock:
                if reject_if_busy and self._counts[kind] > 0:
                    logger.info(f"Rejecting {kind.value}: a run is already in progress")
                    return False
                self._counts[kind] += 1
                became_busy = self._counts[kind] == 1
                listeners = list(self._listeners)

            if became_busy:
                self._notify(listeners, kind, True)
        return True

    def exit(self, kind: OperationKind) -> None:
        with self._notify_lock:
            with self._lock:
                if self._counts[kind] == 0:
                    logger.warning(f"exit({kind.value}) called while idle")
                    return
                self._counts[kind] -= 1
                became_idle = self._counts[kind] == 0
                listeners = list(self._listeners)

            if became_idle:
                self._notify(listeners, kind, False)

    def is_busy(self, kind: OperationKind) -> bool:
        with self._lock:
            return self._counts[kind] > 0

    def is_any_busy(self) -> bool:
        with self._lock:
            return any(count > 0 for count in self._counts.values())

    def active_count(self, kind: OperationKind) -> int:
        with self._lock:
            return self._counts[kind]

    @staticmethod
    def _notify(
        listeners: List[BusyListener], kind: OperationKind, busy: bool
    ) -> None:
        for listener in listeners:
            try:
                listener(kind, busy)
            except Exception as e:
                logger.warning(f"Busy listener failed: {e}")
