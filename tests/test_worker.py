"""Tests for the background worker and the tray busy indicator."""

import threading
from unittest.mock import MagicMock

from polishlanguage.core.pipeline import OperationKind, OutcomeStatus, TransformOutcome
from polishlanguage.core.pipeline.worker import TransformWorkerThread, wait_for_workers
from polishlanguage.ui.tray import SystemTray, TrayStatus


class TestTransformWorkerThread:
    def test_emits_outcome(self, qtbot):
        outcome = TransformOutcome(OperationKind.POLISH, OutcomeStatus.SUCCESS, text="ok")
        pipeline = MagicMock()
        pipeline.run.return_value = outcome

        worker = TransformWorkerThread(pipeline, OperationKind.POLISH)
        with qtbot.waitSignal(worker.completed, timeout=5000) as blocker:
            worker.start()
        worker.wait()

        assert blocker.args == [outcome]
        pipeline.run.assert_called_once_with(OperationKind.POLISH)
        assert worker.kind is OperationKind.POLISH

    def test_emits_error_on_unexpected_exception(self, qtbot):
        pipeline = MagicMock()
        pipeline.run.side_effect = RuntimeError("unexpected")

        worker = TransformWorkerThread(pipeline, OperationKind.TRANSLATE)
        with qtbot.waitSignal(worker.error, timeout=5000) as blocker:
            worker.start()
        worker.wait()

        assert blocker.args == ["unexpected"]


    def test_wait_for_workers_is_bounded(self, qtbot):
        release = threading.Event()
        outcome = TransformOutcome(OperationKind.POLISH, OutcomeStatus.SKIPPED)
        pipeline = MagicMock()
        pipeline.run.side_effect = lambda kind: release.wait(timeout=5) and outcome

        stuck = TransformWorkerThread(pipeline, OperationKind.POLISH)
        stuck.start()
        try:
            assert wait_for_workers([stuck], timeout_ms=50) == 1
            assert stuck.isRunning()
        finally:
            release.set()
            stuck.wait()

        assert wait_for_workers([stuck], timeout_ms=50) == 0


class TestSystemTray:
    def test_busy_indicator(self, qtbot):
        tray = SystemTray()
        assert tray.status is TrayStatus.IDLE

        tray.set_busy(True)
        assert tray.status is TrayStatus.PROCESSING

        tray.set_busy(False)
        assert tray.status is TrayStatus.IDLE
        tray.hide()

    def test_menu_signals(self, qtbot):
        tray = SystemTray()
        actions = {a.text(): a for a in tray._menu.actions() if a.text()}

        with qtbot.waitSignal(tray.reload_requested, timeout=1000):
            actions["Reload Settings"].trigger()
        with qtbot.waitSignal(tray.quit_requested, timeout=1000):
            actions["Quit"].trigger()
        tray.hide()
