"""Application runtime."""

import signal
import sys
from typing import Optional, Set

from PySide6.QtCore import QObject, QUrl
from PySide6.QtGui import QDesktopServices
from PySide6.QtWidgets import QApplication

from polishlanguage import __app_name__, __version__
from polishlanguage.core.errors import PersistenceError
from polishlanguage.core.input import HotkeyListener, SelectionCapture
from polishlanguage.core.output import ClipboardController, play_completion_sound
from polishlanguage.core.pipeline import (
    InvocationGuard,
    OperationKind,
    OutcomeStatus,
    TransformOutcome,
    TransformPipeline,
)
from polishlanguage.core.pipeline.worker import TransformWorkerThread, wait_for_workers
from polishlanguage.core.providers import PROVIDERS
from polishlanguage.core.settings import Settings, get_settings_file
from polishlanguage.ui.tray import SystemTray
from polishlanguage.utils.logger import get_logger, shutdown_logging

logger = get_logger(__name__)


class PolishApp(QObject):

    def __init__(self):
        super().__init__()

        self._settings = Settings.load()

        self._tray = SystemTray()
        self._clipboard = ClipboardController()
        self._capture = SelectionCapture(self._clipboard)

        self._guard = InvocationGuard()
        self._guard.add_listener(self._on_busy_changed)

        self._pipeline = TransformPipeline(
            capture_selected_text=self._capture.capture_selected_text,
            write_clipboard=self._clipboard.write_text,
            show_notification=self._tray.show_notification,
            play_completion_sound=play_completion_sound,
            guard=self._guard,
        )

        # Workers are kept referenced until they finish
        self._workers: Set[TransformWorkerThread] = set()

        self._hotkey_listener = HotkeyListener(self._settings)

        self._tray.settings_requested.connect(self._open_settings_file)
        self._tray.reload_requested.connect(self._reload_settings)
        self._tray.quit_requested.connect(self._quit)
        self._hotkey_listener.polish_triggered.connect(self._start_polish)
        self._hotkey_listener.translate_triggered.connect(self._start_translate)

    def _start_polish(self) -> None:
        self._start_run(OperationKind.POLISH)

    def _start_translate(self) -> None:
        self._start_run(OperationKind.TRANSLATE)

    def _start_run(self, kind: OperationKind) -> None:
        logger.debug(f"Hotkey fired: {kind.value}")
        worker = TransformWorkerThread(self._pipeline, kind, parent=self)
        worker.completed.connect(self._on_run_completed)
        worker.error.connect(self._on_run_error)
        worker.finished.connect(lambda: self._release_worker(worker))
        self._workers.add(worker)
        worker.start()

    def _release_worker(self, worker: TransformWorkerThread) -> None:
        self._workers.discard(worker)
        worker.deleteLater()

    def _on_run_completed(self, outcome: TransformOutcome) -> None:
        if outcome.status is OutcomeStatus.SUCCESS:
            logger.info(f"{outcome.kind.value} result copied to clipboard")

    def _on_run_error(self, error_message: str) -> None:
        logger.error(f"Run failed unexpectedly: {error_message}")

    def _on_busy_changed(self, kind: OperationKind, busy: bool) -> None:
        logger.debug(f"{kind.value} {'busy' if busy else 'idle'}")
        self._tray.set_busy(self._guard.is_any_busy())

    def _open_settings_file(self) -> None:
        try:
            settings_file = get_settings_file()
            if not settings_file.exists():
                Settings.load().save()
        except (OSError, PersistenceError) as e:
            logger.error(f"Cannot open settings file: {e}")
            return
        QDesktopServices.openUrl(QUrl.fromLocalFile(str(settings_file)))

    def _reload_settings(self) -> None:
        self._settings = Settings.load()
        self._hotkey_listener.update_settings(self._settings)
        logger.info(
            f"Settings reloaded: provider={self._settings.provider}, model={self._settings.model}"
        )

    def _quit(self) -> None:
        logger.info("Shutting down application")
        self._hotkey_listener.stop()
        wait_for_workers(list(self._workers))
        self._tray.hide()
        QApplication.quit()
        logger.info("Application shutdown complete")
        shutdown_logging()

    def run(self) -> None:
        logger.info(f"Starting {__app_name__} v{__version__}")
        provider_name = PROVIDERS.get(self._settings.provider, self._settings.provider)
        logger.info(
            f"Settings: provider={provider_name}, model={self._settings.model}, "
            f"api key set: {bool(self._settings.resolve_api_key())}"
        )
        self._hotkey_listener.start()
        logger.info("Application initialization complete")


def main(argv: Optional[list] = None):
    app = QApplication(argv if argv is not None else sys.argv)
    app.setApplicationName(__app_name__)
    app.setQuitOnLastWindowClosed(False)
    signal.signal(signal.SIGINT, lambda *args: QApplication.quit())

    polish_app = PolishApp()
    polish_app.run()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
