"""
System tray icon and menu using PySide6.

Hosts the busy indicator and the OS notifications. Both can be requested
from any thread; the work is queued onto the GUI thread through signals.
"""

from enum import Enum, auto
from typing import Dict, Optional

from PySide6.QtCore import QObject, Qt, Signal, Slot
from PySide6.QtGui import QAction, QBrush, QColor, QIcon, QPainter, QPen, QPixmap
from PySide6.QtWidgets import QMenu, QSystemTrayIcon

from .. import __app_name__


class TrayStatus(Enum):
    """Status indicators for the tray icon."""
    IDLE = auto()        # Waiting for a hotkey
    PROCESSING = auto()  # At least one run in flight


class SystemTray(QObject):
    """
    System tray icon with context menu.

    Signals:
        settings_requested: Emitted when user clicks "Open Settings File"
        reload_requested: Emitted when user clicks "Reload Settings"
        quit_requested: Emitted when user clicks "Quit"
    """

    settings_requested = Signal()
    reload_requested = Signal()
    quit_requested = Signal()

    _busy_changed = Signal(bool)
    _notification_requested = Signal(str, str)

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)

        self._status = TrayStatus.IDLE
        self._tray_icon: Optional[QSystemTrayIcon] = None
        self._menu: Optional[QMenu] = None

        self._busy_changed.connect(self._apply_busy)
        self._notification_requested.connect(self._show_message)

        self._setup_tray()

    def _setup_tray(self) -> None:
        self._tray_icon = QSystemTrayIcon(self)

        self._menu = QMenu()

        self._status_action = QAction("Ready", self._menu)
        self._status_action.setEnabled(False)
        self._menu.addAction(self._status_action)

        self._menu.addSeparator()

        settings_action = QAction("Open Settings File...", self._menu)
        settings_action.triggered.connect(self.settings_requested.emit)
        self._menu.addAction(settings_action)

        reload_action = QAction("Reload Settings", self._menu)
        reload_action.triggered.connect(self.reload_requested.emit)
        self._menu.addAction(reload_action)

        self._menu.addSeparator()

        quit_action = QAction("Quit", self._menu)
        quit_action.triggered.connect(self.quit_requested.emit)
        self._menu.addAction(quit_action)

        self._tray_icon.setContextMenu(self._menu)

        self._update_icon()

        self._tray_icon.show()

    @property
    def status(self) -> TrayStatus:
        return self._status

    def set_busy(self, busy: bool) -> None:
        """Thread-safe: update the busy indicator."""
        self._busy_changed.emit(busy)

    def show_notification(self, title: str, body: str) -> None:
        """Thread-safe: show an OS notification from the tray icon."""
        self._notification_requested.emit(title, body)

    @Slot(bool)
    def _apply_busy(self, busy: bool) -> None:
        self._status = TrayStatus.PROCESSING if busy else TrayStatus.IDLE
        status_texts = {
            TrayStatus.IDLE: "Ready",
            TrayStatus.PROCESSING: "Processing...",
        }
        self._status_action.setText(status_texts[self._status])
        self._update_icon()

    @Slot(str, str)
    def _show_message(self, title: str, body: str) -> None:
        if self._tray_icon and QSystemTrayIcon.supportsMessages():
            self._tray_icon.showMessage(title, body, QSystemTrayIcon.Information)

    def _update_icon(self) -> None:
        status_colors: Dict[TrayStatus, QColor] = {
            TrayStatus.IDLE: QColor("#4CAF50"),        # Green
            TrayStatus.PROCESSING: QColor("#FF9800"),  # Orange
        }

        status_tooltips: Dict[TrayStatus, str] = {
            TrayStatus.IDLE: __app_name__,
            TrayStatus.PROCESSING: f"{__app_name__} - Processing...",
        }

        size = 22
        pixmap = QPixmap(size, size)
        pixmap.fill(Qt.transparent)

        painter = QPainter(pixmap)
        painter.setRenderHint(QPainter.Antialiasing)

        color = status_colors.get(self._status, QColor("#808080"))
        painter.setBrush(QBrush(color))
        painter.setPen(QPen(color.darker(120), 1))

        margin = 2
        painter.drawEllipse(margin, margin, size - 2 * margin, size - 2 * margin)

        painter.end()

        if self._tray_icon:
            self._tray_icon.setIcon(QIcon(pixmap))
            self._tray_icon.setToolTip(status_tooltips.get(self._status, __app_name__))

    def hide(self) -> None:
        """Hide the tray icon."""
        if self._tray_icon:
            self._tray_icon.hide()
