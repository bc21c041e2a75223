# ui/tray.py
from pathlib import Path

from PySide6.QtCore import QObject
from PySide6.QtGui import QGuiApplication, QIcon
from PySide6.QtWidgets import QApplication, QMenu, QStyle, QSystemTrayIcon

from .worker import PresenceWorker

APP_NAME = "Apple Music Presence"


class TrayController(QObject):
    """Menu-bar icon mirroring the worker's status and current track."""

    def __init__(self, worker: PresenceWorker = None, parent=None):
        super().__init__(parent)
        self.worker = worker or PresenceWorker(parent=self)
        self._tray = None

        self.menu = QMenu()
        self.status_action = self.menu.addAction("Starting…")
        self.status_action.setEnabled(False)
        self.track_action = self.menu.addAction("Nothing playing")
        self.track_action.setEnabled(False)
        self.menu.addSeparator()
        self.quit_action = self.menu.addAction("Quit")
        self.quit_action.triggered.connect(self._quit)

        self.worker.status.connect(self.on_status)
        self.worker.now_playing.connect(self.on_now_playing)

        if QSystemTrayIcon.isSystemTrayAvailable():
            tray = QSystemTrayIcon(self._load_icon(), self)
            tray.setToolTip(APP_NAME)
            tray.setContextMenu(self.menu)
            tray.show()
            self._tray = tray

    def _load_icon(self) -> QIcon:
        icon_path = Path(__file__).resolve().parents[1] / "logo.png"
        if icon_path.exists():
            return QIcon(str(icon_path))
        return QApplication.style().standardIcon(QStyle.SP_MediaPlay)

    def start(self):
        if not self.worker.isRunning():
            self.worker.start()

    def stop(self):
        self.worker.stop()
        if self.worker.isRunning():
            self.worker.wait(3000)

    def on_status(self, msg: str):
        self.status_action.setText(msg)

    def on_now_playing(self, np: dict):
        title = (np.get("title") or "").strip()
        artist = (np.get("artist") or "").strip()
        album = (np.get("album") or "").strip()

        if title:
            text = f"{title} — {artist}" if artist else title
            tooltip = f"{APP_NAME}\n{text}" + (f"\n{album}" if album else "")
        else:
            text = "Nothing playing"
            tooltip = APP_NAME

        self.track_action.setText(text)
        if self._tray:
            self._tray.setToolTip(tooltip)

    def _quit(self):
        self.stop()
        app = QGuiApplication.instance()
        if app:
            app.quit()
