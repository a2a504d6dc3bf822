from typing import Callable, Optional

from PyQt6.QtCore import QObject, Qt, QTimer


class QTimerTickSource:
    """TickSource backed by a precise QTimer on the Qt main thread."""

    def __init__(self, parent: Optional[QObject] = None):
        self.timer = QTimer(parent)
        self.timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._callback: Optional[Callable[[], None]] = None
        self.timer.timeout.connect(self._on_timeout)

    def start(self, callback: Callable[[], None], interval_s: float) -> None:
        self._callback = callback
        self.timer.start(max(1, round(interval_s * 1000)))

    def stop(self) -> None:
        self.timer.stop()
        self._callback = None

    def _on_timeout(self) -> None:
        if self._callback is not None:
            self._callback()
