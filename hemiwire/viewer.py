"""Qt window hosting the hemisphere animation.

The window schedules itself one frame at a time through ``QtFrameScheduler``;
each callback re-registers first, then lets the animator's frame gate decide
whether anything is drawn.
"""

from __future__ import annotations

import logging
import sys
import time
from typing import Callable, Optional

from PIL import Image
from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QGuiApplication, QImage, QPixmap
from PySide6.QtWidgets import QApplication, QLabel, QVBoxLayout, QWidget

from .core.animator import Animator, create_animator
from .logging_config import setup_logging
from .utils.draw import new_surface, render_frame

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_HZ = 60.0


def qimage_from_pil(pil_img: Image.Image) -> QImage:
    rgba = pil_img.convert('RGBA')
    data = rgba.tobytes('raw', 'RGBA')
    qimg = QImage(data, rgba.width, rgba.height, QImage.Format_RGBA8888)
    return qimg.copy()  # detach from the temporary byte buffer


class QtFrameScheduler:
    """request_next_frame() at roughly the display refresh rate."""

    def __init__(self, refresh_hz: Optional[float] = None):
        if refresh_hz is None:
            screen = QGuiApplication.primaryScreen()
            refresh_hz = screen.refreshRate() if screen is not None else DEFAULT_REFRESH_HZ
        self.interval_ms = max(1, int(round(1000.0 / max(1.0, refresh_hz))))

    def request_next_frame(self, callback: Callable[[], None]) -> None:
        QTimer.singleShot(self.interval_ms, callback)


class HemisphereView(QWidget):
    def __init__(self, animator: Animator, scheduler: Optional[QtFrameScheduler] = None, parent=None):
        super().__init__(parent)
        self.animator = animator
        self.scheduler = scheduler or QtFrameScheduler()
        self.running = False
        self.surface = new_surface(animator.params.canvas_size)

        self.setWindowTitle("hemiwire")
        self.setStyleSheet("background-color: #000000;")
        self.label = QLabel(self)
        self.label.setAlignment(Qt.AlignCenter)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.label)
        width, height = animator.params.canvas_size
        self.resize(width, height)

    def start(self):
        if self.running:
            return
        self.running = True
        logger.info("Animation started (callback every %d ms)", self.scheduler.interval_ms)
        self.step()

    def stop(self):
        if self.running:
            logger.info("Animation stopped at t=%.2f", self.animator.state.t)
        self.running = False

    def step(self):
        if not self.running:
            return
        self.scheduler.request_next_frame(self.step)

        frame = self.animator.tick(time.time())
        if frame is None:
            return
        render_frame(self.surface, frame)
        self.label.setPixmap(QPixmap.fromImage(qimage_from_pil(self.surface)))

    def closeEvent(self, event):
        self.stop()
        super().closeEvent(event)


def main():
    setup_logging()
    try:
        app = QApplication(sys.argv)
        animator = create_animator()
        view = HemisphereView(animator)
        view.show()
        view.start()
        sys.exit(app.exec())
    except Exception:
        logger.exception("Failed to start hemiwire")
        sys.exit(1)


if __name__ == "__main__":
    main()
