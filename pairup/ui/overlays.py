"""In-window overlay shown when the board is cleared."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QEvent, Qt, Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsDropShadowEffect,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from pairup.ui.colors import GameColors


def _primary_button_style() -> str:
    return f"""
        QPushButton {{
            background: qlineargradient(x1:0, y1:0, x2:1, y2:1,
                stop:0 {GameColors.PRIMARY_LIGHT}, stop:1 {GameColors.PRIMARY});
            color: white;
            padding: 10px 16px;
            border: none;
            border-radius: 12px;
            font-weight: 700;
            font-size: 14px;
        }}
        QPushButton:hover {{ background: {GameColors.PRIMARY}; }}
    """


class LevelCompletedOverlay(QWidget):
    """Dims the board and offers "Next Level" or "Finish Game".

    ``closed`` carries True when the player pressed the button and False when
    the overlay was dismissed by clicking the dimmed background.
    """

    closed = Signal(bool)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        layout = QGridLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        backdrop = QWidget(self)
        backdrop.setStyleSheet("background: rgba(0, 0, 0, 0.2);")
        backdrop.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        backdrop.mousePressEvent = lambda e: self._close(False)
        layout.addWidget(backdrop, 0, 0)

        container = QFrame()
        container.setObjectName("levelCompletedContainer")
        container.setMinimumWidth(380)
        container.setMaximumWidth(460)
        container.setStyleSheet(
            """
            QFrame#levelCompletedContainer {
                background: #ffffff;
                border: 1px solid rgba(161, 94, 117, 0.15);
                border-radius: 20px;
            }
            """
        )
        shadow = QGraphicsDropShadowEffect(container)
        shadow.setBlurRadius(20)
        shadow.setOffset(0, 6)
        shadow.setColor(QColor(80, 30, 50, 40))
        container.setGraphicsEffect(shadow)

        content = QVBoxLayout(container)
        content.setContentsMargins(28, 24, 28, 24)
        content.setSpacing(18)

        header = QHBoxLayout()
        header.setSpacing(12)
        self._icon = QLabel("🎉")
        self._icon.setStyleSheet("font-size: 28px;")
        header.addWidget(self._icon, 0)
        self._title = QLabel("")
        self._title.setStyleSheet(f"color: {GameColors.PRIMARY}; font-size: 18px; font-weight: 800;")
        header.addWidget(self._title, 0)
        header.addStretch(1)
        content.addLayout(header)

        self._message = QLabel("")
        self._message.setStyleSheet(f"color: {GameColors.TEXT_PRIMARY}; font-size: 14px;")
        self._message.setWordWrap(True)
        content.addWidget(self._message, 0)

        self._button = QPushButton("")
        self._button.setStyleSheet(_primary_button_style())
        self._button.setCursor(Qt.CursorShape.PointingHandCursor)
        self._button.clicked.connect(lambda: self._close(True))
        content.addWidget(self._button, 0)

        layout.addWidget(container, 0, 0, 1, 1, Qt.AlignCenter)

    def present(self, level: int, score: int, final: bool) -> None:
        if final:
            self._icon.setText("🎊")
            self._title.setText("You finished the game!")
            self._message.setText(f"All levels cleared with {score} points.")
            self._button.setText("🎊 Finish Game")
        else:
            self._icon.setText("🎉")
            self._title.setText(f"Level {level} complete!")
            self._message.setText(f"You matched every pair. Score so far: {score}.")
            self._button.setText("Next Level")
        parent = self.parentWidget()
        if parent is not None:
            self.setGeometry(parent.rect())
        self.raise_()
        self.show()

    def _close(self, accepted: bool) -> None:
        self.hide()
        self.closed.emit(accepted)

    def eventFilter(self, obj: QWidget, event: QEvent) -> bool:
        if obj is self.parentWidget() and event.type() == QEvent.Type.Resize:
            self.setGeometry(obj.rect())
        return super().eventFilter(obj, event)

    def showEvent(self, event) -> None:
        super().showEvent(event)
        parent = self.parentWidget()
        if parent is not None:
            parent.installEventFilter(self)

    def hideEvent(self, event) -> None:
        parent = self.parentWidget()
        if parent is not None:
            parent.removeEventFilter(self)
        super().hideEvent(event)
