"""Board UI: a single tile and the picture lookup behind it."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Optional

from PySide6.QtCore import QRectF, Qt
from PySide6.QtGui import QColor, QPainter, QPainterPath, QPen, QPixmap
from PySide6.QtWidgets import QWidget

from pairup.ui.colors import GameColors, tile_fill
from pairup.ui.models import TileView

_PLACEHOLDER = "❓"


class ImageLibrary:
    """Finds tile pictures under ``assets/images``; falls back to a text label."""

    def __init__(self, label_for: Callable[[str], str], assets_dir: Optional[Path] = None) -> None:
        self._label_for = label_for
        self._assets_dir = assets_dir or Path(__file__).resolve().parent.parent / "assets" / "images"
        self._cache: Dict[str, Optional[QPixmap]] = {}

    def pixmap(self, image_id: str) -> Optional[QPixmap]:
        if image_id not in self._cache:
            self._cache[image_id] = None
            for suffix in (".png", ".jpg", ".jpeg"):
                path = self._assets_dir / f"{image_id}{suffix}"
                if path.exists():
                    pm = QPixmap(str(path))
                    if not pm.isNull():
                        self._cache[image_id] = pm
                        break
        return self._cache[image_id]

    def label(self, image_id: str) -> str:
        return self._label_for(image_id)


class TileWidget(QWidget):
    """Rounded card showing the picture when face up and a question mark otherwise."""

    def __init__(
        self,
        index: int,
        library: ImageLibrary,
        on_click: Callable[[int], None],
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._index = index
        self._library = library
        self._on_click = on_click
        self._view: Optional[TileView] = None
        self._hovered = False
        self.setFixedSize(96, 96)
        self.setAttribute(Qt.WidgetAttribute.WA_Hover, True)
        self.setCursor(Qt.PointingHandCursor)

    def set_view(self, view: TileView) -> None:
        self._view = view
        self.setCursor(Qt.ArrowCursor if view.face_up else Qt.PointingHandCursor)
        self.update()

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self._on_click(self._index)
        super().mousePressEvent(event)

    def enterEvent(self, event) -> None:
        self._hovered = True
        self.update()
        super().enterEvent(event)

    def leaveEvent(self, event) -> None:
        self._hovered = False
        self.update()
        super().leaveEvent(event)

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        if self._view is None:
            return
        view = self._view
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)

        rect = QRectF(self.rect()).adjusted(2, 2, -2, -2)
        border = GameColors.TILE_MATCHED_BORDER if view.matched else GameColors.TILE_BORDER
        painter.setPen(QPen(QColor(border), 2))
        painter.setBrush(QColor(tile_fill(view.face_up, view.matched, self._hovered)))
        painter.drawRoundedRect(rect, 12, 12)

        if not view.face_up or view.image_id is None:
            font = painter.font()
            font.setPointSize(28)
            painter.setFont(font)
            painter.setPen(QColor(GameColors.TEXT_MUTED))
            painter.drawText(rect, Qt.AlignCenter, _PLACEHOLDER)
            return

        pm = self._library.pixmap(view.image_id)
        if pm is not None:
            inner = rect.adjusted(8, 8, -8, -8)
            scaled = pm.scaled(
                int(inner.width()), int(inner.height()), Qt.KeepAspectRatio, Qt.SmoothTransformation
            )
            x = inner.x() + (inner.width() - scaled.width()) / 2
            y = inner.y() + (inner.height() - scaled.height()) / 2
            clip = QPainterPath()
            clip.addRoundedRect(QRectF(x, y, scaled.width(), scaled.height()), 8, 8)
            painter.setClipPath(clip)
            painter.drawPixmap(int(x), int(y), scaled)
            return

        font = painter.font()
        font.setPointSize(32)
        painter.setFont(font)
        painter.setPen(QColor(GameColors.TEXT_PRIMARY))
        painter.drawText(rect, Qt.AlignCenter, self._library.label(view.image_id))
