from __future__ import annotations

import logging
from typing import List, Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QComboBox,
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from pairup.core.deck import MAX_LEVEL, MIN_LEVEL
from pairup.core.errors import GameSetupError
from pairup.core.game import MatchingGame, Progression, SelectResult
from pairup.core.images import ImagePool
from pairup.ui.colors import GameColors
from pairup.ui.models import tile_views
from pairup.ui.overlays import LevelCompletedOverlay
from pairup.ui.tile_widgets import ImageLibrary, TileWidget

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Single-screen window: level and category pickers, score, feedback and the board.

    The window holds no game rules. Clicks go to ``MatchingGame.select`` and
    every change the game reports triggers a repaint from its current state.
    """

    def __init__(self, game: MatchingGame, pool: ImagePool) -> None:
        super().__init__()
        self._game = game
        self._pool = pool
        self._library = ImageLibrary(pool.label_for)
        self._tiles: List[TileWidget] = []
        self._board_generation: Optional[int] = None
        self._game_finished = False

        self._level_combo: Optional[QComboBox] = None
        self._category_combo: Optional[QComboBox] = None
        self._score_label: Optional[QLabel] = None
        self._pairs_label: Optional[QLabel] = None
        self._feedback_label: Optional[QLabel] = None
        self._board: Optional[QWidget] = None
        self._board_layout: Optional[QGridLayout] = None
        self._completed_overlay: Optional[LevelCompletedOverlay] = None

        self._build_ui()
        self._game.set_on_change(self._refresh)
        self._refresh()

    def _build_ui(self) -> None:
        self.setWindowTitle("PairUp - Matching Pair Game")
        self.setMinimumSize(640, 720)
        self.setStyleSheet(
            f"""
            QMainWindow {{
                background: qlineargradient(x1:0, y1:0, x2:0, y2:1,
                    stop:0 {GameColors.BG_TOP}, stop:1 {GameColors.BG_BOTTOM});
            }}
            """
        )

        root = QWidget()
        self.setCentralWidget(root)
        outer = QVBoxLayout(root)
        outer.setContentsMargins(24, 24, 24, 24)

        card = QFrame()
        card.setObjectName("gameCard")
        card.setMaximumWidth(900)
        card.setStyleSheet(
            f"""
            QFrame#gameCard {{
                background: {GameColors.CARD_BG};
                border-radius: 16px;
            }}
            """
        )
        outer.addWidget(card, 1, Qt.AlignHCenter)
        layout = QVBoxLayout(card)
        layout.setContentsMargins(32, 28, 32, 28)
        layout.setSpacing(14)

        title = QLabel("🧩 Let's Play the Matching Pair Game!")
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet(f"color: {GameColors.TEXT_PRIMARY}; font-size: 26px; font-weight: 800;")
        layout.addWidget(title)

        intro = QLabel("Select your level and category to start playing. Match all the pairs to win!")
        intro.setAlignment(Qt.AlignCenter)
        intro.setWordWrap(True)
        intro.setStyleSheet(f"color: {GameColors.TEXT_SECONDARY}; font-size: 15px;")
        layout.addWidget(intro)

        controls = QHBoxLayout()
        controls.setSpacing(12)
        level_caption = QLabel("Select Level:")
        level_caption.setStyleSheet("font-weight: 600;")
        self._level_combo = QComboBox()
        for level in range(MIN_LEVEL, MAX_LEVEL + 1):
            self._level_combo.addItem(f"Level {level}", level)
        self._level_combo.currentIndexChanged.connect(self._on_level_changed)

        category_caption = QLabel("Select Category:")
        category_caption.setStyleSheet("font-weight: 600;")
        self._category_combo = QComboBox()
        for category in self._pool.all():
            self._category_combo.addItem(category.name, category.key)
        self._category_combo.currentIndexChanged.connect(self._on_category_changed)

        shuffle_btn = QPushButton("🔀 New Deck")
        shuffle_btn.setCursor(Qt.PointingHandCursor)
        shuffle_btn.clicked.connect(self._on_new_deck)

        controls.addWidget(level_caption)
        controls.addWidget(self._level_combo, 1)
        controls.addWidget(category_caption)
        controls.addWidget(self._category_combo, 1)
        controls.addWidget(shuffle_btn)
        layout.addLayout(controls)

        stats = QHBoxLayout()
        self._score_label = QLabel("")
        self._score_label.setStyleSheet("font-weight: 700; font-size: 17px;")
        self._pairs_label = QLabel("")
        self._pairs_label.setStyleSheet(f"color: {GameColors.TEXT_MUTED}; font-size: 14px;")
        stats.addWidget(self._score_label)
        stats.addStretch(1)
        stats.addWidget(self._pairs_label)
        layout.addLayout(stats)

        self._feedback_label = QLabel("")
        self._feedback_label.setAlignment(Qt.AlignCenter)
        self._feedback_label.setMinimumHeight(28)
        self._feedback_label.setStyleSheet(f"color: {GameColors.PRIMARY}; font-size: 18px;")
        layout.addWidget(self._feedback_label)

        self._board = QWidget()
        self._board_layout = QGridLayout(self._board)
        self._board_layout.setSpacing(12)
        layout.addWidget(self._board, 1, Qt.AlignHCenter | Qt.AlignTop)

        self._completed_overlay = LevelCompletedOverlay(root)
        self._completed_overlay.hide()
        self._completed_overlay.closed.connect(self._on_overlay_closed)

    def _rebuild_board(self) -> None:
        """Recreate tile widgets for a freshly generated deck."""
        while self._board_layout.count():
            item = self._board_layout.takeAt(0)
            w = item.widget()
            if w is not None:
                w.setParent(None)
                w.deleteLater()
        self._tiles = []

        state = self._game.state
        columns = state.grid_columns()
        for index in range(len(state.tiles)):
            tile = TileWidget(index, self._library, self._on_tile_clicked)
            self._board_layout.addWidget(tile, index // columns, index % columns)
            self._tiles.append(tile)
        self._board_generation = self._game.generation

    def _refresh(self) -> None:
        if self._board_generation != self._game.generation:
            self._rebuild_board()
            self._sync_controls()

        state = self._game.state
        for widget, view in zip(self._tiles, tile_views(state)):
            widget.set_view(view)
        self._score_label.setText(f"Score: {state.score}")
        self._pairs_label.setText(f"Pairs: {state.matched_pairs()}/{state.total_pairs()}")
        if not self._game_finished:
            self._feedback_label.setText(state.feedback.text)

    def _sync_controls(self) -> None:
        for combo, value in (
            (self._level_combo, self._game.level),
            (self._category_combo, self._game.category),
        ):
            combo.blockSignals(True)
            combo.setCurrentIndex(combo.findData(value))
            combo.blockSignals(False)

    def _apply_setup(self, change, value) -> None:
        self._game_finished = False
        try:
            change(value)
        except GameSetupError as e:
            logger.warning("Rejected game change to %r: %s", value, e)
            self._sync_controls()
            self._feedback_label.setText(str(e))

    def _on_level_changed(self, _index: int) -> None:
        self._apply_setup(self._game.set_level, self._level_combo.currentData())

    def _on_category_changed(self, _index: int) -> None:
        self._apply_setup(self._game.set_category, self._category_combo.currentData())

    def _on_new_deck(self) -> None:
        self._game_finished = False
        self._game.restart()

    def _on_tile_clicked(self, index: int) -> None:
        if self._completed_overlay.isVisible():
            return
        result = self._game.select(index)
        if result is SelectResult.MATCHED and self._game.is_level_complete():
            generation = self._game.generation
            QTimer.singleShot(400, lambda: self._show_level_completed(generation))

    def _show_level_completed(self, generation: int) -> None:
        if generation != self._game.generation or not self._game.is_level_complete():
            return
        final = self._game.state.progression() is Progression.GAME_COMPLETE
        self._completed_overlay.present(self._game.level, self._game.score, final)

    def _on_overlay_closed(self, accepted: bool) -> None:
        if not accepted:
            return
        progression = self._game.advance()
        if progression is Progression.GAME_COMPLETE:
            self._game_finished = True
            self._feedback_label.setText("🎊 Congratulations! You matched every pair in every level.")

    def closeEvent(self, event: QCloseEvent) -> None:
        """Stop any pending flip-back before the window goes away."""
        self._game.close()
        super().closeEvent(event)
