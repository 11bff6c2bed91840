"""Application entry point and setup for the PairUp matching game."""

import logging
import sys

from PySide6.QtGui import QFont, QGuiApplication
from PySide6.QtWidgets import QApplication

from pairup.core.config import load_rules
from pairup.core.deck import DeckGenerator
from pairup.core.game import MatchingGame
from pairup.core.images import ImagePool
from pairup.core.scheduler import ResolutionScheduler
from pairup.ui.main_window import MainWindow


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def apply_application_font(app: QApplication) -> None:
    """Use a rounded UI font with emoji fallbacks so the tile labels render."""
    app_font = QFont()
    app_font.setFamilies(
        [
            "Quicksand",
            "Noto Sans",
            "Noto Color Emoji",  # Linux (common)
            "Segoe UI Emoji",  # Windows
            "Apple Color Emoji",  # macOS
        ]
    )
    app_font.setPointSize(11)
    app.setFont(app_font)
    QGuiApplication.setFont(app_font)


def run() -> None:
    """Load the catalog and rules, deal the first deck and show the window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("PairUp")
    app.setApplicationDisplayName("PairUp")
    apply_application_font(app)

    pool = ImagePool()
    rules = load_rules()
    scheduler = ResolutionScheduler(app)
    game = MatchingGame(DeckGenerator(pool), scheduler, rules, category=pool.keys()[0])
    logging.info("Loaded %d image categories", len(pool.keys()))

    window = MainWindow(game=game, pool=pool)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
