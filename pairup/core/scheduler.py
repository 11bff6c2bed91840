from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer

logger = logging.getLogger(__name__)


class ResolutionScheduler(QObject):
    """One cancellable deferred action, run from the Qt event loop.

    Only a single action can be pending. It is held until the single-shot
    timer fires or ``cancel()`` drops it.
    """

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._action: Optional[Callable[[], None]] = None
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._fire)

    @property
    def pending(self) -> bool:
        """True while an armed action has neither fired nor been cancelled."""
        return self._action is not None

    def arm(self, delay_ms: int, action: Callable[[], None]) -> None:
        if self._action is not None:
            logger.warning("Replacing a pending resolution that has not fired yet")
        self._action = action
        self._timer.start(max(0, int(delay_ms)))

    def cancel(self) -> bool:
        """Drop the pending action. Returns True if there was one."""
        if self._action is None:
            return False
        self._timer.stop()
        self._action = None
        return True

    def _fire(self) -> None:
        action, self._action = self._action, None
        if action is not None:
            action()
