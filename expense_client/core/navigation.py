import logging
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


class Navigator:
    """Records navigation requests; the UI layer decides what they mean."""

    def __init__(self, initial: Optional[str] = None):
        self.current = initial
        self.history: List[str] = []
        self._listeners: List[Callable[[str], None]] = []

    def subscribe(self, callback: Callable[[str], None]) -> None:
        self._listeners.append(callback)

    def navigate(self, target: str) -> None:
        logger.debug("[Navigate] %s -> %s", self.current, target)
        self.current = target
        self.history.append(target)
        for callback in self._listeners:
            callback(target)
