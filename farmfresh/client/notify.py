# farmfresh/client/notify.py
import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, List, Literal

logger = logging.getLogger(__name__)

Variant = Literal["default", "destructive"]


@dataclass(frozen=True)
class Notification:
    title: str
    description: str = ""
    variant: Variant = "default"


class Notifier:
    """User-facing notifications (the storefront's toasts)."""

    def __init__(self, history_size: int = 50):
        self.history: Deque[Notification] = deque(maxlen=history_size)
        self._listeners: List[Callable[[Notification], None]] = []

    def subscribe(self, listener: Callable[[Notification], None]) -> Callable[[], None]:
        self._listeners.append(listener)
        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def notify(self, title: str, description: str = "", variant: Variant = "default") -> Notification:
        note = Notification(title=title, description=description, variant=variant)
        self.history.append(note)
        level = logging.WARNING if variant == "destructive" else logging.INFO
        logger.log(level, "%s: %s", title, description)
        for listener in list(self._listeners):
            listener(note)
        return note

    def error(self, title: str, description: str = "") -> Notification:
        return self.notify(title, description, variant="destructive")

    @property
    def last(self):
        return self.history[-1] if self.history else None
