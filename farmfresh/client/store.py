# farmfresh/client/store.py
import inspect
import logging
from typing import Any, Callable, List, Literal

logger = logging.getLogger(__name__)

Status = Literal["loading", "ready"]

Listener = Callable[[Any], Any]


class Store:
    """Observable state holder. Listeners run after every state change and
    may be plain callables or coroutine functions."""

    def __init__(self):
        self.status: Status = "loading"
        self._listeners: List[Listener] = []

    @property
    def is_loading(self) -> bool:
        return self.status == "loading"

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)
        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    async def _emit(self) -> None:
        for listener in list(self._listeners):
            result = listener(self)
            if inspect.isawaitable(result):
                await result
