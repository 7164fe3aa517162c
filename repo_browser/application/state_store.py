"""Observable holder for the current pagination state."""
import asyncio
import logging
from typing import AsyncIterator, Callable, List
from repo_browser.domain.models import PaginationState


logger = logging.getLogger(__name__)

StateListener = Callable[[PaginationState], None]


class StateStore:
    """Holds the latest PaginationState and notifies observers of changes.

    Observers always see the current value first, then every distinct value
    in the order it was set. Setting a value equal to the current one emits
    nothing.
    """

    def __init__(self, initial: PaginationState = PaginationState()):
        self._value = initial
        self._listeners: List[StateListener] = []
        self._queues: List[asyncio.Queue] = []

    @property
    def value(self) -> PaginationState:
        return self._value

    def set(self, value: PaginationState) -> None:
        if value == self._value:
            return
        self._value = value

        for queue in list(self._queues):
            queue.put_nowait(value)

        for listener in list(self._listeners):
            try:
                listener(value)
            except Exception:
                # One broken observer must not starve the others
                logger.exception("State listener failed")

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a callback and immediately call it with the current state.

        Returns:
            A callable that removes the listener again
        """
        self._listeners.append(listener)
        listener(self._value)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def updates(self) -> AsyncIterator[PaginationState]:
        """Iterate over the current state and every later change."""
        queue: asyncio.Queue = asyncio.Queue()
        queue.put_nowait(self._value)
        self._queues.append(queue)
        try:
            while True:
                yield await queue.get()
        finally:
            self._queues.remove(queue)
