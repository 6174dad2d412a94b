"""Observable holder of the canonical progress snapshot."""

from collections import deque
from typing import Callable, Iterable, Optional

from ritual.domain.model import LevelUpEvent, ProgressState, empty_progress

Listener = Callable[[ProgressState], None]


class ProgressStateStore:
    """Holds the current ProgressState and notifies subscribers on change.

    Only the engine writes to the store; everything else reads snapshots.
    Snapshots are frozen models, so readers can keep them safely.
    """

    def __init__(self, initial: Optional[ProgressState] = None) -> None:
        self._state = initial or empty_progress()
        self._listeners: list[Listener] = []

    def get(self) -> ProgressState:
        return self._state

    def set(self, state: ProgressState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe


class LevelUpQueue:
    """FIFO of pending league crossings, shown one at a time."""

    def __init__(self) -> None:
        self._events: deque[LevelUpEvent] = deque()

    def push(self, events: Iterable[LevelUpEvent]) -> None:
        self._events.extend(events)

    @property
    def current(self) -> Optional[LevelUpEvent]:
        """Event currently on display, if any."""
        return self._events[0] if self._events else None

    def acknowledge(self) -> Optional[LevelUpEvent]:
        """Dismiss the current event.

        Returns:
            The next event to display, if any
        """
        if self._events:
            self._events.popleft()
        return self.current

    def clear(self) -> None:
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)
