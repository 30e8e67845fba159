"""Observer support for editor state objects."""

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, TypeVar

SnapshotT = TypeVar("SnapshotT")

Listener = Callable[[Any], None]


class Observable(ABC, Generic[SnapshotT]):
    """State object that publishes an immutable snapshot on every change.

    Listeners are called synchronously, in subscription order, with the
    snapshot taken right after the change.
    """

    def __init__(self) -> None:
        self._listeners: list[Callable[[SnapshotT], None]] = []

    @abstractmethod
    def snapshot(self) -> SnapshotT:
        """Return an immutable view of the current state."""
        pass

    def subscribe(self, listener: Callable[[SnapshotT], None]) -> Callable[[], None]:
        """Register a listener.

        Args:
            listener: Called with a snapshot after each change.

        Returns:
            Function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)
