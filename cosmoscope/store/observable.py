"""
Observable state container.

Holds one immutable-by-convention state value and notifies subscribers
synchronously after every mutation. No coalescing: five mutations fire five
notifications.
"""

import logging
from typing import Callable, Generic, List, TypeVar


logger = logging.getLogger(__name__)

S = TypeVar("S")
Listener = Callable[[], None]


class ObservableStore(Generic[S]):
    """
    Owned state value plus an ordered list of zero-argument listeners.

    Listeners are snapshotted before each notification, so subscribing from
    inside a listener is safe but the new listener only sees later mutations.
    """

    def __init__(self, initial: S):
        self._state = initial
        self._listeners: List[Listener] = []

    def get_snapshot(self) -> S:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener invoked after every mutation.

        Returns:
            Function that removes the listener. Calling it twice is a no-op.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def replace(self, state: S) -> None:
        """Swap in a new state value and notify."""
        self._state = state
        self._notify()

    def update(self, fn: Callable[[S], S]) -> None:
        """Derive the next state from the current one and notify."""
        self.replace(fn(self._state))

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
