# src/state/state_cell.py

"""Single-writer holder of the latest state snapshot with subscriptions."""

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger("storefront.state")

S = TypeVar("S")


class Subscription:
    """Handle returned by :meth:`StateCell.subscribe`."""

    def __init__(self, cancel_fn: Callable[[], None]) -> None:
        self._cancel_fn = cancel_fn
        self.active = True

    def cancel(self) -> None:
        """Stop receiving snapshots. Safe to call more than once."""
        if self.active:
            self.active = False
            self._cancel_fn()


class StateCell(Generic[S]):
    """Holds the current snapshot and notifies subscribers on change.

    All writes go through :meth:`update` on the owning event loop, so
    there is exactly one writer per cell.
    """

    def __init__(self, initial: S) -> None:
        self._value: S = initial
        self._subscribers: dict[int, Callable[[S], None]] = {}
        self._next_id = 0

    @property
    def value(self) -> S:
        """The latest published snapshot."""
        return self._value

    def subscribe(self, callback: Callable[[S], None]) -> Subscription:
        """Register *callback*; it receives the current snapshot at once."""
        sub_id = self._next_id
        self._next_id += 1
        self._subscribers[sub_id] = callback
        callback(self._value)
        return Subscription(lambda: self._subscribers.pop(sub_id, None))

    def update(self, fn: Callable[[S], S]) -> S:
        """Replace the snapshot with ``fn(current)`` and publish it."""
        new_value = fn(self._value)
        if new_value == self._value:
            return self._value
        self._value = new_value
        for callback in list(self._subscribers.values()):
            try:
                callback(new_value)
            except Exception:
                logger.error(
                    "State subscriber raised", exc_info=True
                )
        return new_value

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)
