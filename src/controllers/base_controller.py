# src/controllers/base_controller.py

"""Task bookkeeping shared by the screen controllers."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any, Generic, TypeVar

from src.repository.product_repository import ProductRepository
from src.state.state_cell import StateCell, Subscription

S = TypeVar("S")


class BaseController(Generic[S]):
    """Owns one screen's state cell and the loads that write to it.

    Loads run as tasks on the event loop that created the controller.
    Each load takes a request sequence number; a completion is applied
    only while its number is still the latest one issued. After
    :meth:`close` nothing is published.
    """

    def __init__(
        self,
        repository: ProductRepository,
        initial_state: S,
        name: str,
    ) -> None:
        self.repository = repository
        self.logger = logging.getLogger(f"storefront.controllers.{name}")
        self._state = StateCell(initial_state)
        self._tasks: set[asyncio.Task[None]] = set()
        self._request_seq = 0
        self._closed = False

    # ── Observation ──────────────────────────────────────

    @property
    def state(self) -> S:
        """The latest published snapshot."""
        return self._state.value

    def subscribe(self, callback: Callable[[S], None]) -> Subscription:
        """Observe every published snapshot, starting with the current one."""
        return self._state.subscribe(callback)

    # ── State writes ─────────────────────────────────────

    def _update(self, fn: Callable[[S], S]) -> None:
        if self._closed:
            return
        self._state.update(fn)

    def _next_request(self) -> int:
        self._request_seq += 1
        return self._request_seq

    def _is_current(self, request_id: int) -> bool:
        """True while *request_id* is the latest load and we are open."""
        if self._closed:
            return False
        if request_id != self._request_seq:
            self.logger.debug(
                "Discarding stale completion #%d (latest #%d)",
                request_id,
                self._request_seq,
            )
            return False
        return True

    # ── Task lifecycle ───────────────────────────────────

    def _launch(
        self,
        loader: Callable[[int], Coroutine[Any, Any, None]],
    ) -> asyncio.Task[None] | None:
        """Start *loader* with a fresh request number as a task."""
        if self._closed:
            self.logger.debug("Ignoring load on a closed controller")
            return None
        request_id = self._next_request()
        task = asyncio.get_running_loop().create_task(loader(request_id))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def wait_until_idle(self) -> None:
        """Wait for every in-flight load, including ones started meanwhile."""
        while self._tasks:
            pending: list[Awaitable[None]] = list(self._tasks)
            await asyncio.gather(*pending, return_exceptions=True)

    def close(self) -> None:
        """Cancel in-flight loads and stop publishing."""
        self._closed = True
        for task in list(self._tasks):
            task.cancel()
        self.logger.debug(
            "Controller closed, %d load(s) cancelled", len(self._tasks)
        )
