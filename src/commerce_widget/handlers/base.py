"""Shared lifecycle for views that listen to the host."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Coroutine, Optional, Set

from commerce_widget.models.host import InboundContext
from commerce_widget.services.host_bridge import HostBridge
from commerce_widget.utils.logging_config import get_logger

logger = get_logger(__name__)


class HostView:
    """
    Base for views driven by host context.

    `mount()` attaches the bridge and subscribes to context updates;
    `unmount()` undoes both. Both are idempotent, and the view is also a
    context manager. Resolution work started from a context update runs as
    a task owned by the view; `drain()` waits for it.
    """

    def __init__(self, bridge: HostBridge):
        self.bridge = bridge
        self._generation = 0
        self._tasks: Set[asyncio.Task] = set()
        self._unsubscribe: Optional[Callable[[], None]] = None

    def mount(self) -> "HostView":
        self.bridge.attach()
        if self._unsubscribe is None:
            self._unsubscribe = self.bridge.subscribe(self.handle_context)
        return self

    def unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.bridge.detach()

    def __enter__(self) -> "HostView":
        return self.mount()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unmount()

    @property
    def context(self) -> Optional[InboundContext]:
        return self.bridge.context

    def handle_context(self, context: InboundContext) -> None:
        raise NotImplementedError

    async def fetch_context(self) -> Optional[InboundContext]:
        """Manually ask the host to resend context."""
        return await self.bridge.request_context()

    async def drain(self) -> None:
        """Wait for every resolution task started from host context."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _is_current(self, generation: int, **fields: Any) -> bool:
        if generation == self._generation:
            return True
        logger.debug(
            "Discarding stale response",
            extra={"generation": generation, "current": self._generation, **fields},
        )
        return False

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task
