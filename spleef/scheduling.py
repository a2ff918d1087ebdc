from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Protocol


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> None: ...


class LoopScheduler:
    """Runs delayed callbacks on the asyncio loop that also drives ticks and sockets.

    Callbacks are queued back onto that loop, so they never overlap a tick.
    When no loop is given, the running loop at scheduling time is used.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        loop = self._loop or asyncio.get_running_loop()
        loop.call_later(delay, callback)
