from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass

from spleef.config import HostSettings
from spleef.infra.local_host import LocalServer
from spleef.plugin import SpleefPlugin

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Runtime:
    settings: HostSettings
    server: LocalServer
    plugin: SpleefPlugin
    tick_task: asyncio.Task[None] | None = None


_RUNTIME: Runtime | None = None


def init_runtime(*, settings: HostSettings) -> Runtime:
    """Create the local server and install the spleef plugin once.

    Safe to call multiple times; subsequent calls return the existing runtime.
    """

    global _RUNTIME
    if _RUNTIME is None:
        server = LocalServer()
        _RUNTIME = Runtime(settings=settings, server=server, plugin=SpleefPlugin(server))
    return _RUNTIME


def reset_runtime_for_tests() -> None:
    global _RUNTIME
    _RUNTIME = None


def get_runtime() -> Runtime:
    if _RUNTIME is None:
        raise RuntimeError("Runtime not initialized. Call init_runtime() at startup.")
    return _RUNTIME


async def run_tick_loop(server: LocalServer, *, tick_rate: float) -> None:
    """Emit server ticks at a fixed rate until cancelled.

    A failing tick handler is logged; the stream keeps going.
    """

    interval = 1 / tick_rate
    last = time.monotonic()
    while True:
        now = time.monotonic()
        try:
            server.tick(now - last)
        except Exception:
            logger.exception("Server tick failed")
        last = now
        await asyncio.sleep(interval)


def start_ticking(runtime: Runtime) -> None:
    if runtime.tick_task is None or runtime.tick_task.done():
        runtime.tick_task = asyncio.create_task(run_tick_loop(runtime.server, tick_rate=runtime.settings.tick_rate))


async def stop_ticking(runtime: Runtime) -> None:
    task = runtime.tick_task
    if task is None:
        return
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass
    runtime.tick_task = None
