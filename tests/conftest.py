from __future__ import annotations

import random
from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from spleef.infra.local_host import LocalPlayer, LocalServer
from spleef.plugin import SpleefPlugin


class ManualScheduler:
    """Scheduler whose clock only moves when a test calls `advance`."""

    def __init__(self) -> None:
        self.now = 0.0
        self._seq = 0
        self._pending: list[tuple[float, int, Callable[[], None]]] = []

    @property
    def pending(self) -> int:
        return len(self._pending)

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        self._pending.append((self.now + delay, self._seq, callback))
        self._seq += 1

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [entry for entry in self._pending if entry[0] <= target]
            if not due:
                break
            entry = min(due)
            self._pending.remove(entry)
            self.now = entry[0]
            entry[2]()
        self.now = target


@pytest.fixture()
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture()
def server() -> LocalServer:
    return LocalServer()


@pytest.fixture()
def plugin(server: LocalServer, scheduler: ManualScheduler) -> SpleefPlugin:
    return SpleefPlugin(server, scheduler=scheduler, rng=random.Random(1234))


@pytest.fixture()
def join(plugin: SpleefPlugin) -> Callable[[str], LocalPlayer]:
    def _join(name: str) -> LocalPlayer:
        player = LocalPlayer(name=name)
        plugin.realm.join(player)
        return player

    return _join


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    """FastAPI TestClient with a fresh local server and plugin per test."""

    from spleef.main import app
    from spleef.runtime import reset_runtime_for_tests

    reset_runtime_for_tests()
    with TestClient(app) as c:
        yield c
    reset_runtime_for_tests()
