from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class EventHandlingResult(StrEnum):
    continue_ = "continue"
    stop = "stop"


Handler = Callable[[T], EventHandlingResult]


class Event(Generic[T]):
    """Synchronous in-process event stream.

    Contract:
      - handlers run in subscription order on the emitting thread.
      - a handler returning `stop` ends propagation for that emit.
    """

    def __init__(self) -> None:
        self._handlers: list[Handler[T]] = []

    def subscribe(self, handler: Handler[T]) -> None:
        self._handlers.append(handler)

    def emit(self, value: T) -> EventHandlingResult:
        for handler in list(self._handlers):
            if handler(value) is EventHandlingResult.stop:
                return EventHandlingResult.stop
        return EventHandlingResult.continue_
