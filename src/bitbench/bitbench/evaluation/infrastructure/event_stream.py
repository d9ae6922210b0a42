"""EventStream — fans RunnerEvents out to registered observers, in order."""

import asyncio

from bitbench.evaluation.domain.events import RunnerEvent
from bitbench.evaluation.domain.observer import RunnerObserver


class EventStream:
    """Delivers every emitted event to each subscriber in registration order.

    Emission is synchronous on the event loop thread, so all subscribers see
    the same sequence and no event is delivered twice. An EventStream is
    itself a RunnerObserver and can be subscribed to another stream.
    """

    def __init__(self, observers: list[RunnerObserver] | None = None) -> None:
        self._observers: list[RunnerObserver] = list(observers or [])

    def subscribe(self, observer: RunnerObserver) -> None:
        self._observers.append(observer)

    def emit(self, event: RunnerEvent) -> None:
        for observer in self._observers:
            observer.handle(event)

    def handle(self, event: RunnerEvent) -> None:
        self.emit(event)


class QueueObserver:
    """Buffers events in an unbounded queue for consumers that await them.

    ``handle`` never blocks, so a slow consumer cannot stall the scheduler.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[RunnerEvent] = asyncio.Queue()

    def handle(self, event: RunnerEvent) -> None:
        self._queue.put_nowait(event)

    async def get(self) -> RunnerEvent:
        return await self._queue.get()

    def drain(self) -> list[RunnerEvent]:
        """Return every buffered event without waiting."""
        events: list[RunnerEvent] = []
        while not self._queue.empty():
            events.append(self._queue.get_nowait())
        return events
