"""Tests for EventStream and QueueObserver."""

from bitbench.evaluation.domain.events import PlanEvent, PlanTotals, RunnerEvent, StartEvent
from bitbench.evaluation.infrastructure.event_stream import EventStream, QueueObserver
from tests.evaluation.recording_observer import RecordingRunnerObserver


def _events() -> list[RunnerEvent]:
    return [
        PlanEvent(totals={"A": PlanTotals(total=2, execute=2, reuse=0)}),
        StartEvent(model="A", test_index=0, run_number=1),
        StartEvent(model="A", test_index=1, run_number=1),
    ]


class TestEventStream:
    def test_every_subscriber_sees_the_same_sequence(self) -> None:
        first, second = RecordingRunnerObserver(), RecordingRunnerObserver()
        stream = EventStream(observers=[first])
        stream.subscribe(second)

        for event in _events():
            stream.emit(event)

        assert first.events == _events()
        assert second.events == _events()

    def test_subscribers_are_called_in_registration_order(self) -> None:
        calls: list[str] = []

        class _Named:
            def __init__(self, name: str) -> None:
                self._name = name

            def handle(self, event: RunnerEvent) -> None:
                calls.append(self._name)

        stream = EventStream()
        stream.subscribe(_Named("one"))
        stream.subscribe(_Named("two"))

        stream.emit(_events()[0])

        assert calls == ["one", "two"]

    def test_streams_can_be_nested(self) -> None:
        recorder = RecordingRunnerObserver()
        inner = EventStream(observers=[recorder])
        outer = EventStream(observers=[inner])

        outer.emit(_events()[1])

        assert recorder.events == [_events()[1]]


class TestQueueObserver:
    async def test_buffers_events_for_async_consumers(self) -> None:
        queue = QueueObserver()
        stream = EventStream(observers=[queue])

        for event in _events():
            stream.emit(event)

        assert await queue.get() == _events()[0]
        assert queue.drain() == _events()[1:]
        assert queue.drain() == []
