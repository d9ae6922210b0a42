"""Tests for publish_report."""

from bitbench.publish.application.publisher import publish_report
from tests.publish.fake_observer import FakePublishObserver
from tests.publish.fake_sink import FakeSink
from tests.publish.report_factory import make_report


class TestPublishReport:
    async def test_every_sink_receives_the_report(self) -> None:
        first, second = FakeSink("first"), FakeSink("second")
        observer = FakePublishObserver()
        report = make_report()

        receipts = await publish_report(report=report, sinks=[first, second], observer=observer)

        assert first.published == [report]
        assert second.published == [report]
        assert [r.ok for r in receipts] == [True, True]
        assert receipts[0].location == "memory://first/arith"
        assert [s["sink"] for s in observer.succeeded] == ["first", "second"]

    async def test_failing_sink_does_not_stop_the_others(self) -> None:
        broken, healthy = FakeSink("broken", fail_with="HTTP 503"), FakeSink("healthy")
        observer = FakePublishObserver()

        receipts = await publish_report(
            report=make_report(), sinks=[broken, healthy], observer=observer
        )

        assert [(r.sink, r.ok) for r in receipts] == [("broken", False), ("healthy", True)]
        assert receipts[0].error == "HTTP 503"
        assert observer.failed == [{"sink": "broken", "reason": "HTTP 503"}]
        assert len(healthy.published) == 1

    async def test_no_sinks(self) -> None:
        receipts = await publish_report(
            report=make_report(), sinks=[], observer=FakePublishObserver()
        )

        assert receipts == []
