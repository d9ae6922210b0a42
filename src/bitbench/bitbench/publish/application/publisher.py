"""publish_report — delivers one report to every configured sink."""

from bitbench.evaluation.domain.report import BenchmarkReport
from bitbench.publish.domain.observer import PublishObserver
from bitbench.publish.domain.receipt import PublishReceipt
from bitbench.publish.domain.sink import PublishSink
from bitbench.publish.infrastructure.errors import PublishError


async def publish_report(
    report: BenchmarkReport,
    sinks: list[PublishSink],
    observer: PublishObserver,
) -> list[PublishReceipt]:
    """Publish to each sink in order and return one receipt per sink.

    A failing sink is reported to the observer and recorded in its receipt;
    the remaining sinks are still attempted.
    """
    receipts: list[PublishReceipt] = []
    for sink in sinks:
        try:
            location = await sink.publish(report)
        except PublishError as exc:
            observer.publish_failed(sink=sink.name, reason=exc.reason)
            receipts.append(PublishReceipt(sink=sink.name, ok=False, error=exc.reason))
            continue
        observer.publish_succeeded(sink=sink.name, location=location)
        receipts.append(PublishReceipt(sink=sink.name, ok=True, location=location))
    return receipts
