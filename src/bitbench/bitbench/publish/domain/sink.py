"""PublishSink Protocol — a destination for finished benchmark reports."""

from typing import Protocol

from bitbench.evaluation.domain.report import BenchmarkReport


class PublishSink(Protocol):
    """Publishes a report and returns where it ended up (a path or URL).

    Implementations raise PublishError on failure.
    """

    @property
    def name(self) -> str: ...

    async def publish(self, report: BenchmarkReport) -> str: ...
