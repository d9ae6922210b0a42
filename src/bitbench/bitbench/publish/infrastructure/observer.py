"""Structlog implementation of the PublishObserver port."""

import structlog


class StructlogPublishObserver:
    """Delegates publish domain events to structlog.

    Satisfies the PublishObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def publish_succeeded(self, sink: str, location: str) -> None:
        self._log.info("publish.succeeded", sink=sink, location=location)

    def publish_failed(self, sink: str, reason: str) -> None:
        self._log.error("publish.failed", sink=sink, reason=reason)
