"""Errors raised by publish sinks."""

from bitbench.core.errors import BitbenchError


class PublishError(BitbenchError):
    """Raised when a report could not be delivered to a sink."""

    def __init__(self, sink: str, reason: str, retriable: bool = False) -> None:
        self.sink = sink
        self.reason = reason
        super().__init__(
            message=f"Failed to publish report to {sink}: {reason}",
            retriable=retriable,
        )
