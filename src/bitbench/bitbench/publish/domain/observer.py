"""Observer port for the publish domain."""

from typing import Protocol


class PublishObserver(Protocol):
    def publish_succeeded(self, sink: str, location: str) -> None: ...

    def publish_failed(self, sink: str, reason: str) -> None: ...
