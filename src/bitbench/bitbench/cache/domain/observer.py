"""Observer port for the cache domain — defines events in domain language."""

from typing import Protocol


class CacheObserver(Protocol):
    def cache_read_failed(self, path: str, reason: str) -> None: ...

    def cache_stale(self, path: str, model: str, test_index: int) -> None: ...

    def cache_write_failed(self, path: str, reason: str) -> None: ...
