"""ResultStore Protocol — durable storage for CachedResult records."""

from collections.abc import Iterator
from typing import Protocol

from bitbench.cache.domain.key import UnitKey
from bitbench.cache.domain.result import CachedResult


class ResultStore(Protocol):
    """Key-value store of completed executions.

    Implementations must tolerate concurrent calls from worker threads.
    ``lookup`` never raises for I/O problems (they read as a miss) and
    ``store`` never raises either (it returns False when persistence failed).
    """

    def lookup(self, key: UnitKey, fingerprint: str) -> CachedResult | None: ...

    def store(self, result: CachedResult) -> bool: ...

    def count(self, suite_id: str, version: str) -> int: ...

    def iter_results(self) -> Iterator[CachedResult]: ...
