"""Structlog implementation of the CacheObserver port."""

import structlog


class StructlogCacheObserver:
    """Delegates cache domain events to structlog.

    Satisfies the CacheObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def cache_read_failed(self, path: str, reason: str) -> None:
        self._log.warning("cache.read_failed", path=path, reason=reason)

    def cache_stale(self, path: str, model: str, test_index: int) -> None:
        self._log.info(
            "cache.stale", path=path, model=model, test_index=test_index
        )

    def cache_write_failed(self, path: str, reason: str) -> None:
        self._log.error("cache.write_failed", path=path, reason=reason)
