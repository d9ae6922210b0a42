"""Fake CacheObserver for use in tests — records events without mocking."""


class FakeCacheObserver:
    def __init__(self) -> None:
        self.read_failures: list[dict[str, str]] = []
        self.stale: list[dict[str, object]] = []
        self.write_failures: list[dict[str, str]] = []

    def cache_read_failed(self, path: str, reason: str) -> None:
        self.read_failures.append({"path": path, "reason": reason})

    def cache_stale(self, path: str, model: str, test_index: int) -> None:
        self.stale.append({"path": path, "model": model, "test_index": test_index})

    def cache_write_failed(self, path: str, reason: str) -> None:
        self.write_failures.append({"path": path, "reason": reason})
