"""Observer port for the suite domain — defines events in domain language."""

from typing import Protocol


class SuiteObserver(Protocol):
    def suite_loaded(self, suite_id: str, path: str, total_tests: int) -> None: ...

    def suite_skipped(self, path: str, reason: str) -> None: ...
