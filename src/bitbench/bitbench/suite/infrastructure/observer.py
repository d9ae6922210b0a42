"""Structlog implementation of the SuiteObserver port."""

import structlog


class StructlogSuiteObserver:
    """Delegates suite domain events to structlog.

    Satisfies the SuiteObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def suite_loaded(self, suite_id: str, path: str, total_tests: int) -> None:
        self._log.info(
            "suite.loaded", suite_id=suite_id, path=path, total_tests=total_tests
        )

    def suite_skipped(self, path: str, reason: str) -> None:
        self._log.warning("suite.skipped", path=path, reason=reason)
