"""SuiteLoader Protocol — structural interface for loading test suites."""

from pathlib import Path
from typing import Protocol

from bitbench.suite.domain.suite import SuiteEntry, TestSuite


class SuiteLoader(Protocol):
    def load(self, path: Path) -> TestSuite: ...

    def discover(self, directory: Path) -> list[SuiteEntry]: ...
