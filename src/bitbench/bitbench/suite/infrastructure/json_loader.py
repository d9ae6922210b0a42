"""JSON suite loader — reads suite definition files into TestSuite objects."""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from bitbench.suite.domain.observer import SuiteObserver
from bitbench.suite.domain.suite import SuiteEntry, TestCase, TestSuite
from bitbench.suite.infrastructure.errors import SuiteLoadError


class _QuestionFile(BaseModel):
    prompt: str
    answers: list[str]
    negative_answers: list[str] = Field(default_factory=list)


class _SuiteFile(BaseModel):
    """On-disk schema of a suite definition (snake_case keys, as authored)."""

    name: str = Field(min_length=1)
    description: str = ""
    version: str = "1.0.0"
    chain: str = "unknown"
    system_prompt: str
    tests: list[_QuestionFile]


class JsonSuiteLoader:
    """Loads suite definitions from ``*.json`` files.

    The suite id is the file stem, so ``suites/bsv-script.json`` becomes
    ``bsv-script``; the id is what cache keys and reports are addressed by.
    """

    def __init__(self, observer: SuiteObserver) -> None:
        self._observer = observer

    def load(self, path: Path) -> TestSuite:
        """
        Parse a single suite file.

        Raises:
            SuiteLoadError: if the file is missing, is not valid JSON, or does
                not match the suite schema.
        """
        raw = _read_json(path=path)
        try:
            parsed = _SuiteFile.model_validate(raw)
        except ValidationError as exc:
            raise SuiteLoadError(f"{path}: {exc}") from exc

        suite = TestSuite(
            id=path.stem,
            name=parsed.name,
            description=parsed.description,
            version=parsed.version,
            chain=parsed.chain,
            system_prompt=parsed.system_prompt,
            tests=tuple(
                TestCase(
                    prompt=question.prompt,
                    required_answers=frozenset(question.answers),
                    forbidden_answers=frozenset(question.negative_answers),
                )
                for question in parsed.tests
            ),
        )
        self._observer.suite_loaded(
            suite_id=suite.id, path=str(path), total_tests=len(suite.tests)
        )
        return suite

    def discover(self, directory: Path) -> list[SuiteEntry]:
        """Load every ``*.json`` suite in directory, sorted by file name.

        Files that fail to load are reported to the observer and skipped so
        that one broken definition does not hide the others.
        """
        if not directory.is_dir():
            return []
        entries: list[SuiteEntry] = []
        for path in sorted(directory.glob("*.json")):
            try:
                suite = self.load(path=path)
            except SuiteLoadError as exc:
                self._observer.suite_skipped(path=str(path), reason=str(exc))
                continue
            entries.append(SuiteEntry(path=str(path), suite=suite))
        return entries


def _read_json(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SuiteLoadError(f"file not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SuiteLoadError(f"{path}: unreadable: {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise SuiteLoadError(f"{path}: invalid JSON: {exc}") from exc
