"""Tests for JSON suite loading infrastructure."""

from pathlib import Path

import pytest

from bitbench.suite.infrastructure.errors import SuiteLoadError
from bitbench.suite.infrastructure.json_loader import JsonSuiteLoader
from tests.suite.fake_observer import FakeSuiteObserver

# __file__ is tests/suite/infrastructure/test_json_loader.py
SUITES = Path(__file__).parent.parent.parent / "fixtures" / "suites"


class TestLoadSuite:
    """A valid suite file loads with every field populated."""

    def test_loads_metadata(self) -> None:
        suite = JsonSuiteLoader(observer=FakeSuiteObserver()).load(path=SUITES / "arith.json")

        assert suite.id == "arith"
        assert suite.name == "Arithmetic"
        assert suite.version == "1.2.0"
        assert suite.chain == "bsv"
        assert suite.system_prompt == "Answer with a number."

    def test_loads_tests_in_file_order(self) -> None:
        suite = JsonSuiteLoader(observer=FakeSuiteObserver()).load(path=SUITES / "arith.json")

        assert [t.prompt for t in suite.tests] == ["What is 6 x 7?", "What is 2 + 2?"]
        assert suite.tests[0].required_answers == frozenset({"42", "forty-two"})
        assert suite.tests[0].forbidden_answers == frozenset()
        assert suite.tests[1].forbidden_answers == frozenset({"5"})

    def test_optional_fields_default(self) -> None:
        suite = JsonSuiteLoader(observer=FakeSuiteObserver()).load(path=SUITES / "minimal.json")

        assert suite.chain == "unknown"
        assert suite.version == "1.0.0"
        assert suite.description == ""

    def test_emits_loaded_event(self) -> None:
        observer = FakeSuiteObserver()
        JsonSuiteLoader(observer=observer).load(path=SUITES / "arith.json")

        assert observer.loaded == [
            {"suite_id": "arith", "path": str(SUITES / "arith.json"), "total_tests": 2}
        ]


class TestLoadSuiteErrors:
    def test_missing_file(self) -> None:
        with pytest.raises(SuiteLoadError, match="file not found"):
            JsonSuiteLoader(observer=FakeSuiteObserver()).load(path=SUITES / "nope.json")

    def test_invalid_json(self) -> None:
        with pytest.raises(SuiteLoadError, match="invalid JSON"):
            JsonSuiteLoader(observer=FakeSuiteObserver()).load(path=SUITES / "broken.json")

    def test_schema_violation(self) -> None:
        with pytest.raises(SuiteLoadError):
            JsonSuiteLoader(observer=FakeSuiteObserver()).load(path=SUITES / "no_prompt.json")

    def test_non_utf8_file(self) -> None:
        with pytest.raises(SuiteLoadError, match="unreadable"):
            JsonSuiteLoader(observer=FakeSuiteObserver()).load(path=SUITES / "latin1.json")

    def test_directory_named_like_a_suite(self, tmp_path: Path) -> None:
        (tmp_path / "folder.json").mkdir()

        with pytest.raises(SuiteLoadError, match="unreadable"):
            JsonSuiteLoader(observer=FakeSuiteObserver()).load(path=tmp_path / "folder.json")


class TestDiscoverSuites:
    def test_loads_valid_suites_sorted_and_skips_broken(self) -> None:
        observer = FakeSuiteObserver()

        entries = JsonSuiteLoader(observer=observer).discover(directory=SUITES)

        assert [e.suite.id for e in entries] == ["arith", "minimal"]
        assert sorted(Path(s["path"]).name for s in observer.skipped) == [
            "broken.json",
            "latin1.json",
            "no_prompt.json",
        ]

    def test_missing_directory_is_empty(self, tmp_path: Path) -> None:
        entries = JsonSuiteLoader(observer=FakeSuiteObserver()).discover(
            directory=tmp_path / "absent"
        )

        assert entries == []

    def test_unreadable_entry_is_skipped(self, tmp_path: Path) -> None:
        (tmp_path / "a.json").mkdir()
        (tmp_path / "b.json").write_bytes((SUITES / "minimal.json").read_bytes())
        observer = FakeSuiteObserver()

        entries = JsonSuiteLoader(observer=observer).discover(directory=tmp_path)

        assert [e.suite.id for e in entries] == ["b"]
        assert [Path(s["path"]).name for s in observer.skipped] == ["a.json"]
