"""Tests for JsonReportSink."""

import json
from pathlib import Path

import pytest

from bitbench.publish.infrastructure.errors import PublishError
from bitbench.publish.infrastructure.json_sink import JsonReportSink
from tests.publish.report_factory import make_report


class TestJsonReportSink:
    async def test_writes_camel_case_report(self, tmp_path: Path) -> None:
        sink = JsonReportSink(output_dir=tmp_path)

        location = await sink.publish(make_report())

        path = Path(location)
        assert path == tmp_path / "arith" / "2026-10-19" / "report-20261019T083005Z.json"
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["suiteId"] == "arith"
        assert data["rankings"][0]["successRate"] == 75.0
        assert data["metadata"]["totalTestsRun"] == 4

    async def test_unsafe_segments_are_sanitized(self, tmp_path: Path) -> None:
        sink = JsonReportSink(output_dir=tmp_path)

        path = sink.path_for(make_report(suite_id="a/b", version="v 1"))

        assert path.parent == tmp_path / "a_b" / "v_1"

    async def test_unwritable_output_raises_publish_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "out"
        blocker.write_text("not a directory", encoding="utf-8")
        sink = JsonReportSink(output_dir=blocker)

        with pytest.raises(PublishError) as exc_info:
            await sink.publish(make_report())

        assert exc_info.value.sink == "json"
