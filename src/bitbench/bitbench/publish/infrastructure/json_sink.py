"""JsonReportSink — writes reports as camelCase JSON files under an output directory."""

import asyncio
import re
from pathlib import Path

from bitbench.evaluation.domain.report import BenchmarkReport
from bitbench.publish.infrastructure.errors import PublishError

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]")


class JsonReportSink:
    """Writes ``<output_dir>/<suite>/<version>/report-<stamp>.json``.

    The stamp is the report timestamp in compact UTC form, so re-publishing
    the same report overwrites its own file and nothing else.
    """

    def __init__(self, output_dir: Path) -> None:
        self._output_dir = output_dir

    @property
    def name(self) -> str:
        return "json"

    def path_for(self, report: BenchmarkReport) -> Path:
        stamp = report.timestamp.strftime("%Y%m%dT%H%M%SZ")
        return (
            self._output_dir
            / _UNSAFE.sub("_", report.suite_id)
            / _UNSAFE.sub("_", report.version)
            / f"report-{stamp}.json"
        )

    async def publish(self, report: BenchmarkReport) -> str:
        path = self.path_for(report)
        payload = report.model_dump_json(by_alias=True, indent=2)
        try:
            await asyncio.to_thread(self._write, path, payload)
        except OSError as exc:
            raise PublishError(sink=self.name, reason=str(exc)) from exc
        return str(path)

    @staticmethod
    def _write(path: Path, payload: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(payload + "\n", encoding="utf-8")
