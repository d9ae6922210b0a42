"""WebhookSink — POSTs reports as JSON to an HTTP endpoint via httpx."""

import json

import httpx

from bitbench.evaluation.domain.report import BenchmarkReport
from bitbench.publish.infrastructure.errors import PublishError


class WebhookSink:
    """Delivers a report in one POST; 5xx and 429 responses are marked retriable.

    ``transport`` lets tests substitute ``httpx.MockTransport``.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._transport = transport

    @property
    def name(self) -> str:
        return "webhook"

    async def publish(self, report: BenchmarkReport) -> str:
        body = json.loads(report.model_dump_json(by_alias=True))
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout),
            headers={"Content-Type": "application/json"},
            transport=self._transport,
        ) as client:
            try:
                response = await client.post(self._url, json=body)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                status = exc.response.status_code
                raise PublishError(
                    sink=self.name,
                    reason=f"HTTP {status} from {self._url}",
                    retriable=status >= 500 or status == 429,
                ) from exc
            except httpx.HTTPError as exc:
                raise PublishError(
                    sink=self.name, reason=str(exc) or type(exc).__name__, retriable=True
                ) from exc
        return self._url
