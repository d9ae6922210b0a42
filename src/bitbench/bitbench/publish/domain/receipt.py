"""PublishReceipt — the outcome of publishing a report to one sink."""

from pydantic import BaseModel


class PublishReceipt(BaseModel, frozen=True):
    sink: str
    ok: bool
    location: str | None = None
    error: str | None = None
