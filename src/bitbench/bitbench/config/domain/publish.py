"""Publishing configuration model."""

from pydantic import BaseModel


class PublishConfig(BaseModel, frozen=True):
    json_report: bool = True
    webhook_url: str | None = None
