"""Completion value object — the outcome of a single model invocation."""

from pydantic import BaseModel, Field


class Completion(BaseModel, frozen=True):
    text: str
    completion_tokens: int = Field(ge=0)
    cost_usd: float = Field(ge=0.0)
    duration_ms: int = Field(ge=0)
