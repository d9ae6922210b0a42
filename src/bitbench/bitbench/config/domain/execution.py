"""Execution configuration model."""

from pydantic import BaseModel, Field


class ExecutionConfig(BaseModel, frozen=True):
    runs_per_model: int = Field(default=1, ge=1)
    max_concurrency: int = Field(default=40, ge=1)
    timeout_seconds: float = Field(default=400.0, gt=0)
    stagger_delay_ms: int = Field(default=150, ge=0)
