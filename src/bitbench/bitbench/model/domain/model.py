"""RunnableModel — one benchmarkable model from the catalog."""

from typing import Any

from pydantic import BaseModel, Field


class RunnableModel(BaseModel, frozen=True):
    """Immutable catalog entry for the duration of a run.

    ``invocation_options`` is opaque to the scheduler: it is handed to the
    invoker untouched on every call.
    """

    name: str = Field(min_length=1)
    model: str = Field(min_length=1)
    reasoning_enabled: bool = False
    avg_cost_per_test: float = Field(default=0.01, ge=0.0)
    invocation_options: dict[str, Any] = Field(default_factory=dict)
