"""RunnerEvent — the tagged union of progress events emitted during a run."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field


class PlanTotals(BaseModel, frozen=True):
    """Per-model unit counts, split by whether the cache already holds a result."""

    total: int = Field(ge=0)
    execute: int = Field(ge=0)
    reuse: int = Field(ge=0)


class PlanEvent(BaseModel, frozen=True):
    """Emitted once, before any unit starts. Key order is the model plan order."""

    type: Literal["plan"] = "plan"
    totals: dict[str, PlanTotals]


class StartEvent(BaseModel, frozen=True):
    type: Literal["start"] = "start"
    model: str
    test_index: int
    run_number: int


class DoneEvent(BaseModel, frozen=True):
    type: Literal["done"] = "done"
    model: str
    test_index: int
    run_number: int
    duration_ms: int
    correct: bool
    cost_usd: float
    completion_tokens: int


class ErrorEvent(BaseModel, frozen=True):
    type: Literal["error"] = "error"
    model: str
    test_index: int
    run_number: int
    duration_ms: int
    message: str


class ReuseEvent(BaseModel, frozen=True):
    """A unit satisfied from the cache; metrics are those recorded originally."""

    type: Literal["reuse"] = "reuse"
    model: str
    test_index: int
    run_number: int
    duration_ms: int
    correct: bool
    cost_usd: float
    completion_tokens: int


type RunnerEvent = Annotated[
    PlanEvent | StartEvent | DoneEvent | ErrorEvent | ReuseEvent,
    Field(discriminator="type"),
]
