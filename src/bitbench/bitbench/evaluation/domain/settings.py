"""RunSettings and RunOutcome — scheduler inputs and result."""

from pydantic import BaseModel, Field

from bitbench.evaluation.domain.report import BenchmarkReport


class RunSettings(BaseModel, frozen=True):
    runs_per_model: int = 1
    max_concurrency: int = 40
    timeout_seconds: float = Field(default=400.0, gt=0)
    stagger_delay_seconds: float = Field(default=0.15, ge=0)


class RunOutcome(BaseModel, frozen=True):
    """Result of a scheduler run. ``stopped`` is set when a stop was requested."""

    report: BenchmarkReport
    stopped: bool = False
    skipped_units: int = 0
