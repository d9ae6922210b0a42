"""ExecutionUnit — one (model, test, run) combination and its lifecycle states."""

from dataclasses import dataclass, field
from enum import StrEnum

from bitbench.model.domain.model import RunnableModel


class UnitState(StrEnum):
    PENDING = "pending"
    CACHE_CHECKING = "cache_checking"
    REUSED = "reused"
    EXECUTING = "executing"
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"  # never executed because a stop was requested

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL


_TERMINAL = frozenset(
    {UnitState.REUSED, UnitState.COMPLETED, UnitState.FAILED, UnitState.SKIPPED}
)


@dataclass(frozen=True)
class ExecutionUnit:
    """Identity is (model_index, test_index, run_number) within one plan."""

    model: RunnableModel = field(compare=False)
    model_index: int
    test_index: int
    run_number: int


def expand_units(
    models: list[RunnableModel], num_tests: int, runs_per_model: int
) -> list[ExecutionUnit]:
    """Cross product in dispatch order: model-major, then test index, then run."""
    return [
        ExecutionUnit(
            model=model,
            model_index=model_index,
            test_index=test_index,
            run_number=run_number,
        )
        for model_index, model in enumerate(models)
        for test_index in range(num_tests)
        for run_number in range(1, runs_per_model + 1)
    ]
