"""Structlog implementation of the RunnerObserver port."""

import structlog

from bitbench.evaluation.domain.events import (
    DoneEvent,
    ErrorEvent,
    PlanEvent,
    ReuseEvent,
    RunnerEvent,
    StartEvent,
)


class StructlogRunnerObserver:
    """Logs every runner event.

    Satisfies the RunnerObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def handle(self, event: RunnerEvent) -> None:
        match event:
            case PlanEvent(totals=totals):
                self._log.info(
                    "runner.plan",
                    total_models=len(totals),
                    total_units=sum(t.total for t in totals.values()),
                    execute=sum(t.execute for t in totals.values()),
                    reuse=sum(t.reuse for t in totals.values()),
                )
            case StartEvent():
                self._log.debug(
                    "runner.unit.started",
                    model=event.model,
                    test_index=event.test_index,
                    run_number=event.run_number,
                )
            case DoneEvent():
                self._log.info(
                    "runner.unit.done",
                    model=event.model,
                    test_index=event.test_index,
                    run_number=event.run_number,
                    correct=event.correct,
                    duration_ms=event.duration_ms,
                    cost_usd=event.cost_usd,
                )
            case ErrorEvent():
                self._log.warning(
                    "runner.unit.failed",
                    model=event.model,
                    test_index=event.test_index,
                    run_number=event.run_number,
                    duration_ms=event.duration_ms,
                    reason=event.message,
                )
            case ReuseEvent():
                self._log.debug(
                    "runner.unit.reused",
                    model=event.model,
                    test_index=event.test_index,
                    run_number=event.run_number,
                    correct=event.correct,
                )
