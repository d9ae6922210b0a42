"""RunAccumulator — folds the runner event stream into per-model statistics."""

import math
from datetime import datetime

from bitbench.evaluation.domain.events import (
    DoneEvent,
    ErrorEvent,
    PlanEvent,
    ReuseEvent,
    RunnerEvent,
    StartEvent,
)
from bitbench.evaluation.domain.report import (
    BenchmarkReport,
    ModelRanking,
    ReportMetadata,
)
from bitbench.evaluation.domain.stats import ModelStats
from bitbench.suite.domain.suite import TestSuite


class RunAccumulator:
    """Single-writer fold over RunnerEvents.

    Subscribe it to an EventStream; every update happens inside ``handle`` on
    the event loop thread, so no locking is needed. Model order is the order
    in which models first appear, which is plan order once a PlanEvent arrives.
    """

    def __init__(self) -> None:
        self._stats: dict[str, ModelStats] = {}

    @property
    def stats(self) -> dict[str, ModelStats]:
        return self._stats

    @property
    def model_order(self) -> list[str]:
        return list(self._stats)

    def _for(self, model: str) -> ModelStats:
        if model not in self._stats:
            self._stats[model] = ModelStats()
        return self._stats[model]

    def handle(self, event: RunnerEvent) -> None:
        match event:
            case PlanEvent(totals=totals):
                for model, plan in totals.items():
                    stats = self._for(model)
                    stats.total = plan.total
                    stats.execute_total = plan.execute
                    stats.reuse_total = plan.reuse
            case StartEvent(model=model):
                self._for(model).executed_started += 1
            case DoneEvent():
                stats = self._for(event.model)
                stats.executed_done += 1
                self._record_answer(stats, event)
            case ReuseEvent():
                stats = self._for(event.model)
                stats.reuse_completed += 1
                self._record_answer(stats, event)
            case ErrorEvent():
                stats = self._for(event.model)
                stats.executed_errors += 1
                self._record_duration(stats, event.duration_ms)

    def _record_answer(self, stats: ModelStats, event: DoneEvent | ReuseEvent) -> None:
        if event.correct:
            stats.correct += 1
        else:
            stats.incorrect += 1
        stats.costs.append(event.cost_usd)
        stats.completion_tokens_sum += event.completion_tokens
        self._record_duration(stats, event.duration_ms)

    @staticmethod
    def _record_duration(stats: ModelStats, duration_ms: int) -> None:
        stats.duration_sum_ms += duration_ms
        stats.duration_max_ms = max(stats.duration_max_ms, duration_ms)

    def build_report(
        self, suite: TestSuite, version: str, timestamp: datetime
    ) -> BenchmarkReport:
        """Build the final report; rankings are a stable sort by success rate."""
        rankings = [
            ModelRanking(
                model=model,
                correct=stats.correct,
                incorrect=stats.incorrect,
                errors=stats.executed_errors,
                total_tests=stats.total,
                success_rate=stats.success_rate,
                total_cost=stats.cost_sum,
                tokens_per_second=stats.tokens_per_second,
            )
            for model, stats in self._stats.items()
        ]
        # sorted() is stable, so ties keep plan order.
        rankings = sorted(rankings, key=lambda r: r.success_rate, reverse=True)

        all_stats = list(self._stats.values())
        answered = sum(s.answered for s in all_stats)
        correct = sum(s.correct for s in all_stats)
        metadata = ReportMetadata(
            total_models=len(all_stats),
            total_tests_run=sum(s.total for s in all_stats),
            overall_success_rate=correct / answered * 100 if answered else 0.0,
            total_cost=math.fsum(c for s in all_stats for c in s.costs),
        )
        return BenchmarkReport(
            suite_id=suite.id,
            suite_name=suite.name,
            chain=suite.chain,
            version=version,
            timestamp=timestamp,
            rankings=tuple(rankings),
            metadata=metadata,
        )
