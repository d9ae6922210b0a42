"""ModelStats — running per-model counters folded from runner events."""

import math
from dataclasses import dataclass, field


@dataclass
class ModelStats:
    """Mutable counters for one model. Only the accumulator writes to these."""

    total: int = 0
    execute_total: int = 0
    reuse_total: int = 0
    executed_started: int = 0
    executed_done: int = 0
    executed_errors: int = 0
    reuse_completed: int = 0
    correct: int = 0
    incorrect: int = 0
    duration_sum_ms: int = 0
    duration_max_ms: int = 0
    completion_tokens_sum: int = 0
    costs: list[float] = field(default_factory=list)

    @property
    def cost_sum(self) -> float:
        # fsum is exact, so the total does not depend on arrival order.
        return math.fsum(self.costs)

    @property
    def answered(self) -> int:
        return self.correct + self.incorrect

    @property
    def completed(self) -> int:
        """Units in a terminal state: executed (done or failed) plus reused."""
        return self.executed_done + self.executed_errors + self.reuse_completed

    @property
    def running(self) -> int:
        return self.executed_started - self.executed_done - self.executed_errors

    @property
    def success_rate(self) -> float:
        if self.answered == 0:
            return 0.0
        return self.correct / self.answered * 100

    @property
    def avg_cost(self) -> float:
        if self.answered == 0:
            return 0.0
        return self.cost_sum / self.answered

    @property
    def avg_tokens(self) -> float:
        if self.answered == 0:
            return 0.0
        return self.completion_tokens_sum / self.answered

    @property
    def tokens_per_second(self) -> float:
        if self.duration_sum_ms <= 0:
            return 0.0
        return self.completion_tokens_sum / (self.duration_sum_ms / 1000)

    @property
    def avg_duration_ms(self) -> float:
        if self.completed == 0:
            return 0.0
        return self.duration_sum_ms / self.completed
