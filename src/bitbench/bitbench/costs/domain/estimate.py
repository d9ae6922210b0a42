"""Up-front cost estimation and historical cost averaging."""

import math
from collections.abc import Iterable

from pydantic import BaseModel

from bitbench.cache.domain.result import CachedResult
from bitbench.costs.domain.cost_table import CostTableMeta, ModelCostTable
from bitbench.model.domain.model import RunnableModel


class CostSample(BaseModel, frozen=True):
    average: float
    samples: int


def estimate_benchmark_cost(
    models: Iterable[RunnableModel],
    num_tests: int,
    runs_per_model: int,
    cached_fraction: float = 0.0,
) -> float:
    """Estimate the USD cost of running every model over the suite.

    ``cached_fraction`` (0..1) discounts the share of units expected to be
    satisfied from the cache.
    """
    full = math.fsum(
        model.avg_cost_per_test * num_tests * runs_per_model for model in models
    )
    remaining = 1.0 - min(1.0, max(0.0, cached_fraction))
    return full * remaining


def average_costs(results: Iterable[CachedResult]) -> dict[str, CostSample]:
    """Mean positive cost per execution for each model, rounded to 4 decimals."""
    by_model: dict[str, list[float]] = {}
    for result in results:
        if result.cost_usd > 0:
            by_model.setdefault(result.model, []).append(result.cost_usd)
    return {
        model: CostSample(
            average=round(math.fsum(costs) / len(costs), 4), samples=len(costs)
        )
        for model, costs in by_model.items()
    }


def merge_costs(
    table: ModelCostTable, averages: dict[str, CostSample], today: str
) -> ModelCostTable:
    """Return a new table where freshly averaged models overwrite old values."""
    costs = {**table.costs, **{m: s.average for m, s in averages.items()}}
    meta = CostTableMeta(
        description=table.meta.description,
        source=table.meta.source,
        last_updated=today,
        sample_count={m: s.samples for m, s in averages.items()},
    )
    return ModelCostTable(meta=meta, costs=costs)
