"""Tests for cost estimation and historical cost averaging."""

import pytest

from bitbench.cache.domain.result import CachedResult
from bitbench.costs.domain.cost_table import (
    DEFAULT_COST_PER_TEST,
    CostTableMeta,
    ModelCostTable,
)
from bitbench.costs.domain.estimate import (
    CostSample,
    average_costs,
    estimate_benchmark_cost,
    merge_costs,
)
from bitbench.model.domain.model import RunnableModel


def _result(model: str, cost: float, test_index: int = 0) -> CachedResult:
    return CachedResult(
        signature="f" * 64,
        suite_id="arith",
        version="v1",
        model=model,
        run_number=1,
        test_index=test_index,
        prompt="q",
        required_answers=["42"],
        duration_ms=100,
        cost_usd=cost,
        completion_tokens=5,
        result_text="42",
        correct=True,
    )


class TestEstimateBenchmarkCost:
    def test_sums_cost_over_models_tests_and_runs(self) -> None:
        models = [
            RunnableModel(name="a", model="x/a", avg_cost_per_test=0.01),
            RunnableModel(name="b", model="x/b", avg_cost_per_test=0.002),
        ]

        estimate = estimate_benchmark_cost(models=models, num_tests=10, runs_per_model=2)

        assert estimate == pytest.approx(0.24)

    def test_cached_fraction_discounts_estimate(self) -> None:
        models = [RunnableModel(name="a", model="x/a", avg_cost_per_test=0.01)]

        estimate = estimate_benchmark_cost(
            models=models, num_tests=10, runs_per_model=1, cached_fraction=0.75
        )

        assert estimate == pytest.approx(0.025)

    def test_cached_fraction_is_clamped(self) -> None:
        models = [RunnableModel(name="a", model="x/a", avg_cost_per_test=0.01)]

        assert estimate_benchmark_cost(
            models=models, num_tests=1, runs_per_model=1, cached_fraction=2.0
        ) == 0.0


class TestAverageCosts:
    def test_averages_positive_costs_per_model(self) -> None:
        results = [
            _result("a", 0.001),
            _result("a", 0.002, test_index=1),
            _result("a", 0.0, test_index=2),
            _result("b", 0.01234567),
        ]

        averages = average_costs(results=results)

        assert averages == {
            "a": CostSample(average=0.0015, samples=2),
            "b": CostSample(average=0.0123, samples=1),
        }

    def test_models_with_only_free_runs_are_omitted(self) -> None:
        assert average_costs(results=[_result("free", 0.0)]) == {}


class TestModelCostTable:
    def test_unknown_model_uses_default_cost(self) -> None:
        table = ModelCostTable(costs={"a": 0.004})

        assert table.cost_per_test("a") == 0.004
        assert table.cost_per_test("zzz") == DEFAULT_COST_PER_TEST

    def test_serializes_meta_under_underscore_key(self) -> None:
        table = ModelCostTable(
            meta=CostTableMeta(last_updated="2026-10-19", sample_count={"a": 3}),
            costs={"a": 0.004},
        )

        data = table.model_dump(mode="json", by_alias=True)

        assert set(data) == {"_meta", "costs"}
        assert data["_meta"]["lastUpdated"] == "2026-10-19"
        assert data["_meta"]["sampleCount"] == {"a": 3}


class TestMergeCosts:
    def test_new_averages_overwrite_and_others_are_kept(self) -> None:
        table = ModelCostTable(costs={"a": 0.5, "b": 0.25})

        merged = merge_costs(
            table=table,
            averages={"a": CostSample(average=0.001, samples=4)},
            today="2026-10-19",
        )

        assert merged.costs == {"a": 0.001, "b": 0.25}
        assert merged.meta.last_updated == "2026-10-19"
        assert merged.meta.sample_count == {"a": 4}
        assert table.costs == {"a": 0.5, "b": 0.25}
