"""Tests for building and filtering the model catalog."""

import pytest

from bitbench.config.domain.model import ModelConfig
from bitbench.costs.domain.cost_table import DEFAULT_COST_PER_TEST, ModelCostTable
from bitbench.model.infrastructure.catalog import build_catalog, select_models
from bitbench.model.infrastructure.errors import UnknownModelError


def _configs() -> list[ModelConfig]:
    return [
        ModelConfig(name="mini", model="openai/gpt-4o-mini"),
        ModelConfig(
            name="r1",
            model="openrouter/deepseek/deepseek-r1",
            reasoning=True,
            options={"reasoning_effort": "medium"},
        ),
        ModelConfig(name="llama", model="groq/llama-3.3-70b-versatile"),
    ]


class TestBuildCatalog:
    def test_keeps_config_order_and_fields(self) -> None:
        catalog = build_catalog(models=_configs(), cost_table=ModelCostTable())

        assert [m.name for m in catalog] == ["mini", "r1", "llama"]
        r1 = catalog[1]
        assert r1.model == "openrouter/deepseek/deepseek-r1"
        assert r1.reasoning_enabled is True
        assert r1.invocation_options == {"reasoning_effort": "medium"}

    def test_costs_come_from_table_with_default(self) -> None:
        table = ModelCostTable(costs={"mini": 0.0004})

        catalog = build_catalog(models=_configs(), cost_table=table)

        assert catalog[0].avg_cost_per_test == pytest.approx(0.0004)
        assert catalog[2].avg_cost_per_test == DEFAULT_COST_PER_TEST


class TestSelectModels:
    def test_no_filter_selects_everything(self) -> None:
        catalog = build_catalog(models=_configs(), cost_table=ModelCostTable())

        assert select_models(catalog=catalog, names=None) == catalog
        assert select_models(catalog=catalog, names=[]) == catalog

    def test_filter_keeps_catalog_order(self) -> None:
        catalog = build_catalog(models=_configs(), cost_table=ModelCostTable())

        selected = select_models(catalog=catalog, names=["llama", "mini"])

        assert [m.name for m in selected] == ["mini", "llama"]

    def test_unknown_names_raise(self) -> None:
        catalog = build_catalog(models=_configs(), cost_table=ModelCostTable())

        with pytest.raises(UnknownModelError) as exc_info:
            select_models(catalog=catalog, names=["mini", "gpt-9", "nope"])

        assert exc_info.value.names == ["gpt-9", "nope"]
