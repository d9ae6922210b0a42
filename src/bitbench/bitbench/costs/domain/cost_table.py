"""ModelCostTable — historical average cost per test execution, per model."""

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_COST_PER_TEST = 0.01


class CostTableMeta(BaseModel, frozen=True):
    model_config = ConfigDict(populate_by_name=True)

    description: str = (
        "Average cost per test execution for each model. Updated after benchmark runs."
    )
    last_updated: str | None = Field(default=None, alias="lastUpdated")
    source: str = "Aggregated from benchmark results"
    sample_count: dict[str, int] = Field(default_factory=dict, alias="sampleCount")


class ModelCostTable(BaseModel, frozen=True):
    """Serialized as ``{"_meta": {...}, "costs": {model: usd}}``."""

    model_config = ConfigDict(populate_by_name=True)

    meta: CostTableMeta = Field(default_factory=CostTableMeta, alias="_meta")
    costs: dict[str, float] = Field(default_factory=dict)

    def cost_per_test(self, model: str) -> float:
        return self.costs.get(model, DEFAULT_COST_PER_TEST)
