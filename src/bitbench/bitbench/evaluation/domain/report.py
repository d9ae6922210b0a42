"""BenchmarkReport — the immutable aggregate published at the end of a run."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _ReportModel(BaseModel):
    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )


class ModelRanking(_ReportModel):
    model: str
    correct: int
    incorrect: int
    errors: int
    total_tests: int
    success_rate: float
    total_cost: float
    tokens_per_second: float


class ReportMetadata(_ReportModel):
    total_models: int
    total_tests_run: int
    overall_success_rate: float
    total_cost: float


class BenchmarkReport(_ReportModel):
    """Serialize with ``model_dump(by_alias=True)`` for the camelCase wire shape."""

    suite_id: str
    suite_name: str
    chain: str
    version: str
    timestamp: datetime
    rankings: tuple[ModelRanking, ...]
    metadata: ReportMetadata
