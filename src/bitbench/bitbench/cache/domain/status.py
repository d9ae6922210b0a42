"""CacheStatus — how much of a (suite, version) run is already cached."""

from pydantic import BaseModel, Field, computed_field

from bitbench.cache.domain.store import ResultStore


class CacheStatus(BaseModel, frozen=True):
    cached_results: int = Field(ge=0)
    total_expected: int = Field(ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def progress(self) -> float:
        if self.total_expected == 0:
            return 0.0
        return min(1.0, self.cached_results / self.total_expected)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def can_resume(self) -> bool:
        """True when a previous run stopped part-way through."""
        return 0 < self.cached_results < self.total_expected


def cache_status(
    store: ResultStore,
    suite_id: str,
    version: str,
    num_tests: int,
    num_models: int,
    runs_per_model: int,
) -> CacheStatus:
    return CacheStatus(
        cached_results=store.count(suite_id=suite_id, version=version),
        total_expected=num_tests * num_models * runs_per_model,
    )
