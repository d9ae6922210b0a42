"""CachedResult — the persisted outcome of one completed execution."""

from datetime import datetime

from pydantic import BaseModel, Field

from bitbench.cache.domain.key import UnitKey


class CachedResult(BaseModel, frozen=True):
    """Immutable record written once per successfully completed execution.

    The prompt and answer keys are kept for audit; ``signature`` is the
    fingerprint the record was produced under and must match the freshly
    computed fingerprint before the record is trusted.
    """

    signature: str = Field(min_length=1)
    suite_id: str
    version: str
    model: str
    run_number: int = Field(ge=1)
    test_index: int = Field(ge=0)
    prompt: str
    required_answers: list[str]
    forbidden_answers: list[str] = Field(default_factory=list)
    duration_ms: int = Field(ge=0)
    cost_usd: float = Field(ge=0.0)
    completion_tokens: int = Field(ge=0)
    result_text: str
    correct: bool
    created_at: datetime | None = None

    @property
    def key(self) -> UnitKey:
        return UnitKey(
            suite_id=self.suite_id,
            version=self.version,
            model=self.model,
            run_number=self.run_number,
            test_index=self.test_index,
        )
