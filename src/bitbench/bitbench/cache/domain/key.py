"""UnitKey — the address of one cached result."""

from pydantic import BaseModel, Field


class UnitKey(BaseModel, frozen=True):
    """Addresses one (suite, version, model, run, test) execution in the store.

    ``version`` is the run's version label (for example a date), not the
    suite author's semver; re-running under a new label starts a fresh cache.
    """

    suite_id: str = Field(min_length=1)
    version: str = Field(min_length=1)
    model: str = Field(min_length=1)
    run_number: int = Field(ge=1)
    test_index: int = Field(ge=0)
