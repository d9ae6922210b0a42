"""TestSuite and TestCase value objects — a versioned set of graded questions."""

from pydantic import BaseModel, Field


class TestCase(BaseModel, frozen=True):
    """One question with the substrings that make an answer right or wrong."""

    __test__ = False  # not a pytest test class

    prompt: str
    required_answers: frozenset[str]
    forbidden_answers: frozenset[str] = frozenset()


class TestSuite(BaseModel, frozen=True):
    """Immutable suite definition; read-only for the lifetime of a run.

    ``id`` is the stable identifier used in cache keys and published reports
    (the definition file's stem); ``version`` is the author's semver string.
    """

    __test__ = False

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    version: str = "1.0.0"
    chain: str = "unknown"
    system_prompt: str
    tests: tuple[TestCase, ...]


class SuiteEntry(BaseModel, frozen=True):
    """A suite discovered on disk, paired with the file it came from."""

    path: str
    suite: TestSuite
