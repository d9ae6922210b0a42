"""Content fingerprint of one execution — cache key check and staleness guard."""

import hashlib
import json

from bitbench.cache.domain.key import UnitKey
from bitbench.suite.domain.suite import TestSuite


def fingerprint_payload(key: UnitKey, suite: TestSuite) -> dict[str, object]:
    """Return the logical inputs that determine an execution's expected output."""
    test = suite.tests[key.test_index]
    return {
        "suiteId": key.suite_id,
        "suiteVersion": key.version,
        "modelName": key.model,
        "runNumber": key.run_number,
        "testIndex": key.test_index,
        "systemPrompt": suite.system_prompt,
        "prompt": test.prompt,
        "requiredAnswers": sorted(test.required_answers),
    }


def compute_fingerprint(key: UnitKey, suite: TestSuite) -> str:
    """Return the SHA-256 hex digest of the canonical JSON fingerprint payload.

    Canonical means sorted keys, compact separators and sorted answer lists,
    so the digest depends only on content: never on set iteration order,
    process, host or time.

    Raises:
        IndexError: if key.test_index is outside the suite's test list.
    """
    canonical = json.dumps(
        fingerprint_payload(key=key, suite=suite),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
