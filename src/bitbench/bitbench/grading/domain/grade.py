"""Substring grading of a model response against a test case's answer keys."""

from collections.abc import Iterable


def _normalized(answers: Iterable[str]) -> list[str]:
    return [answer.strip().lower() for answer in answers if answer.strip()]


def grade(
    response_text: str,
    required_answers: Iterable[str],
    forbidden_answers: Iterable[str] = (),
) -> bool:
    """Return True iff the response contains a required answer and no forbidden one.

    Matching is case-insensitive substring containment. Blank answer strings
    are ignored, and a test case with no usable required answers is graded
    incorrect rather than raising, so one malformed question cannot abort a run.
    """
    required = _normalized(required_answers)
    if not required:
        return False

    text = response_text.lower()
    if not any(answer in text for answer in required):
        return False
    return not any(answer in text for answer in _normalized(forbidden_answers))
