"""${ENV_VAR} expansion for raw YAML config trees."""

import os
import re
from collections.abc import Iterator, Mapping

_REFERENCE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")

type RawValue = (
    str | int | float | bool | None | list["RawValue"] | dict[str, "RawValue"]
)


def iter_strings(data: RawValue) -> Iterator[str]:
    """Yield every string leaf of a raw config tree, depth first."""
    if isinstance(data, str):
        yield data
    elif isinstance(data, list):
        for item in data:
            yield from iter_strings(item)
    elif isinstance(data, dict):
        for value in data.values():
            yield from iter_strings(value)


def unset_references(
    data: RawValue, environ: Mapping[str, str] | None = None
) -> list[str]:
    """Return referenced variable names missing from the environment, in first-seen order."""
    env = os.environ if environ is None else environ
    missing: list[str] = []
    for text in iter_strings(data):
        for name in _REFERENCE.findall(text):
            if name not in env and name not in missing:
                missing.append(name)
    return missing


def expand(data: RawValue, environ: Mapping[str, str] | None = None) -> RawValue:
    """Return a copy of data with every ${VAR} replaced by its value.

    Callers check `unset_references` first; an unset variable raises KeyError here.
    """
    env = os.environ if environ is None else environ
    if isinstance(data, str):
        return _REFERENCE.sub(lambda m: env[m.group(1)], data)
    if isinstance(data, list):
        return [expand(item, env) for item in data]
    if isinstance(data, dict):
        return {key: expand(value, env) for key, value in data.items()}
    return data
