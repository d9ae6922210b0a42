"""FileResultStore — one JSON file per cached execution, written atomically."""

import os
import re
import tempfile
from collections.abc import Iterator
from pathlib import Path

from pydantic import ValidationError

from bitbench.cache.domain.key import UnitKey
from bitbench.cache.domain.observer import CacheObserver
from bitbench.cache.domain.result import CachedResult

_UNSAFE_SEGMENT_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def _segment(value: str) -> str:
    """Make a model name or version label safe to use as one path segment."""
    cleaned = _UNSAFE_SEGMENT_CHARS.sub("_", value)
    return cleaned if cleaned.strip(".") else "_"


class FileResultStore:
    """Stores results under ``root/<suite>/<version>/<model>/run-<n>/test-<i>.json``.

    Reads are plain file reads and writes go through a temp file in the same
    directory followed by ``os.replace``, so a reader sees either the previous
    state or the complete new record, never a partial one. Both directions are
    safe to call concurrently from worker threads.

    Satisfies the ResultStore protocol structurally.
    """

    def __init__(self, root: Path, observer: CacheObserver) -> None:
        self._root = root
        self._observer = observer

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, key: UnitKey) -> Path:
        return (
            self._root
            / _segment(key.suite_id)
            / _segment(key.version)
            / _segment(key.model)
            / f"run-{key.run_number}"
            / f"test-{key.test_index}.json"
        )

    def lookup(self, key: UnitKey, fingerprint: str) -> CachedResult | None:
        """Return the stored result for key if its signature matches fingerprint.

        A missing file is a silent miss. An unreadable or malformed file, or a
        record produced under a different fingerprint, is reported to the
        observer and also treated as a miss.
        """
        path = self.path_for(key)
        result = self._read(path=path)
        if result is None:
            return None
        if result.signature != fingerprint:
            self._observer.cache_stale(
                path=str(path), model=key.model, test_index=key.test_index
            )
            return None
        return result

    def store(self, result: CachedResult) -> bool:
        """Persist result atomically. Returns False (after reporting) on I/O failure."""
        path = self.path_for(result.key)
        tmp_name: str | None = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=path.parent,
                prefix=f".{path.stem}-",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(result.model_dump_json(indent=2))
            os.replace(tmp_name, path)
        except OSError as exc:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            self._observer.cache_write_failed(path=str(path), reason=str(exc))
            return False
        return True

    def count(self, suite_id: str, version: str) -> int:
        base = self._root / _segment(suite_id) / _segment(version)
        if not base.is_dir():
            return 0
        return sum(1 for _ in base.glob("*/run-*/test-*.json"))

    def iter_results(self) -> Iterator[CachedResult]:
        """Yield every readable record under the root, in path order."""
        if not self._root.is_dir():
            return
        for path in sorted(self._root.rglob("test-*.json")):
            result = self._read(path=path)
            if result is not None:
                yield result

    def _read(self, path: Path) -> CachedResult | None:
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            self._observer.cache_read_failed(path=str(path), reason=str(exc))
            return None
        try:
            return CachedResult.model_validate_json(text)
        except ValidationError as exc:
            self._observer.cache_read_failed(
                path=str(path), reason=f"invalid record: {exc.error_count()} error(s)"
            )
            return None
