"""Error types raised by costs infrastructure."""

from pathlib import Path

from bitbench.core.errors import BitbenchError


class CostTableError(BitbenchError):
    """Raised when the model cost table file exists but is malformed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to load model costs from {path}: {reason}")
