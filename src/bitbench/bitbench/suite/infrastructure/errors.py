"""Error types raised by suite infrastructure."""

from bitbench.core.errors import BitbenchError


class SuiteLoadError(BitbenchError):
    """Raised when a suite definition file cannot be read or is malformed."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to load suite: {reason}")
