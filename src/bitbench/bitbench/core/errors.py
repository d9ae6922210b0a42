"""Base exception class for all bitbench-specific errors."""


class BitbenchError(Exception):
    """Base class for all bitbench errors."""

    def __init__(self, message: str, retriable: bool = False) -> None:
        super().__init__(message)
        self.retriable = retriable
