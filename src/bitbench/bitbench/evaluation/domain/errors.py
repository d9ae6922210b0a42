"""Errors raised while constructing an execution plan."""

from bitbench.core.errors import BitbenchError


class PlanConstructionError(BitbenchError):
    """Raised before any event is emitted when the run cannot be planned."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(
            message=f"Failed to construct execution plan: {reason}",
            retriable=False,
        )
