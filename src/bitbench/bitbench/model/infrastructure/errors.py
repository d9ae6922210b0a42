"""Error types raised by model infrastructure."""

from bitbench.core.errors import BitbenchError


class ModelInvocationError(BitbenchError):
    """Raised when a model call fails, returns no usable content, or times out."""

    def __init__(self, model: str, reason: str, retriable: bool = False) -> None:
        self.model = model
        self.reason = reason
        super().__init__(
            f"Failed to invoke model '{model}': {reason}", retriable=retriable
        )


class UnknownModelError(BitbenchError):
    """Raised when a model filter names models that are not in the catalog."""

    def __init__(self, names: list[str]) -> None:
        self.names = names
        super().__init__(
            f"Failed to select models: not in catalog: {', '.join(names)}"
        )
