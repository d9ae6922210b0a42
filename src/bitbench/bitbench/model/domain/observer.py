"""ModelObserver port — domain events emitted around model invocations."""

from typing import Protocol


class ModelObserver(Protocol):
    def model_invocation_started(self, model: str, backend_model: str) -> None: ...

    def model_invocation_completed(
        self,
        model: str,
        duration_ms: int,
        completion_tokens: int,
        cost_usd: float,
    ) -> None: ...

    def model_invocation_failed(self, model: str, reason: str) -> None: ...

    def model_cost_unavailable(self, model: str, reason: str) -> None: ...
