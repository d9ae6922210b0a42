"""Structlog implementation of the ModelObserver port."""

import structlog


class StructlogModelObserver:
    """Delegates model domain events to structlog.

    Satisfies the ModelObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def model_invocation_started(self, model: str, backend_model: str) -> None:
        self._log.debug(
            "model.invocation_started", model=model, backend_model=backend_model
        )

    def model_invocation_completed(
        self,
        model: str,
        duration_ms: int,
        completion_tokens: int,
        cost_usd: float,
    ) -> None:
        self._log.debug(
            "model.invocation_completed",
            model=model,
            duration_ms=duration_ms,
            completion_tokens=completion_tokens,
            cost_usd=cost_usd,
        )

    def model_invocation_failed(self, model: str, reason: str) -> None:
        self._log.warning("model.invocation_failed", model=model, reason=reason)

    def model_cost_unavailable(self, model: str, reason: str) -> None:
        self._log.debug("model.cost_unavailable", model=model, reason=reason)
