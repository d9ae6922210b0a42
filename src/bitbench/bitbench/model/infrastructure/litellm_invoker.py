"""LiteLLMModelInvoker — model invocation backend built on LiteLLM."""

import time
from typing import Any

import litellm

from bitbench.model.domain.completion import Completion
from bitbench.model.domain.model import RunnableModel
from bitbench.model.domain.observer import ModelObserver
from bitbench.model.infrastructure.errors import ModelInvocationError

_TRANSIENT_ERRORS: tuple[type[Exception], ...] = (
    litellm.RateLimitError,
    litellm.Timeout,
    litellm.APIConnectionError,
)


class LiteLLMModelInvoker:
    """Invokes catalog models through ``litellm.acompletion``.

    Exactly one request is made per call. Whatever retry behaviour the
    provider SDK applies internally is left as is; nothing is retried here.

    Satisfies the ModelInvoker protocol structurally.
    """

    def __init__(self, observer: ModelObserver) -> None:
        self._observer = observer

    async def invoke(
        self,
        model: RunnableModel,
        system_prompt: str,
        prompt: str,
        timeout_seconds: float,
    ) -> Completion:
        """Send one system+user exchange and return the completion.

        Raises:
            ModelInvocationError: if the call fails for any reason or the
                response has no text content. Rate limits, timeouts and
                connection failures are marked retriable.
        """
        self._observer.model_invocation_started(
            model=model.name, backend_model=model.model
        )
        kwargs: dict[str, Any] = {
            **model.invocation_options,
            "model": model.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
            "timeout": timeout_seconds,
        }

        start = time.monotonic()
        try:
            response = await litellm.acompletion(**kwargs)
        except Exception as exc:
            reason = str(exc) or type(exc).__name__
            self._observer.model_invocation_failed(model=model.name, reason=reason)
            raise ModelInvocationError(
                model=model.name,
                reason=reason,
                retriable=isinstance(exc, _TRANSIENT_ERRORS),
            ) from exc
        duration_ms = int((time.monotonic() - start) * 1000)

        text = _response_text(response)
        if text is None:
            reason = "response contained no text content"
            self._observer.model_invocation_failed(model=model.name, reason=reason)
            raise ModelInvocationError(model=model.name, reason=reason)

        completion_tokens = _completion_tokens(response)
        cost_usd = self._cost(model=model, response=response)

        self._observer.model_invocation_completed(
            model=model.name,
            duration_ms=duration_ms,
            completion_tokens=completion_tokens,
            cost_usd=cost_usd,
        )
        return Completion(
            text=text,
            completion_tokens=completion_tokens,
            cost_usd=cost_usd,
            duration_ms=duration_ms,
        )

    def _cost(self, model: RunnableModel, response: Any) -> float:
        """Prefer provider-reported cost (OpenRouter usage accounting), else litellm pricing."""
        usage = getattr(response, "usage", None)
        reported = getattr(usage, "cost", None)
        if isinstance(reported, (int, float)) and reported >= 0:
            return float(reported)
        try:
            return max(0.0, float(litellm.completion_cost(completion_response=response)))
        except Exception as exc:
            self._observer.model_cost_unavailable(model=model.name, reason=str(exc))
            return 0.0


def _response_text(response: Any) -> str | None:
    try:
        content = response.choices[0].message.content
    except (AttributeError, IndexError):
        return None
    return content if isinstance(content, str) else None


def _completion_tokens(response: Any) -> int:
    usage = getattr(response, "usage", None)
    tokens = getattr(usage, "completion_tokens", None)
    return int(tokens) if isinstance(tokens, int) and tokens > 0 else 0
