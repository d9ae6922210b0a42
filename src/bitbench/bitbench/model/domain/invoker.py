"""ModelInvoker Protocol — structural interface for model invocation backends."""

from typing import Protocol

from bitbench.model.domain.completion import Completion
from bitbench.model.domain.model import RunnableModel


class ModelInvoker(Protocol):
    """Invokes a model once.

    Implementations make exactly one attempt and raise ModelInvocationError
    on any failure; retrying and caching are the caller's concern.
    """

    async def invoke(
        self,
        model: RunnableModel,
        system_prompt: str,
        prompt: str,
        timeout_seconds: float,
    ) -> Completion: ...
