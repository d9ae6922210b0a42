"""Model catalog entry configuration."""

from typing import Any

from pydantic import BaseModel, Field


class ModelConfig(BaseModel, frozen=True):
    """One catalog entry: a display name bound to a litellm model id.

    ``options`` is passed through to the backend untouched (reasoning effort,
    provider routing, usage accounting and similar provider-specific knobs).
    """

    name: str = Field(min_length=1)
    model: str = Field(min_length=1)
    reasoning: bool = False
    options: dict[str, Any] = Field(default_factory=dict)
