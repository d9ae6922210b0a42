"""Top-level BenchConfig aggregate — the root configuration object."""

from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from bitbench.config.domain.execution import ExecutionConfig
from bitbench.config.domain.model import ModelConfig
from bitbench.config.domain.publish import PublishConfig


class BenchConfig(BaseModel, frozen=True):
    """Root configuration aggregate for a bitbench installation."""

    name: str = Field(default="bitbench", min_length=1)
    suites_dir: Path = Path("./suites")
    cache_dir: Path = Path("./results/cache")
    output_dir: Path = Path("./results")
    model_costs_path: Path = Path("./model-costs.json")
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)
    models: list[ModelConfig] = Field(default_factory=list)
    publish: PublishConfig = Field(default_factory=PublishConfig)

    @model_validator(mode="after")
    def _model_names_are_unique(self) -> "BenchConfig":
        seen: set[str] = set()
        duplicates: list[str] = []
        for entry in self.models:
            if entry.name in seen and entry.name not in duplicates:
                duplicates.append(entry.name)
            seen.add(entry.name)
        if duplicates:
            raise ValueError(f"duplicate model names: {', '.join(duplicates)}")
        return self
