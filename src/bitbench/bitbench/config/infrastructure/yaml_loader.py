"""YAML config loader — parses, interpolates env vars, validates, and emits observer events."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from bitbench.config.domain.config import BenchConfig
from bitbench.config.domain.observer import ConfigObserver
from bitbench.config.infrastructure.env_interpolation import expand, unset_references
from bitbench.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
)


class YamlConfigLoader:
    """Loads and validates a BenchConfig from a YAML file.

    Relative paths inside the file (suites_dir, cache_dir, ...) are resolved
    against the directory containing the config file, so the CLI behaves the
    same regardless of the current working directory.
    """

    def __init__(self, observer: ConfigObserver) -> None:
        self._observer = observer

    def load(self, path: Path) -> BenchConfig:
        """
        Load, interpolate, validate, and return a BenchConfig.

        Raises:
            ConfigLoadError: if the file is missing or is not valid YAML.
            MissingEnvVarsError: if any ${ENV_VAR} references are unset (all collected first).
            ConfigValidationError: if the schema is violated.
        """
        raw = _parse_yaml(path=path)
        missing = unset_references(raw)
        if missing:
            raise MissingEnvVarsError(missing)
        expanded = expand(raw)
        cfg = _build_config(data=expanded, base_dir=path.parent)

        if not cfg.models:
            self._observer.config_no_models_warning(path=str(path))
        self._observer.config_loaded(
            name=cfg.name, path=str(path), total_models=len(cfg.models)
        )
        return cfg


def _parse_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except FileNotFoundError as exc:
        raise ConfigLoadError(path=path) from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(path=path, reason=f"invalid YAML ({exc})") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigValidationError("top-level YAML value must be a mapping")
    return data


_PATH_KEYS = ("suites_dir", "cache_dir", "output_dir", "model_costs_path")


def _build_config(data: dict[str, Any], base_dir: Path) -> BenchConfig:
    resolved = dict(data)
    for key in _PATH_KEYS:
        value = resolved.get(key)
        if isinstance(value, str) and not Path(value).is_absolute():
            resolved[key] = str(base_dir / value)
    try:
        return BenchConfig.model_validate(resolved)
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc
