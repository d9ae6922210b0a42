"""Error types raised by config infrastructure."""

from pathlib import Path

from bitbench.core.errors import BitbenchError


class MissingEnvVarsError(BitbenchError):
    """Raised when the config references environment variables that are not set."""

    def __init__(self, missing_vars: list[str]) -> None:
        self.missing_vars = missing_vars
        var_list = ", ".join(sorted(missing_vars))
        super().__init__(
            f"Failed to load config: missing environment variables: {var_list}"
        )


class ConfigValidationError(BitbenchError):
    """Raised when the config file parses but violates the schema."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to validate config: {reason}")


class ConfigLoadError(BitbenchError):
    """Raised when the config file cannot be found or is not valid YAML."""

    def __init__(self, path: Path, reason: str = "file not found") -> None:
        self.path = path
        super().__init__(f"Failed to load config: {reason}: {path}")
