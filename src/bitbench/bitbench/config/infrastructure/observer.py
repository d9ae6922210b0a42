"""Structlog implementation of the ConfigObserver port."""

import structlog


class StructlogConfigObserver:
    """Delegates config domain events to structlog.

    Satisfies the ConfigObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def config_loaded(self, name: str, path: str, total_models: int) -> None:
        self._log.info(
            "config.loaded", name=name, path=path, total_models=total_models
        )

    def config_no_models_warning(self, path: str) -> None:
        self._log.warning(
            "config.no_models_warning",
            path=path,
            message="Model catalog is empty; `run` will refuse to start",
        )
