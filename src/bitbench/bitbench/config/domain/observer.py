"""Observer port for the config domain — defines events in domain language."""

from typing import Protocol


class ConfigObserver(Protocol):
    def config_loaded(self, name: str, path: str, total_models: int) -> None: ...

    def config_no_models_warning(self, path: str) -> None: ...
