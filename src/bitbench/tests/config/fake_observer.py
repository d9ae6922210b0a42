"""Fake ConfigObserver for use in tests — records events without mocking."""


class FakeConfigObserver:
    def __init__(self) -> None:
        self.loaded: list[dict[str, object]] = []
        self.no_models_warnings: list[str] = []

    def config_loaded(self, name: str, path: str, total_models: int) -> None:
        self.loaded.append({"name": name, "path": path, "total_models": total_models})

    def config_no_models_warning(self, path: str) -> None:
        self.no_models_warnings.append(path)
