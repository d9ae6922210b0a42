"""JSON persistence for the model cost table (``model-costs.json``)."""

import json
from pathlib import Path

from pydantic import ValidationError

from bitbench.costs.domain.cost_table import ModelCostTable
from bitbench.costs.infrastructure.errors import CostTableError


class JsonCostTableRepository:
    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> ModelCostTable:
        """Return the stored table, or an empty one if the file does not exist yet.

        Raises:
            CostTableError: if the file exists but cannot be parsed.
        """
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return ModelCostTable()
        try:
            return ModelCostTable.model_validate_json(text)
        except ValidationError as exc:
            raise CostTableError(path=self._path, reason=str(exc)) from exc

    def save(self, table: ModelCostTable) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = table.model_dump(mode="json", by_alias=True)
        self._path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
