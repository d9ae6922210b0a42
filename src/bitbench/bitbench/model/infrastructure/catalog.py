"""Model catalog — builds RunnableModels from config and selects the active set."""

from bitbench.config.domain.model import ModelConfig
from bitbench.costs.domain.cost_table import ModelCostTable
from bitbench.model.domain.model import RunnableModel
from bitbench.model.infrastructure.errors import UnknownModelError


def build_catalog(
    models: list[ModelConfig], cost_table: ModelCostTable
) -> list[RunnableModel]:
    """Return one RunnableModel per config entry, in config order."""
    return [
        RunnableModel(
            name=entry.name,
            model=entry.model,
            reasoning_enabled=entry.reasoning,
            avg_cost_per_test=cost_table.cost_per_test(entry.name),
            invocation_options=dict(entry.options),
        )
        for entry in models
    ]


def select_models(
    catalog: list[RunnableModel], names: list[str] | None
) -> list[RunnableModel]:
    """Filter the catalog to the named models, keeping catalog order.

    An empty or missing filter selects the whole catalog.

    Raises:
        UnknownModelError: listing every requested name that is not in the catalog.
    """
    if not names:
        return list(catalog)
    known = {model.name for model in catalog}
    unknown = [name for name in dict.fromkeys(names) if name not in known]
    if unknown:
        raise UnknownModelError(names=unknown)
    wanted = set(names)
    return [model for model in catalog if model.name in wanted]
