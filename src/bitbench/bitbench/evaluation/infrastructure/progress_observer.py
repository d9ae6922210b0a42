"""ProgressRunnerObserver — renders a live per-model Rich table to stderr."""

from __future__ import annotations

from rich.console import Console, Group, RenderableType
from rich.live import Live
from rich.table import Table
from rich.text import Text

from bitbench.evaluation.domain.accumulator import RunAccumulator
from bitbench.evaluation.domain.events import PlanEvent, RunnerEvent
from bitbench.evaluation.domain.stats import ModelStats

_BAR_WIDTH = 40

_COLUMNS: list[tuple[str, str]] = [
    ("Model", "left"),
    ("Tests", "right"),
    ("% Right", "right"),
    ("Errors", "right"),
    ("Running", "right"),
    ("Avg Cost", "right"),
    ("Avg Tokens", "right"),
    ("TPS", "right"),
    ("Avg Duration", "right"),
    ("Slowest", "right"),
]


def _bar(done: int, running: int, total: int) -> Text:
    """Three segments: done, in-flight, remaining."""
    if total > 0:
        done_cells = int(done / total * _BAR_WIDTH)
        running_cells = min(int(running / total * _BAR_WIDTH), _BAR_WIDTH - done_cells)
    else:
        done_cells = 0
        running_cells = 0
    remaining_cells = _BAR_WIDTH - done_cells - running_cells

    result = Text()
    result.append("█" * done_cells, style="bright_green")
    result.append("▒" * running_cells, style="grey50")
    result.append("░" * remaining_cells, style="dim white")
    return result


def _row(model: str, stats: ModelStats) -> list[RenderableType]:
    pct = "-" if stats.answered == 0 else f"{stats.success_rate:.0f}%"
    if stats.success_rate >= 75:
        pct_style = "green"
    elif stats.success_rate >= 40:
        pct_style = "yellow"
    else:
        pct_style = "red"
    errors = "-" if stats.executed_errors == 0 else str(stats.executed_errors)
    slowest = (
        "-" if stats.duration_max_ms == 0 else f"{stats.duration_max_ms / 1000:.1f}s"
    )
    return [
        model,
        f"{stats.completed}/{stats.total}",
        Text(pct, style=pct_style if stats.answered else "dim"),
        Text(errors, style="red" if stats.executed_errors else "dim"),
        str(stats.running) if stats.running else "-",
        "-" if stats.answered == 0 else f"${stats.avg_cost:.4f}",
        "-" if stats.answered == 0 else f"{stats.avg_tokens:.0f}",
        "-" if stats.tokens_per_second == 0 else f"{stats.tokens_per_second:.1f}",
        "-" if stats.completed == 0 else f"{stats.avg_duration_ms / 1000:.1f}s",
        slowest,
    ]


class ProgressRunnerObserver:
    """Renders one row per model plus an overall progress line on stderr.

    The observer keeps its own RunAccumulator, so the table is a fold over the
    events it received. The live display starts on the plan event; call
    ``stop()`` once the run is over (the CLI does so in a ``finally``).

    Pass ``disabled=True`` to suppress all terminal output (useful in tests).

    Does NOT inherit from RunnerObserver (structural typing via Protocol).
    """

    def __init__(self, title: str = "bitbench", disabled: bool = False) -> None:
        self._title = title
        self._disabled = disabled
        self._accumulator = RunAccumulator()
        self._live: Live | None = None

    @property
    def accumulator(self) -> RunAccumulator:
        return self._accumulator

    def handle(self, event: RunnerEvent) -> None:
        self._accumulator.handle(event)
        if self._disabled:
            return
        if isinstance(event, PlanEvent) and self._live is None:
            self._live = Live(
                get_renderable=self.render,
                console=Console(stderr=True),
                refresh_per_second=10,
            )
            self._live.start()

    def stop(self) -> None:
        if self._live is not None:
            self._live.stop()
            self._live = None

    def render(self) -> RenderableType:
        all_stats = self._accumulator.stats
        total = sum(s.total for s in all_stats.values())
        done = sum(s.completed for s in all_stats.values())
        running = sum(s.running for s in all_stats.values())

        overall = Text.assemble(
            ("Overall ", "bold"),
            _bar(done=done, running=running, total=total),
            " ",
            (str(done), "bright_green"),
            ("+", "dim white"),
            (str(running), "grey50"),
            ("/", "dim white"),
            str(total),
        )

        table = Table(title=self._title, show_lines=False)
        for header, justify in _COLUMNS:
            table.add_column(header, justify=justify)  # type: ignore[arg-type]
        for model in self._accumulator.model_order:
            table.add_row(*_row(model=model, stats=all_stats[model]))

        return Group(overall, Text(""), table)
