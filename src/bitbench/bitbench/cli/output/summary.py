"""Terminal summaries — ranking table, cache status and catalog listings."""

import typer

from bitbench.cache.domain.status import CacheStatus
from bitbench.evaluation.domain.report import BenchmarkReport
from bitbench.evaluation.domain.settings import RunOutcome
from bitbench.model.domain.model import RunnableModel
from bitbench.publish.domain.receipt import PublishReceipt
from bitbench.suite.domain.suite import SuiteEntry

_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[2m"
_CYAN = "\033[36m"
_YELLOW = "\033[33m"
_GREEN = "\033[32m"
_RED = "\033[31m"
_WHITE = "\033[97m"


def _rate_color(rate: float) -> str:
    if rate >= 75:
        return _GREEN
    if rate >= 40:
        return _YELLOW
    return _RED


def _rule(width: int = 72, color: str = _DIM) -> None:
    typer.echo(f"{color}{'─' * width}{_RESET}")


def _header(title: str) -> None:
    typer.echo("")
    _rule(color=_CYAN)
    typer.echo(f"{_CYAN}{_BOLD}  {title}{_RESET}")
    _rule(color=_CYAN)


def _meta(rows: list[tuple[str, str]]) -> None:
    label_w = max(len(label) for label, _ in rows)
    for label, value in rows:
        typer.echo(f"  {_DIM}{label:<{label_w}}{_RESET}  {_WHITE}{value}{_RESET}")


def format_elapsed(elapsed_seconds: float) -> str:
    """Format elapsed seconds as '1m 23.4s' or '5.2s'."""
    minutes, seconds = divmod(elapsed_seconds, 60)
    if minutes >= 1:
        return f"{int(minutes)}m {seconds:.1f}s"
    return f"{elapsed_seconds:.1f}s"


def print_plan(
    suite_name: str,
    version: str,
    models: list[RunnableModel],
    status: CacheStatus,
    estimated_cost: float,
) -> None:
    _header(f"bitbench  ·  {suite_name}")
    typer.echo("")
    rows = [
        ("Version", version),
        ("Models", str(len(models))),
        (
            "Cached",
            f"{status.cached_results}/{status.total_expected}"
            f" ({status.progress * 100:.0f}%)",
        ),
        ("Estimated cost", f"${estimated_cost:.4f}"),
    ]
    if status.can_resume:
        rows.append(("Resume", "previous run incomplete, cached units are reused"))
    _meta(rows)
    typer.echo("")


def print_report(outcome: RunOutcome, elapsed_seconds: float) -> None:
    """Print the ranking table: one row per model, best success rate first."""
    report: BenchmarkReport = outcome.report
    _header(f"bitbench  ·  {report.suite_name}  ·  Run Complete")
    typer.echo("")
    rows = [
        ("Suite", f"{report.suite_id} ({report.chain})"),
        ("Version", report.version),
        ("Models", str(report.metadata.total_models)),
        ("Tests run", str(report.metadata.total_tests_run)),
        ("Overall", f"{report.metadata.overall_success_rate:.1f}%"),
        ("Total cost", f"${report.metadata.total_cost:.4f}"),
        ("Elapsed", format_elapsed(elapsed_seconds=elapsed_seconds)),
    ]
    if outcome.stopped:
        rows.append(("Stopped", f"{outcome.skipped_units} units not executed"))
    _meta(rows)

    model_w = max([len("Model")] + [len(r.model) for r in report.rankings])
    typer.echo("")
    typer.echo(
        f"  {_DIM}{'#':>3}  {'Model':<{model_w}}  {'Right':>5}  {'Wrong':>5}"
        f"  {'Err':>4}  {'Tests':>5}  {'Rate':>7}  {'Cost':>9}  {'TPS':>7}{_RESET}"
    )
    typer.echo(f"  {'─' * (model_w + 60)}")
    for position, ranking in enumerate(report.rankings, start=1):
        color = _rate_color(ranking.success_rate)
        errors = f"{_RED}{ranking.errors:>4}{_RESET}" if ranking.errors else f"{'-':>4}"
        typer.echo(
            f"  {position:>3}  {_WHITE}{ranking.model:<{model_w}}{_RESET}"
            f"  {ranking.correct:>5}  {ranking.incorrect:>5}  {errors}"
            f"  {ranking.total_tests:>5}"
            f"  {color}{ranking.success_rate:>6.1f}%{_RESET}"
            f"  {ranking.total_cost:>9.4f}  {ranking.tokens_per_second:>7.1f}"
        )
    typer.echo("")
    _rule(color=_CYAN)
    typer.echo("")


def print_receipts(receipts: list[PublishReceipt]) -> None:
    for receipt in receipts:
        if receipt.ok:
            typer.echo(f"  {_GREEN}published{_RESET} [{receipt.sink}] {receipt.location}")
        else:
            typer.echo(f"  {_RED}failed{_RESET}    [{receipt.sink}] {receipt.error}")


def print_suites(entries: list[SuiteEntry], statuses: dict[str, CacheStatus]) -> None:
    if not entries:
        typer.echo("No suites found.")
        return
    id_w = max(len("Suite"), *(len(e.suite.id) for e in entries))
    typer.echo(
        f"  {_DIM}{'Suite':<{id_w}}  {'Tests':>5}  {'Chain':<10}  {'Cached':>13}"
        f"  Name{_RESET}"
    )
    for entry in entries:
        suite = entry.suite
        status = statuses[suite.id]
        cached = f"{status.cached_results}/{status.total_expected}"
        color = _GREEN if status.progress >= 1.0 else _YELLOW if status.can_resume else _DIM
        typer.echo(
            f"  {_WHITE}{suite.id:<{id_w}}{_RESET}  {len(suite.tests):>5}"
            f"  {suite.chain:<10}  {color}{cached:>13}{_RESET}  {suite.name}"
        )


def print_models(models: list[RunnableModel], estimates: dict[str, float] | None) -> None:
    if not models:
        typer.echo("No models configured.")
        return
    name_w = max(len("Model"), *(len(m.name) for m in models))
    header = f"  {_DIM}{'Model':<{name_w}}  {'Per test':>9}"
    if estimates is not None:
        header += f"  {'Suite est.':>10}"
    typer.echo(f"{header}  Backend{_RESET}")
    for model in models:
        line = f"  {_WHITE}{model.name:<{name_w}}{_RESET}  {model.avg_cost_per_test:>9.4f}"
        if estimates is not None:
            line += f"  {estimates[model.name]:>10.4f}"
        reasoning = f" {_DIM}(reasoning){_RESET}" if model.reasoning_enabled else ""
        typer.echo(f"{line}  {model.model}{reasoning}")
