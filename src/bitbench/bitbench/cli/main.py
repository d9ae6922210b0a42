"""CLI entrypoint for bitbench — typer app with run, suites, models and update-costs."""

import asyncio
import contextlib
import logging
import signal
import sys
import time
from datetime import date
from pathlib import Path

import structlog
import typer

from bitbench.cache.domain.status import cache_status
from bitbench.cache.infrastructure.file_store import FileResultStore
from bitbench.cache.infrastructure.observer import StructlogCacheObserver
from bitbench.cli.output.summary import (
    print_models,
    print_plan,
    print_receipts,
    print_report,
    print_suites,
)
from bitbench.config.domain.config import BenchConfig
from bitbench.config.infrastructure.observer import StructlogConfigObserver
from bitbench.config.infrastructure.yaml_loader import YamlConfigLoader
from bitbench.core.errors import BitbenchError
from bitbench.costs.domain.estimate import (
    average_costs,
    estimate_benchmark_cost,
    merge_costs,
)
from bitbench.costs.infrastructure.json_repository import JsonCostTableRepository
from bitbench.evaluation.application.scheduler import BenchmarkScheduler
from bitbench.evaluation.domain.settings import RunOutcome, RunSettings
from bitbench.evaluation.infrastructure.event_stream import EventStream
from bitbench.evaluation.infrastructure.observer import StructlogRunnerObserver
from bitbench.evaluation.infrastructure.progress_observer import (
    ProgressRunnerObserver,
)
from bitbench.model.domain.model import RunnableModel
from bitbench.model.infrastructure.catalog import build_catalog, select_models
from bitbench.model.infrastructure.litellm_invoker import LiteLLMModelInvoker
from bitbench.model.infrastructure.observer import StructlogModelObserver
from bitbench.publish.application.publisher import publish_report
from bitbench.publish.domain.sink import PublishSink
from bitbench.publish.infrastructure.json_sink import JsonReportSink
from bitbench.publish.infrastructure.observer import StructlogPublishObserver
from bitbench.publish.infrastructure.webhook_sink import WebhookSink
from bitbench.suite.domain.loader import SuiteLoader
from bitbench.suite.domain.suite import TestSuite
from bitbench.suite.infrastructure.errors import SuiteLoadError
from bitbench.suite.infrastructure.json_loader import JsonSuiteLoader
from bitbench.suite.infrastructure.observer import StructlogSuiteObserver

app = typer.Typer(add_completion=False)

_DEFAULT_CONFIG = Path("bitbench.yaml")


def _configure_structlog(log_format: str) -> None:
    """Configure structlog based on the requested format.

    Console output shares the terminal with the progress table, so only
    warnings and above are printed; JSON output keeps every event.
    """
    if log_format == "console":
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
        min_level = logging.WARNING
    elif log_format == "json":
        renderer = structlog.processors.JSONRenderer()
        min_level = logging.NOTSET
    else:
        typer.echo(f"Invalid log format: {log_format!r}. Must be 'console' or 'json'.")
        raise typer.Exit(code=1)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )


def _default_version() -> str:
    return date.today().isoformat()


def _load_config(config_path: Path) -> BenchConfig:
    return YamlConfigLoader(observer=StructlogConfigObserver()).load(path=config_path)


def _load_suite(config: BenchConfig, suite: str) -> TestSuite:
    """Resolve SUITE as a file path, else as an id under the suites directory."""
    loader: SuiteLoader = JsonSuiteLoader(observer=StructlogSuiteObserver())
    candidate = Path(suite)
    if candidate.is_file():
        return loader.load(path=candidate)
    path = config.suites_dir / f"{suite}.json"
    if not path.is_file():
        raise SuiteLoadError(f"suite '{suite}' not found in {config.suites_dir}")
    return loader.load(path=path)


def _catalog(config: BenchConfig) -> list[RunnableModel]:
    cost_table = JsonCostTableRepository(path=config.model_costs_path).load()
    return build_catalog(models=config.models, cost_table=cost_table)


def _store(config: BenchConfig) -> FileResultStore:
    return FileResultStore(root=config.cache_dir, observer=StructlogCacheObserver())


def _sinks(config: BenchConfig) -> list[PublishSink]:
    sinks: list[PublishSink] = []
    if config.publish.json_report:
        sinks.append(JsonReportSink(output_dir=config.output_dir))
    if config.publish.webhook_url:
        sinks.append(WebhookSink(url=config.publish.webhook_url))
    return sinks


async def _run_with_signals(scheduler: BenchmarkScheduler) -> RunOutcome:
    """Run the scheduler; the first Ctrl-C requests a graceful stop.

    A second Ctrl-C cancels the run outright.
    """
    loop = asyncio.get_running_loop()
    main_task = asyncio.current_task()

    def _on_sigint() -> None:
        if scheduler.stop_requested:
            if main_task is not None:
                main_task.cancel()
            return
        typer.echo(
            "\nStopping: waiting for in-flight calls (Ctrl-C again to abort).",
            err=True,
        )
        scheduler.request_stop()

    # Signal handlers are unavailable on some platforms; Ctrl-C then aborts.
    with contextlib.suppress(NotImplementedError):
        loop.add_signal_handler(signal.SIGINT, _on_sigint)
    try:
        return await scheduler.run()
    finally:
        with contextlib.suppress(NotImplementedError):
            loop.remove_signal_handler(signal.SIGINT)


@app.command()
def run(
    suite: str = typer.Argument(..., help="Suite id (file stem) or path to a suite JSON"),
    config_path: Path = typer.Option(
        _DEFAULT_CONFIG, "--config", "-c", help="Path to bitbench config YAML"
    ),
    version: str | None = typer.Option(
        None, "--version", "-v", help="Run version label (default: today's date)"
    ),
    models: list[str] | None = typer.Option(
        None, "--model", "-m", help="Only run these models (repeatable)"
    ),
    runs: int | None = typer.Option(None, "--runs", help="Runs per model"),
    concurrency: int | None = typer.Option(
        None, "--concurrency", help="Global cap on in-flight model calls"
    ),
    timeout: float | None = typer.Option(
        None, "--timeout", help="Per-call timeout in seconds"
    ),
    stagger_ms: int | None = typer.Option(
        None, "--stagger-ms", help="Per-model start delay in milliseconds"
    ),
    publish: bool = typer.Option(
        True, "--publish/--no-publish", help="Publish the report to configured sinks"
    ),
    log_format: str = typer.Option(
        "console",
        "--log-format",
        help="Log format: 'console' or 'json'",
    ),
) -> None:
    """Run a benchmark suite against the configured models."""
    _configure_structlog(log_format=log_format)
    progress: ProgressRunnerObserver | None = None
    try:
        config = _load_config(config_path=config_path)
        test_suite = _load_suite(config=config, suite=suite)
        active = select_models(catalog=_catalog(config=config), names=models)
        label = version or _default_version()

        execution = config.execution
        settings = RunSettings(
            runs_per_model=runs if runs is not None else execution.runs_per_model,
            max_concurrency=(
                concurrency if concurrency is not None else execution.max_concurrency
            ),
            timeout_seconds=timeout if timeout is not None else execution.timeout_seconds,
            stagger_delay_seconds=(
                stagger_ms if stagger_ms is not None else execution.stagger_delay_ms
            )
            / 1000,
        )

        store = _store(config=config)
        status = cache_status(
            store=store,
            suite_id=test_suite.id,
            version=label,
            num_tests=len(test_suite.tests),
            num_models=len(active),
            runs_per_model=settings.runs_per_model,
        )
        print_plan(
            suite_name=test_suite.name,
            version=label,
            models=active,
            status=status,
            estimated_cost=estimate_benchmark_cost(
                models=active,
                num_tests=len(test_suite.tests),
                runs_per_model=settings.runs_per_model,
                cached_fraction=status.progress,
            ),
        )

        stream = EventStream()
        stream.subscribe(StructlogRunnerObserver())
        if log_format != "json":
            progress = ProgressRunnerObserver(title=test_suite.name)
            stream.subscribe(progress)

        scheduler = BenchmarkScheduler(
            suite=test_suite,
            version=label,
            models=active,
            invoker=LiteLLMModelInvoker(observer=StructlogModelObserver()),
            store=store,
            stream=stream,
            settings=settings,
        )

        started_at = time.monotonic()
        try:
            outcome = asyncio.run(_run_with_signals(scheduler=scheduler))
        finally:
            if progress is not None:
                progress.stop()
        print_report(outcome=outcome, elapsed_seconds=time.monotonic() - started_at)

        if publish and not outcome.stopped:
            receipts = asyncio.run(
                publish_report(
                    report=outcome.report,
                    sinks=_sinks(config=config),
                    observer=StructlogPublishObserver(),
                )
            )
            print_receipts(receipts=receipts)
        elif outcome.stopped:
            typer.echo("Run stopped early; report not published. Re-run to resume.")

    except (KeyboardInterrupt, asyncio.CancelledError):
        typer.echo("Benchmark interrupted.")
        sys.exit(1)
    except BitbenchError as exc:
        typer.echo(str(exc))
        sys.exit(1)
    except Exception as exc:  # noqa: BLE001
        typer.echo(f"Unexpected error: {exc}\nPlease report this bug.")
        sys.exit(1)


@app.command()
def suites(
    config_path: Path = typer.Option(
        _DEFAULT_CONFIG, "--config", "-c", help="Path to bitbench config YAML"
    ),
    version: str | None = typer.Option(
        None, "--version", "-v", help="Version label for cache progress"
    ),
) -> None:
    """List available suites with their cache progress."""
    try:
        _configure_structlog(log_format="console")
        config = _load_config(config_path=config_path)
        label = version or _default_version()
        entries = JsonSuiteLoader(observer=StructlogSuiteObserver()).discover(
            directory=config.suites_dir
        )
        store = _store(config=config)
        statuses = {
            entry.suite.id: cache_status(
                store=store,
                suite_id=entry.suite.id,
                version=label,
                num_tests=len(entry.suite.tests),
                num_models=len(config.models),
                runs_per_model=config.execution.runs_per_model,
            )
            for entry in entries
        }
        print_suites(entries=entries, statuses=statuses)
    except BitbenchError as exc:
        typer.echo(str(exc))
        sys.exit(1)


@app.command()
def models(
    config_path: Path = typer.Option(
        _DEFAULT_CONFIG, "--config", "-c", help="Path to bitbench config YAML"
    ),
    suite: str | None = typer.Option(
        None, "--suite", "-s", help="Show the estimated cost of running this suite"
    ),
) -> None:
    """List the model catalog with per-test costs."""
    try:
        _configure_structlog(log_format="console")
        config = _load_config(config_path=config_path)
        catalog = _catalog(config=config)
        estimates: dict[str, float] | None = None
        if suite is not None:
            test_suite = _load_suite(config=config, suite=suite)
            estimates = {
                model.name: estimate_benchmark_cost(
                    models=[model],
                    num_tests=len(test_suite.tests),
                    runs_per_model=config.execution.runs_per_model,
                )
                for model in catalog
            }
        print_models(models=catalog, estimates=estimates)
    except BitbenchError as exc:
        typer.echo(str(exc))
        sys.exit(1)


@app.command("update-costs")
def update_costs(
    config_path: Path = typer.Option(
        _DEFAULT_CONFIG, "--config", "-c", help="Path to bitbench config YAML"
    ),
) -> None:
    """Recompute per-model average costs from every cached result."""
    try:
        _configure_structlog(log_format="console")
        config = _load_config(config_path=config_path)
        repository = JsonCostTableRepository(path=config.model_costs_path)
        averages = average_costs(results=_store(config=config).iter_results())
        table = merge_costs(
            table=repository.load(), averages=averages, today=_default_version()
        )
        repository.save(table=table)
        typer.echo(
            f"Updated {len(averages)} model costs in {repository.path}"
            f" from {sum(s.samples for s in averages.values())} cached results."
        )
    except BitbenchError as exc:
        typer.echo(str(exc))
        sys.exit(1)


if __name__ == "__main__":
    app()
