"""BenchmarkScheduler — runs every (model, test, run) unit of a suite once."""

import asyncio
import contextlib
import time
from datetime import UTC, datetime

from bitbench.cache.domain.fingerprint import compute_fingerprint
from bitbench.cache.domain.key import UnitKey
from bitbench.cache.domain.result import CachedResult
from bitbench.cache.domain.store import ResultStore
from bitbench.evaluation.domain.accumulator import RunAccumulator
from bitbench.evaluation.domain.errors import PlanConstructionError
from bitbench.evaluation.domain.events import (
    DoneEvent,
    ErrorEvent,
    PlanEvent,
    PlanTotals,
    ReuseEvent,
    StartEvent,
)
from bitbench.evaluation.domain.settings import RunOutcome, RunSettings
from bitbench.evaluation.domain.unit import ExecutionUnit, UnitState, expand_units
from bitbench.evaluation.infrastructure.event_stream import EventStream
from bitbench.grading.domain.grade import grade
from bitbench.model.domain.invoker import ModelInvoker
from bitbench.model.domain.model import RunnableModel
from bitbench.model.infrastructure.errors import ModelInvocationError
from bitbench.suite.domain.suite import TestSuite


def _elapsed_ms(started_at: float) -> int:
    return int((time.monotonic() - started_at) * 1000)


class BenchmarkScheduler:
    """Schedules a suite's units under one global concurrency cap.

    Units whose fingerprint is already in the store are reused without
    touching the model. Misses are dispatched model-major, each model's first
    call delayed by its stagger offset. A failing unit is reported as an
    ``error`` event and never aborts the run; nothing is retried here.

    The scheduler receives its collaborators as ports so that tests can drive
    it with in-memory fakes.
    """

    def __init__(
        self,
        suite: TestSuite,
        version: str,
        models: list[RunnableModel],
        invoker: ModelInvoker,
        store: ResultStore,
        stream: EventStream,
        settings: RunSettings,
    ) -> None:
        self._suite = suite
        self._version = version
        self._models = models
        self._invoker = invoker
        self._store = store
        self._settings = settings
        self._stop = asyncio.Event()
        self._states: dict[ExecutionUnit, UnitState] = {}

        # Subscribed first so the report folds exactly what every observer saw.
        self._accumulator = RunAccumulator()
        self._stream = EventStream()
        self._stream.subscribe(self._accumulator)
        self._stream.subscribe(stream)

    @property
    def accumulator(self) -> RunAccumulator:
        return self._accumulator

    @property
    def states(self) -> dict[ExecutionUnit, UnitState]:
        return dict(self._states)

    def request_stop(self) -> None:
        """Stop dispatching new units. Calls already in flight run to completion."""
        self._stop.set()

    @property
    def stop_requested(self) -> bool:
        return self._stop.is_set()

    def _validate(self) -> None:
        if not self._models:
            raise PlanConstructionError(reason="no active models")
        if not self._suite.tests:
            raise PlanConstructionError(
                reason=f"suite '{self._suite.id}' has no tests"
            )
        names = [model.name for model in self._models]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise PlanConstructionError(
                reason=f"duplicate model names: {', '.join(duplicates)}"
            )
        if self._settings.runs_per_model < 1:
            raise PlanConstructionError(reason="runs_per_model must be at least 1")
        if self._settings.max_concurrency < 1:
            raise PlanConstructionError(reason="max_concurrency must be at least 1")

    def _key(self, unit: ExecutionUnit) -> UnitKey:
        return UnitKey(
            suite_id=self._suite.id,
            version=self._version,
            model=unit.model.name,
            run_number=unit.run_number,
            test_index=unit.test_index,
        )

    async def run(self) -> RunOutcome:
        """Execute the plan and return the report with stop bookkeeping.

        Raises:
            PlanConstructionError: if the plan is invalid. Nothing is emitted.
        """
        self._validate()
        units = expand_units(
            models=self._models,
            num_tests=len(self._suite.tests),
            runs_per_model=self._settings.runs_per_model,
        )
        self._states = {unit: UnitState.PENDING for unit in units}

        sem = asyncio.Semaphore(self._settings.max_concurrency)
        hits = await self._probe_cache(units=units, sem=sem)
        self._stream.emit(self._plan_event(units=units, hits=hits))

        started_at = time.monotonic()
        async with asyncio.TaskGroup() as tg:
            for unit in units:
                cached = hits.get(unit)
                if cached is not None:
                    self._reuse(unit=unit, cached=cached)
                else:
                    tg.create_task(
                        self._execute(unit=unit, sem=sem, run_started_at=started_at)
                    )

        skipped = sum(1 for s in self._states.values() if s is UnitState.SKIPPED)
        report = self._accumulator.build_report(
            suite=self._suite,
            version=self._version,
            timestamp=datetime.now(UTC),
        )
        return RunOutcome(
            report=report, stopped=self._stop.is_set(), skipped_units=skipped
        )

    async def _probe_cache(
        self, units: list[ExecutionUnit], sem: asyncio.Semaphore
    ) -> dict[ExecutionUnit, CachedResult]:
        """Look every unit up in the store; reads run in worker threads."""

        async def probe(unit: ExecutionUnit) -> CachedResult | None:
            key = self._key(unit)
            fingerprint = compute_fingerprint(key=key, suite=self._suite)
            async with sem:
                self._states[unit] = UnitState.CACHE_CHECKING
                return await asyncio.to_thread(self._store.lookup, key, fingerprint)

        found = await asyncio.gather(*(probe(unit) for unit in units))
        return {
            unit: cached
            for unit, cached in zip(units, found, strict=True)
            if cached is not None
        }

    def _plan_event(
        self, units: list[ExecutionUnit], hits: dict[ExecutionUnit, CachedResult]
    ) -> PlanEvent:
        totals: dict[str, PlanTotals] = {}
        for model in self._models:
            model_units = [u for u in units if u.model.name == model.name]
            reuse = sum(1 for u in model_units if u in hits)
            totals[model.name] = PlanTotals(
                total=len(model_units),
                execute=len(model_units) - reuse,
                reuse=reuse,
            )
        return PlanEvent(totals=totals)

    def _reuse(self, unit: ExecutionUnit, cached: CachedResult) -> None:
        self._states[unit] = UnitState.REUSED
        self._stream.emit(
            ReuseEvent(
                model=unit.model.name,
                test_index=unit.test_index,
                run_number=unit.run_number,
                duration_ms=cached.duration_ms,
                correct=cached.correct,
                cost_usd=cached.cost_usd,
                completion_tokens=cached.completion_tokens,
            )
        )

    async def _execute(
        self, unit: ExecutionUnit, sem: asyncio.Semaphore, run_started_at: float
    ) -> None:
        """Run one cache miss: stagger, acquire a slot, invoke, grade, persist.

        The stagger sleep happens outside the semaphore so that waiting models
        do not hold slots.
        """
        offset = unit.model_index * self._settings.stagger_delay_seconds
        wait = offset - (time.monotonic() - run_started_at)
        if wait > 0:
            # A stop request ends the wait early.
            with contextlib.suppress(TimeoutError):
                await asyncio.wait_for(self._stop.wait(), timeout=wait)

        async with sem:
            if self._stop.is_set():
                self._states[unit] = UnitState.SKIPPED
                return

            self._states[unit] = UnitState.EXECUTING
            self._stream.emit(
                StartEvent(
                    model=unit.model.name,
                    test_index=unit.test_index,
                    run_number=unit.run_number,
                )
            )
            test = self._suite.tests[unit.test_index]
            started_at = time.monotonic()
            try:
                async with asyncio.timeout(self._settings.timeout_seconds):
                    completion = await self._invoker.invoke(
                        model=unit.model,
                        system_prompt=self._suite.system_prompt,
                        prompt=test.prompt,
                        timeout_seconds=self._settings.timeout_seconds,
                    )
            except ModelInvocationError as exc:
                self._fail(unit=unit, started_at=started_at, message=exc.reason)
                return
            except TimeoutError:
                self._fail(
                    unit=unit,
                    started_at=started_at,
                    message=f"timed out after {self._settings.timeout_seconds:g}s",
                )
                return

        duration_ms = completion.duration_ms
        correct = grade(
            response_text=completion.text,
            required_answers=test.required_answers,
            forbidden_answers=test.forbidden_answers,
        )
        key = self._key(unit)
        result = CachedResult(
            signature=compute_fingerprint(key=key, suite=self._suite),
            suite_id=key.suite_id,
            version=key.version,
            model=key.model,
            run_number=key.run_number,
            test_index=key.test_index,
            prompt=test.prompt,
            required_answers=sorted(test.required_answers),
            forbidden_answers=sorted(test.forbidden_answers),
            duration_ms=duration_ms,
            cost_usd=completion.cost_usd,
            completion_tokens=completion.completion_tokens,
            result_text=completion.text,
            correct=correct,
            created_at=datetime.now(UTC),
        )
        # A failed write is reported by the store and never fails the unit.
        await asyncio.to_thread(self._store.store, result)

        self._states[unit] = UnitState.COMPLETED
        self._stream.emit(
            DoneEvent(
                model=unit.model.name,
                test_index=unit.test_index,
                run_number=unit.run_number,
                duration_ms=duration_ms,
                correct=correct,
                cost_usd=completion.cost_usd,
                completion_tokens=completion.completion_tokens,
            )
        )

    def _fail(self, unit: ExecutionUnit, started_at: float, message: str) -> None:
        self._states[unit] = UnitState.FAILED
        self._stream.emit(
            ErrorEvent(
                model=unit.model.name,
                test_index=unit.test_index,
                run_number=unit.run_number,
                duration_ms=_elapsed_ms(started_at),
                message=message,
            )
        )
