"""Tests for ProgressRunnerObserver."""

from unittest.mock import patch

from rich.console import Console

from bitbench.evaluation.domain.events import (
    DoneEvent,
    ErrorEvent,
    PlanEvent,
    PlanTotals,
    StartEvent,
)
from bitbench.evaluation.infrastructure.progress_observer import ProgressRunnerObserver


def _feed(observer: ProgressRunnerObserver) -> None:
    observer.handle(
        PlanEvent(
            totals={
                "mini": PlanTotals(total=2, execute=2, reuse=0),
                "r1": PlanTotals(total=2, execute=2, reuse=0),
            }
        )
    )
    observer.handle(StartEvent(model="mini", test_index=0, run_number=1))
    observer.handle(
        DoneEvent(
            model="mini",
            test_index=0,
            run_number=1,
            duration_ms=2000,
            correct=True,
            cost_usd=0.004,
            completion_tokens=80,
        )
    )
    observer.handle(StartEvent(model="r1", test_index=0, run_number=1))
    observer.handle(
        ErrorEvent(model="r1", test_index=0, run_number=1, duration_ms=500, message="boom")
    )
    observer.handle(StartEvent(model="r1", test_index=1, run_number=1))


def _render_text(observer: ProgressRunnerObserver) -> str:
    console = Console(record=True, width=160, color_system=None)
    console.print(observer.render())
    return console.export_text()


class TestProgressRunnerObserver:
    def test_disabled_observer_still_tracks_stats(self) -> None:
        observer = ProgressRunnerObserver(disabled=True)

        _feed(observer)
        observer.stop()

        stats = observer.accumulator.stats
        assert stats["mini"].correct == 1
        assert stats["r1"].executed_errors == 1
        assert stats["r1"].running == 1

    def test_render_shows_one_row_per_model(self) -> None:
        observer = ProgressRunnerObserver(title="Arithmetic", disabled=True)
        _feed(observer)

        text = _render_text(observer)

        assert "Arithmetic" in text
        assert "mini" in text
        assert "r1" in text
        assert "1/2" in text
        assert "100%" in text
        assert "Overall" in text

    def test_render_before_any_event(self) -> None:
        observer = ProgressRunnerObserver(disabled=True)

        text = _render_text(observer)

        assert "Overall" in text

    def test_stop_without_start_is_safe(self) -> None:
        observer = ProgressRunnerObserver(disabled=True)
        observer.stop()
        observer.stop()

    def test_live_display_starts_once_and_refreshes_on_its_own(self) -> None:
        with patch(
            "bitbench.evaluation.infrastructure.progress_observer.Live"
        ) as live_cls:
            observer = ProgressRunnerObserver()
            _feed(observer)
            observer.stop()

        live = live_cls.return_value
        live_cls.assert_called_once()
        live.start.assert_called_once_with()
        live.refresh.assert_not_called()
        live.stop.assert_called_once_with()
