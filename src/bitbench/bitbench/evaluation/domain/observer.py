"""Observer port for the evaluation domain — consumers of the runner event stream."""

from typing import Protocol

from bitbench.evaluation.domain.events import RunnerEvent


class RunnerObserver(Protocol):
    """Receives every RunnerEvent of a run, in emission order.

    ``handle`` is called synchronously on the scheduler's event loop and must
    return promptly; an observer with slow work to do buffers events and
    processes them elsewhere (see QueueObserver).
    """

    def handle(self, event: RunnerEvent) -> None: ...
