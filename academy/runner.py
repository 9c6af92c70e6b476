"""Action Runner: executes one lesson action at a time.

Responsibilities:
1. Reject a run while another is in flight (single-flight)
2. Clear the Log Stream and announce the backend in use
3. Hand the action a logger bound to the run's generation
4. Turn any action failure into one error entry
5. Release the busy flag only if the run is still the current one

A run becomes stale when ``cancel()`` bumps the generation (navigation,
clearing the console). Its late log writes are dropped, and its ``finally``
leaves the busy flag to whichever run owns it now.
"""

from __future__ import annotations

import logging
from datetime import datetime

from academy.backends import Backend
from academy.log_stream import LogStream
from academy.models import LogKind, Module, RunOutcome, RunStatus, SessionConfig

logger = logging.getLogger(__name__)


class RunLogger:
    """Log callback handed to a lesson action, bound to one generation."""

    def __init__(self, runner: "ActionRunner", generation: int):
        self.runner = runner
        self.generation = generation

    @property
    def stale(self) -> bool:
        return self.generation != self.runner.generation

    def __call__(self, message: str, kind: LogKind = LogKind.INFO) -> None:
        if self.stale:
            logger.debug(
                "Discarded log from superseded run %d (current %d): %s",
                self.generation, self.runner.generation, message,
            )
            return
        self.runner.log_stream.append(message, kind)


class ActionRunner:
    """Runs lesson actions against a backend, one at a time."""

    def __init__(self, log_stream: LogStream):
        self.log_stream = log_stream
        self._busy = False
        self._generation = 0

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def generation(self) -> int:
        return self._generation

    def cancel(self) -> None:
        """Supersede any in-flight run. Its remaining output is discarded."""
        if self._busy:
            logger.info("Cancelling run %d", self._generation)
        self._generation += 1
        self._busy = False

    def bind_logger(self) -> RunLogger:
        """Logger for the current generation, for writes made outside a run."""
        return RunLogger(self, self._generation)

    async def run(
        self,
        module: Module,
        backend: Backend,
        config: SessionConfig,
    ) -> RunOutcome:
        """Execute the module's action. Never raises for action failures."""
        if self._busy:
            logger.info("Rejected run of '%s': another run is in flight", module.id)
            return RunOutcome(
                module_id=module.id,
                generation=self._generation,
                status=RunStatus.REJECTED,
                finished_at=datetime.now().isoformat(),
            )

        self._generation += 1
        generation = self._generation
        self._busy = True
        self.log_stream.clear()

        outcome = RunOutcome(
            module_id=module.id,
            generation=generation,
            status=RunStatus.RUNNING,
        )
        log = RunLogger(self, generation)
        logger.info("Run %d started for module '%s' (%s)",
                    generation, module.id, backend.kind.value)

        try:
            log(backend.describe(), LogKind.INFO)
            outcome.result = await module.action.execute(
                backend, config.custom_endpoint, log, config.focus_address
            )
            outcome.status = RunStatus.COMPLETED
        except Exception as e:
            logger.warning("Run %d for module '%s' failed: %s", generation, module.id, e)
            outcome.status = RunStatus.FAILED
            outcome.error = str(e)
            log(f"Execution Error: {e}", LogKind.ERROR)
        finally:
            if self._generation == generation:
                self._busy = False
            else:
                outcome.status = RunStatus.SUPERSEDED
            outcome.finished_at = datetime.now().isoformat()

        return outcome
