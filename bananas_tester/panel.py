"""Trigger boundary shared by the presentations."""

import asyncio
import logging
from dataclasses import dataclass, field

from bananas_tester.runner import TestRunner

log = logging.getLogger(__name__)


@dataclass(kw_only=True)
class TestPanel:
    """Starts test runs, refusing to start one while another is running.

    The runner itself does not serialize runs; presentations go through the
    panel so that the trigger is disabled while a run is in flight.
    """

    __test__ = False

    runner: TestRunner
    _task: asyncio.Task[None] | None = field(default=None, init=False, repr=False)

    @property
    def busy(self) -> bool:
        """Whether the trigger is currently disabled."""
        if self.runner.results.in_flight.get():
            return True
        return self._task is not None and not self._task.done()

    def trigger(self) -> asyncio.Task[None] | None:
        """Schedule a test run.

        Returns:
            The scheduled task, or None when a run is already in flight

        """
        if self.busy:
            log.warning("Test already in flight, ignoring trigger")
            return None

        self._task = asyncio.create_task(self.runner.run_test())
        return self._task

    async def wait_idle(self) -> None:
        """Wait for the last scheduled run to finish, if any."""
        if self._task is not None and not self._task.done():
            log.info("Waiting for the test in flight to finish")
            await self._task
