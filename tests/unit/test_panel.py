"""Tests for the trigger boundary."""

import asyncio
import logging
from unittest.mock import AsyncMock, Mock

import pytest

from bananas_tester.panel import TestPanel
from bananas_tester.runner import TestRunner
from bananas_tester.state import ResultState


@pytest.fixture
def runner_mock() -> Mock:
    """Create mock runner with real result state."""
    runner = Mock(spec=TestRunner)
    runner.results = ResultState()
    runner.run_test = AsyncMock(return_value=None)
    return runner


async def test_trigger_schedules_run(runner_mock: Mock) -> None:
    """Starts a run and returns its task."""
    panel = TestPanel(runner=runner_mock)

    assert panel.busy is False
    task = panel.trigger()

    assert task is not None
    await task
    runner_mock.run_test.assert_awaited_once()
    assert panel.busy is False


async def test_rejects_trigger_while_in_flight(
    runner_mock: Mock, caplog: pytest.LogCaptureFixture
) -> None:
    """Does not start a run while the result state is in flight."""
    runner_mock.results.in_flight.set(True)
    panel = TestPanel(runner=runner_mock)

    with caplog.at_level(logging.WARNING):
        task = panel.trigger()

    assert task is None
    assert panel.busy is True
    runner_mock.run_test.assert_not_called()
    assert "Test already in flight" in caplog.text


async def test_rejects_second_trigger_until_first_completes(
    runner_mock: Mock,
) -> None:
    """Keeps the trigger disabled from scheduling until the run finishes."""
    release = asyncio.Event()

    async def slow_run() -> None:
        runner_mock.results.in_flight.set(True)
        await release.wait()
        runner_mock.results.in_flight.set(False)

    runner_mock.run_test.side_effect = slow_run
    panel = TestPanel(runner=runner_mock)

    first = panel.trigger()
    assert first is not None
    assert panel.trigger() is None

    await asyncio.sleep(0)
    assert runner_mock.results.in_flight.get() is True
    assert panel.trigger() is None

    release.set()
    await first
    assert panel.busy is False

    second = panel.trigger()
    assert second is not None
    await second
    assert runner_mock.run_test.await_count == 2


async def test_wait_idle_waits_for_pending_run(runner_mock: Mock) -> None:
    """Returns only once the scheduled run has finished."""
    release = asyncio.Event()

    async def slow_run() -> None:
        await release.wait()

    runner_mock.run_test.side_effect = slow_run
    panel = TestPanel(runner=runner_mock)
    task = panel.trigger()
    assert task is not None

    waiter = asyncio.create_task(panel.wait_idle())
    await asyncio.sleep(0)
    assert not waiter.done()

    release.set()
    await waiter
    assert task.done()


async def test_wait_idle_without_run(runner_mock: Mock) -> None:
    """Returns immediately when nothing was scheduled."""
    panel = TestPanel(runner=runner_mock)

    await panel.wait_idle()

    runner_mock.run_test.assert_not_called()
