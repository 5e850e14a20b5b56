"""Shared fixtures for tester tests."""

from collections.abc import AsyncGenerator, Generator

import pytest
from aioresponses import aioresponses as aioresponses_cls

from bananas_tester.config import TesterConfig
from bananas_tester.runner import TestRunner

# aiohttp test servers listen here and must not be intercepted.
TEST_SERVER_URL = "http://127.0.0.1"


@pytest.fixture
def aioresponses() -> Generator[aioresponses_cls, None, None]:
    """Intercept outgoing aiohttp client requests."""
    with aioresponses_cls(passthrough=[TEST_SERVER_URL]) as mocked:
        yield mocked


@pytest.fixture
async def runner(
    aioresponses: aioresponses_cls,
) -> AsyncGenerator[TestRunner, None]:
    """Create runner with default catalog and a managed session."""
    async with TestRunner.from_config(TesterConfig()) as impl:
        yield impl
