"""Test runner: builds the probe request, times it and publishes the result."""

import json
import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

import aiohttp

from bananas_tester.config import TesterConfig
from bananas_tester.models.result import UNKNOWN_ERROR, Selection, TestResult
from bananas_tester.registry import DEFAULT_REGISTRY, Registry
from bananas_tester.state import ResultState, SelectionState

log = logging.getLogger(__name__)


def build_url(selection: Selection, host: str = "localhost") -> str:
    """Build the probe URL for a selection.

    The database endpoint already carries a query string, so the ORM is
    joined with ``&``. No other endpoint gets the ``orm`` parameter.
    """
    url = f"http://{host}:{selection.framework.port}{selection.endpoint.path}"
    if selection.endpoint.is_database_test:
        url += f"&orm={selection.orm.value}"
    return url


def reject_constant(name: str) -> Any:
    """Refuse the non-standard NaN and Infinity literals."""
    raise ValueError(f"Unexpected token {name} in JSON")


def elapsed_ms(start: float) -> float:
    """Milliseconds since a ``time.perf_counter()`` reading."""
    return (time.perf_counter() - start) * 1000


@dataclass(frozen=True, kw_only=True)
class TestRunner:
    """Executes one test run for the current selection."""

    __test__ = False

    selection: SelectionState
    results: ResultState
    session: aiohttp.ClientSession = field(repr=False)
    host: str = "localhost"

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: TesterConfig, registry: Registry = DEFAULT_REGISTRY
    ) -> AsyncGenerator["TestRunner", None]:
        """Create runner with fresh state and a managed session lifecycle."""
        async with aiohttp.ClientSession() as session:
            yield cls(
                selection=SelectionState(registry),
                results=ResultState(),
                session=session,
                host=config.host,
            )

    async def run_test(self) -> None:
        """Run the probe and publish its outcome to the result state.

        Every failure is converted into a result carrying ``error``; the
        in-flight flag is cleared after the result is published, whatever
        the outcome.
        """
        self.results.in_flight.set(True)
        try:
            self.results.current.set(None)

            start = time.perf_counter()
            selection = self.selection.current()
            url = build_url(selection, self.host)
            log.info("Running test: url=%s", url)

            result = await self._probe(selection, url, start)
            self.results.current.set(result)
        finally:
            self.results.in_flight.set(False)

    async def _probe(
        self, selection: Selection, url: str, start: float
    ) -> TestResult:
        """Issue the GET and capture either the payload or the failure."""
        try:
            async with self.session.get(url) as response:
                body = await response.text()
            data = json.loads(body, parse_constant=reject_constant)
        except Exception as e:
            result = TestResult(
                framework=selection.framework.name,
                orm=selection.orm.name,
                response=None,
                duration=elapsed_ms(start),
                error=str(e) or UNKNOWN_ERROR,
            )
            log.warning(
                "Test failed: url=%s duration=%.2fms error=%s",
                url,
                result.duration,
                result.error,
            )
            return result

        result = TestResult(
            framework=selection.framework.name,
            orm=selection.orm.name,
            response=data,
            duration=elapsed_ms(start),
        )
        log.info(
            "Test completed: url=%s status=%d duration=%.2fms",
            url,
            response.status,
            result.duration,
        )
        return result
