"""Models for selections and test execution results."""

from dataclasses import dataclass
from typing import Any, TypeAlias

from bananas_tester.models.catalog import Endpoint, Framework, Orm

ResponsePayload: TypeAlias = Any

UNKNOWN_ERROR = "Unknown error"


@dataclass(frozen=True, kw_only=True)
class Selection:
    """The operator's current choice driving the next test run."""

    framework: Framework
    orm: Orm
    endpoint: Endpoint


@dataclass(frozen=True, kw_only=True)
class TestResult:
    """Outcome of a single test run.

    Exactly one of ``response`` and ``error`` is meaningful: a run either
    captured a structured payload or failed with a description. The labels are
    those of the selection at the moment the run started.
    """

    __test__ = False

    framework: str
    orm: str
    response: ResponsePayload = None
    duration: float
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        """Whether the run captured a response."""
        return self.error is None
