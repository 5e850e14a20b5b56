"""Observable selection and result state shared by the runner and presentations."""

import logging
from collections.abc import Callable
from typing import Generic, Protocol, TypeAlias, TypeVar

from bananas_tester.models.catalog import Endpoint, Framework, Orm
from bananas_tester.models.result import Selection, TestResult
from bananas_tester.registry import Registry

log = logging.getLogger(__name__)

T = TypeVar("T")

Unsubscribe: TypeAlias = Callable[[], None]


class ObservableState(Protocol[T]):
    """A mutable value that notifies subscribers when it is written."""

    def get(self) -> T:
        """Return the held value."""
        ...

    def set(self, value: T) -> None:
        """Replace the held value."""
        ...

    def subscribe(self, callback: Callable[[T], None]) -> Unsubscribe:
        """Call ``callback`` with every new value until unsubscribed."""
        ...


class Cell(Generic[T]):
    """Signal-style ObservableState.

    Subscribers are notified only when the written value is a different
    object from the held one.
    """

    def __init__(self, value: T) -> None:
        self._value = value
        self._subscribers: list[Callable[[T], None]] = []

    def __repr__(self) -> str:
        return f"Cell({self._value!r})"

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        if value is self._value:
            return
        self._value = value
        for callback in list(self._subscribers):
            try:
                callback(value)
            except Exception:
                log.exception("Subscriber %r failed on %r", callback, value)

    def subscribe(self, callback: Callable[[T], None]) -> Unsubscribe:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe


class SelectionState:
    """The current framework, ORM and endpoint.

    Setters look the identifier up in the registry and silently keep the
    current entry when it is unknown.
    """

    def __init__(self, registry: Registry) -> None:
        self.registry = registry
        default = registry.default_selection()
        self.framework: ObservableState[Framework] = Cell(default.framework)
        self.orm: ObservableState[Orm] = Cell(default.orm)
        self.endpoint: ObservableState[Endpoint] = Cell(default.endpoint)

    def set_framework(self, value: str) -> bool:
        """Select a framework by its value; return whether it was applied."""
        if (framework := self.registry.frameworks.get(value)) is None:
            log.debug("Ignoring unknown framework %r", value)
            return False
        self.framework.set(framework)
        return True

    def set_orm(self, value: str) -> bool:
        """Select an ORM by its value; return whether it was applied."""
        if (orm := self.registry.orms.get(value)) is None:
            log.debug("Ignoring unknown orm %r", value)
            return False
        self.orm.set(orm)
        return True

    def set_endpoint(self, path: str) -> bool:
        """Select an endpoint by its path; return whether it was applied."""
        if (endpoint := self.registry.endpoints.get(path)) is None:
            log.debug("Ignoring unknown endpoint %r", path)
            return False
        self.endpoint.set(endpoint)
        return True

    def current(self) -> Selection:
        """Snapshot of the current selection."""
        return Selection(
            framework=self.framework.get(),
            orm=self.orm.get(),
            endpoint=self.endpoint.get(),
        )


class ResultState:
    """Latest test result and whether a run is in flight."""

    def __init__(self) -> None:
        self.current: ObservableState[TestResult | None] = Cell(None)
        self.in_flight: ObservableState[bool] = Cell(False)
