"""Selection registry: the fixed catalogs of frameworks, ORMs and endpoints."""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TypeVar

from bananas_tester.models.catalog import Catalog, Endpoint, Framework, Orm
from bananas_tester.models.result import Selection


EntryT = TypeVar("EntryT")


class CatalogError(ValueError):
    """Raised when a catalog is empty or repeats an identifier."""


def index_by(
    kind: str, entries: Iterable[EntryT], key: Callable[[EntryT], str]
) -> Mapping[str, EntryT]:
    """Index catalog entries by their identity field, preserving order.

    Raises:
        CatalogError: If there are no entries or an identifier repeats

    """
    indexed: dict[str, EntryT] = {}
    for entry in entries:
        identifier = key(entry)
        if identifier in indexed:
            raise CatalogError(f"Duplicate {kind} identifier: {identifier!r}")
        indexed[identifier] = entry

    if not indexed:
        raise CatalogError(f"The {kind} catalog is empty")

    return MappingProxyType(indexed)


@dataclass(frozen=True, kw_only=True)
class Registry:
    """Read-only catalogs, each keyed by the entry's identity field."""

    frameworks: Mapping[str, Framework]
    orms: Mapping[str, Orm]
    endpoints: Mapping[str, Endpoint]

    @classmethod
    def from_catalog(cls, catalog: Catalog) -> "Registry":
        """Build a registry, validating identifier uniqueness."""
        return cls(
            frameworks=index_by("framework", catalog.frameworks, lambda f: f.value),
            orms=index_by("orm", catalog.orms, lambda o: o.value),
            endpoints=index_by("endpoint", catalog.endpoints, lambda e: e.path),
        )

    def default_selection(self) -> Selection:
        """Select the first entry of every catalog."""
        return Selection(
            framework=next(iter(self.frameworks.values())),
            orm=next(iter(self.orms.values())),
            endpoint=next(iter(self.endpoints.values())),
        )


DEFAULT_CATALOG = Catalog(
    frameworks=[
        Framework(name="Standard Library", value="standard", port=8081),
        Framework(name="Gin", value="gin", port=8082),
        Framework(name="Fiber", value="fiber", port=8083),
        Framework(name="Echo", value="echo", port=8084),
        Framework(name="Chi", value="chi", port=8085),
        Framework(name="Gorilla Mux", value="gorilla", port=8086),
    ],
    orms=[
        Orm(name="database/sql", value="sql"),
        Orm(name="GORM", value="gorm"),
        Orm(name="SQLx", value="sqlx"),
        Orm(name="PGX", value="pgx"),
    ],
    endpoints=[
        Endpoint(name="Health Check", path="/health"),
        Endpoint(name="Simple Test", path="/api/test/simple"),
        Endpoint(name="Database Test", path="/api/test/database?limit=10"),
        Endpoint(name="JSON Test", path="/api/test/json"),
        Endpoint(name="Framework Info", path="/api/info"),
    ],
)

DEFAULT_REGISTRY = Registry.from_catalog(DEFAULT_CATALOG)
