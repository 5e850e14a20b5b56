"""Tests for the selection registry."""

import pytest

from bananas_tester.models.catalog import Catalog, Endpoint, Framework, Orm
from bananas_tester.registry import (
    DEFAULT_REGISTRY,
    CatalogError,
    Registry,
    index_by,
)
from bananas_tester.testing.factories import (
    EndpointFactory,
    FrameworkFactory,
    OrmFactory,
)


def test_default_frameworks_in_catalog_order() -> None:
    """Default frameworks keep their order and ports 8081-8086."""
    assert [(fw.value, fw.port) for fw in DEFAULT_REGISTRY.frameworks.values()] == [
        ("standard", 8081),
        ("gin", 8082),
        ("fiber", 8083),
        ("echo", 8084),
        ("chi", 8085),
        ("gorilla", 8086),
    ]


def test_default_orms_and_endpoints() -> None:
    """Default ORMs and endpoints are keyed by their identity field."""
    assert list(DEFAULT_REGISTRY.orms) == ["sql", "gorm", "sqlx", "pgx"]
    assert list(DEFAULT_REGISTRY.endpoints) == [
        "/health",
        "/api/test/simple",
        "/api/test/database?limit=10",
        "/api/test/json",
        "/api/info",
    ]


def test_only_database_endpoint_is_database_test() -> None:
    """Exactly one default endpoint takes the orm parameter."""
    database = [
        e.path for e in DEFAULT_REGISTRY.endpoints.values() if e.is_database_test
    ]

    assert database == ["/api/test/database?limit=10"]


def test_default_selection_uses_first_entries() -> None:
    """Default selection is the first entry of every catalog."""
    selection = DEFAULT_REGISTRY.default_selection()

    assert selection.framework.value == "standard"
    assert selection.orm.value == "sql"
    assert selection.endpoint.path == "/health"


def test_registry_mappings_are_read_only() -> None:
    """Registry catalogs cannot be modified."""
    frameworks = DEFAULT_REGISTRY.frameworks

    with pytest.raises(TypeError):
        frameworks["new"] = FrameworkFactory.build()  # type: ignore[index]


def test_from_catalog_rejects_duplicate_framework_value() -> None:
    """Raises CatalogError when two frameworks share a value."""
    catalog = Catalog(
        frameworks=[
            Framework(name="Gin", value="gin", port=8082),
            Framework(name="Gin again", value="gin", port=9082),
        ],
        orms=[OrmFactory.build()],
        endpoints=[EndpointFactory.build()],
    )

    with pytest.raises(CatalogError, match="Duplicate framework identifier: 'gin'"):
        Registry.from_catalog(catalog)


def test_from_catalog_rejects_duplicate_endpoint_path() -> None:
    """Raises CatalogError when two endpoints share a path."""
    catalog = Catalog(
        frameworks=[FrameworkFactory.build()],
        orms=[Orm(name="GORM", value="gorm")],
        endpoints=[
            Endpoint(name="Simple", path="/api/test/simple"),
            Endpoint(name="Also simple", path="/api/test/simple"),
        ],
    )

    with pytest.raises(CatalogError, match="Duplicate endpoint identifier"):
        Registry.from_catalog(catalog)


def test_index_by_rejects_empty_catalog() -> None:
    """Raises CatalogError for an empty catalog."""
    with pytest.raises(CatalogError, match="orm catalog is empty"):
        index_by("orm", [], lambda o: o.value)
