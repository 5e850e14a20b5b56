"""Models for the selectable catalog entries."""

from collections.abc import Sequence

from pydantic import Field

from bananas_tester.models.base import Model


class Framework(Model):
    """A backend implementation under test, reachable on a local port."""

    name: str = Field(..., description="Display name")
    value: str = Field(..., description="Stable identifier")
    port: int = Field(..., ge=1, le=65535, description="Local network port")


class Orm(Model):
    """A data-access strategy, only meaningful for the database probe."""

    name: str = Field(..., description="Display name")
    value: str = Field(..., description="Stable identifier sent as orm=")


class Endpoint(Model):
    """An HTTP probe path exposed by every framework target."""

    name: str = Field(..., description="Display name")
    path: str = Field(..., description="URL path, optionally with a query string")

    @property
    def is_database_test(self) -> bool:
        """Whether requests to this endpoint carry the selected ORM."""
        return "database" in self.path


class Catalog(Model):
    """Raw catalog document, as loaded from YAML."""

    frameworks: Sequence[Framework] = Field(..., min_length=1)
    orms: Sequence[Orm] = Field(..., min_length=1)
    endpoints: Sequence[Endpoint] = Field(..., min_length=1)
