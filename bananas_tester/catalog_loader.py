"""Load an alternative selection registry from a YAML catalog file."""

import asyncio
import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from bananas_tester.models.catalog import Catalog
from bananas_tester.registry import CatalogError, Registry

log = logging.getLogger(__name__)


async def load_catalog(path: Path) -> Registry:
    """Load and validate a catalog file.

    The document holds ``frameworks``, ``orms`` and ``endpoints`` lists using
    the same fields as the built-in catalog.

    Args:
        path: Path to the YAML catalog

    Returns:
        Registry built from the catalog

    Raises:
        FileNotFoundError: If the file does not exist
        CatalogError: If the document is not a valid catalog

    """
    if not path.exists():
        raise FileNotFoundError(f"Catalog not found: {path}")

    content = await asyncio.to_thread(path.read_text)

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise CatalogError(f"Invalid YAML in {path}: {e}") from e

    try:
        catalog = Catalog.model_validate(data)
    except ValidationError as e:
        raise CatalogError(f"Invalid catalog in {path}: {e}") from e

    registry = Registry.from_catalog(catalog)
    log.info(
        "Loaded catalog %s: %d framework(s), %d orm(s), %d endpoint(s)",
        path,
        len(registry.frameworks),
        len(registry.orms),
        len(registry.endpoints),
    )
    return registry
