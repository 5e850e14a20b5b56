"""CLI entry point for the framework tester."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from bananas_tester.catalog_loader import load_catalog
from bananas_tester.config import TesterConfig
from bananas_tester.models.result import TestResult
from bananas_tester.panel import TestPanel
from bananas_tester.registry import DEFAULT_REGISTRY, Registry
from bananas_tester.render import format_catalog, format_duration, format_result
from bananas_tester.runner import TestRunner
from bananas_tester.state import SelectionState
from bananas_tester.web import serve

STATUS_SYMBOLS = {
    True: "✅",
    False: "❌",
}


def log_result_summary(log: logging.Logger, result: TestResult) -> None:
    """Log a one-line summary of a test result."""
    log.info(
        "%s %s / %s (%s)",
        STATUS_SYMBOLS[result.succeeded],
        result.framework,
        result.orm,
        format_duration(result.duration),
    )
    if result.error is not None:
        log.info("  Error: %s", result.error)


def apply_selection(
    log: logging.Logger,
    selection: SelectionState,
    framework: str | None = None,
    orm: str | None = None,
    endpoint: str | None = None,
) -> None:
    """Apply requested choices, keeping the current entry for unknown values."""
    if framework is not None and not selection.set_framework(framework):
        log.warning(
            "Unknown framework %r, keeping %s",
            framework,
            selection.framework.get().value,
        )
    if orm is not None and not selection.set_orm(orm):
        log.warning("Unknown orm %r, keeping %s", orm, selection.orm.get().value)
    if endpoint is not None and not selection.set_endpoint(endpoint):
        log.warning(
            "Unknown endpoint %r, keeping %s", endpoint, selection.endpoint.get().path
        )


async def load_registry(config: TesterConfig) -> Registry:
    """Load the configured catalog, or the built-in one."""
    if config.catalog_path is None:
        return DEFAULT_REGISTRY
    return await load_catalog(config.catalog_path)


async def run(
    config: TesterConfig,
    framework: str | None = None,
    orm: str | None = None,
    endpoint: str | None = None,
    list_only: bool = False,
) -> int:
    """Run one test for the requested selection and return exit code."""
    log = logging.getLogger("bananas_tester")

    registry = await load_registry(config)

    if list_only:
        print(format_catalog(registry))
        return 0

    async with TestRunner.from_config(config, registry) as runner:
        apply_selection(log, runner.selection, framework, orm, endpoint)
        selection = runner.selection.current()
        log.info(
            "Testing framework=%s orm=%s endpoint=%s",
            selection.framework.value,
            selection.orm.value,
            selection.endpoint.path,
        )

        panel = TestPanel(runner=runner)
        if (task := panel.trigger()) is not None:
            await task

        result = runner.results.current.get()

    if result is None:
        log.error("Test run produced no result")
        return 1

    log_result_summary(log, result)
    print(format_result(result))

    return 0 if result.succeeded else 1


async def serve_registry(config: TesterConfig) -> None:
    """Load the catalog and serve the web presentation."""
    await serve(config, await load_registry(config))


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run a single timed request against a backend framework target"
    )
    parser.add_argument(
        "--framework",
        help="Framework identifier (standard, gin, fiber, echo, chi, gorilla)",
    )
    parser.add_argument(
        "--orm",
        help="ORM identifier, used by the database test (sql, gorm, sqlx, pgx)",
    )
    parser.add_argument(
        "--endpoint",
        help="Endpoint path (e.g. /health, /api/test/database?limit=10)",
    )
    parser.add_argument(
        "--host",
        default="localhost",
        help="Host the framework targets listen on",
    )
    parser.add_argument(
        "--catalog",
        type=Path,
        help="YAML file replacing the built-in catalog",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List the selectable frameworks, ORMs and endpoints",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Serve the tester as a web application instead of running once",
    )
    parser.add_argument(
        "--listen-host",
        default="127.0.0.1",
        help="Address the web application binds to",
    )
    parser.add_argument(
        "--listen-port",
        type=int,
        default=8080,
        help="Port the web application binds to",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    config = TesterConfig(
        host=args.host,
        catalog_path=args.catalog,
        listen_host=args.listen_host,
        listen_port=args.listen_port,
    )

    if args.serve:
        asyncio.run(serve_registry(config))
        return

    exit_code = asyncio.run(
        run(
            config,
            framework=args.framework,
            orm=args.orm,
            endpoint=args.endpoint,
            list_only=args.list,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
