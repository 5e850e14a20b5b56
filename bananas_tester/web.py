"""HTTP presentation: the tester exposed as a small JSON web application."""

import asyncio
import json
import logging
from typing import Any

from aiohttp import web

from bananas_tester.config import TesterConfig
from bananas_tester.panel import TestPanel
from bananas_tester.registry import Registry
from bananas_tester.render import (
    framework_label,
    result_to_dict,
    selection_to_dict,
    trigger_label,
)
from bananas_tester.runner import TestRunner

log = logging.getLogger(__name__)

PANEL_KEY = web.AppKey("panel", TestPanel)


def create_app(runner: TestRunner) -> web.Application:
    """Create the web application around a runner and its state."""
    app = web.Application()
    app[PANEL_KEY] = TestPanel(runner=runner)
    app.router.add_get("/api/catalog", get_catalog)
    app.router.add_get("/api/selection", get_selection)
    app.router.add_put("/api/selection", put_selection)
    app.router.add_post("/api/run", post_run)
    app.router.add_get("/api/result", get_result)
    return app


def result_state(panel: TestPanel) -> dict[str, Any]:
    """Loading indicator and latest result, as rendered by the client."""
    result = panel.runner.results.current.get()
    return {
        "in_flight": panel.busy,
        "trigger_label": trigger_label(panel.busy),
        "result": result_to_dict(result) if result is not None else None,
    }


async def get_catalog(request: web.Request) -> web.Response:
    """Return the three catalogs in display order."""
    registry = request.app[PANEL_KEY].runner.selection.registry
    return web.json_response(
        {
            "frameworks": [
                fw.model_dump(mode="json") | {"label": framework_label(fw)}
                for fw in registry.frameworks.values()
            ],
            "orms": [orm.model_dump(mode="json") for orm in registry.orms.values()],
            "endpoints": [
                endpoint.model_dump(mode="json")
                for endpoint in registry.endpoints.values()
            ],
        }
    )


async def get_selection(request: web.Request) -> web.Response:
    """Return the current selection."""
    selection = request.app[PANEL_KEY].runner.selection
    return web.json_response(selection_to_dict(selection.current()))


async def put_selection(request: web.Request) -> web.Response:
    """Change any of framework, orm and endpoint; unknown values are ignored."""
    try:
        body = await request.json()
    except json.JSONDecodeError as e:
        raise web.HTTPBadRequest(text=f"Invalid JSON body: {e}") from e
    if not isinstance(body, dict):
        raise web.HTTPBadRequest(text="Expected a JSON object")

    selection = request.app[PANEL_KEY].runner.selection
    setters = {
        "framework": selection.set_framework,
        "orm": selection.set_orm,
        "endpoint": selection.set_endpoint,
    }
    applied = {
        key: setter(str(body[key]))
        for key, setter in setters.items()
        if body.get(key) is not None
    }
    log.info("Selection change requested: %s", applied)

    return web.json_response(
        selection_to_dict(selection.current()) | {"applied": applied}
    )


async def post_run(request: web.Request) -> web.Response:
    """Start a test run unless one is already in flight."""
    panel = request.app[PANEL_KEY]
    if panel.trigger() is None:
        return web.json_response(
            {"error": "Test already in flight"} | result_state(panel), status=409
        )
    return web.json_response(result_state(panel), status=202)


async def get_result(request: web.Request) -> web.Response:
    """Return the in-flight flag and the latest result."""
    return web.json_response(result_state(request.app[PANEL_KEY]))


async def serve(config: TesterConfig, registry: Registry) -> None:
    """Serve the web presentation until cancelled."""
    async with TestRunner.from_config(config, registry) as runner:
        app = create_app(runner)
        app_runner = web.AppRunner(app)
        await app_runner.setup()
        site = web.TCPSite(app_runner, config.listen_host, config.listen_port)
        await site.start()
        log.info(
            "Serving tester on http://%s:%d", config.listen_host, config.listen_port
        )
        try:
            await asyncio.Event().wait()
        finally:
            await app_runner.cleanup()
            await app[PANEL_KEY].wait_idle()
