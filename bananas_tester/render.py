"""Text and JSON rendering of the catalog, selection and results."""

import json
from typing import Any

from bananas_tester.models.catalog import Framework
from bananas_tester.models.result import Selection, TestResult
from bananas_tester.registry import Registry


def framework_label(framework: Framework) -> str:
    """Dropdown label for a framework."""
    return f"{framework.name} (:{framework.port})"


def trigger_label(busy: bool) -> str:
    """Label of the run button."""
    return "Testing..." if busy else "Run Test"


def format_duration(duration: float) -> str:
    """Duration in milliseconds with two decimals."""
    return f"{duration:.2f}ms"


def format_catalog(registry: Registry) -> str:
    """Render every selectable entry, one per line, grouped by catalog."""
    lines = ["Frameworks:"]
    lines.extend(
        f"  {value:<10} {framework_label(fw)}"
        for value, fw in registry.frameworks.items()
    )
    lines.append("ORMs:")
    lines.extend(f"  {value:<10} {orm.name}" for value, orm in registry.orms.items())
    lines.append("Endpoints:")
    lines.extend(
        f"  {path:<30} {endpoint.name}"
        for path, endpoint in registry.endpoints.items()
    )
    return "\n".join(lines)


def format_result(result: TestResult) -> str:
    """Render a result: labels and duration, then the error or the payload."""
    lines = [
        f"Framework: {result.framework}",
        f"ORM: {result.orm}",
        f"Duration: {format_duration(result.duration)}",
    ]
    if result.error is not None:
        lines.append(f"Error: {result.error}")
    else:
        lines.append(json.dumps(result.response, indent=2))
    return "\n".join(lines)


def selection_to_dict(selection: Selection) -> dict[str, Any]:
    """JSON-ready form of a selection."""
    return {
        "framework": selection.framework.model_dump(mode="json"),
        "orm": selection.orm.model_dump(mode="json"),
        "endpoint": selection.endpoint.model_dump(mode="json"),
    }


def result_to_dict(result: TestResult) -> dict[str, Any]:
    """JSON-ready form of a result."""
    return {
        "framework": result.framework,
        "orm": result.orm,
        "response": result.response,
        "duration": result.duration,
        "duration_text": format_duration(result.duration),
        "error": result.error,
    }
