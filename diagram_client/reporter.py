"""Render fatal workflow failures for the command line."""
from __future__ import annotations

import json
from typing import Any, NoReturn

import typer

from diagram_client.errors import WorkflowStepError


def _format_payload(payload: Any) -> str:
    if payload is None:
        return "<none>"
    if isinstance(payload, str):
        return payload
    return json.dumps(payload, indent=2, default=str, ensure_ascii=False)


def render_diagnostic(error: WorkflowStepError) -> str:
    lines = [
        f"Step {error.step} failed ({error.kind}): {error.message}",
        f"Retryable: {'yes' if error.retryable else 'no'}",
        "Payload:",
        _format_payload(error.payload),
    ]
    return "\n".join(lines)


def report_failure(error: WorkflowStepError) -> NoReturn:
    """Print the diagnostic to stderr and stop the CLI with exit status 1."""
    typer.secho(render_diagnostic(error), fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)
