"""CLI interface."""
from __future__ import annotations

from typing import Optional

import typer

from diagram_client.errors import WorkflowStepError
from diagram_client.mcp.client.http_client import MCPHTTPClient
from diagram_client.orchestrator.sample_workflow import SampleUmlWorkflow
from diagram_client.reporter import report_failure
from diagram_client.utils.config import settings
from diagram_client.utils.logger import configure_logging

app = typer.Typer(add_completion=False)


@app.callback()
def main() -> None:
    """Drive the diagram-modeling service with sample tool calls."""


@app.command()
def run(
    url: Optional[str] = typer.Option(None, "--url", "-u", help="JSON-RPC message endpoint."),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Per-request timeout in seconds."),
    skip_cleanup: bool = typer.Option(False, "--skip-cleanup", help="Do not delete earlier sample diagrams."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
):
    """Create the sample UML diagram: two classes joined by an association."""
    configure_logging("DEBUG" if verbose else settings.log_level)
    with MCPHTTPClient(url, timeout=timeout) as client:
        workflow = SampleUmlWorkflow(transport=client, skip_cleanup=skip_cleanup)
        try:
            context = workflow.run()
        except WorkflowStepError as exc:
            report_failure(exc)
    typer.secho(f"UML diagram ID: {context.diagram_id}", fg=typer.colors.GREEN)
    typer.echo(f"Class1 ID: {context.entity_a_id}  Class2 ID: {context.entity_b_id}")
    typer.secho(
        f"Association edge added between {workflow.entity_a.name} and {workflow.entity_b.name}",
        fg=typer.colors.GREEN,
    )


if __name__ == "__main__":
    app()
