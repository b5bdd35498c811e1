# -*- coding: utf-8 -*-
"""CLI commands for headless analysis sessions."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import typer

from smartlex.config import load_config
from smartlex.core.session import build_session
from smartlex.integrations.notifications import LogNotifier
from smartlex.models.toast import Severity
from smartlex.models.view import View
from smartlex.utils.image_utils import file_to_data_url
from smartlex.utils.logger import get_logger

app = typer.Typer(help="Deep analysis of terms in context")
logger = logging.getLogger(__name__)

_COLORS = {
    Severity.INFO: typer.colors.BLUE,
    Severity.SUCCESS: typer.colors.GREEN,
    Severity.ERROR: typer.colors.RED,
}


class ConsoleToastService:
    """Print toasts to the terminal."""

    def show(self, message: str, severity: Severity = Severity.INFO) -> None:
        typer.secho(f"[{severity.value}] {message}", fg=_COLORS[severity], err=severity is Severity.ERROR)


@app.command()
def analyze(
    term: str = typer.Argument(..., help="Term to analyze"),
    context: str = typer.Option("", "--context", "-c", help="Sentence the term appeared in"),
    image: Path = typer.Option(None, "--image", "-i", exists=True, dir_okay=False, help="Screenshot of the context"),
    settings_path: Path = typer.Option(Path("settings.json"), "--settings", help="Settings JSON path"),
    verbose: bool = typer.Option(False, help="Verbose output"),
    log_file: Path = typer.Option(None, "--log-file", dir_okay=False, help="Also write the log to this file"),
) -> None:
    """Analyze TERM and store the result in the history."""
    if verbose or log_file is not None:
        get_logger("smartlex", log_file, level=logging.DEBUG if verbose else logging.INFO)
    if not term.strip() or (not context.strip() and image is None):
        typer.secho("A term and a context (or --image) are required.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)

    settings = load_config(settings_path, environ=dict(os.environ))
    session = build_session(
        settings,
        toasts=ConsoleToastService(),
        notifier=LogNotifier(),
        base_dir=settings_path.parent,
    )
    image_data = file_to_data_url(image) if image is not None else None
    try:
        if session.orchestrator.submit(term, context, image_data) is not None:
            session.orchestrator.wait_idle()
    finally:
        session.orchestrator.shutdown()

    snapshot = session.state.snapshot()
    result = snapshot.current_analysis
    if snapshot.current_view is not View.ANALYSIS_RESULT or result is None:
        raise typer.Exit(code=1)
    typer.echo(f"\n{result.term}")
    for key, value in result.sections.items():
        if isinstance(value, list):
            value = "; ".join(str(item) for item in value)
        typer.echo(f"  {key}: {value}")


@app.command()
def history(
    settings_path: Path = typer.Option(Path("settings.json"), "--settings", help="Settings JSON path"),
    limit: int = typer.Option(20, min=1, help="Number of entries to show"),
) -> None:
    """List past analyses, newest first."""
    settings = load_config(settings_path)
    session = build_session(settings, toasts=ConsoleToastService(), base_dir=settings_path.parent)
    entries = session.state.snapshot().history
    session.orchestrator.shutdown()
    if not entries:
        typer.echo("No analyses yet.")
        return
    for entry in entries[:limit]:
        typer.echo(f"{entry.created_at}  {entry.term}  ({entry.id[:8]})")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
