"""Verify CLI command."""

from pathlib import Path

import typer
from rich.markup import escape

from proxyctl.models import Times

from .shared import (
    BODY_OPTION,
    COOKIE_OPTION,
    HEADER_OPTION,
    METHOD_OPTION,
    PATH_OPTION,
    PATTERN_FILE_OPTION,
    QUERY_OPTION,
    app,
    build_pattern,
    cli_module,
    console,
    proxy_errors,
)


def resolve_times(exactly: int | None, at_least: int | None) -> Times:
    """Pick the occurrence spec from --exactly/--at-least (default: at least once)."""
    if exactly is not None and at_least is not None:
        raise typer.BadParameter("Use either --exactly or --at-least, not both")
    if exactly is not None:
        return Times.exactly(exactly)
    if at_least is not None:
        return Times.at_least(at_least)
    return Times.at_least(1)


@app.command()
def verify(
    ctx: typer.Context,
    exactly: int | None = typer.Option(None, "--exactly", min=0, help="Require exactly N matches"),
    at_least: int | None = typer.Option(
        None, "--at-least", min=0, help="Require at least N matches"
    ),
    method: str = METHOD_OPTION,
    path: str = PATH_OPTION,
    query: str = QUERY_OPTION,
    body: str = BODY_OPTION,
    header: list[str] | None = HEADER_OPTION,
    cookie: list[str] | None = COOKIE_OPTION,
    pattern_file: Path | None = PATTERN_FILE_OPTION,
) -> None:
    """Check that a request was recorded the expected number of times."""
    cli = cli_module()
    times = resolve_times(exactly, at_least)
    with proxy_errors():
        pattern = build_pattern(method, path, query, body, header, cookie, pattern_file)
        if pattern is None:
            console.print("[red]Error: verify needs a request pattern (e.g. --path /login).[/red]")
            raise typer.Exit(2)
        with cli.open_client(ctx) as client:
            outcome = client.check(pattern, times)

    if not outcome.passed:
        console.print(f"[red]Verification failed:[/red] {escape(outcome.message)}", soft_wrap=True)
        raise typer.Exit(1)
    console.print(
        f"[green]Verified:[/green] found {outcome.found}, expected {times.describe()}."
    )
