"""Reset, clear, dump and retrieve CLI commands."""

from pathlib import Path

import typer
from rich.table import Table

from proxyctl.codec import expectation_to_dict

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


@app.command()
def reset(ctx: typer.Context) -> None:
    """Clear every request recorded by the proxy."""
    cli = cli_module()
    with proxy_errors():
        with cli.open_client(ctx) as client:
            client.reset()
    console.print("[green]Proxy reset.[/green]")


@app.command()
def clear(
    ctx: typer.Context,
    method: str = METHOD_OPTION,
    path: str = PATH_OPTION,
    query: str = QUERY_OPTION,
    body: str = BODY_OPTION,
    header: list[str] | None = HEADER_OPTION,
    cookie: list[str] | None = COOKIE_OPTION,
    pattern_file: Path | None = PATTERN_FILE_OPTION,
) -> None:
    """Clear recorded requests matching a pattern (all when none is given)."""
    cli = cli_module()
    with proxy_errors():
        pattern = build_pattern(method, path, query, body, header, cookie, pattern_file)
        with cli.open_client(ctx) as client:
            client.clear(pattern)
    scope = "all" if pattern is None else "matching"
    console.print(f"[green]Cleared {scope} recorded requests.[/green]")


@app.command()
def dump(
    ctx: typer.Context,
    as_code: str | None = typer.Option(
        None,
        "--code",
        help="Dump as source code in this language (e.g. java) instead of JSON",
    ),
    method: str = METHOD_OPTION,
    path: str = PATH_OPTION,
    query: str = QUERY_OPTION,
    body: str = BODY_OPTION,
    header: list[str] | None = HEADER_OPTION,
    cookie: list[str] | None = COOKIE_OPTION,
    pattern_file: Path | None = PATTERN_FILE_OPTION,
) -> None:
    """Ask the proxy to write recorded expectations to its own log."""
    cli = cli_module()
    with proxy_errors():
        pattern = build_pattern(method, path, query, body, header, cookie, pattern_file)
        with cli.open_client(ctx) as client:
            if as_code:
                client.dump_to_log_as_code(pattern, language=as_code)
            else:
                client.dump_to_log_as_json(pattern)
    fmt = f"{as_code} code" if as_code else "JSON"
    console.print(f"[green]Dumped expectations to the proxy log as {fmt}.[/green]")


@app.command()
def retrieve(
    ctx: typer.Context,
    table: bool = typer.Option(False, "--table", help="Show a summary table instead of JSON"),
    method: str = METHOD_OPTION,
    path: str = PATH_OPTION,
    query: str = QUERY_OPTION,
    body: str = BODY_OPTION,
    header: list[str] | None = HEADER_OPTION,
    cookie: list[str] | None = COOKIE_OPTION,
    pattern_file: Path | None = PATTERN_FILE_OPTION,
) -> None:
    """Show recorded expectations matching a pattern (all when none is given)."""
    cli = cli_module()
    with proxy_errors():
        pattern = build_pattern(method, path, query, body, header, cookie, pattern_file)
        with cli.open_client(ctx) as client:
            expectations = client.retrieve_as_expectations(pattern)

    if not expectations:
        console.print("[dim]No recorded requests.[/dim]")
        return

    if not table:
        console.print_json(data=[expectation_to_dict(e) for e in expectations])
        return

    summary = Table(title=f"Recorded requests ({len(expectations)})")
    summary.add_column("#", justify="right", style="dim")
    summary.add_column("Method", style="cyan")
    summary.add_column("Path")
    summary.add_column("Status", justify="right")
    summary.add_column("Body", overflow="ellipsis", max_width=40)
    for index, expectation in enumerate(expectations, 1):
        req = expectation.http_request
        resp = expectation.http_response
        summary.add_row(
            str(index),
            req.method or "*",
            req.path or "*",
            str(resp.status_code) if resp else "-",
            req.body,
        )
    console.print(summary)
