"""Shared CLI app objects and option helpers."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from importlib import import_module
from pathlib import Path
from types import ModuleType

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from proxyctl.codec import deserialize_request
from proxyctl.errors import DecodeError, ProxyCtlError, VerificationError
from proxyctl.models import RequestPattern

app = typer.Typer(
    name="proxyctl",
    help="Control and verify a recording mock/proxy HTTP server",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

METHOD_OPTION = typer.Option("", "--method", "-X", help="Match the HTTP method")
PATH_OPTION = typer.Option("", "--path", "-p", help="Match the request path")
QUERY_OPTION = typer.Option("", "--query", help="Match the raw query string")
BODY_OPTION = typer.Option("", "--body", "-d", help="Match the request body")
HEADER_OPTION = typer.Option(None, "--header", "-H", help="Match a header (NAME:VALUE)")
COOKIE_OPTION = typer.Option(None, "--cookie", help="Match a cookie (NAME=VALUE)")
PATTERN_FILE_OPTION = typer.Option(
    None,
    "--pattern-file",
    "-f",
    help="Read the request pattern from a JSON file",
    exists=True,
    dir_okay=False,
)


def cli_module() -> ModuleType:
    """Return the CLI facade, resolved at call time so tests can patch it."""
    return import_module("proxyctl.cli")


@dataclass
class CLIState:
    """Connection settings resolved by the app callback."""

    host: str
    port: int
    timeout: float
    verbose: bool = False


def configure_logging(verbose: bool) -> None:
    """Route library logs through rich when verbose."""
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )
    # httpcore is too chatty at DEBUG
    logging.getLogger("httpcore").setLevel(logging.INFO)


def _split_pair(raw: str, separator: str, option: str) -> tuple[str, str]:
    name, sep, value = raw.partition(separator)
    if not sep or not name.strip():
        raise typer.BadParameter(f"Expected NAME{separator}VALUE, got {raw!r}", param_hint=option)
    return name.strip(), value.strip()


def build_pattern(
    method: str = "",
    path: str = "",
    query: str = "",
    body: str = "",
    headers: list[str] | None = None,
    cookies: list[str] | None = None,
    pattern_file: Path | None = None,
) -> RequestPattern | None:
    """Turn CLI options into a pattern; None when no option narrows the match."""
    if pattern_file is not None:
        try:
            text = pattern_file.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"Pattern file {pattern_file} is not valid UTF-8: {exc}") from exc
        pattern = deserialize_request(text)
    else:
        pattern = RequestPattern()

    if method:
        pattern = pattern.with_method(method)
    if path:
        pattern = pattern.with_path(path)
    if query:
        pattern = pattern.with_query_string(query)
    if body:
        pattern = pattern.with_body(body)
    for raw in headers or []:
        name, value = _split_pair(raw, ":", "--header")
        pattern = pattern.with_header(name, value)
    for raw in cookies or []:
        name, value = _split_pair(raw, "=", "--cookie")
        pattern = pattern.with_cookie(name, value)

    if pattern_file is None and pattern.is_empty():
        return None
    return pattern


def get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        from proxyctl import config

        state = CLIState(config.get_host(), config.get_port(), config.get_timeout())
        ctx.obj = state
    return state


@contextmanager
def proxy_errors() -> Iterator[None]:
    """Convert library errors into a red message and exit code 1."""
    try:
        yield
    except VerificationError as exc:
        console.print(f"[red]Verification failed:[/red] {escape(str(exc))}", soft_wrap=True)
        raise typer.Exit(1) from exc
    except ProxyCtlError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]", soft_wrap=True)
        raise typer.Exit(1) from exc
    except OSError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]", soft_wrap=True)
        raise typer.Exit(1) from exc
