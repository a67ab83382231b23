"""proxyctl CLI - control and verify a recording mock/proxy server."""

import typer

from proxyctl import cli_commands, config  # noqa: F401
from proxyctl.cli_commands.shared import CLIState, app, configure_logging, console, get_state
from proxyctl.client import ProxyClient

__all__ = ["app", "main", "open_client", "ProxyClient", "config"]


@app.callback()
def main_callback(
    ctx: typer.Context,
    host: str | None = typer.Option(None, "--host", help="Proxy host [env: PROXYCTL_HOST]"),
    port: int | None = typer.Option(None, "--port", help="Proxy port [env: PROXYCTL_PORT]"),
    timeout: float | None = typer.Option(
        None, "--timeout", help="Request timeout in seconds [env: PROXYCTL_TIMEOUT]"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Control and verify a recording mock/proxy HTTP server."""
    ctx.obj = CLIState(
        host=host or config.get_host(),
        port=port if port is not None else config.get_port(),
        timeout=timeout if timeout is not None else config.get_timeout(),
        verbose=verbose or config.is_verbose(),
    )
    configure_logging(ctx.obj.verbose)


def open_client(ctx: typer.Context) -> ProxyClient:
    """Build a client for the proxy selected by the global options."""
    state = get_state(ctx)
    return ProxyClient(state.host, state.port, timeout=state.timeout)


@app.command()
def version() -> None:
    """Show the installed proxyctl version."""
    from importlib.metadata import PackageNotFoundError, version as pkg_version

    try:
        current_version = pkg_version("proxyctl")
    except PackageNotFoundError:
        current_version = "0.0.0+unknown"

    console.print(f"proxyctl {current_version}")


def main():
    """Entry point for the CLI."""
    app()
