"""Configuration CLI command."""

import typer
import yaml

from .shared import app, cli_module, console


@app.command()
def config(
    action: str = typer.Argument("show", help="Action: show, init"),
    global_config: bool = typer.Option(
        False,
        "--global",
        help="Show the global config file instead of the resolved settings",
    ),
) -> None:
    """Show or initialise proxyctl configuration."""
    cli = cli_module()

    if action == "init":
        config_path = cli.config.create_global_config()
        console.print(f"[green]Global config:[/green] {config_path}")
        return

    if action != "show":
        console.print(f"[red]Unknown action: {action}. Use show or init.[/red]")
        raise typer.Exit(1)

    if global_config:
        config_data = cli.config.load_global_config()
        console.print("[bold]Global Configuration (~/.proxyctl/config.yml):[/bold]")
        if not config_data:
            console.print("[dim]Empty. Run 'proxyctl config init'.[/dim]")
            return
        console.print(yaml.dump(config_data, default_flow_style=False))
        return

    console.print("[bold]Resolved Configuration:[/bold]")
    console.print(f"  PROXYCTL_HOST:    {cli.config.get_host()}")
    console.print(f"  PROXYCTL_PORT:    {cli.config.get_port()}")
    console.print(f"  PROXYCTL_TIMEOUT: {cli.config.get_timeout()}")
    console.print(f"  PROXYCTL_VERBOSE: {cli.config.is_verbose()}")
