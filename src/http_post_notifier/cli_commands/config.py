"""Config commands for the HTTP POST notifier - configuration management.

Provides commands to manage the .http-post/config.json file:
- set: Validate and save the endpoint URL and headers
- check: Validate individual values without saving
- show: Display current configuration
- path: Show path to config file
"""

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax

from ..core.config_loader import (
    ConfigFileError,
    config_file_exists,
    get_config,
    get_config_file_path,
    get_env_overrides,
    save_config_to_file,
)
from ..notifier.config import NotifierConfig, check_headers, check_url
from ..notifier.headers import mask_header_block

console = Console()

config_app = typer.Typer(
    name="config",
    help="📋 Manage notifier configuration.",
    no_args_is_help=True,
)


def _read_headers(headers: str | None, headers_file: Path | None) -> str:
    if headers is not None and headers_file is not None:
        console.print("[red]❌ Use either --headers or --headers-file, not both[/red]")
        raise typer.Exit(2)
    if headers_file is not None:
        try:
            return headers_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            message = f"Cannot read {headers_file}: {e}"
            console.print(f"[red]❌ headers: {escape(message)}[/red]")
            console.print("[dim]Configuration not saved.[/dim]")
            raise typer.Exit(1) from None
    # Literal \n in a single-line shell argument is a line break; the file is read as-is
    return (headers or "").replace("\\n", "\n")


@config_app.command(name="set")
def config_set(
    url: str = typer.Option(..., "--url", "-u", help="Notification endpoint URL"),
    headers: str | None = typer.Option(
        None,
        "--headers",
        "-H",
        help=(
            "Extra headers, 'Key: Value' per line. A literal \\n is read as a line break;"
            " use --headers-file for values containing a backslash-n"
        ),
    ),
    headers_file: Path | None = typer.Option(
        None,
        "--headers-file",
        exists=True,
        dir_okay=False,
        readable=True,
        help="File with one 'Key: Value' header per line",
    ),
) -> None:
    """💾 Validate and save the notifier configuration.

    Nothing is written if the URL or any header line is invalid.

    Examples:
        httppost config set --url https://talk.example.com/api/send
        httppost config set -u https://talk.example.com/api/send -H "X-Token: abc"
    """
    header_block = _read_headers(headers, headers_file)

    errors = []
    url_error = check_url(url)
    if url_error:
        errors.append(f"url: {url_error}")
    headers_error = check_headers(header_block)
    if headers_error:
        errors.append(f"headers: {headers_error}")

    if errors:
        for message in errors:
            console.print(f"[red]❌ {escape(message)}[/red]")
        console.print("[dim]Configuration not saved.[/dim]")
        raise typer.Exit(1)

    try:
        config = NotifierConfig(url=url, headers=header_block)
    except ValidationError as e:
        console.print(f"[red]❌ Invalid configuration: {escape(str(e))}[/red]")
        raise typer.Exit(1) from None

    path = save_config_to_file(config, get_config_file_path())
    console.print(f"[green]✅ Configuration saved:[/green] {path}")


@config_app.command(name="check")
def config_check(
    url: str | None = typer.Option(None, "--url", "-u", help="URL to validate"),
    headers: str | None = typer.Option(
        None, "--headers", "-H", help="Header block to validate (a literal \\n is a line break)"
    ),
) -> None:
    """🔍 Validate a URL and/or header block without saving.

    Examples:
        httppost config check --url https://talk.example.com/api/send
        httppost config check --headers "X-Token: abc"
    """
    if url is None and headers is None:
        console.print("[yellow]⚠️  Nothing to check. Pass --url and/or --headers.[/yellow]")
        raise typer.Exit(2)

    failed = False
    if url is not None:
        error = check_url(url)
        if error:
            console.print(f"[red]❌ url: {escape(error)}[/red]")
            failed = True
        else:
            console.print("[green]✅ url: OK[/green]")

    if headers is not None:
        error = check_headers(headers.replace("\\n", "\n"))
        if error:
            console.print(f"[red]❌ headers: {escape(error)}[/red]")
            failed = True
        else:
            console.print("[green]✅ headers: OK[/green]")

    if failed:
        raise typer.Exit(1)


@config_app.command(name="show")
def config_show(
    raw: bool = typer.Option(False, "--raw", "-r", help="Show raw JSON without formatting"),
) -> None:
    """📖 Display current configuration, including environment overrides.

    Examples:
        httppost config show
        httppost config show --raw
    """
    try:
        config = get_config()
    except (ConfigFileError, ValidationError) as e:
        console.print(f"[red]❌ Error loading config: {escape(str(e))}[/red]")
        raise typer.Exit(1) from None

    config_json = config.model_dump_json(indent=2)
    if raw:
        print(config_json)
        return

    # Credential header values stay out of the terminal; --raw prints the file as stored
    display = config.model_copy(update={"headers": mask_header_block(config.headers)})
    console.print(f"[bold]{escape(str(config))}[/bold]")
    console.print(
        Syntax(display.model_dump_json(indent=2), "json", theme="monokai", line_numbers=False)
    )

    overrides = get_env_overrides()
    if overrides:
        console.print("[dim]Environment overrides:[/dim]")
        for env_var in overrides:
            console.print(f"[dim]  {env_var}[/dim]")


@config_app.command(name="path")
def config_path(
    check: bool = typer.Option(False, "--check", "-c", help="Check if file exists"),
) -> None:
    """📍 Show path to configuration file.

    Examples:
        httppost config path
        httppost config path --check
    """
    path = get_config_file_path()

    if check:
        if config_file_exists():
            console.print(f"[green]✅ {path}[/green]")
        else:
            console.print(f"[yellow]⚠️  {path}[/yellow] [dim](not found)[/dim]")
            raise typer.Exit(1)
    else:
        # Plain output for piping
        print(str(path))


def register_config_commands(app: typer.Typer) -> None:
    """Register config command group with the Typer app.

    Args:
        app: The main Typer application.
    """
    app.add_typer(config_app, name="config")
