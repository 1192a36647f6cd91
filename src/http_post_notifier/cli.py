"""CLI entry point for the HTTP POST build notifier."""

import logging

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from .cli_commands import register_config_commands
from .core.build import BuildOutcome, BuildResult
from .core.config_loader import ConfigFileError, get_config
from .core.console import BuildConsole
from .notifier.publisher import notify_build

app = typer.Typer(
    name="httppost",
    help="""Post CI build status messages to a chat endpoint.

Run after a build finishes to send a failure or "build finished" message
with install links. Notification problems never fail the build.

Quick start:
  httppost config set --url https://talk.example.com/api/send
  httppost notify --job ios-app --number 42 --build-url https://ci/job/ios-app/42/ --result FAILURE --recipients "dev@example.com"
""",
    add_completion=False,
)
console = Console()

LOG_LEVELS = ("debug", "info", "warning", "error")


def _parse_variables(values: list[str]) -> dict[str, str]:
    """Parse repeated ``key=value`` options into a dict."""
    variables: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"Expected key=value, got: {item}", param_hint="--var")
        variables[key.strip()] = value
    return variables


@app.command()
def notify(
    job: str = typer.Option(..., "--job", "-j", help="Job name"),
    number: int = typer.Option(..., "--number", "-n", help="Build number"),
    build_url: str = typer.Option(..., "--build-url", "-u", help="Absolute URL of the build"),
    result: str = typer.Option(
        "SUCCESS",
        "--result",
        "-r",
        help="Build result: SUCCESS, UNSTABLE, FAILURE, NOT_BUILT or ABORTED",
    ),
    recipients: str = typer.Option(
        "", "--recipients", "-t", help="Space-separated recipient addresses"
    ),
    var: list[str] = typer.Option(
        [],
        "--var",
        "-v",
        help="Build variable as key=value (phase, scheme, branch, service); repeatable",
    ),
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        "-l",
        help="Logging level: debug, info, warning (default), error",
    ),
) -> None:
    """📣 Send the notification for a finished build.

    Always exits 0 once the arguments are valid: a missing URL, missing
    recipients or a failed request is reported but never fails the build.

    Examples:
        httppost notify -j ios-app -n 42 -u https://ci/job/ios-app/42/ -r FAILURE -t "dev@example.com"
        httppost notify -j ios-app -n 43 -u https://ci/job/ios-app/43/ -v phase=test -v service=ncs
    """
    if log_level.lower() not in LOG_LEVELS:
        raise typer.BadParameter(
            f"Must be one of: {', '.join(LOG_LEVELS)}", param_hint="--log-level"
        )
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )

    try:
        build_result = BuildResult.from_string(result)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--result") from None

    outcome = BuildOutcome(
        job_name=job,
        build_number=number,
        absolute_url=build_url,
        result=build_result,
        variables=_parse_variables(var),
    )

    try:
        config = get_config()
    except (ConfigFileError, ValidationError) as e:
        # Unreadable configuration is a notifier problem, not a build problem
        console.print(f"[red]❌ Error loading config: {escape(str(e))}[/red]")
        console.print("[dim]Notification skipped.[/dim]")
        return

    report = notify_build(outcome, recipients, config, BuildConsole(echo=True))
    if report.skipped_reason:
        console.print(f"[dim]Notification skipped: {escape(report.skipped_reason)}[/dim]")
    elif report.delivery is not None and not report.delivery.success:
        error = escape(report.delivery.error or "")
        console.print(f"[yellow]⚠️  Notification not delivered: {error}[/yellow]")


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__

    console.print(f"http-post-notifier version {__version__}")


register_config_commands(app)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    app()
