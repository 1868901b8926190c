"""CLI for errbit-notifier.

Usage:
    errbit-notifier endpoint
    errbit-notifier parse-backtrace trace.txt
    errbit-notifier test --message "Hello from errbit-notifier"
"""

import json
from pathlib import Path
from typing import TextIO

import click

from errbit_notifier.backtrace import parse_backtrace
from errbit_notifier.config import Config
from errbit_notifier.errors import NotifierError
from errbit_notifier.logging import configure_logging, get_logger
from errbit_notifier.notifier import Notifier

log = get_logger(__name__)


class NotifierTestError(Exception):
    """Raised and reported by the ``test`` command."""

    pass


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=False, path_type=Path),
    default=Path.home() / ".errbit" / "notifier.yaml",
    help="Config file path",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_path: Path, verbose: bool) -> None:
    """Report errors to an Airbrake-compatible collector."""
    configure_logging("errbit-notifier", level="DEBUG" if verbose else "WARNING")
    ctx.ensure_object(dict)
    ctx.obj["config"] = Config.from_file(config_path)
    ctx.obj["verbose"] = verbose


@main.command("endpoint")
@click.pass_context
def endpoint(ctx: click.Context) -> None:
    """Show the notice endpoint URL."""
    config = ctx.obj["config"]
    click.echo(config.endpoint)


@main.command("parse-backtrace")
@click.argument("source", type=click.File("r"), default="-")
def parse_backtrace_cmd(source: TextIO) -> None:
    """Parse a rendered backtrace (file or stdin) and print frames as JSON."""
    frames = parse_backtrace(source.read())
    click.echo(
        json.dumps([frame.model_dump(exclude_none=True) for frame in frames], indent=2)
    )


@main.command("test")
@click.option(
    "--message",
    default="Test notice from errbit-notifier",
    help="Message of the test error",
)
@click.pass_context
def test_notice(ctx: click.Context, message: str) -> None:
    """Send a test notice to verify collector settings.

    Reads AIRBRAKE_HOST, AIRBRAKE_PROJECT_ID, AIRBRAKE_API_KEY and
    AIRBRAKE_ENVIRONMENT, overriding the config file.
    """
    config = ctx.obj["config"]

    try:
        with Notifier(config) as notifier:
            try:
                raise NotifierTestError(message)
            except NotifierTestError as e:
                result = notifier.notify_chain_error(e)
    except NotifierError as e:
        log.debug("Test notice failed", error=str(e))
        click.echo(f"Failed to send test notice: {e}")
        raise SystemExit(1)

    click.echo("Test notice sent!")
    click.echo(f"  id:  {result.id}")
    click.echo(f"  url: {result.url}")


if __name__ == "__main__":
    main()
