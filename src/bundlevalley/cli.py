"""Root CLI group for bundlevalley with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from bundlevalley import __version__
from bundlevalley.commands import COMMANDS
from bundlevalley.commands._base import BvGroup
from bundlevalley.commands._context import AppContext
from bundlevalley.config.settings import BvSettings


_CLI_EXAMPLES = """\
  bundlevalley init
  bundlevalley bundles --room Pantry
  bundlevalley mark spring_parsnip delivered
  bundlevalley --json stats"""


@click.group(
    cls=BvGroup,
    lazy_commands=COMMANDS,
    examples=_CLI_EXAMPLES,
    invoke_without_command=True,
)
@click.version_option(version=__version__, prog_name="bundlevalley")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--data-dir",
    "data_root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the .bundlevalley store.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    data_root: Path | None,
) -> None:
    """bundlevalley — Community Center bundle progress tracker."""
    settings = BvSettings.from_cli(
        config_path=config_path,
        data_root=data_root,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


def main() -> None:
    """Console-script entry point."""
    cli()
