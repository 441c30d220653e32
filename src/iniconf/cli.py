"""Root CLI group for iniconf with global flags and command registration."""

from __future__ import annotations

import click

from iniconf import __version__
from iniconf.commands import register_commands
from iniconf.commands._base import IniGroup
from iniconf.commands._context import AppContext
from iniconf.config.settings import IniconfSettings


@click.group(
    cls=IniGroup,
    invoke_without_command=True,
    examples="""\
  iniconf scan app.ini
  iniconf get app.ini port --section db --type int
  iniconf --json get app.ini timeout --section http --type duration""",
)
@click.version_option(version=__version__, prog_name="iniconf")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
) -> None:
    """iniconf: inspect INI-style files through typed bindings."""
    settings = IniconfSettings.from_cli(
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
