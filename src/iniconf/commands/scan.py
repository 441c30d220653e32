"""Command: list the sections and entries of an INI file."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from iniconf.commands._base import IniCommand

if TYPE_CHECKING:
    from iniconf.commands._context import AppContext


@click.command(
    cls=IniCommand,
    examples="""\
  iniconf scan app.ini
  iniconf scan app.ini --section db
  iniconf --json scan app.ini
  iniconf -q scan app.ini""",
)
@click.argument("path", type=click.Path(dir_okay=False))
@click.option("-s", "--section", default=None, help="Only show this section.")
@click.pass_obj
def scan(app: AppContext, path: str, section: str | None) -> None:
    """Show every section and key = value entry found in PATH."""
    from iniconf.services.inspect import InspectService

    app.emit(InspectService(path).scan(section=section))
