"""Command: resolve one typed key from an INI file."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from iniconf.commands._base import IniCommand
from iniconf.values import VALUE_TYPES

if TYPE_CHECKING:
    from iniconf.commands._context import AppContext


@click.command(
    cls=IniCommand,
    examples="""\
  iniconf get app.ini retries --type int --default 3
  iniconf get app.ini port --section db --type int
  iniconf get app.ini timeout --section http --type duration --default 30s
  iniconf -q get app.ini host --section db""",
)
@click.argument("path", type=click.Path(dir_okay=False))
@click.argument("name")
@click.option(
    "-s",
    "--section",
    default=None,
    help="Section holding NAME (default: entries before any header).",
)
@click.option(
    "-t",
    "--type",
    "kind",
    type=click.Choice(list(VALUE_TYPES)),
    default="string",
    show_default=True,
    help="Type NAME is parsed as.",
)
@click.option("-d", "--default", default=None, help="Value reported when PATH omits NAME.")
@click.pass_obj
def get(
    app: AppContext,
    path: str,
    name: str,
    section: str | None,
    kind: str,
    default: str | None,
) -> None:
    """Parse NAME from PATH as a typed value and print it."""
    from iniconf.services.inspect import InspectService

    app.emit(InspectService(path).get(name, section=section, kind=kind, default=default))
