"""Subcommand modules for the iniconf CLI.

Provides register_commands() which uses deferred imports to keep
``iniconf --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every standalone command on the root CLI group."""
    from iniconf.commands.get import get
    from iniconf.commands.scan import scan

    cli.add_command(scan)
    cli.add_command(get)
