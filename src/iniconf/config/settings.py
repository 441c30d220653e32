"""Settings for the ``iniconf`` command-line tool.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``INICONF_*`` prefix
  3. Code defaults

These govern the tool's own output; they are unrelated to the files the
tool inspects, which go through :class:`iniconf.registry.ConfSet`.
"""

from __future__ import annotations

from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict


class IniconfSettings(BaseSettings):
    """Output and logging switches for one CLI invocation.

    Stored on the shared :class:`~iniconf.commands._context.AppContext`.
    """

    model_config = SettingsConfigDict(frozen=True, env_prefix="INICONF_")

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    @classmethod
    def from_cli(cls, **cli_flags: Any) -> IniconfSettings:
        """Construct settings from a CLI invocation.

        Flags left at their Click default (``False``) are dropped so that
        ``INICONF_*`` environment variables can still switch them on.
        """
        overrides = {name: value for name, value in cli_flags.items() if value}
        return cls(**overrides)
