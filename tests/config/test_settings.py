"""Tests for IniconfSettings: CLI flags over INICONF_* env vars."""

from __future__ import annotations

import pytest

from iniconf.config.settings import IniconfSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("JSON_OUTPUT", "QUIET", "VERBOSE", "LOG_JSON"):
        monkeypatch.delenv(f"INICONF_{name}", raising=False)


class TestIniconfSettings:
    def test_all_defaults(self) -> None:
        settings = IniconfSettings.from_cli()
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.log_json is False

    def test_cli_flags(self) -> None:
        settings = IniconfSettings.from_cli(json_output=True, verbose=True)
        assert settings.json_output is True
        assert settings.verbose is True
        assert settings.quiet is False

    def test_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INICONF_VERBOSE", "true")
        settings = IniconfSettings.from_cli(verbose=False)
        assert settings.verbose is True

    def test_cli_flag_wins_over_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INICONF_QUIET", "false")
        settings = IniconfSettings.from_cli(quiet=True)
        assert settings.quiet is True

    def test_frozen(self) -> None:
        settings = IniconfSettings.from_cli()
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]
