"""Tests for ConfSet registration and lookup."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import pytest

from iniconf import GLOBAL, ConfSet, DuplicateRegistrationError, ParseError
from iniconf.registry import GlobalSection, Item, Section
from iniconf.values import IntValue, StringValue


class TestRegistration:
    def test_constructors_return_items_holding_defaults(self) -> None:
        conf = ConfSet("unused.ini")
        assert conf.add_bool("s", "b", True).value is True
        assert conf.add_int("s", "i", -3).value == -3
        assert conf.add_int64("s", "i64", 2**40).value == 2**40
        assert conf.add_uint("s", "u", 7).value == 7
        assert conf.add_uint64("s", "u64", 2**63).value == 2**63
        assert conf.add_string("s", "str", "default").value == "default"
        assert conf.add_float64("s", "f", 1.25).value == 1.25
        assert conf.add_duration("s", "d", "30s").value == timedelta(seconds=30)
        assert conf.add_duration("s", "d2", timedelta(minutes=1)).value == timedelta(minutes=1)

    def test_item_identity(self) -> None:
        conf = ConfSet()
        item = conf.add_int("db", "port", 5432)
        assert isinstance(item, Item)
        assert item.section == "db"
        assert item.name == "port"
        assert item.kind == "int"
        assert item.lineno is None

    def test_var_accepts_custom_value(self) -> None:
        conf = ConfSet()
        value = StringValue("x")
        item = conf.var(value, GLOBAL, "name")
        assert item.val is value
        assert conf.get(GLOBAL, "name") == "x"

    def test_sections_created_on_demand(self) -> None:
        conf = ConfSet()
        conf.add_int("a", "x")
        conf.add_int("a", "y")
        conf.add_int("b", "x")
        assert set(conf.sections) == {"a", "b"}
        assert isinstance(conf.sections["a"], Section)
        assert list(conf.sections["a"].items) == ["x", "y"]

    def test_same_name_in_different_sections_is_allowed(self) -> None:
        conf = ConfSet()
        conf.add_string("one", "field1", "a")
        conf.add_string("two", "field1", "b")
        conf.add_string(GLOBAL, "field1", "c")
        assert len(conf) == 3


class TestDuplicateRegistration:
    def test_duplicate_rejected(self) -> None:
        conf = ConfSet()
        conf.add_int("db", "port", 1)
        with pytest.raises(DuplicateRegistrationError, match="port"):
            conf.add_string("db", "port", "x")

    def test_duplicate_in_global_section(self) -> None:
        conf = ConfSet()
        conf.add_int(GLOBAL, "retries")
        with pytest.raises(DuplicateRegistrationError) as exc_info:
            conf.var(IntValue(), GLOBAL, "retries")
        assert exc_info.value.section is GLOBAL
        assert exc_info.value.name == "retries"
        assert "<global>" in str(exc_info.value)

    def test_first_registration_survives(self) -> None:
        conf = ConfSet()
        first = conf.add_int("db", "port", 1)
        with pytest.raises(DuplicateRegistrationError):
            conf.add_int("db", "port", 2)
        assert conf.lookup("db", "port") is first
        assert conf.get("db", "port") == 1

    def test_not_a_parse_error(self) -> None:
        assert not issubclass(DuplicateRegistrationError, ParseError)


class TestGlobalSection:
    def test_global_is_enum_member(self) -> None:
        assert GLOBAL is GlobalSection.GLOBAL
        assert repr(GLOBAL) == "GLOBAL"

    def test_header_named_like_global_does_not_alias_it(self) -> None:
        conf = ConfSet()
        item = conf.add_int(GLOBAL, "retries", 3)
        conf.parse_string("[global]\nretries = 9\n")
        assert item.value == 3


class TestLookup:
    def test_lookup_missing_returns_none(self) -> None:
        conf = ConfSet()
        conf.add_int("db", "port")
        assert conf.lookup("db", "host") is None
        assert conf.lookup("web", "port") is None

    def test_get_missing_raises_key_error(self) -> None:
        conf = ConfSet()
        with pytest.raises(KeyError):
            conf.get("db", "port")

    def test_contains(self) -> None:
        conf = ConfSet()
        conf.add_int("db", "port")
        assert ("db", "port") in conf
        assert ("db", "host") not in conf
        assert "db" not in conf

    def test_items_and_as_dict(self) -> None:
        conf = ConfSet()
        conf.add_string("db", "host", "localhost")
        conf.add_int("db", "port", 5432)
        conf.add_bool(GLOBAL, "debug")
        assert [(i.section, i.name) for i in conf.items()] == [
            ("db", "host"),
            ("db", "port"),
            (GLOBAL, "debug"),
        ]
        assert conf.as_dict() == {
            "db": {"host": "localhost", "port": 5432},
            GLOBAL: {"debug": False},
        }

    def test_item_str(self) -> None:
        conf = ConfSet()
        item = conf.add_duration("http", "timeout", "90s")
        assert str(item) == "[http] timeout = 1m30s"


class TestParseState:
    def test_parsed_flag(self, write_ini) -> None:
        path: Path = write_ini("")
        conf = ConfSet(path)
        assert conf.parsed is False
        conf.parse()
        assert conf.parsed is True

    def test_path_accepts_pathlike(self, tmp_path: Path) -> None:
        conf = ConfSet(tmp_path / "x.ini")
        assert conf.path == str(tmp_path / "x.ini")

    def test_parse_without_path(self) -> None:
        with pytest.raises(ValueError, match="no path"):
            ConfSet().parse()
