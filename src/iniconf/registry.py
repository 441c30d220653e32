"""Registry of typed bindings, organized by section.

Usage::

    conf = ConfSet("app.ini")
    host = conf.add_string("db", "host", "localhost")
    port = conf.add_int("db", "port", 5432)
    retries = conf.add_int(GLOBAL, "retries", 3)
    conf.parse()
    host.value, port.value, conf.get(GLOBAL, "retries")

INVARIANT: registration completes before :meth:`ConfSet.parse` runs.
Items are never removed; a ``(section, name)`` pair is registered once.
The registry is not thread-safe; callers serialize access themselves.
"""

from __future__ import annotations

import io
import logging
import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any

from iniconf.errors import DuplicateRegistrationError, TypeConversionError, describe_section
from iniconf.values import (
    BoolValue,
    DurationValue,
    Float64Value,
    Int64Value,
    IntValue,
    StringValue,
    Uint64Value,
    UintValue,
    Value,
)

logger = logging.getLogger(__name__)


class GlobalSection(Enum):
    """Key of the implicit section holding entries seen before any header."""

    GLOBAL = "global"

    def __repr__(self) -> str:
        return "GLOBAL"


GLOBAL = GlobalSection.GLOBAL

SectionKey = str | GlobalSection


@dataclass
class Item:
    """One registered binding: a field inside a section and its value.

    Returned by the ``add_*`` constructors as the caller's handle; read
    :attr:`value` after parsing. :attr:`lineno` is the line that last
    assigned it, or None while it still holds its default.
    """

    section: SectionKey
    name: str
    val: Value
    lineno: int | None = field(default=None, compare=False)

    @property
    def value(self) -> Any:
        """Current native value (the default until a parse assigns one)."""
        return self.val.get()

    @property
    def kind(self) -> str:
        return self.val.kind

    def set(self, text: str, *, source: str | None = None, lineno: int | None = None) -> None:
        """Assign *text* through the bound value.

        Raises:
            TypeConversionError: *text* is not valid for this item's kind.
        """
        try:
            self.val.set(text)
        except ValueError as exc:
            raise TypeConversionError(
                self.section,
                self.name,
                text,
                self.val.kind,
                str(exc),
                source=source,
                lineno=lineno,
            ) from exc
        self.lineno = lineno

    def __str__(self) -> str:
        return f"{describe_section(self.section)} {self.name} = {self.val}"


@dataclass
class Section:
    name: SectionKey
    items: dict[str, Item] = field(default_factory=dict)


class ConfSet:
    """Named, typed bindings for one INI-style file.

    Args:
        path: File read by :meth:`parse`. Optional when only
            :meth:`parse_string` / :meth:`parse_lines` are used.
    """

    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        self.path = os.fspath(path) if path is not None else None
        self.parsed = False
        self.sections: dict[SectionKey, Section] = {}

    # --- Registration ---

    def var(self, value: Value, section: SectionKey, name: str) -> Item:
        """Register *value* under ``(section, name)`` and return its item.

        Raises:
            DuplicateRegistrationError: The pair is already registered.
        """
        sect = self.sections.get(section)
        if sect is None:
            sect = Section(section)
        if name in sect.items:
            raise DuplicateRegistrationError(section, name)

        item = Item(section, name, value)
        sect.items[name] = item
        self.sections[section] = sect
        logger.debug("Registered %s %s (%s)", describe_section(section), name, value.kind)
        return item

    def add_bool(self, section: SectionKey, name: str, default: bool = False) -> Item:
        return self.var(BoolValue(default), section, name)

    def add_int(self, section: SectionKey, name: str, default: int = 0) -> Item:
        return self.var(IntValue(default), section, name)

    def add_int64(self, section: SectionKey, name: str, default: int = 0) -> Item:
        return self.var(Int64Value(default), section, name)

    def add_uint(self, section: SectionKey, name: str, default: int = 0) -> Item:
        return self.var(UintValue(default), section, name)

    def add_uint64(self, section: SectionKey, name: str, default: int = 0) -> Item:
        return self.var(Uint64Value(default), section, name)

    def add_string(self, section: SectionKey, name: str, default: str = "") -> Item:
        return self.var(StringValue(default), section, name)

    def add_float64(self, section: SectionKey, name: str, default: float = 0.0) -> Item:
        return self.var(Float64Value(default), section, name)

    def add_duration(
        self,
        section: SectionKey,
        name: str,
        default: timedelta | str = timedelta(0),
    ) -> Item:
        """Register a duration; *default* may be a timedelta or a token like ``"30s"``."""
        return self.var(DurationValue(default), section, name)

    # --- Lookup ---

    def lookup(self, section: SectionKey, name: str) -> Item | None:
        """Return the item registered under ``(section, name)``, if any."""
        sect = self.sections.get(section)
        if sect is None:
            return None
        return sect.items.get(name)

    def get(self, section: SectionKey, name: str) -> Any:
        """Return the current native value of a registered item.

        Raises:
            KeyError: Nothing is registered under ``(section, name)``.
        """
        item = self.lookup(section, name)
        if item is None:
            raise KeyError((section, name))
        return item.value

    def items(self) -> Iterator[Item]:
        """Iterate over every registered item, section by section."""
        for sect in self.sections.values():
            yield from sect.items.values()

    def as_dict(self) -> dict[SectionKey, dict[str, Any]]:
        """Snapshot of ``{section: {name: value}}`` for every registered item."""
        return {
            key: {name: item.value for name, item in sect.items.items()}
            for key, sect in self.sections.items()
        }

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        section, name = key
        return self.lookup(section, name) is not None

    def __len__(self) -> int:
        return sum(len(sect.items) for sect in self.sections.values())

    # --- Parsing ---

    def parse(self) -> None:
        """Read :attr:`path` once and assign every matching entry.

        Raises:
            FileOpenError: The file cannot be opened or read.
            MalformedLineError: A line is not a header or ``key = value``.
            TypeConversionError: A value does not parse for its binding.
        """
        from iniconf.parser import parse_file

        if self.path is None:
            raise ValueError("ConfSet has no path to parse")
        self.parsed = True
        parse_file(self, self.path)

    def parse_lines(self, lines: Iterable[str], *, source: str = "<lines>") -> None:
        """Parse already-read lines with the same rules as :meth:`parse`."""
        from iniconf.parser import apply

        self.parsed = True
        apply(self, lines, source=source)

    def parse_string(self, text: str, *, source: str = "<string>") -> None:
        """Parse in-memory file content with the same rules as :meth:`parse`."""
        from iniconf.parser import LINE_TERMINATOR

        self.parse_lines(io.StringIO(text, newline=LINE_TERMINATOR), source=source)
