"""Exception hierarchy for registration and parsing.

Two families hang off :class:`IniconfError`:

- :class:`DuplicateRegistrationError` is a programmer error raised while
  bindings are being declared. It is deliberately *not* a
  :class:`ParseError`, so ``except ParseError`` never hides it.
- :class:`ParseError` covers everything :meth:`ConfSet.parse` can report.
  The first one raised aborts the scan; assignments made before it stay.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from iniconf.registry import SectionKey


def describe_section(section: SectionKey) -> str:
    """Render a section key for messages (the global section has no name)."""
    if isinstance(section, str):
        return f"[{section}]"
    return "<global>"


class IniconfError(Exception):
    """Root of every error raised by iniconf."""


class DuplicateRegistrationError(IniconfError):
    """A ``(section, name)`` pair was registered twice."""

    def __init__(self, section: SectionKey, name: str) -> None:
        self.section = section
        self.name = name
        super().__init__(f"item {name!r} already registered in {describe_section(section)}")


class ParseError(IniconfError):
    """Base for failures reported by a parse.

    Attributes:
        source: File path (or ``"<string>"``) being scanned.
        lineno: 1-based line number, or None when not tied to a line.
    """

    def __init__(self, message: str, *, source: str | None = None, lineno: int | None = None) -> None:
        self.message = message
        self.source = source
        self.lineno = lineno
        super().__init__(message)

    def __str__(self) -> str:
        if self.source is None:
            return self.message
        if self.lineno is None:
            return f"{self.source}: {self.message}"
        return f"{self.source}:{self.lineno}: {self.message}"


class FileOpenError(ParseError):
    """The configured file could not be opened or read.

    The underlying :class:`OSError` (or decode error) is chained as
    ``__cause__``.
    """

    def __init__(self, path: str, reason: str, *, lineno: int | None = None) -> None:
        self.path = path
        self.reason = reason
        super().__init__(reason, source=path, lineno=lineno)


class MalformedLineError(ParseError):
    """A non-blank line is neither a section header nor ``key = value``."""

    def __init__(self, line: str, *, source: str | None = None, lineno: int | None = None) -> None:
        self.line = line
        super().__init__(f"malformed line {line!r}", source=source, lineno=lineno)


class TypeConversionError(ParseError):
    """A value token could not be converted to its binding's type."""

    def __init__(
        self,
        section: SectionKey,
        name: str,
        token: str,
        kind: str,
        reason: str = "",
        *,
        source: str | None = None,
        lineno: int | None = None,
    ) -> None:
        self.section = section
        self.name = name
        self.token = token
        self.kind = kind
        self.reason = reason
        message = f"invalid {kind} value {token!r} for {describe_section(section)} {name}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, source=source, lineno=lineno)
