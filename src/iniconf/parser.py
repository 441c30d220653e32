"""Single-pass line parser for INI-style files.

Grammar::

    file           := line*
    line           := section-header | item | blank
    section-header := "[" text "]"
    item           := key "=" value

No comments, quoting, escapes, or continuation lines. The scanner tracks
one piece of state, the current section, starting at :data:`GLOBAL`.

:func:`scan` turns lines into :class:`SectionHeader` / :class:`Entry`
tokens and knows nothing about registrations; :func:`apply` routes each
entry to the matching registered item and ignores the rest.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, NamedTuple, TextIO

from iniconf.errors import FileOpenError, MalformedLineError, describe_section
from iniconf.registry import GLOBAL, SectionKey

if TYPE_CHECKING:
    from iniconf.registry import ConfSet

logger = logging.getLogger(__name__)

FILE_ENCODING = "utf-8-sig"
LINE_TERMINATOR = "\n"


class SectionHeader(NamedTuple):
    lineno: int
    name: str


class Entry(NamedTuple):
    lineno: int
    section: SectionKey
    name: str
    value: str


def parse_section_header(line: str) -> str | None:
    """Return the section name if *line* (already trimmed) is a header.

    Bracket contents are used verbatim, inner whitespace included.

    Raises:
        MalformedLineError: *line* opens with ``[`` but does not close.
    """
    if not line.startswith("["):
        return None
    if len(line) < 2 or not line.endswith("]"):
        raise MalformedLineError(line)
    return line[1:-1]


def split_item(line: str) -> tuple[str, str]:
    """Split ``key = value`` at the first ``=`` and trim both halves.

    Raises:
        MalformedLineError: *line* has no ``=``.
    """
    name, sep, value = line.partition("=")
    if not sep:
        raise MalformedLineError(line)
    return name.strip(), value.strip()


def scan(lines: Iterable[str], *, source: str | None = None) -> Iterator[SectionHeader | Entry]:
    """Tokenize *lines*, yielding headers and entries in file order.

    Blank and whitespace-only lines are skipped. Line terminators
    (``\\n``, ``\\r\\n``) are removed before anything else; a ``\\r``
    anywhere else stays part of the line.

    Raises:
        MalformedLineError: A line is neither a header nor an item.
    """
    section: SectionKey = GLOBAL
    for lineno, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n").strip()
        if not line:
            continue
        try:
            header = parse_section_header(line)
            if header is None:
                name, value = split_item(line)
        except MalformedLineError:
            raise MalformedLineError(raw.rstrip("\r\n"), source=source, lineno=lineno) from None

        if header is not None:
            section = header
            yield SectionHeader(lineno, header)
        else:
            yield Entry(lineno, section, name, value)


def apply(conf: ConfSet, lines: Iterable[str], *, source: str | None = None) -> int:
    """Assign every entry in *lines* that matches a registered item.

    Entries in unregistered sections, or with unregistered names, are
    ignored. The first error aborts; earlier assignments are kept.

    Returns:
        The number of assignments made.
    """
    assigned = 0
    for token in scan(lines, source=source):
        if isinstance(token, SectionHeader):
            logger.debug("Entering section [%s] at line %d", token.name, token.lineno)
            continue
        item = conf.lookup(token.section, token.name)
        if item is None:
            logger.debug(
                "Ignoring unregistered %s %s at line %d",
                describe_section(token.section),
                token.name,
                token.lineno,
            )
            continue
        item.set(token.value, source=source, lineno=token.lineno)
        assigned += 1
    logger.debug("Parsed %s: %d value(s) assigned", source, assigned)
    return assigned


@contextmanager
def open_source(path: str) -> Iterator[TextIO]:
    """Open *path* for scanning and close it on every exit path.

    Only ``\\n`` ends a line; a ``\\r`` before it is dropped by
    :func:`scan`, and a lone ``\\r`` stays part of the line.

    Raises:
        FileOpenError: *path* cannot be opened, decoded, or read.
    """
    try:
        fh = open(path, encoding=FILE_ENCODING, newline=LINE_TERMINATOR)
    except OSError as exc:
        raise FileOpenError(path, exc.strerror or str(exc)) from exc

    with fh:
        try:
            yield fh
        except UnicodeDecodeError as exc:
            raise FileOpenError(path, f"cannot decode as UTF-8: {exc.reason}") from exc
        except OSError as exc:
            raise FileOpenError(path, exc.strerror or str(exc)) from exc


def parse_file(conf: ConfSet, path: str) -> int:
    """Open *path* and apply it to *conf*.

    Raises:
        FileOpenError: *path* cannot be opened, or reading it fails.
    """
    with open_source(path) as fh:
        return apply(conf, fh, source=path)
