"""InspectService: read-only inspection of INI files for the CLI.

Two operations:
- ``scan``: list every section and entry the parser sees, registered or not.
- ``get``: bind one typed key, parse the file, report the resulting value.
"""

from __future__ import annotations

import logging
import os
from typing import Any

from iniconf.errors import (
    FileOpenError,
    MalformedLineError,
    ParseError,
    TypeConversionError,
    describe_section,
)
from iniconf.parser import Entry, SectionHeader, open_source, scan
from iniconf.registry import GLOBAL, ConfSet, SectionKey
from iniconf.services.result import ServiceError, ServiceResult
from iniconf.values import VALUE_TYPES

logger = logging.getLogger(__name__)


def _section_label(section: SectionKey) -> str | None:
    """JSON-friendly section name; the global section becomes None."""
    return section if isinstance(section, str) else None


def error_result(op: str, exc: ParseError) -> ServiceResult:
    """Convert a parse failure into a failed ServiceResult."""
    detail: dict[str, Any] = {"source": exc.source, "line": exc.lineno}
    if isinstance(exc, FileOpenError):
        code = "FILE_OPEN"
    elif isinstance(exc, MalformedLineError):
        code = "MALFORMED_LINE"
        detail["text"] = exc.line
    elif isinstance(exc, TypeConversionError):
        code = "TYPE_CONVERSION"
        detail.update(
            section=_section_label(exc.section),
            name=exc.name,
            token=exc.token,
            kind=exc.kind,
        )
    else:
        code = "PARSE_ERROR"
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=str(exc), detail=detail),
    )


class InspectService:
    """Inspection operations over one file path."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = os.fspath(path)

    def scan(self, *, section: str | None = None) -> ServiceResult:
        """List sections and entries in file order.

        Sections repeated in the file are merged under their first
        appearance. With *section*, only that section is reported.
        """
        op = "scan"
        sections: dict[SectionKey, list[dict[str, Any]]] = {}
        try:
            with open_source(self._path) as fh:
                for token in scan(fh, source=self._path):
                    if isinstance(token, SectionHeader):
                        sections.setdefault(token.name, [])
                    elif isinstance(token, Entry):
                        sections.setdefault(token.section, []).append(
                            {"name": token.name, "value": token.value, "line": token.lineno}
                        )
        except ParseError as exc:
            return error_result(op, exc)

        warnings: list[str] = []
        if section is not None:
            if section not in sections:
                warnings.append(f"Section [{section}] not found")
            sections = {section: sections.get(section, [])}

        listing = [
            {"name": _section_label(key), "entries": entries} for key, entries in sections.items()
        ]
        count = sum(len(entries) for entries in sections.values())
        logger.debug("Scanned %s: %d section(s), %d entries", self._path, len(listing), count)
        return ServiceResult(
            ok=True,
            op=op,
            data={"path": self._path, "sections": listing, "count": count},
            warnings=warnings,
        )

    def get(
        self,
        name: str,
        *,
        section: str | None = None,
        kind: str = "string",
        default: str | None = None,
    ) -> ServiceResult:
        """Bind ``(section, name)`` as *kind*, parse, and report the value.

        *section* None means the global section. *default* is parsed with
        the same rules as file values.
        """
        op = "get"
        key: SectionKey = GLOBAL if section is None else section
        value_type = VALUE_TYPES.get(kind)
        if value_type is None:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="UNKNOWN_TYPE",
                    message=f"Unknown value type {kind!r}",
                    detail={"choices": sorted(VALUE_TYPES)},
                ),
            )

        conf = ConfSet(self._path)
        item = conf.var(value_type(), key, name)
        if default is not None:
            try:
                item.set(default)
            except TypeConversionError as exc:
                return ServiceResult(
                    ok=False,
                    op=op,
                    error=ServiceError(
                        code="INVALID_DEFAULT",
                        message=f"Invalid default: {exc}",
                        detail={"token": default, "kind": kind},
                    ),
                )

        try:
            conf.parse()
        except ParseError as exc:
            return error_result(op, exc)

        logger.debug("Resolved %s %s = %s", describe_section(key), name, item.val)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "section": _section_label(key),
                "name": name,
                "kind": kind,
                "value": str(item.val),
                "default_used": item.lineno is None,
                "line": item.lineno,
            },
        )
