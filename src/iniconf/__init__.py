"""iniconf: bind sections and keys of an INI-style file to typed values."""

from iniconf.errors import (
    DuplicateRegistrationError,
    FileOpenError,
    IniconfError,
    MalformedLineError,
    ParseError,
    TypeConversionError,
)
from iniconf.registry import GLOBAL, ConfSet, GlobalSection, Item, Section
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

__version__ = "0.1.0"

__all__ = [
    "GLOBAL",
    "BoolValue",
    "ConfSet",
    "DuplicateRegistrationError",
    "DurationValue",
    "FileOpenError",
    "Float64Value",
    "GlobalSection",
    "IniconfError",
    "Int64Value",
    "IntValue",
    "Item",
    "MalformedLineError",
    "ParseError",
    "Section",
    "StringValue",
    "TypeConversionError",
    "Uint64Value",
    "UintValue",
    "Value",
    "__version__",
]
