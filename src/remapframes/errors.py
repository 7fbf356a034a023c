"""Exception types raised while building frame mapping tables.

Every error carries a single human-readable message. Positional errors also
keep the 0-based line/column they were raised at so callers can point at the
offending token without re-parsing the message.
"""
from __future__ import annotations


class RemapError(RuntimeError):
    """Base class for all mapping build failures."""


class MappingSyntaxError(RemapError):
    """An error tied to a line/column inside a mapping source."""

    cause: str = ""

    def __init__(
        self,
        filter_name: str,
        *,
        from_file: bool,
        line: int,
        column: int,
    ) -> None:
        self.filter_name = filter_name
        self.from_file = from_file
        self.line = line
        self.column = column
        location = "text file" if from_file else "mappings"
        super().__init__(
            f"{filter_name}: {self.cause} in {location} "
            f"at line {line + 1}, column {column + 1}"
        )


class ParseError(MappingSyntaxError, ValueError):
    cause = "Parse Error"


class MappingOverflowError(MappingSyntaxError, OverflowError):
    cause = "Overflow Error"


class IndexOutOfBoundsError(MappingSyntaxError, IndexError):
    cause = "Index out of bounds"


class SourceUnavailableError(RemapError):
    """The mapping file could not be opened for reading."""


class DegenerateInputError(RemapError, ValueError):
    """Source combination or content that cannot produce a usable table."""


class StreamMismatchError(RemapError, ValueError):
    """Two clips disagree on geometry, format, frame rate or length."""
