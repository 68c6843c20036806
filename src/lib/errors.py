"""
Conversion errors

Both error kinds are fatal to the whole conversion: nothing is written
when either is raised.
"""

from typing import Optional

from ..models.cells import CellKind


class ConversionError(Exception):
    """
    Base class for notebook conversion failures

    Carries optional location details which are folded into the message.

    Attributes:
        message: Human-readable error description
        cell_index: Zero-based index of the offending cell, if known
        kind: Kind of the offending cell, if known
        line_number: Source line number where the problem was found, if known
    """

    def __init__(
        self,
        message: str,
        cell_index: Optional[int] = None,
        kind: Optional[CellKind] = None,
        line_number: Optional[int] = None,
    ) -> None:
        self.message = message
        self.cell_index = cell_index
        self.kind = kind
        self.line_number = line_number
        super().__init__(self.message_format())

    def message_format(self) -> str:
        """Build the full message with any known location details"""
        location = []
        if self.cell_index is not None:
            location.append(f"cell {self.cell_index}")
        if self.kind is not None:
            location.append(f"({self.kind.value})")
        if self.line_number is not None:
            location.append(f"at line {self.line_number}")
        if not location:
            return self.message
        return f"{' '.join(location)}: {self.message}"


class MalformedNotebook(ConversionError):
    """Raised when marker and content lines cannot form open/content/close triples"""
    pass


class MalformedOutput(ConversionError):
    """Raised when an output cell does not hold a valid, bounded JSON output tree"""
    pass
