"""
Segmenter-specific data models
"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass
class LineGroup:
    """
    Maximal run of consecutive lines with the same classification

    Returned by Segmenter.lines_partition(). Consecutive marker lines with
    the same literal form one group; consecutive content lines form another.

    Attributes:
        marker: Marker literal shared by the lines (e.g., ";; @@"),
                or None for a group of content lines
        lines: The lines of the run, in source order
        line_number: Source line number of the first line in the run

    Example:
        For lines ["(+ 1 2)", "(+ 3 4)"] starting at line 5:
        LineGroup(marker=None, lines=["(+ 1 2)", "(+ 3 4)"], line_number=5)
    """
    marker: Optional[str]
    lines: List[str]
    line_number: int

    def blank_is(self) -> bool:
        """True if every line in the group is whitespace only"""
        return all(not line.strip() for line in self.lines)

    def marker_is(self) -> bool:
        """True if this is a group of marker lines"""
        return self.marker is not None
