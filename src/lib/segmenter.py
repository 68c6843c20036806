"""
Segmenter for Gorilla notebook source

Splits notebook text into an ordered list of RawCell records.

The segmenter operates in four phases:
1. Header: drop the first line (the "gorilla-repl.fileformat" declaration)
2. Partitioning: group consecutive lines with the same marker classification
3. Filtering: drop groups made only of blank separator lines
4. Assembly: read the remaining groups as (open, content, close) triples

Example:
    >>> source = ";; gorilla-repl.fileformat = 1\\n\\n;; @@\\n(+ 1 2)\\n;; @@\\n"
    >>> cells = Segmenter(source).segment()
    >>> cells[0].kind
    <CellKind.CODE: 'code'>
    >>> cells[0].body
    ['(+ 1 2)']
"""

import re
from itertools import groupby
from typing import List, NoReturn, Optional

from ..models.cells import RawCell, CELL_MARKERS, kind_fromOpenMarker
from ..models.segmenter import LineGroup
from .errors import MalformedNotebook
from .log import LOG


MARKER_PATTERN = re.compile(r";; (@@|\*\*|<-|->|<=|=>)")
LINE_BREAK = re.compile(r"\r?\n")


class Segmenter:
    """
    Segmenter for the Gorilla REPL notebook format

    Handles:
    - Version header removal
    - Marker line recognition for the four cell kinds
    - Blank separator lines between cells
    - Error reporting with cell index and line number
    """

    def __init__(self, source: str, debug: bool = False):
        """
        Initialize segmenter with source text

        Args:
            source: Raw notebook text (.clj file contents)
            debug: Enable trace logging of every line group

        Attributes:
            source: Source text being segmented
            debug: Debug mode flag
            cells: Accumulated list of segmented cells
        """
        self.source = source
        self.debug = debug
        self.cells: List[RawCell] = []

    def segment(self) -> List[RawCell]:
        """
        Segment source text into cells

        Main entry point. Returns the cells in document order. A header-only
        notebook yields an empty list.

        Raises:
            MalformedNotebook: If the source is empty, or the line groups do
                               not form well-formed open/content/close triples
        """
        lines = self.lines_split(self.source)
        if not lines:
            raise MalformedNotebook("Notebook source is empty (expected a format header line)")

        LOG(f"Discarding header: {lines[0]!r}", level=3)

        # Header is line 1, so cell lines start at line 2
        groups = self.lines_partition(lines[1:], first_line=2)
        groups = self.groups_dropBlank(groups)
        LOG(f"Partitioned source into {len(groups)} non-blank line groups", level=2)

        if len(groups) % 3 != 0:
            last = groups[-1] if groups else None
            raise MalformedNotebook(
                f"Found {len(groups)} line groups, which cannot be split into "
                f"open/content/close triples",
                line_number=last.line_number if last else None,
            )

        self.cells = []
        for index in range(len(groups) // 3):
            opener, content, closer = groups[3 * index: 3 * index + 3]
            self.cells.append(self.cell_build(index, opener, content, closer))

        LOG(f"Segmented {len(self.cells)} cells", level=2)
        return self.cells

    def lines_split(self, source: str) -> List[str]:
        """
        Split source text on line feeds (optionally preceded by a carriage return)

        Other characters str.splitlines() treats as breaks (form feed,
        U+2028, ...) stay inside their line. A trailing newline does not
        produce an extra empty line.

        Example:
            >>> Segmenter("").lines_split("a\\x0cb\\r\\nc\\n")
            ['a\\x0cb', 'c']
        """
        lines = LINE_BREAK.split(source)
        if lines and lines[-1] == "":
            lines.pop()
        return lines

    def line_classify(self, line: str) -> Optional[str]:
        """
        Classify one line as a marker or content

        A marker line consists of the marker literal alone; trailing
        whitespace is ignored.

        Returns:
            The marker literal (e.g., ";; @@"), or None for content lines
        """
        match = MARKER_PATTERN.fullmatch(line.rstrip())
        if match:
            return match.group(0)
        return None

    def lines_partition(self, lines: List[str], first_line: int = 1) -> List[LineGroup]:
        """
        Partition lines into maximal runs sharing one classification

        Consecutive content lines form one group; consecutive marker lines
        form one group only if they carry the same literal.

        Args:
            lines: Lines to partition
            first_line: Source line number of lines[0]

        Returns:
            List of LineGroup in source order
        """
        groups: List[LineGroup] = []
        numbered = enumerate(lines, start=first_line)
        for marker, run in groupby(numbered, key=lambda pair: self.line_classify(pair[1])):
            run_lines = list(run)
            group = LineGroup(
                marker=marker,
                lines=[line for _, line in run_lines],
                line_number=run_lines[0][0],
            )
            if self.debug:
                LOG(f"Line {group.line_number}: {marker or 'content'} x{len(group.lines)}", level=3)
            groups.append(group)
        return groups

    def groups_dropBlank(self, groups: List[LineGroup]) -> List[LineGroup]:
        """Remove groups made only of whitespace lines (cell separators)"""
        return [group for group in groups if not group.blank_is()]

    def cell_build(
        self, index: int, opener: LineGroup, content: LineGroup, closer: LineGroup
    ) -> RawCell:
        """
        Build one RawCell from an (open, content, close) triple

        Args:
            index: Zero-based cell index (for error reporting)
            opener: Group expected to hold a single open marker
            content: Group expected to hold the cell body
            closer: Group expected to hold the matching close marker

        Raises:
            MalformedNotebook: If any group of the triple is out of place
        """
        if opener.marker is None:
            self.error("Expected a cell open marker, found content", index, opener)

        kind = kind_fromOpenMarker(opener.marker)
        if kind is None:
            self.error(f"'{opener.marker}' is not a cell open marker", index, opener)

        if len(opener.lines) != 1:
            self.error(f"Repeated marker '{opener.marker}' (empty or unterminated cell)", index, opener)

        if content.marker_is():
            self.error(
                f"Expected cell content after '{opener.marker}', found marker '{content.marker}'",
                index,
                content,
            )

        expected_close = CELL_MARKERS[kind].close
        if closer.marker != expected_close or len(closer.lines) != 1:
            found = closer.marker if closer.marker is not None else "content"
            self.error(
                f"Expected close marker '{expected_close}' for {kind.value} cell, found {found}",
                index,
                closer,
            )

        return RawCell(kind=kind, body=list(content.lines), line_number=opener.line_number)

    def error(self, message: str, index: int, group: LineGroup) -> NoReturn:
        """
        Report segmentation error with source location

        Raises:
            MalformedNotebook: Always (this is an error reporting function)
        """
        raise MalformedNotebook(message, cell_index=index, line_number=group.line_number)
