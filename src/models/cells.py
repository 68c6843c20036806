"""
Cell kinds, marker literals and the raw cell record

A Gorilla notebook is a sequence of cells, each delimited by a pair of
marker lines. The marker pair identifies the kind of the cell.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, List, Optional


class CellKind(Enum):
    """
    Kinds of notebook cells

    Each kind has its own marker pair and its own Markdown formatter.
    """
    CODE = "code"            # ;; @@ ... ;; @@
    MARKDOWN = "markdown"    # ;; ** ... ;; **
    STDOUT = "stdout"        # ;; -> ... ;; <-
    OUTPUT = "output"        # ;; => ... ;; <=


@dataclass(frozen=True)
class MarkerPair:
    """
    Open and close marker lines for one cell kind

    Attributes:
        open: Marker line that starts the cell (e.g., ";; ->")
        close: Marker line that ends the cell (e.g., ";; <-")
    """
    open: str
    close: str


CELL_MARKERS: Dict[CellKind, MarkerPair] = {
    CellKind.CODE: MarkerPair(open=";; @@", close=";; @@"),
    CellKind.MARKDOWN: MarkerPair(open=";; **", close=";; **"),
    CellKind.STDOUT: MarkerPair(open=";; ->", close=";; <-"),
    CellKind.OUTPUT: MarkerPair(open=";; =>", close=";; <="),
}


def kind_fromOpenMarker(marker: str) -> Optional[CellKind]:
    """
    Look up the cell kind opened by a marker line

    Args:
        marker: Marker literal (e.g., ";; =>")

    Returns:
        CellKind whose open marker matches, or None for close-only
        markers such as ";; <-"
    """
    for kind, pair in CELL_MARKERS.items():
        if pair.open == marker:
            return kind
    return None


@dataclass(frozen=True)
class RawCell:
    """
    One segmented cell, before rendering

    Produced by Segmenter.segment() from an (open, content, close) triple
    of line groups. Marker lines are never part of the body.

    Attributes:
        kind: Cell kind, taken from the open marker
        body: Content lines exactly as they appear in the source
              (content prefix not yet stripped)
        line_number: Source line number of the open marker (for error reporting)

    Example:
        For source lines ";; ->", ";;; Hello", ";; <-":
        RawCell(kind=CellKind.STDOUT, body=[";;; Hello"], line_number=...)
    """
    kind: CellKind
    body: List[str] = field(default_factory=list)
    line_number: int = 0
