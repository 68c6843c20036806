"""
Models package for gorillamd

Contains data structures and type definitions for the conversion pipeline.
"""

from .state import ProgramState, pipeline
from .cells import CellKind, MarkerPair, RawCell, CELL_MARKERS, kind_fromOpenMarker
from .segmenter import LineGroup
from .output import HtmlLeaf, ListLikeNode, OutputNode, output_adapter

__all__ = [
    "ProgramState",
    "pipeline",
    "CellKind",
    "MarkerPair",
    "RawCell",
    "CELL_MARKERS",
    "kind_fromOpenMarker",
    "LineGroup",
    "HtmlLeaf",
    "ListLikeNode",
    "OutputNode",
    "output_adapter",
]
