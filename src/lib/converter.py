"""
String-in, string-out notebook conversion
"""

from typing import Optional

from ..config import AppSettings
from .segmenter import Segmenter
from .renderer import Renderer


def notebook_convert(source: str, settings: Optional[AppSettings] = None, debug: bool = False) -> str:
    """
    Convert Gorilla notebook text into a Markdown document.

    Args:
        source: Complete notebook text, header line included
        settings: Settings to use instead of the global appsettings
        debug: Enable segmenter trace logging

    Returns:
        Markdown text, one fragment per cell separated by blank lines

    Raises:
        MalformedNotebook: If the cell markers are not well formed
        MalformedOutput: If an output cell does not hold a valid tree
    """
    cells = Segmenter(source, debug=debug).segment()
    return Renderer(cells, settings=settings).render()
