"""
gorillamd - Gorilla REPL notebook to Markdown converter

Renders Gorilla notebook source files as GitHub-flavored Markdown.
"""

__version__ = "0.1.0"

from .segmenter import Segmenter
from .renderer import Renderer
from .converter import notebook_convert
from .errors import ConversionError, MalformedNotebook, MalformedOutput
from .log import LOG, state_connectToLogger

__all__ = [
    "Segmenter",
    "Renderer",
    "notebook_convert",
    "ConversionError",
    "MalformedNotebook",
    "MalformedOutput",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
