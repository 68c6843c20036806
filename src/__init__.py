"""
gorillamd - Gorilla REPL notebook to Markdown converter

Renders Gorilla notebook source files as GitHub-flavored Markdown.
"""

__version__ = "0.1.0"

from .lib import (
    Segmenter,
    Renderer,
    notebook_convert,
    ConversionError,
    MalformedNotebook,
    MalformedOutput,
    LOG,
    state_connectToLogger,
)

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
