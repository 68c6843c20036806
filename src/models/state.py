"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing conversion stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Optional, Type, TypeVar, List, Callable
from dataclasses import dataclass, field

from .cells import RawCell


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the conversion pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the conversion progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, outputFile
        - env_check: inputSourceFile, markdownOutputFile, envOK
        - source_read: notebookSource
        - notebook_segment: parsedCells
        - markdown_render: markdownDocument
        - markdown_write: writeOK
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the notebook source file
        outputdir: Directory for the converted Markdown file
        verbosity: Logging verbosity level (1-3)
        inputFile: Notebook filename (relative to inputdir)
        outputFile: Markdown filename (relative to outputdir)
        envOK: Environment validation passed
        inputSourceFile: Resolved path to the notebook file
        markdownOutputFile: Resolved path to the Markdown file
        notebookSource: Raw notebook text
        parsedCells: Cells produced by the segmenter
        markdownDocument: Rendered Markdown text
        writeOK: Markdown file was written
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    outputFile: str = field(default="")

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    markdownOutputFile: Path = field(default=Path("/"))
    notebookSource: Optional[str] = field(default=None)
    parsedCells: Optional[List[RawCell]] = field(default=None)
    markdownDocument: Optional[str] = field(default=None)
    writeOK: bool = field(default=False)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (inputFile, outputFile, verbosity)
            inputdir: Directory containing the notebook
            outputdir: Directory for conversion output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Drop options that ProgramState does not know about (e.g. chris_plugin extras)
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}

        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            source_read,
            notebook_segment,
            markdown_render,
            markdown_write,
            results_report
        )
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
