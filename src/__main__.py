#!/usr/bin/env python3
"""
gorillamd - Gorilla REPL notebook to Markdown converter

Reads a Gorilla REPL notebook source file and writes it out as a single
GitHub-flavored Markdown document, suitable for publishing a notebook on a
static site.

As with other ChRIS-style tools, the app takes an input directory and an
output directory and is driven through the chris_plugin wrapper.

Cell mapping:
    - Prose cells become raw Markdown
    - Code cells become language-tagged fenced blocks
    - Console output becomes plain fenced blocks
    - Evaluation results are flattened from their JSON/HTML tree

Usage:
    gorillamd inputdir/ outputdir/ --inputFile notebook.clj --outputFile notebook.md

    Any existing output file is overwritten on success and left untouched
    when the notebook cannot be converted.

Examples:
    # Convert with the default file names
    gorillamd . .

    # Verbose output
    gorillamd notebooks/ site/ --inputFile analysis.clj --outputFile analysis.md -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import Segmenter, Renderer, MalformedNotebook, MalformedOutput, __version__, LOG, state_connectToLogger
from .models import ProgramState, pipeline


# Define CLI arguments
parser = ArgumentParser(
    description="gorillamd - Gorilla REPL notebook to Markdown converter",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile",
    default=appsettings.default_input_file,
    type=str,
    help="Input Gorilla notebook (.clj) file (relative to inputdir)",
)

parser.add_argument(
    "--outputFile",
    default=appsettings.default_output_file,
    type=str,
    help="Output Markdown file (relative to outputdir), overwritten on success",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve file paths.

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the notebook
            - markdownOutputFile: Resolved path to the Markdown file
            - envOK: True if environment is valid

    Exits:
        1 if the input file is not found
    """
    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile
    if not input_file.is_file():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    state.outputdir.mkdir(parents=True, exist_ok=True)
    state.markdownOutputFile = state.outputdir / state.outputFile
    LOG(f"Output file: {state.markdownOutputFile}", level=2)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the notebook source file.

    Returns:
        ProgramState with added field:
            - notebookSource: Notebook text

    Exits:
        1 if the file cannot be read
    """
    state = inputstate.copy()

    LOG("Reading notebook...", level=1)

    try:
        state.notebookSource = state.inputSourceFile.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Read {len(state.notebookSource)} characters from {state.inputSourceFile.name}", level=2)
    return state


def notebook_segment(inputstate: ProgramState) -> ProgramState:
    """
    Split the notebook source into cells.

    Returns:
        ProgramState with added field:
            - parsedCells: List[RawCell] in document order

    Exits:
        1 if the cell markers are malformed
    """
    state = inputstate.copy()

    LOG("Segmenting notebook into cells...", level=1)

    try:
        segmenter = Segmenter(state.notebookSource or "", debug=(state.verbosity >= 3))
        state.parsedCells = segmenter.segment()
    except MalformedNotebook as e:
        print(f"Malformed notebook: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Found {len(state.parsedCells)} cells", level=2)
    return state


def markdown_render(inputstate: ProgramState) -> ProgramState:
    """
    Render the cells to a Markdown document.

    Returns:
        ProgramState with added field:
            - markdownDocument: Markdown text

    Exits:
        1 if parsedCells is None or an output cell is malformed
    """
    state = inputstate.copy()

    LOG("Rendering cells to Markdown...", level=1)

    if state.parsedCells is None:
        print("Error: No segmented cells available", file=sys.stderr)
        sys.exit(1)

    try:
        state.markdownDocument = Renderer(state.parsedCells).render()
    except MalformedOutput as e:
        print(f"Malformed output cell: {e}", file=sys.stderr)
        sys.exit(1)

    return state


def markdown_write(inputstate: ProgramState) -> ProgramState:
    """
    Write the Markdown document, replacing any previous file.

    Returns:
        ProgramState with added field:
            - writeOK: True once the file is written

    Exits:
        1 if there is no document or the write fails
    """
    state = inputstate.copy()

    if state.markdownDocument is None:
        print("Error: No Markdown document to write", file=sys.stderr)
        sys.exit(1)

    try:
        state.markdownOutputFile.write_text(state.markdownDocument, encoding="utf-8")
    except OSError as e:
        print(f"Error writing output file: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Wrote {state.markdownOutputFile}", level=2)
    state.writeOK = True
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display conversion results to the user.

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if the document was not written
    """
    state: ProgramState = inputstate.copy()
    if not state.writeOK:
        print("Error: Conversion failed", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Conversion successful!", level=1)
    LOG(f"  Output: {state.markdownOutputFile}", level=1)
    LOG(f"  Cells:  {len(state.parsedCells or [])}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="gorillamd - Gorilla REPL notebook to Markdown converter",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - convert a Gorilla notebook to Markdown.

    Orchestrates the conversion pipeline:
        1. env_check: Validate paths
        2. source_read: Read the notebook
        3. notebook_segment: Split into cells
        4. markdown_render: Render cells to Markdown
        5. markdown_write: Write the output file
        6. results_report: Display results

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(
        state,
        env_check,
        source_read,
        notebook_segment,
        markdown_render,
        markdown_write,
        results_report,
    )


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
