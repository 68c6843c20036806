"""
Renderer for segmented notebook cells

Transforms RawCell records into GitHub-flavored Markdown.
"""

from typing import List, Optional

from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from ..config import AppSettings, appsettings
from ..models.cells import CellKind, RawCell
from .errors import ConversionError, MalformedOutput
from .log import LOG
from .tree import output_parse, node_render


def fenceLanguage_resolve(name: str) -> str:
    """
    Normalize a fence language tag through the Pygments lexer registry

    Aliases resolve to the lexer's primary alias (e.g., "clj" -> "clojure").
    Names Pygments does not know are returned unchanged.
    """
    try:
        lexer = get_lexer_by_name(name)
    except ClassNotFound:
        LOG(f"No Pygments lexer for '{name}', using fence tag as given", level=2)
        return name
    if lexer.aliases:
        return lexer.aliases[0]
    return name


class Renderer:
    """
    Renders notebook cells to a Markdown document

    Responsibilities:
    - Dispatch each cell to the formatter for its kind
    - Strip the content prefix from prose, stdout and output lines
    - Flatten output cell JSON trees
    - Join cell fragments into the final document
    """

    def __init__(
        self,
        cells: List[RawCell],
        settings: Optional[AppSettings] = None,
    ) -> None:
        """
        Initialize renderer

        Args:
            cells: Cells produced by the segmenter, in document order
            settings: Settings to use instead of the global appsettings
        """
        self.cells = cells
        self.settings = settings or appsettings
        self.fence_language = fenceLanguage_resolve(self.settings.fence_language)
        LOG(f"Code fence language: {self.fence_language}", level=3)

    def render(self) -> str:
        """
        Render all cells and join them into one Markdown document

        Each fragment ends with a newline, so joining with a newline leaves
        one blank line between cells.

        Raises:
            MalformedOutput: If an output cell cannot be rendered; the error
                             carries the cell index, kind and line number
        """
        fragments = []
        for index, cell in enumerate(self.cells):
            try:
                fragments.append(self.cell_render(cell))
            except ConversionError as e:
                raise type(e)(
                    e.message, cell_index=index, kind=cell.kind, line_number=cell.line_number
                ) from e
        LOG(f"Rendered {len(fragments)} cells", level=2)
        return "\n".join(fragments)

    def cell_render(self, cell: RawCell) -> str:
        """Format a single cell according to its kind"""
        match cell.kind:
            case CellKind.CODE:
                return self.codeCell_format(cell.body)
            case CellKind.MARKDOWN:
                return self.markdownCell_format(cell.body)
            case CellKind.STDOUT:
                return self.stdoutCell_format(cell.body)
            case CellKind.OUTPUT:
                return self.outputCell_format(cell.body)
        raise ValueError(f"Unhandled cell kind: {cell.kind}")

    def lines_strip(self, lines: List[str]) -> List[str]:
        """Strip one content prefix from each line"""
        return [self.settings.prefix_strip(line) for line in lines]

    def codeCell_format(self, lines: List[str]) -> str:
        """
        Format a code cell as a language-tagged fence

        Code lines carry no prefix and are copied verbatim.
        """
        code = "\n".join(lines)
        return f"```{self.fence_language}\n{code}\n```\n"

    def markdownCell_format(self, lines: List[str]) -> str:
        """Format a prose cell: the stripped lines are already Markdown"""
        return "\n".join(self.lines_strip(lines)) + "\n"

    def stdoutCell_format(self, lines: List[str]) -> str:
        """Format captured console output as an untagged fence"""
        text = "\n".join(self.lines_strip(lines))
        return f"```\n{text}\n```\n"

    def outputCell_format(self, lines: List[str]) -> str:
        """
        Format an evaluation result cell

        A cell with nothing to show (e.g. a nil result written as ";;; ")
        renders as a single blank line. Otherwise its one JSON line is
        flattened through the output tree renderer.

        Raises:
            MalformedOutput: If the cell holds more than one non-blank line
                             (strict mode) or its JSON is not a valid tree
        """
        stripped = [line for line in self.lines_strip(lines) if line.strip()]
        if not stripped:
            return "\n"

        if len(stripped) > 1:
            if self.settings.strict_mode:
                raise MalformedOutput(
                    f"Output cell holds {len(stripped)} non-blank lines, expected one JSON line"
                )
            LOG(f"Output cell holds {len(stripped)} lines, keeping the first", level=1)

        max_depth = self.settings.max_output_depth
        node = output_parse(stripped[0], max_depth=max_depth)
        return node_render(node, max_depth=max_depth) + "\n"
