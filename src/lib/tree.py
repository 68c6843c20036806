"""
Output tree parsing and rendering

An output cell holds one line of JSON describing a tree of HTML fragments.
The tree is flattened into a single string:

    html       -> content
    list-like  -> open + separator.join(items) + close

Example:
    >>> node = output_parse('{"type":"list-like","open":"[","close":"]",'
    ...                     '"separator":",","items":[{"type":"html","content":"a"},'
    ...                     '{"type":"html","content":"b"}]}')
    >>> node_render(node)
    '[a,b]'
"""

import json
from typing import Any, Optional

from pydantic import ValidationError

from ..config import appsettings
from ..models.output import HtmlLeaf, ListLikeNode, OutputNode, output_adapter
from .errors import MalformedOutput
from .log import LOG


def json_depthMeasure(value: Any) -> int:
    """
    Measure the object nesting depth of a decoded JSON value

    Only objects count towards depth, so a bare leaf is depth 1 and a
    list-like node whose items are leaves is depth 2. Walks with an
    explicit stack so arbitrarily deep input cannot exhaust the call stack.
    """
    deepest = 0
    stack = [(value, 0)]
    while stack:
        current, depth = stack.pop()
        if isinstance(current, dict):
            depth += 1
            deepest = max(deepest, depth)
            stack.extend((child, depth) for child in current.values())
        elif isinstance(current, list):
            stack.extend((child, depth) for child in current)
    return deepest


def output_parse(text: str, max_depth: Optional[int] = None) -> OutputNode:
    """
    Parse one line of output JSON into an OutputNode tree

    Args:
        text: JSON text (content prefix already stripped)
        max_depth: Maximum node nesting depth (default: settings.max_output_depth)

    Returns:
        HtmlLeaf or ListLikeNode

    Raises:
        MalformedOutput: If the text is not JSON, is nested deeper than
                         max_depth, or does not describe an output tree
    """
    if max_depth is None:
        max_depth = appsettings.max_output_depth

    try:
        raw = json.loads(text)
    except ValueError as e:
        # JSONDecodeError, or an integer literal past the int conversion limit
        raise MalformedOutput(f"Output is not valid JSON: {e}") from e
    except RecursionError as e:
        raise MalformedOutput("Output JSON is too deeply nested to decode") from e

    depth = json_depthMeasure(raw)
    if depth > max_depth:
        raise MalformedOutput(f"Output tree depth {depth} exceeds the maximum of {max_depth}")

    try:
        node = output_adapter.validate_python(raw)
    except ValidationError as e:
        raise MalformedOutput(f"Output JSON is not an html/list-like tree: {e}") from e

    LOG(f"Parsed output tree of depth {depth}", level=3)
    return node


def node_render(node: OutputNode, max_depth: Optional[int] = None, depth: int = 1) -> str:
    """
    Flatten an output tree into a string

    Children are rendered in order and joined with the node's separator.

    Args:
        node: Tree to render
        max_depth: Maximum node nesting depth (default: settings.max_output_depth)
        depth: Depth of node within the tree being rendered (root is 1)

    Raises:
        MalformedOutput: If the tree is nested deeper than max_depth
    """
    if max_depth is None:
        max_depth = appsettings.max_output_depth
    if depth > max_depth:
        raise MalformedOutput(f"Output tree exceeds the maximum depth of {max_depth}")

    match node:
        case HtmlLeaf():
            return node.content
        case ListLikeNode():
            rendered = [node_render(item, max_depth, depth + 1) for item in node.items]
            return node.open + node.separator.join(rendered) + node.close
        case _:
            raise MalformedOutput(f"Unknown output node type: {type(node).__name__}")
