"""
Output cell tree models

Gorilla stores the rendered value of an evaluation as a single line of JSON
describing a small tree of HTML fragments. Two node types exist:

    {"type": "html", "content": "<span>3</span>"}
    {"type": "list-like", "open": "[", "close": "]", "separator": " ",
     "items": [...]}

Unknown keys (Gorilla also writes a "value" key) are ignored.
"""

from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter


class HtmlLeaf(BaseModel):
    """Pre-rendered string emitted verbatim"""

    type: Literal["html"] = "html"
    content: str


class ListLikeNode(BaseModel):
    """
    Composite node rendered as open + separator.join(items) + close

    Attributes:
        open: Text emitted before the first item
        close: Text emitted after the last item
        separator: Text emitted between items
        items: Child nodes, in presentation order
    """

    type: Literal["list-like"] = "list-like"
    open: str
    close: str
    separator: str
    items: List["OutputNode"]


OutputNode = Annotated[Union[HtmlLeaf, ListLikeNode], Field(discriminator="type")]

ListLikeNode.model_rebuild()

output_adapter = TypeAdapter(OutputNode)
