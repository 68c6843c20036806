"""
Output tree tests

Tests JSON parsing into output nodes, tree flattening and the depth guard.
"""

import json

import pytest

from gorillamd.lib.tree import output_parse, node_render, json_depthMeasure
from gorillamd.lib.errors import MalformedOutput
from gorillamd.models.output import HtmlLeaf, ListLikeNode


def leaf(content):
    return HtmlLeaf(content=content)


def nested_json(depth):
    """JSON text for a chain of list-like nodes ending in a leaf, depth nodes deep"""
    text = '{"type":"html","content":"x"}'
    for _ in range(depth - 1):
        text = '{"type":"list-like","open":"(","close":")","separator":"","items":[' + text + ']}'
    return text


class TestRender:
    """Test tree flattening"""

    def test_leaf(self):
        """Leaf content is emitted verbatim"""
        assert node_render(leaf("<span class='clj-long'>3</span>")) == "<span class='clj-long'>3</span>"

    def test_list_like(self):
        """Items joined by separator, wrapped in open and close"""
        node = ListLikeNode(open="[", close="]", separator=",", items=[leaf("a"), leaf("b")])
        assert node_render(node) == "[a,b]"

    def test_empty_items(self):
        """Empty list-like renders open then close"""
        node = ListLikeNode(open="<", close=">", separator=",", items=[])
        assert node_render(node) == "<>"

    def test_single_item_has_no_separator(self):
        node = ListLikeNode(open="(", close=")", separator=" ", items=[leaf("1")])
        assert node_render(node) == "(1)"

    def test_nested_table(self):
        """Nested list-like nodes render a table, rows in order"""
        node = output_parse(json.dumps({
            "type": "list-like",
            "open": "<center><table>",
            "close": "</table></center>",
            "separator": "\n",
            "items": [
                {
                    "type": "list-like",
                    "open": "<tr><td>",
                    "close": "</td></tr>",
                    "separator": "</td><td>",
                    "items": [
                        {"type": "html", "content": "Hi"},
                        {"type": "html", "content": "there"},
                    ],
                },
                {
                    "type": "list-like",
                    "open": "<tr><td>",
                    "close": "</td></tr>",
                    "separator": "</td><td>",
                    "items": [
                        {"type": "html", "content": "Bye"},
                        {"type": "html", "content": "there"},
                    ],
                },
            ],
        }))

        assert node_render(node) == (
            "<center><table>"
            "<tr><td>Hi</td><td>there</td></tr>"
            "\n<tr><td>Bye</td><td>there</td></tr>"
            "</table></center>"
        )


class TestParse:
    """Test output JSON parsing"""

    def test_leaf(self):
        node = output_parse('{"type":"html","content":"3"}')
        assert node == HtmlLeaf(content="3")

    def test_extra_keys_ignored(self):
        """Gorilla's value key is ignored"""
        node = output_parse('{"type":"html","content":"<span>nil</span>","value":"nil"}')
        assert node_render(node) == "<span>nil</span>"

    def test_list_like(self):
        node = output_parse(
            '{"type":"list-like","open":"[","close":"]","separator":" ",'
            '"items":[{"type":"html","content":"1"},{"type":"html","content":"2"}],"value":"[1 2]"}'
        )
        assert isinstance(node, ListLikeNode)
        assert node_render(node) == "[1 2]"

    @pytest.mark.parametrize("text", [
        "not json",
        '{"type":"html","content":',
        "",
    ])
    def test_invalid_json(self, text):
        with pytest.raises(MalformedOutput, match="not valid JSON"):
            output_parse(text)

    def test_oversized_integer(self):
        """Integers past the int conversion limit are reported as bad output"""
        text = '{"type":"html","content":"x","value":' + "1" * 5000 + "}"
        with pytest.raises(MalformedOutput, match="not valid JSON"):
            output_parse(text)

    @pytest.mark.parametrize("text", [
        '{"type":"latex","content":"x"}',
        '{"content":"x"}',
        '{"type":"html","content":3}',
        '{"type":"list-like","open":"[","close":"]","separator":","}',
        '{"type":"list-like","open":"[","close":"]","separator":",","items":[1]}',
        "[1, 2]",
        '"plain string"',
        "null",
    ])
    def test_not_an_output_tree(self, text):
        with pytest.raises(MalformedOutput, match="not an html/list-like tree"):
            output_parse(text)


class TestDepthGuard:
    """Test the nesting depth limit"""

    def test_depth_measure(self):
        assert json_depthMeasure({"type": "html", "content": "x"}) == 1
        assert json_depthMeasure(json.loads(nested_json(5))) == 5
        assert json_depthMeasure([1, [2, [3]]]) == 0

    def test_within_limit(self):
        node = output_parse(nested_json(4), max_depth=4)
        assert node_render(node, max_depth=4) == "(((x)))"

    def test_parse_over_limit(self):
        with pytest.raises(MalformedOutput, match="exceeds the maximum"):
            output_parse(nested_json(5), max_depth=4)

    def test_default_limit(self):
        """Default limit rejects very deep trees"""
        with pytest.raises(MalformedOutput, match="exceeds the maximum"):
            output_parse(nested_json(150))

    def test_render_over_limit(self):
        """Trees built in code are guarded during rendering"""
        node = leaf("x")
        for _ in range(3):
            node = ListLikeNode(open="", close="", separator="", items=[node])
        with pytest.raises(MalformedOutput, match="maximum depth"):
            node_render(node, max_depth=3)

    def test_undecodable_depth(self):
        """JSON too deep for the decoder is reported, not raised as RecursionError"""
        text = "[" * 100000 + "]" * 100000
        with pytest.raises(MalformedOutput):
            output_parse(text)
