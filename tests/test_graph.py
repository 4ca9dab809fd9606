"""Tests for canvas graph data structures."""

import pytest
from pydantic import ValidationError

from easel.core.graph import (
    Edge,
    Graph,
    ImageNode,
    ImageStyle,
    NodeType,
    TextEditorNode,
    parse_node,
)

from conftest import edge, image_node, text_node


def test_parse_node_selects_variant_by_type():
    """Test that the type tag picks the concrete node class."""
    node = parse_node(
        {
            "id": "img",
            "type": "image",
            "position": {"x": 10, "y": 20},
            "data": {"imageUrl": None, "isLocked": False, "style": "anime"},
        }
    )

    assert isinstance(node, ImageNode)
    assert node.type == NodeType.IMAGE
    assert node.data.style == ImageStyle.ANIME
    assert node.position.x == 10


def test_parse_node_rejects_unknown_type():
    with pytest.raises(ValidationError):
        parse_node({"id": "x", "type": "video", "position": {"x": 0, "y": 0}, "data": {}})


def test_parse_node_rejects_unknown_style():
    with pytest.raises(ValidationError):
        parse_node(
            {
                "id": "img",
                "type": "image",
                "position": {"x": 0, "y": 0},
                "data": {"isLocked": False, "style": "oil-painting"},
            }
        )


def test_nodes_are_immutable():
    """Test that nodes cannot be edited in place."""
    node = text_node("a")

    with pytest.raises(ValidationError):
        node.id = "b"


def test_models_use_config_dict():
    assert TextEditorNode.model_config["frozen"] is True
    assert TextEditorNode.model_config["populate_by_name"] is True


def test_with_data_validates_payload():
    node = image_node("img")

    assert node.with_data(style="pixel-art").data.style is ImageStyle.PIXEL_ART
    with pytest.raises(ValidationError):
        node.with_data(style="oil-painting")


def test_with_data_returns_copy():
    node = text_node("a", "before")

    updated = node.with_data(text="after")

    assert node.data.text == "before"
    assert updated.data.text == "after"
    assert updated.id == node.id
    assert isinstance(updated, TextEditorNode)


def test_edge_defaults():
    e = Edge(id="e1", source="a", target="b")

    assert e.type == "default"
    assert e.animated is None


def test_edge_rejects_other_types():
    with pytest.raises(ValidationError):
        Edge(id="e1", source="a", target="b", type="smoothstep")


def test_graph_edge_lookups():
    graph = Graph(
        nodes=(text_node("a"), text_node("b"), image_node("c")),
        edges=(edge("a", "c"), edge("b", "c"), edge("c", "a")),
    )

    assert [e.source for e in graph.incoming_edges("c")] == ["a", "b"]
    assert [e.target for e in graph.outgoing_edges("c")] == ["a"]
    assert graph.has_node("b")
    assert graph.get_node("missing") is None
