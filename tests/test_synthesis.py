"""Tests for node synthesis."""

import pytest

from easel.core.graph import ImageStyle, NodeType, TextEditorNode
from easel.core.synthesis import (
    NodeSynthesizer,
    default_node_data,
    initial_nodes,
)
from easel.utils.errors import InvalidNodeTypeError

from conftest import SequentialIds, image_node, instruction_node


@pytest.fixture
def synthesizer():
    return NodeSynthesizer(id_factory=SequentialIds())


@pytest.mark.parametrize("desired_type", ["textEditor", "image", "speech", "comment", "instruction"])
def test_new_node_is_placed_below_anchor(synthesizer, desired_type):
    anchor = instruction_node("anchor", x=120, y=-40)

    node, new_edge = synthesizer.synthesize(desired_type, anchor)

    assert node.type == desired_type
    assert node.position.x == 120
    assert node.position.y == 260
    assert new_edge.source == "anchor"
    assert new_edge.target == node.id
    assert new_edge.type == "default"
    assert not new_edge.animated


def test_text_editor_gets_default_size(synthesizer):
    node, _ = synthesizer.synthesize("textEditor", instruction_node("anchor"))

    assert isinstance(node, TextEditorNode)
    assert (node.width, node.height) == (270, 170)
    assert node.data.text == ""
    assert not node.data.is_locked


def test_other_types_have_no_size(synthesizer):
    node, _ = synthesizer.synthesize("image", instruction_node("anchor"))

    assert node.width is None
    assert node.height is None


def test_image_style_hint_overrides_default(synthesizer):
    node, _ = synthesizer.synthesize("image", instruction_node("anchor"), style_hint="anime")

    assert node.data.style == ImageStyle.ANIME
    assert node.data.image_url is None


def test_image_without_hint_uses_auto(synthesizer):
    node, _ = synthesizer.synthesize("image", instruction_node("anchor"))

    assert node.data.style == ImageStyle.AUTO


def test_style_hint_ignored_for_non_image(synthesizer):
    node, _ = synthesizer.synthesize("speech", instruction_node("anchor"), style_hint="anime")

    assert not hasattr(node.data, "style")


def test_ids_are_unique_and_edge_id_links_both():
    synthesizer = NodeSynthesizer()
    anchor = image_node("anchor")

    first, first_edge = synthesizer.synthesize("image", anchor)
    second, _ = synthesizer.synthesize("image", anchor)

    assert first.id != second.id
    assert first_edge.id == f"edge-anchor-{first.id}"


def test_unknown_type_raises_before_consuming_an_id():
    ids = SequentialIds()
    synthesizer = NodeSynthesizer(id_factory=ids)

    with pytest.raises(InvalidNodeTypeError):
        synthesizer.synthesize("video", instruction_node("anchor"))

    assert ids.count == 0


def test_default_node_data_per_type():
    assert default_node_data(NodeType.IMAGE).style == ImageStyle.AUTO
    assert default_node_data(NodeType.COMMENT).text == ""
    assert default_node_data(NodeType.SPEECH).is_locked is False


def test_initial_nodes_seed_canvas():
    nodes = initial_nodes(id_factory=SequentialIds("seed"))

    assert len(nodes) == 1
    seed = nodes[0]
    assert seed.id == "seed-1"
    assert seed.type == "textEditor"
    assert seed.data.text == "This is a text node."
    assert (seed.width, seed.height) == (280, 180)
