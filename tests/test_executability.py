"""Tests for executability rules."""

from easel.core.executability import evaluate_executability
from easel.core.graph import CommentNode, TextNodeData

from conftest import edge, image_node, instruction_node, speech_node, text_node


def test_instruction_with_text_is_executable_without_inputs():
    result = evaluate_executability(instruction_node("i", "draw a cat"), [])

    assert result.executable
    assert result.reason is None


def test_blank_instruction_is_not_executable():
    result = evaluate_executability(instruction_node("i", "   "), [])

    assert not result.executable
    assert result.reason == "Instruction is empty"


def test_running_node_is_not_executable():
    node = instruction_node("i")

    result = evaluate_executability(node, [], running_node_ids=frozenset({"i"}))

    assert result.reason == "Node is already running"


def test_locked_node_is_not_executable():
    result = evaluate_executability(instruction_node("i", locked=True), [])

    assert not result.executable
    assert result.reason == "Node is locked"


def test_running_takes_precedence_over_locked():
    result = evaluate_executability(
        instruction_node("i", locked=True), [], running_node_ids={"i"}
    )

    assert result.reason == "Node is already running"


def test_comment_nodes_never_run():
    node = CommentNode(id="c", data=TextNodeData(text="note"))

    result = evaluate_executability(node, [edge("x", "c")])

    assert not result.executable
    assert result.reason == "Comment nodes cannot be run"


def test_generation_nodes_need_an_incoming_edge():
    for node in (image_node("n"), speech_node("n"), text_node("n")):
        assert not evaluate_executability(node, []).executable
        assert not evaluate_executability(node, [edge("n", "other")]).executable
        assert evaluate_executability(node, [edge("src", "n")]).executable


def test_evaluation_is_pure():
    node = image_node("img")
    edges = [edge("a", "img")]

    first = evaluate_executability(node, edges)
    second = evaluate_executability(node, edges)

    assert first == second
    assert edges == [edge("a", "img")]
