"""Executability rules deciding whether a node may be run.

Evaluation is a pure function of the node, the edge collection and the
set of node ids currently running. A node that cannot run is a normal
outcome reported through ``Executability.reason``, never an exception.
"""

from dataclasses import dataclass
from typing import AbstractSet, Callable, Dict, Iterable, List, Optional

from easel.core.graph import BaseCanvasNode, Edge, NodeType


@dataclass(frozen=True)
class Executability:
    """Result of evaluating a node.

    Attributes:
        executable: Whether the run action is allowed
        reason: Human-readable explanation when it is not
    """

    executable: bool
    reason: Optional[str] = None

    @classmethod
    def ok(cls) -> "Executability":
        return cls(executable=True)

    @classmethod
    def blocked(cls, reason: str) -> "Executability":
        return cls(executable=False, reason=reason)


Rule = Callable[[BaseCanvasNode, List[Edge]], Optional[str]]


def _never(reason: str) -> Rule:
    return lambda node, incoming: reason


def _requires_input(reason: str) -> Rule:
    return lambda node, incoming: None if incoming else reason


def _requires_text(reason: str) -> Rule:
    return lambda node, incoming: None if node.data.text.strip() else reason


TYPE_RULES: Dict[str, Rule] = {
    NodeType.COMMENT: _never("Comment nodes cannot be run"),
    NodeType.INSTRUCTION: _requires_text("Instruction is empty"),
    NodeType.TEXT_EDITOR: _requires_input("Connect an input node to generate text"),
    NodeType.IMAGE: _requires_input("Connect a text or image node to generate an image"),
    NodeType.SPEECH: _requires_input("Connect a text node to generate speech"),
}


def evaluate_executability(
    node: BaseCanvasNode,
    edges: Iterable[Edge],
    running_node_ids: AbstractSet[str] = frozenset(),
) -> Executability:
    """Decide whether a node may be run.

    Rules apply in order and the first failing one wins: the node must
    not be running, must not be locked, and must satisfy its type rule.

    Args:
        node: Node to evaluate
        edges: Current edge collection
        running_node_ids: Ids of nodes with an in-flight execution

    Returns:
        Executability with a reason when the node cannot run
    """
    if node.id in running_node_ids:
        return Executability.blocked("Node is already running")
    if node.is_locked:
        return Executability.blocked("Node is locked")

    rule = TYPE_RULES.get(node.type)
    if rule is None:
        return Executability.blocked(f"Unsupported node type: {node.type}")

    incoming = [edge for edge in edges if edge.target == node.id]
    reason = rule(node, incoming)
    if reason:
        return Executability.blocked(reason)
    return Executability.ok()
