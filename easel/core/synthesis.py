"""Node synthesis: building the node and edge produced by another node.

Synthesized nodes are placed directly below the node that produced
them so chained generations read top to bottom.
"""

from typing import Callable, List, Optional, Tuple
import uuid

from easel.core.graph import (
    NODE_CLASSES,
    BaseCanvasNode,
    Edge,
    ImageNodeData,
    ImageStyle,
    NodeData,
    NodeType,
    Position,
    SpeechNodeData,
    TextEditorNode,
    TextNodeData,
)
from easel.utils.errors import InvalidNodeTypeError


VERTICAL_GAP = 300
TEXT_EDITOR_SIZE = (270, 170)
SEED_TEXT = "This is a text node."
SEED_SIZE = (280, 180)


def resolve_node_type(node_type: str) -> NodeType:
    """Map a type tag to NodeType.

    Raises:
        InvalidNodeTypeError: If the tag is not a known node type
    """
    try:
        return NodeType(node_type)
    except ValueError:
        raise InvalidNodeTypeError(
            f"Unknown node type '{node_type}'. "
            f"Available types: {', '.join(t.value for t in NodeType)}"
        )


def default_node_data(node_type: str) -> NodeData:
    """Default payload for a freshly created node of a type."""
    resolved = resolve_node_type(node_type)
    if resolved == NodeType.IMAGE:
        return ImageNodeData(image_url=None, style=ImageStyle.AUTO, is_locked=False)
    if resolved == NodeType.SPEECH:
        return SpeechNodeData(is_locked=False)
    return TextNodeData(text="", is_locked=False)


def initial_nodes(id_factory: Callable[[], str] = None) -> List[BaseCanvasNode]:
    """Nodes a new canvas starts with: a single text node at the origin."""
    make_id = id_factory or (lambda: str(uuid.uuid4()))
    width, height = SEED_SIZE
    return [
        TextEditorNode(
            id=make_id(),
            position=Position(x=0, y=0),
            data=TextNodeData(text=SEED_TEXT, is_locked=False),
            width=width,
            height=height,
        )
    ]


class NodeSynthesizer:
    """Builds a new node of a requested type and the edge from its origin.

    Example:
        >>> synthesizer = NodeSynthesizer()
        >>> node, edge = synthesizer.synthesize("image", anchor, style_hint="anime")
        >>> node.data.style
        <ImageStyle.ANIME: 'anime'>
        >>> (edge.source, edge.target) == (anchor.id, node.id)
        True
    """

    def __init__(self, id_factory: Optional[Callable[[], str]] = None):
        """Initialize synthesizer.

        Args:
            id_factory: Generates node ids; defaults to uuid4 strings
        """
        self.id_factory = id_factory or (lambda: str(uuid.uuid4()))

    def synthesize(
        self,
        desired_type: str,
        anchor: BaseCanvasNode,
        style_hint: Optional[str] = None,
    ) -> Tuple[BaseCanvasNode, Edge]:
        """Create a node below the anchor and the edge linking them.

        The pair must be committed together.

        Args:
            desired_type: Type tag of the node to create
            anchor: Node the new one is generated from
            style_hint: Style to use instead of the default, images only

        Returns:
            Tuple of (new node, new edge)

        Raises:
            InvalidNodeTypeError: If desired_type is unknown
        """
        node_type = resolve_node_type(desired_type)
        node_id = self.id_factory()

        data = default_node_data(node_type)
        if node_type == NodeType.IMAGE and style_hint is not None:
            data = data.model_copy(update={"style": ImageStyle(style_hint)})

        fields = {
            "id": node_id,
            "position": Position(x=anchor.position.x, y=anchor.position.y + VERTICAL_GAP),
            "data": data,
        }
        if node_type == NodeType.TEXT_EDITOR:
            fields["width"], fields["height"] = TEXT_EDITOR_SIZE

        node = NODE_CLASSES[node_type](**fields)
        edge = Edge(
            id=f"edge-{anchor.id}-{node_id}",
            source=anchor.id,
            target=node_id,
            type="default",
        )
        return node, edge
