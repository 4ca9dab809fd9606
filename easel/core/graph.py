"""Canvas graph data structures for Easel.

Nodes and edges are immutable pydantic models mirroring the React Flow
document the canvas edits. A node is a tagged union over its ``type``;
every variant carries a ``data`` payload with an ``isLocked`` flag.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


MAX_TEXT_LENGTH = 10000


class NodeType(str, Enum):
    """Node type tags as they appear in the canvas document."""

    TEXT_EDITOR = "textEditor"
    IMAGE = "image"
    SPEECH = "speech"
    COMMENT = "comment"
    INSTRUCTION = "instruction"


class ImageStyle(str, Enum):
    """Rendering styles an image node can request."""

    AUTO = "auto"
    ANIME = "anime"
    PIXEL_ART = "pixel-art"
    CYBERPUNK = "cyberpunk"
    MODEL_3D = "3d-model"
    LOW_POLY = "low-poly"
    LINE_ART = "line-art"
    WATERCOLOR = "watercolor"
    POP_ART = "pop-art"
    SURREALISM = "surrealism"


class _Frozen(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class Position(_Frozen):
    x: float
    y: float


class NodeData(_Frozen):
    """Payload fields shared by every node type."""

    is_locked: bool = Field(False, alias="isLocked")


class TextNodeData(NodeData):
    """Payload for text-editor, comment and instruction nodes."""

    text: str = ""


class ImageNodeData(NodeData):
    image_url: Optional[str] = Field(None, alias="imageUrl")
    style: ImageStyle = ImageStyle.AUTO


class SpeechNodeData(NodeData):
    """Speech audio lives in a side record, not on the node."""

    pass


class BaseCanvasNode(_Frozen):
    """Fields common to every node variant."""

    id: str
    position: Position = Field(default_factory=lambda: Position(x=0, y=0))
    z_index: Optional[int] = Field(None, alias="zIndex")
    width: Optional[float] = None
    height: Optional[float] = None

    @property
    def is_locked(self) -> bool:
        return self.data.is_locked

    def with_data(self, **changes: Any) -> "BaseCanvasNode":
        """Return a copy of this node with payload fields replaced.

        The new payload is validated, so enum fields are coerced and
        unknown values are rejected.

        Raises:
            pydantic.ValidationError: If a changed field is invalid
        """
        data = type(self.data).model_validate({**self.data.model_dump(), **changes})
        return self.model_copy(update={"data": data})


class TextEditorNode(BaseCanvasNode):
    type: Literal["textEditor"] = "textEditor"
    data: TextNodeData = Field(default_factory=TextNodeData)


class ImageNode(BaseCanvasNode):
    type: Literal["image"] = "image"
    data: ImageNodeData = Field(default_factory=ImageNodeData)


class SpeechNode(BaseCanvasNode):
    type: Literal["speech"] = "speech"
    data: SpeechNodeData = Field(default_factory=SpeechNodeData)


class CommentNode(BaseCanvasNode):
    type: Literal["comment"] = "comment"
    data: TextNodeData = Field(default_factory=TextNodeData)


class InstructionNode(BaseCanvasNode):
    type: Literal["instruction"] = "instruction"
    data: TextNodeData = Field(default_factory=TextNodeData)


CanvasNode = Annotated[
    Union[TextEditorNode, ImageNode, SpeechNode, CommentNode, InstructionNode],
    Field(discriminator="type"),
]

NODE_CLASSES = {
    NodeType.TEXT_EDITOR: TextEditorNode,
    NodeType.IMAGE: ImageNode,
    NodeType.SPEECH: SpeechNode,
    NodeType.COMMENT: CommentNode,
    NodeType.INSTRUCTION: InstructionNode,
}

TEXT_NODE_TYPES = frozenset(
    {NodeType.TEXT_EDITOR, NodeType.COMMENT, NodeType.INSTRUCTION}
)

_node_adapter = TypeAdapter(CanvasNode)


def parse_node(data: Dict[str, Any]) -> BaseCanvasNode:
    """Validate a raw node dictionary into its concrete node class."""
    return _node_adapter.validate_python(data)


class Edge(_Frozen):
    """Directed connection feeding the source node's output into the target."""

    id: str
    source: str
    target: str
    type: Literal["default"] = "default"
    animated: Optional[bool] = None


@dataclass(frozen=True)
class Graph:
    """Immutable snapshot of a canvas: ordered nodes and ordered edges.

    Attributes:
        nodes: Nodes in document order
        edges: Edges in document order
    """

    nodes: Tuple[BaseCanvasNode, ...] = ()
    edges: Tuple[Edge, ...] = ()

    def get_node(self, node_id: str) -> Optional[BaseCanvasNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def has_node(self, node_id: str) -> bool:
        return self.get_node(node_id) is not None

    def incoming_edges(self, node_id: str) -> List[Edge]:
        """Edges terminating at a node, in edge order."""
        return [edge for edge in self.edges if edge.target == node_id]

    def outgoing_edges(self, node_id: str) -> List[Edge]:
        """Edges starting at a node, in edge order."""
        return [edge for edge in self.edges if edge.source == node_id]
