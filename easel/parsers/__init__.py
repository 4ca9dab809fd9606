"""Parsers for converting canvas documents to Easel graphs."""

from easel.parsers.react_flow import ReactFlowParser, ReactFlowJSON, node_to_dict, edge_to_dict

__all__ = [
    "ReactFlowParser",
    "ReactFlowJSON",
    "node_to_dict",
    "edge_to_dict",
]
