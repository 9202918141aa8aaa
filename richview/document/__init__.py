"""
Document model - immutable content tree.

This module provides:
- Document: Root of the tree with an arena index and copy-on-write transforms
- Block: Structural container (paragraph, heading, list, list item, image)
- Text: Leaf holding a character run and its marks
- Mark: Formatting annotation (bold, italic, underlined, code)
- IndexPath: Position of a node, ordered in document order
- to_json / from_json: Canonical snapshot serialization
"""

from .nodes import (
    Block,
    Mark,
    Node,
    Text,
    generate_key,
    PARAGRAPH,
    HEADING_ONE,
    HEADING_TWO,
    BLOCK_QUOTE,
    BULLETED_LIST,
    NUMBERED_LIST,
    LIST_ITEM,
    IMAGE,
    LIST_TYPES,
    BOLD,
    ITALIC,
    UNDERLINED,
    CODE,
    MARK_TYPES,
)
from .path import IndexPath
from .document import Document, TextSpan
from .serialization import SnapshotModel, to_json, from_json

__all__ = [
    "Document",
    "Block",
    "Text",
    "Mark",
    "Node",
    "IndexPath",
    "TextSpan",
    "SnapshotModel",
    "to_json",
    "from_json",
    "generate_key",
    "PARAGRAPH",
    "HEADING_ONE",
    "HEADING_TWO",
    "BLOCK_QUOTE",
    "BULLETED_LIST",
    "NUMBERED_LIST",
    "LIST_ITEM",
    "IMAGE",
    "LIST_TYPES",
    "BOLD",
    "ITALIC",
    "UNDERLINED",
    "CODE",
    "MARK_TYPES",
]
