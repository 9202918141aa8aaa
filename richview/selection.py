"""
Selection - Cursor and range over a document.

A Point is (key, offset). The key normally names a leaf block (a text block
or a void block) and the offset counts characters across all of that
block's text leaves. Points may also name a text leaf (offset inside that
leaf) or a container (offset counts children); both are resolved to the
leaf-block form before use.

Keeping offsets block-relative means a selection stays valid while marks
split and merge the text leaves of a block.
"""

from __future__ import annotations
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field

from .document import Block, Document, Text
from .errors import NodeNotFoundError, SelectionError


class Point(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    offset: int = Field(default=0, ge=0)


class Range(BaseModel):
    """
    Attributes:
        anchor: Where the selection started
        focus: Where the selection ends (the moving end)
    """
    model_config = ConfigDict(frozen=True)

    anchor: Point
    focus: Point

    @classmethod
    def collapsed(cls, key: str, offset: int = 0) -> Range:
        point = Point(key=key, offset=offset)
        return cls(anchor=point, focus=point)

    @classmethod
    def between(cls, anchor_key: str, anchor_offset: int, focus_key: str, focus_offset: int) -> Range:
        return cls(
            anchor=Point(key=anchor_key, offset=anchor_offset),
            focus=Point(key=focus_key, offset=focus_offset),
        )

    @property
    def is_collapsed(self) -> bool:
        return self.anchor == self.focus


class SelectedText(NamedTuple):
    """
    A text leaf touched by a range.

    start/end are offsets inside the text leaf itself.
    """
    block_key: str
    text: Text
    start: int
    end: int


# =============================================================================
# Resolution against a document
# =============================================================================

def _descend(document: Document, container: "Block | Document", offset: int) -> Point:
    while not (isinstance(container, Block) and container.is_leaf_block):
        if not container.nodes:
            raise SelectionError(f"Container {container.key!r} is empty")
        if offset >= len(container.nodes):
            container = container.nodes[-1]
            while isinstance(container, Block) and not container.is_leaf_block:
                container = container.nodes[-1]
            return Point(key=container.key, offset=len(container.text))
        container = container.nodes[offset]
        offset = 0
    return Point(key=container.key, offset=offset)


def resolve_point(document: Document, point: Point) -> Point:
    """
    Express a point as (leaf block key, block-relative character offset).

    Raises:
        NodeNotFoundError: if the key is not in the document
        SelectionError: if the offset is out of range
    """
    node = document.get_node(point.key)
    if isinstance(node, Text):
        block = document.get_closest_block(node.key)
        for span in document.text_spans(block.key):
            if span.text.key == node.key:
                if point.offset > len(node):
                    raise SelectionError(f"Offset {point.offset} out of range for text {node.key!r}")
                return Point(key=block.key, offset=span.start + point.offset)
    if isinstance(node, Block) and node.is_leaf_block:
        if point.offset > len(node.text):
            raise SelectionError(f"Offset {point.offset} out of range for block {node.key!r}")
        return point
    return _descend(document, node, point.offset)


def _sort_key(document: Document, point: Point) -> tuple:
    return (document.get_path(point.key), point.offset)


def resolve(document: Document, selection: Range) -> tuple[Point, Point]:
    """Resolved (start, end) of a range in document order."""
    anchor = resolve_point(document, selection.anchor)
    focus = resolve_point(document, selection.focus)
    if _sort_key(document, focus) < _sort_key(document, anchor):
        return focus, anchor
    return anchor, focus


def is_valid(document: Document, selection: Range) -> bool:
    """True if both ends of the range exist in this document version."""
    try:
        resolve(document, selection)
    except (NodeNotFoundError, SelectionError):
        return False
    return True


def collapse_to_start(document: Document, selection: Range) -> Range:
    start, _ = resolve(document, selection)
    return Range(anchor=start, focus=start)


def leaf_blocks_in(document: Document, selection: Range) -> list[Block]:
    """Leaf blocks from the start block to the end block, in document order."""
    start, end = resolve(document, selection)
    blocks = document.leaf_blocks()
    keys = [b.key for b in blocks]
    return blocks[keys.index(start.key):keys.index(end.key) + 1]


def text_in(document: Document, selection: Range) -> list[SelectedText]:
    """
    Text leaves touched by the range.

    A collapsed range touches the leaf that ends at the cursor, or the first
    leaf when the cursor is at offset 0. An expanded range touches every
    leaf that overlaps it.
    """
    start, end = resolve(document, selection)
    if start == end:
        for span in document.text_spans(start.key):
            if span.start < start.offset <= span.end or start.offset == 0:
                local = start.offset - span.start
                return [SelectedText(start.key, span.text, local, local)]
        return []

    selected = []
    for block in leaf_blocks_in(document, selection):
        lo = start.offset if block.key == start.key else 0
        hi = end.offset if block.key == end.key else len(block.text)
        for span in document.text_spans(block.key):
            if span.start < hi and lo < span.end:
                selected.append(SelectedText(
                    block.key,
                    span.text,
                    max(lo, span.start) - span.start,
                    min(hi, span.end) - span.start,
                ))
    return selected


def select_blocks(document: Document, first_key: str, last_key: str | None = None) -> Range:
    """Range from the start of one block to the end of another (or the same) block."""
    last_key = last_key or first_key
    first = resolve_point(document, Point(key=first_key, offset=0))
    last_block = document.get_node(last_key)
    if isinstance(last_block, Block) and last_block.is_leaf_block:
        last = Point(key=last_key, offset=len(last_block.text))
    else:
        last = resolve_point(document, Point(key=last_key, offset=len(last_block.nodes)))
    return Range(anchor=first, focus=last)
