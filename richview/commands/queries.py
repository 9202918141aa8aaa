"""Read-only questions about the current selection, used by commands and toolbar state."""

from __future__ import annotations

from ..document import (
    Block,
    Document,
    BLOCK_QUOTE,
    BULLETED_LIST,
    HEADING_ONE,
    HEADING_TWO,
    LIST_ITEM,
    NUMBERED_LIST,
)
from ..selection import Range, leaf_blocks_in, text_in


# block buttons shown on the toolbar, in display order
TOOLBAR_BLOCK_TYPES = (HEADING_ONE, HEADING_TWO, BLOCK_QUOTE, NUMBERED_LIST, BULLETED_LIST)


def has_mark(document: Document, selection: Range, type: str) -> bool:
    """True if any text leaf touched by the selection carries the mark."""
    return any(selected.text.has_mark(type) for selected in text_in(document, selection))


def active_marks(document: Document, selection: Range) -> set[str]:
    marks: set[str] = set()
    for selected in text_in(document, selection):
        marks |= selected.text.mark_types
    return marks


def has_block(document: Document, selection: Range, type: str) -> bool:
    """True if any selected leaf block has the type."""
    return any(block.type == type for block in leaf_blocks_in(document, selection))


def has_parent_of_type(document: Document, selection: Range, type: str) -> bool:
    """True if some selected block sits inside a block of the type."""
    return any(
        document.get_closest_of_type(block.key, type) is not None
        for block in leaf_blocks_in(document, selection)
    )


def is_list_active(document: Document, selection: Range, list_type: str) -> bool:
    """
    Toolbar state of a list button: the selection holds list items and the
    first selected block sits directly in a list of this type.
    """
    blocks = leaf_blocks_in(document, selection)
    if not blocks:
        return False
    parent = document.get_parent(blocks[0].key)
    return (
        has_block(document, selection, LIST_ITEM)
        and isinstance(parent, Block)
        and parent.type == list_type
    )


def list_type_at(document: Document, selection: Range) -> str | None:
    """
    List type governing Tab indentation.

    numbered-list is tested before bulleted-list; when the selection sits
    in both kinds the numbered one wins.
    """
    for list_type in (NUMBERED_LIST, BULLETED_LIST):
        if has_parent_of_type(document, selection, list_type):
            return list_type
    return None
