"""
Block commands.

Range primitives:
- set_blocks: change the type of the selected leaf blocks
- wrap_block: move the selected blocks into a new container
- unwrap_block: lift the selected blocks out of their closest container

and the commands built on them:
- set_block_type: toolbar block buttons, including list toggling
- indent / outdent: Tab and Shift+Tab inside lists
"""

from __future__ import annotations

from ..document import (
    Document,
    BULLETED_LIST,
    LIST_ITEM,
    LIST_TYPES,
    NUMBERED_LIST,
    generate_key,
)
from ..schema import Schema, get_default_schema
from ..selection import Range, leaf_blocks_in
from .queries import has_block, has_parent_of_type, list_type_at


# =============================================================================
# Range primitives
# =============================================================================

def set_blocks(document: Document, selection: Range, type: str, *, schema: Schema | None = None) -> Document:
    """Set the type of every selected non-void leaf block."""
    schema = schema or get_default_schema()
    for block in leaf_blocks_in(document, selection):
        if schema.is_void(block.type):
            continue
        document = document.replace_type(block.key, type)
    return schema.normalize(document)


def wrap_block(document: Document, selection: Range, type: str, *, schema: Schema | None = None) -> Document:
    """
    Wrap the selection in a new block of the type.

    A single selected block is wrapped on its own. Otherwise the children of
    the deepest common ancestor, from the one holding the first selected
    block to the one holding the last, are wrapped together.
    """
    schema = schema or get_default_schema()
    blocks = leaf_blocks_in(document, selection)
    if not blocks:
        return document
    first, last = blocks[0], blocks[-1]
    if first.key == last.key:
        siblings = [first.key]
    else:
        ancestor = document.common_ancestor(first.key, last.key)
        depth = len(document.get_path(ancestor.key))
        start = document.get_path(first.key)[depth]
        end = document.get_path(last.key)[depth]
        siblings = [node.key for node in ancestor.nodes[start:end + 1]]
    document = document.wrap_nodes(siblings, type)
    return schema.normalize(document)


def unwrap_block(document: Document, selection: Range, type: str, *, schema: Schema | None = None) -> Document:
    """
    Lift the selected blocks out of their closest ancestor of the type.

    When only some of the wrapper's children are selected the wrapper is
    split around them, so the unselected children stay wrapped.
    """
    schema = schema or get_default_schema()
    block_keys = [block.key for block in leaf_blocks_in(document, selection)]
    wrapper_keys = []
    for key in block_keys:
        wrapper = document.get_closest_of_type(key, type)
        if wrapper is not None and wrapper.key not in wrapper_keys:
            wrapper_keys.append(wrapper.key)

    for wrapper_key in wrapper_keys:
        if not document.has_node(wrapper_key):
            continue
        wrapper_path = document.get_path(wrapper_key)
        depth = len(wrapper_path)
        matched = sorted({
            document.get_path(key)[depth]
            for key in block_keys
            if document.has_node(key) and wrapper_path.is_strict_ancestor_of(document.get_path(key))
        })
        if not matched:
            continue
        first, last = matched[0], matched[-1]
        wrapper = document.get_block(wrapper_key)
        if last < len(wrapper.nodes) - 1:
            document = document.split_node(wrapper_key, last + 1)
        target = wrapper_key
        if first > 0:
            target = generate_key()
            document = document.split_node(wrapper_key, first, target)
        first_child = document.get_block(target).nodes[0]
        document = document.unwrap_nodes([first_child.key], type)
    return schema.normalize(document)


# =============================================================================
# Commands
# =============================================================================

def set_block_type(document: Document, selection: Range, type: str, *, schema: Schema | None = None) -> Document:
    """
    Toggle the block type of the selection.

    Non-list types:
        The selected blocks become `type`, or the default type when `type` is
        already active. Inside a list both list wrappers are removed as well.

    List types:
        - already in a list of this type: back to default blocks, unwrapped
        - in a list of the other type: swap the wrapper, items are kept
        - not in a list: blocks become list items wrapped in a new list
    """
    schema = schema or get_default_schema()
    default = schema.default_type
    is_list = has_block(document, selection, LIST_ITEM)

    if type not in LIST_TYPES:
        is_active = has_block(document, selection, type)
        document = set_blocks(document, selection, default if is_active else type, schema=schema)
        if is_list:
            document = unwrap_block(document, selection, BULLETED_LIST, schema=schema)
            document = unwrap_block(document, selection, NUMBERED_LIST, schema=schema)
        return document

    is_type = has_parent_of_type(document, selection, type)
    if is_list and is_type:
        document = set_blocks(document, selection, default, schema=schema)
        document = unwrap_block(document, selection, BULLETED_LIST, schema=schema)
        document = unwrap_block(document, selection, NUMBERED_LIST, schema=schema)
    elif is_list:
        other = NUMBERED_LIST if type == BULLETED_LIST else BULLETED_LIST
        document = unwrap_block(document, selection, other, schema=schema)
        document = wrap_block(document, selection, type, schema=schema)
    else:
        document = set_blocks(document, selection, LIST_ITEM, schema=schema)
        document = wrap_block(document, selection, type, schema=schema)
    return document


def can_indent(document: Document, selection: Range) -> bool:
    """Tab only acts on list items inside a list."""
    return has_block(document, selection, LIST_ITEM) and list_type_at(document, selection) is not None


def indent(document: Document, selection: Range, *, schema: Schema | None = None) -> Document:
    """Nest the selected list items one level deeper in a list of the same type."""
    if not has_block(document, selection, LIST_ITEM):
        return document
    list_type = list_type_at(document, selection)
    if list_type is None:
        return document
    document = set_blocks(document, selection, LIST_ITEM, schema=schema)
    return wrap_block(document, selection, list_type, schema=schema)


def outdent(document: Document, selection: Range, *, schema: Schema | None = None) -> Document:
    """Lift the selected list items out of one level of their list."""
    if not has_block(document, selection, LIST_ITEM):
        return document
    list_type = list_type_at(document, selection)
    if list_type is None:
        return document
    return unwrap_block(document, selection, list_type, schema=schema)
