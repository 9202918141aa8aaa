"""
Command engine.

Pure functions (document, selection, *args) -> document. Every result is
normalized by the schema before it is returned.
"""

from .queries import (
    TOOLBAR_BLOCK_TYPES,
    has_mark,
    active_marks,
    has_block,
    has_parent_of_type,
    is_list_active,
    list_type_at,
)
from .marks import add_mark, remove_mark, toggle_mark
from .blocks import (
    set_blocks,
    wrap_block,
    unwrap_block,
    set_block_type,
    can_indent,
    indent,
    outdent,
)
from .images import insert_block, insert_image
from .registry import Command, CommandMeta, run_command

__all__ = [
    "TOOLBAR_BLOCK_TYPES",
    "has_mark",
    "active_marks",
    "has_block",
    "has_parent_of_type",
    "is_list_active",
    "list_type_at",
    "add_mark",
    "remove_mark",
    "toggle_mark",
    "set_blocks",
    "wrap_block",
    "unwrap_block",
    "set_block_type",
    "can_indent",
    "indent",
    "outdent",
    "insert_block",
    "insert_image",
    "Command",
    "CommandMeta",
    "run_command",
]
