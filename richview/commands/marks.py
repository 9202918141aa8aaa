"""
Mark commands.

Leaves partly covered by the selection are split at the range edges before
marks change, so only the selected characters are affected. The schema
merges equal neighbours back afterwards.
"""

from __future__ import annotations

from ..document import Document, generate_key
from ..schema import Schema, get_default_schema
from ..selection import Range, text_in
from .queries import has_mark


def _isolate_selected_text(document: Document, selection: Range) -> tuple[Document, list[str]]:
    """Split leaves at the range edges and return the keys of the selected leaves."""
    keys = []
    for selected in text_in(document, selection):
        if selected.start == selected.end:
            continue
        key = selected.text.key
        if selected.start > 0:
            right_key = generate_key()
            document = document.split_text(key, selected.start, right_key)
            key = right_key
        remaining = len(selected.text) - selected.start
        if selected.end - selected.start < remaining:
            document = document.split_text(key, selected.end - selected.start)
        keys.append(key)
    return document, keys


def add_mark(document: Document, selection: Range, type: str, *, schema: Schema | None = None) -> Document:
    schema = schema or get_default_schema()
    document, keys = _isolate_selected_text(document, selection)
    for key in keys:
        text = document.get_node(key)
        document = document.replace_node(key, text.add_mark(type))
    return schema.normalize(document)


def remove_mark(document: Document, selection: Range, type: str, *, schema: Schema | None = None) -> Document:
    schema = schema or get_default_schema()
    document, keys = _isolate_selected_text(document, selection)
    for key in keys:
        text = document.get_node(key)
        document = document.replace_node(key, text.remove_mark(type))
    return schema.normalize(document)


def toggle_mark(document: Document, selection: Range, type: str, *, schema: Schema | None = None) -> Document:
    """
    Remove the mark from every selected leaf if any of them has it,
    otherwise add it to all of them. A collapsed selection changes nothing.
    """
    if has_mark(document, selection, type):
        return remove_mark(document, selection, type, schema=schema)
    return add_mark(document, selection, type, schema=schema)
