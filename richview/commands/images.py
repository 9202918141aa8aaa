"""Image insertion."""

from __future__ import annotations
import logging

from ..document import Block, Document, IMAGE
from ..errors import StaleTargetError
from ..schema import Schema, get_default_schema
from ..selection import Point, Range, is_valid, resolve


logger = logging.getLogger(__name__)


def insert_block(document: Document, point: Point, block: Block, *, schema: Schema | None = None) -> Document:
    """
    Insert a block relative to the leaf block holding the point.

    - void or empty block: after it
    - point at the block start: before it
    - point at the block end: after it
    - otherwise the block is split at the point and the new block goes
      between the two halves
    """
    schema = schema or get_default_schema()
    start_block = document.get_block(point.key)
    parent = document.get_parent(start_block.key)
    index = document.index_of(start_block.key)
    text = start_block.text

    if schema.is_void(start_block.type) or not text:
        return document.insert_node(parent.key, index + 1, block)
    if point.offset == 0:
        return document.insert_node(parent.key, index, block)
    if point.offset >= len(text):
        return document.insert_node(parent.key, index + 1, block)
    document = document.split_block(start_block.key, point.offset)
    return document.insert_node(parent.key, index + 1, block)


def insert_image(
    document: Document,
    selection: Range,
    src: str,
    target: Range | None = None,
    *,
    key: str | None = None,
    schema: Schema | None = None,
) -> Document:
    """
    Insert a void image block with data.src at the selection.

    When a target range is given (drop or paste location) the selection
    moves there first. An expanded selection inserts at its start.

    Raises:
        StaleTargetError: if the range does not exist in this document
    """
    schema = schema or get_default_schema()
    if target is not None:
        selection = target
    if not is_valid(document, selection):
        raise StaleTargetError(f"Insertion target {selection!r} is not part of document {document.key!r}")
    start, _ = resolve(document, selection)
    image = Block.create(IMAGE, data={"src": src}, key=key)
    logger.debug("Inserting image %s at %s:%d", image.key, start.key, start.offset)
    document = insert_block(document, start, image, schema=schema)
    return schema.normalize(document)
