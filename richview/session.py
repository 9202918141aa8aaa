"""
EditorSession - owns the active document and selection.

Every edit is snapshot-then-replace: a command computes a new Document from
the current one and the session swaps it in. Old snapshots stay valid and
unchanged. Subscribers are called with each published snapshot, which is
how a renderer follows the editor.
"""

from __future__ import annotations
import logging
from typing import Callable

from . import commands
from .document import Document, generate_key, MARK_TYPES, LIST_TYPES
from .errors import SelectionError, StaleTargetError
from .schema import Schema, get_default_schema
from .selection import Point, Range, is_valid, resolve_point
from .storage import DocumentGateway


logger = logging.getLogger(__name__)


Listener = Callable[[Document], None]


class EditorSession:
    """
    Attributes:
        schema: Schema every published document is normalized with
        gateway: Where the document is saved and loaded
        generation: Bumped on reset; async work from an older generation is dropped
        version: Bumped on every published snapshot
    """

    def __init__(
        self,
        document: Document | None = None,
        selection: Range | None = None,
        *,
        schema: Schema | None = None,
        gateway: DocumentGateway | None = None,
    ):
        self.schema = schema or get_default_schema()
        self.gateway = gateway if gateway is not None else DocumentGateway(schema=self.schema)
        if document is None:
            document = self.gateway.load()
        self._document = self.schema.normalize(document)
        self._selection = self._start_of(self._document)
        self._generation = 0
        self._version = 0
        self._listeners: list[Listener] = []
        if selection is not None:
            self.select(selection)

    @property
    def document(self) -> Document:
        return self._document

    @property
    def selection(self) -> Range:
        return self._selection

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def version(self) -> int:
        return self._version

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener with every published document. Returns an unsubscribe function."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _start_of(self, document: Document) -> Range:
        return Range.collapsed(document.leaf_blocks()[0].key, 0)

    def _publish(self, document: Document, selection: Range | None = None) -> bool:
        if document is self._document and selection is None:
            return False
        self._document = document
        if selection is not None:
            self._selection = selection
        elif not is_valid(document, self._selection):
            self._selection = self._start_of(document)
        self._version += 1
        for listener in list(self._listeners):
            listener(document)
        return True

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def select(self, selection: Range) -> Range:
        """
        Move the selection. Points are stored in leaf-block form.

        Raises:
            SelectionError: if the range is not part of the current document
        """
        if not is_valid(self._document, selection):
            raise SelectionError(f"Range {selection!r} is not part of document {self._document.key!r}")
        self._selection = Range(
            anchor=resolve_point(self._document, selection.anchor),
            focus=resolve_point(self._document, selection.focus),
        )
        return self._selection

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def has_mark(self, type: str) -> bool:
        return commands.has_mark(self._document, self._selection, type)

    def has_block(self, type: str) -> bool:
        return commands.has_block(self._document, self._selection, type)

    def is_list_active(self, list_type: str) -> bool:
        return commands.is_list_active(self._document, self._selection, list_type)

    def toolbar_state(self) -> dict[str, bool]:
        """Active state of each toolbar button, keyed by mark or block type."""
        state = {mark: self.has_mark(mark) for mark in MARK_TYPES}
        for block_type in commands.TOOLBAR_BLOCK_TYPES:
            if block_type in LIST_TYPES:
                state[block_type] = self.is_list_active(block_type)
            else:
                state[block_type] = self.has_block(block_type)
        return state

    # -------------------------------------------------------------------------
    # Edits
    # -------------------------------------------------------------------------

    def toggle_mark(self, type: str) -> bool:
        document = commands.toggle_mark(self._document, self._selection, type, schema=self.schema)
        return self._publish(document)

    def set_block_type(self, type: str) -> bool:
        document = commands.set_block_type(self._document, self._selection, type, schema=self.schema)
        return self._publish(document)

    def indent(self) -> bool:
        """Tab. Returns False outside a list, leaving the key to the host."""
        if not commands.can_indent(self._document, self._selection):
            return False
        self._publish(commands.indent(self._document, self._selection, schema=self.schema))
        return True

    def outdent(self) -> bool:
        """Shift+Tab. Returns False outside a list."""
        if not commands.can_indent(self._document, self._selection):
            return False
        self._publish(commands.outdent(self._document, self._selection, schema=self.schema))
        return True

    def insert_image(self, src: str, target: Range | None = None, generation: int | None = None) -> bool:
        """
        Insert an image at the target, or at the selection when there is none.
        The selection then sits on the new image.

        `generation` is the session generation observed when the insert was
        requested. An insert requested before a reset, or aimed at nodes the
        document no longer has, is dropped and False is returned.
        """
        if generation is not None and generation != self._generation:
            logger.info("Dropping image insert from generation %d, session is at %d", generation, self._generation)
            return False
        key = generate_key()
        try:
            document = commands.insert_image(
                self._document, self._selection, src, target, key=key, schema=self.schema,
            )
        except StaleTargetError as e:
            logger.info("Dropping image insert: %s", e)
            return False
        self._publish(document, Range(anchor=Point(key=key), focus=Point(key=key)))
        return True

    def insert_images(self, sources: list[str]) -> int:
        """Insert several images one after the other at the selection. Returns how many were inserted."""
        return sum(1 for src in sources if src and self.insert_image(src))

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def save(self) -> str:
        return self.gateway.save(self._document)

    def reset(self) -> Document:
        """
        Drop the saved document and start over from the default. Pending
        async inserts from before the reset will not apply.
        """
        document = self.gateway.reset()
        self._generation += 1
        self._publish(document, self._start_of(document))
        return document
