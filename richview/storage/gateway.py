"""
Persistence gateway.

Saves the document as canonical JSON under one fixed key and loads it back
at session start. Loading never fails: anything that is missing, malformed
or structurally invalid falls back to the bundled default document.
"""

from __future__ import annotations
import logging

from ..config import get_settings
from ..document import Document, from_json, to_json
from ..errors import SchemaError, SnapshotError
from ..schema import Schema, get_default_schema
from .default_value import DEFAULT_VALUE
from .stores import KeyValueStore, create_store


logger = logging.getLogger(__name__)


class DocumentGateway:
    """
    Attributes:
        store: Key-value store holding the snapshot
        key: Storage key, overwritten wholesale on every save
        schema: Schema loaded documents are normalized with
    """

    def __init__(self, store: KeyValueStore | None = None, *, key: str | None = None, schema: Schema | None = None):
        self.store = store if store is not None else create_store()
        self.key = key or get_settings().storage_key
        self.schema = schema or get_default_schema()

    def default_document(self) -> Document:
        return self.schema.normalize(Document.model_load(DEFAULT_VALUE))

    def save(self, document: Document) -> str:
        payload = to_json(document)
        self.store.set(self.key, payload)
        logger.info("Saved document %s under %r (%d bytes)", document.key, self.key, len(payload))
        return payload

    def load(self) -> Document:
        payload = self.store.get(self.key)
        if payload is None:
            logger.debug("No saved document under %r, using default", self.key)
            return self.default_document()
        try:
            document = from_json(payload)
            return self.schema.normalize(document)
        except (SnapshotError, SchemaError) as e:
            logger.warning("Saved document under %r is invalid, using default: %s", self.key, e)
            return self.default_document()

    def reset(self) -> Document:
        """Forget the saved document and return a fresh default."""
        self.store.delete(self.key)
        logger.info("Deleted saved document under %r", self.key)
        return self.default_document()
