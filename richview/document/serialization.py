"""
Snapshot serialization.

Persisted format:

    { "document": { "key", "nodes": [ <node>... ] } }
    container := { "key", "type", "nodes": [<node>...], "data"? }
    image     := { "key", "type": "image", "nodes": [], "data": { "src" } }
    text      := { "key", "text", "marks": [ { "type" } ... ] }

Incoming data is validated with the pydantic models below before any node
is built, so a malformed snapshot fails as a whole with SnapshotError.
"""

from __future__ import annotations
import json
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import DocumentError, SnapshotError
from .document import Document
from .nodes import Block, Mark, Node, Text


class MarkModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    type: str = Field(min_length=1)


class TextModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    key: str = Field(min_length=1)
    text: str
    marks: list[MarkModel] = Field(default_factory=list)


class BlockModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    key: str = Field(min_length=1)
    type: str = Field(min_length=1)
    nodes: list[Union[TextModel, "BlockModel"]] = Field(default_factory=list)
    data: dict[str, Any] = Field(default_factory=dict)


class DocumentModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    key: str = Field(min_length=1)
    nodes: list[BlockModel] = Field(default_factory=list)


class SnapshotModel(BaseModel):
    document: DocumentModel


BlockModel.model_rebuild()


# =============================================================================
# Dump
# =============================================================================

def dump_node(node: Node) -> dict[str, Any]:
    if isinstance(node, Text):
        return {
            "key": node.key,
            "text": node.text,
            "marks": [{"type": m.type} for m in sorted(node.marks)],
        }
    result: dict[str, Any] = {
        "key": node.key,
        "type": node.type,
        "nodes": [dump_node(n) for n in node.nodes],
    }
    if node.data:
        result["data"] = dict(node.data)
    return result


def dump_document(document: Document) -> dict[str, Any]:
    return {
        "document": {
            "key": document.key,
            "nodes": [dump_node(n) for n in document.nodes],
        }
    }


def to_json(document: Document) -> str:
    """Canonical JSON text: sorted keys, no insignificant whitespace."""
    return json.dumps(dump_document(document), sort_keys=True, separators=(",", ":"))


# =============================================================================
# Load
# =============================================================================

def _build_node(model: TextModel | BlockModel) -> Node:
    if isinstance(model, TextModel):
        return Text(key=model.key, text=model.text, marks=frozenset(Mark(m.type) for m in model.marks))
    return Block(
        key=model.key,
        type=model.type,
        nodes=tuple(_build_node(n) for n in model.nodes),
        data=dict(model.data),
    )


def load_document(data: dict[str, Any] | SnapshotModel) -> Document:
    try:
        snapshot = data if isinstance(data, SnapshotModel) else SnapshotModel.model_validate(data)
    except ValidationError as e:
        raise SnapshotError(f"Invalid document snapshot: {e.error_count()} validation errors") from e
    try:
        return Document(
            [_build_node(n) for n in snapshot.document.nodes],
            key=snapshot.document.key,
        )
    except DocumentError as e:
        raise SnapshotError(f"Invalid document snapshot: {e}") from e


def from_json(text: str | bytes) -> Document:
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        raise SnapshotError(f"Snapshot is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise SnapshotError("Snapshot must be a JSON object")
    return load_document(data)
