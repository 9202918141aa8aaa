from .document import Document, Block, Text, Mark, IndexPath, to_json, from_json
from .schema import Schema, Rule, get_default_schema
from .selection import Point, Range
from .session import EditorSession
from .events import EventDispatcher, KeyEvent, ClickEvent, TransferEvent, DataTransfer, FileBlob
from .storage import DocumentGateway, MemoryStore, FileStore
from .render import render_html
from .config import EditorSettings, get_settings
from .errors import (
    RichViewError,
    DocumentError,
    NodeNotFoundError,
    SnapshotError,
    SchemaError,
    SelectionError,
    StaleTargetError,
    UnknownCommandError,
    InvalidCommandValueError,
)

__all__ = [
    "Document",
    "Block",
    "Text",
    "Mark",
    "IndexPath",
    "to_json",
    "from_json",
    "Schema",
    "Rule",
    "get_default_schema",
    "Point",
    "Range",
    "EditorSession",
    "EventDispatcher",
    "KeyEvent",
    "ClickEvent",
    "TransferEvent",
    "DataTransfer",
    "FileBlob",
    "DocumentGateway",
    "MemoryStore",
    "FileStore",
    "render_html",
    "EditorSettings",
    "get_settings",
    "RichViewError",
    "DocumentError",
    "NodeNotFoundError",
    "SnapshotError",
    "SchemaError",
    "SelectionError",
    "StaleTargetError",
    "UnknownCommandError",
    "InvalidCommandValueError",
]
