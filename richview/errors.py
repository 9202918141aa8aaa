"""
Exception types raised by the editor core.

User-facing paths (loading a snapshot, inserting into a replaced document,
unrecognized drop payloads) catch these and degrade to no-ops. Anything that
escapes to the caller is a programming or schema-authoring defect.
"""


class RichViewError(Exception):
    pass


class DocumentError(RichViewError):
    """Raised when a tree transform is given arguments it cannot apply."""
    pass


class NodeNotFoundError(DocumentError, KeyError):
    """Raised when a key does not identify a node of the document."""

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"No node with key {self.key!r} in document"


class SnapshotError(RichViewError):
    """Raised when a persisted snapshot cannot be turned into a document."""
    pass


class SchemaError(RichViewError):
    """Raised when a tree cannot be normalized. Always a schema defect."""
    pass


class SelectionError(RichViewError):
    pass


class StaleTargetError(SelectionError):
    """Raised when a range points at nodes the current document no longer has."""
    pass


class UnknownCommandError(RichViewError):
    pass


class InvalidCommandValueError(RichViewError, ValueError):
    """Raised when a control passes a value its command does not accept."""
    pass
