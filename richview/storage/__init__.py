from .stores import KeyValueStore, MemoryStore, FileStore, create_store
from .gateway import DocumentGateway
from .default_value import DEFAULT_VALUE

__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "FileStore",
    "create_store",
    "DocumentGateway",
    "DEFAULT_VALUE",
]
