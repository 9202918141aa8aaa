"""
Document - Immutable root of the content tree.

A Document never changes after construction. Transforms return a new
Document that rebuilds only the path from the root to the edited node;
every sibling subtree is shared with the previous version.

Each Document carries an arena index built once per version:

    key -> (node, parent_key, position)

Parent entries are keys, not references, so ancestor walks follow the index
and nodes never point back at their parents.

Usage:
    doc = Document([Block.create_text_block("paragraph", "Hello")])
    para = doc.nodes[0]
    doc2 = doc.replace_type(para.key, "heading-one")
    doc2.get_parent(para.key) is doc2          # True
    doc.get_node(para.key).type                # "paragraph", doc is untouched
"""

from __future__ import annotations
from typing import Any, Callable, Iterable, Iterator, NamedTuple, TYPE_CHECKING

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from ..errors import DocumentError, NodeNotFoundError, SnapshotError
from .nodes import Block, Node, Text, generate_key
from .path import IndexPath

if TYPE_CHECKING:
    from .serialization import SnapshotModel


class _Entry(NamedTuple):
    node: "Node | Document"
    parent_key: str | None
    position: int


class TextSpan(NamedTuple):
    """A text leaf with its character range inside the owning block."""
    text: Text
    start: int
    end: int


class Document:
    """
    Root container holding an ordered sequence of top-level Blocks.

    Attributes:
        key: Identifier of the root
        nodes: Top-level blocks
    """

    __slots__ = ("key", "nodes", "_index")

    def __init__(self, nodes: Iterable[Node] = (), *, key: str | None = None):
        object.__setattr__(self, "key", key or generate_key())
        object.__setattr__(self, "nodes", tuple(nodes))
        object.__setattr__(self, "_index", self._build_index())

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Document is immutable, cannot set {name!r}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self.key == other.key and self.nodes == other.nodes

    def __hash__(self) -> int:
        return hash((self.key, self.nodes))

    def __repr__(self) -> str:
        return f"Document({self.key}, {len(self.nodes)} nodes)"

    def _build_index(self) -> dict[str, _Entry]:
        index: dict[str, _Entry] = {self.key: _Entry(self, None, 0)}
        stack: list[tuple[str, tuple[Node, ...]]] = [(self.key, self.nodes)]
        while stack:
            parent_key, children = stack.pop()
            for position, node in enumerate(children):
                if not isinstance(node, (Block, Text)):
                    raise DocumentError(f"Invalid node {node!r} under {parent_key!r}")
                if parent_key == self.key and not isinstance(node, Block):
                    raise DocumentError(f"Top-level node {node.key!r} must be a Block")
                if node.key in index:
                    raise DocumentError(f"Duplicate node key {node.key!r}")
                index[node.key] = _Entry(node, parent_key, position)
                if isinstance(node, Block):
                    stack.append((node.key, node.nodes))
        return index

    # =========================================================================
    # Queries
    # =========================================================================

    def _entry(self, key: str) -> _Entry:
        try:
            return self._index[key]
        except KeyError:
            raise NodeNotFoundError(key) from None

    @property
    def node_count(self) -> int:
        """Number of nodes, the root included."""
        return len(self._index)

    def has_node(self, key: str) -> bool:
        return key in self._index

    def get_node(self, key: str) -> "Node | Document":
        return self._entry(key).node

    def get_block(self, key: str) -> Block:
        node = self.get_node(key)
        if not isinstance(node, Block):
            raise DocumentError(f"Node {key!r} is not a block")
        return node

    def get_parent(self, key: str) -> "Block | Document | None":
        """Get the nearest containing node, or None for the root."""
        parent_key = self._entry(key).parent_key
        if parent_key is None:
            return None
        return self._index[parent_key].node

    def index_of(self, key: str) -> int:
        """Position of the node among its parent's children."""
        entry = self._entry(key)
        if entry.parent_key is None:
            raise DocumentError("The document root has no position")
        return entry.position

    def iter_ancestors(self, key: str) -> Iterator["Block | Document"]:
        """Iterate from the node's parent outward to the root (inclusive)."""
        parent_key = self._entry(key).parent_key
        while parent_key is not None:
            entry = self._index[parent_key]
            yield entry.node
            parent_key = entry.parent_key

    def get_closest(self, key: str, predicate: Callable[[Block], bool]) -> Block | None:
        """
        Walk the ancestors of a node outward and return the first Block
        matching the predicate. The node itself and the root are not tested.
        """
        for ancestor in self.iter_ancestors(key):
            if isinstance(ancestor, Block) and predicate(ancestor):
                return ancestor
        return None

    def get_closest_of_type(self, key: str, type: str) -> Block | None:
        return self.get_closest(key, lambda block: block.type == type)

    def get_closest_block(self, key: str) -> Block:
        """The block itself, or for a text leaf the block that owns it."""
        node = self.get_node(key)
        if isinstance(node, Block):
            return node
        if isinstance(node, Text):
            parent = self.get_parent(key)
            if not isinstance(parent, Block):
                raise DocumentError(f"Text node {key!r} is not inside a block")
            return parent
        raise DocumentError("The document root is not a block")

    def get_path(self, key: str) -> IndexPath:
        indices = []
        entry = self._entry(key)
        while entry.parent_key is not None:
            indices.append(entry.position)
            entry = self._index[entry.parent_key]
        return IndexPath(reversed(indices))

    def common_ancestor(self, key_a: str, key_b: str) -> "Block | Document":
        """Deepest node that contains both nodes (a node contains itself)."""
        chain_a = [key_a] + [n.key for n in self.iter_ancestors(key_a)]
        chain_b = {key_b} | {n.key for n in self.iter_ancestors(key_b)}
        for candidate in chain_a:
            if candidate in chain_b:
                node = self._index[candidate].node
                if isinstance(node, Text):
                    continue
                return node
        return self

    def iter_depth_first(self) -> Iterator[Node]:
        """Iterate all nodes below the root in document order."""
        def walk(nodes: tuple[Node, ...]) -> Iterator[Node]:
            for node in nodes:
                yield node
                if isinstance(node, Block):
                    yield from walk(node.nodes)
        return walk(self.nodes)

    def leaf_blocks(self) -> list[Block]:
        """Blocks without block children (text blocks and void blocks), in order."""
        return [n for n in self.iter_depth_first() if isinstance(n, Block) and n.is_leaf_block]

    def texts(self) -> list[Text]:
        return [n for n in self.iter_depth_first() if isinstance(n, Text)]

    def text_spans(self, block_key: str) -> list[TextSpan]:
        """Text leaves of a leaf block with their block-relative offsets."""
        block = self.get_block(block_key)
        spans = []
        pos = 0
        for text in block.iter_texts():
            spans.append(TextSpan(text, pos, pos + len(text)))
            pos += len(text)
        return spans

    def block_text(self, key: str) -> str:
        return self.get_closest_block(key).text

    def text_length(self, key: str) -> int:
        return len(self.block_text(key))

    # =========================================================================
    # Copy-on-write helpers
    # =========================================================================

    def _with_children(self, parent_key: str, children: Iterable[Node]) -> Document:
        children = tuple(children)
        if parent_key == self.key:
            return Document(children, key=self.key)
        parent = self.get_node(parent_key)
        if not isinstance(parent, Block):
            raise DocumentError(f"Node {parent_key!r} cannot hold children")
        return self._replace(parent.with_nodes(children))

    def _replace(self, node: Node) -> Document:
        """Swap in a new version of an existing node and rebuild its spine."""
        entry = self._entry(node.key)
        while True:
            if entry.parent_key is None:
                raise DocumentError("Cannot replace the document root")
            parent_entry = self._index[entry.parent_key]
            parent = parent_entry.node
            siblings = parent.nodes
            siblings = siblings[:entry.position] + (node,) + siblings[entry.position + 1:]
            if isinstance(parent, Document):
                return Document(siblings, key=self.key)
            node = parent.with_nodes(siblings)
            entry = parent_entry

    def _container(self, key: str) -> "Block | Document":
        node = self.get_node(key)
        if isinstance(node, Text):
            raise DocumentError(f"Text node {key!r} cannot hold children")
        return node

    # =========================================================================
    # Transforms
    # =========================================================================

    def insert_node(self, parent_key: str, index: int, node: Node) -> Document:
        """Insert a node (with its subtree) as a child of parent_key at index."""
        parent = self._container(parent_key)
        if index < 0 or index > len(parent.nodes):
            raise DocumentError(f"Index {index} out of range for {parent_key!r}")
        children = parent.nodes[:index] + (node,) + parent.nodes[index:]
        return self._with_children(parent_key, children)

    def remove_node(self, key: str) -> Document:
        entry = self._entry(key)
        if entry.parent_key is None:
            raise DocumentError("Cannot remove the document root")
        parent = self._index[entry.parent_key].node
        children = parent.nodes[:entry.position] + parent.nodes[entry.position + 1:]
        return self._with_children(entry.parent_key, children)

    def replace_node(self, key: str, node: Node) -> Document:
        if node.key != key:
            raise DocumentError(f"Replacement for {key!r} has key {node.key!r}")
        current = self.get_node(key)
        if current == node:
            return self
        return self._replace(node)

    def replace_type(self, key: str, new_type: str) -> Document:
        block = self.get_block(key)
        if block.type == new_type:
            return self
        return self._replace(block.with_type(new_type))

    def set_data(self, key: str, data: dict[str, Any]) -> Document:
        block = self.get_block(key)
        return self._replace(block.with_data(data))

    def wrap_nodes(self, keys: Iterable[str], wrapper_type: str, wrapper_key: str | None = None) -> Document:
        """
        Move contiguous sibling nodes into a new Block of wrapper_type.

        The wrapper takes the position of the first node; the nodes keep
        their relative order.

        Raises:
            DocumentError: if the nodes are not contiguous siblings
        """
        keys = list(dict.fromkeys(keys))
        if not keys:
            return self
        entries = [self._entry(k) for k in keys]
        parent_keys = {e.parent_key for e in entries}
        if len(parent_keys) != 1 or None in parent_keys:
            raise DocumentError("Only sibling nodes can be wrapped together")
        parent_key = parent_keys.pop()
        positions = sorted(e.position for e in entries)
        if positions != list(range(positions[0], positions[-1] + 1)):
            raise DocumentError("Only contiguous nodes can be wrapped together")
        parent = self._index[parent_key].node
        first, last = positions[0], positions[-1]
        wrapper = Block.create(wrapper_type, parent.nodes[first:last + 1], key=wrapper_key)
        children = parent.nodes[:first] + (wrapper,) + parent.nodes[last + 1:]
        return self._with_children(parent_key, children)

    def unwrap_nodes(self, keys: Iterable[str], wrapper_type: str) -> Document:
        """
        For each node, splice the children of its closest wrapper_type
        ancestor into the ancestor's own position and drop the ancestor.
        Nodes without such an ancestor are skipped.
        """
        document = self
        for key in keys:
            if not document.has_node(key):
                continue
            wrapper = document.get_closest_of_type(key, wrapper_type)
            if wrapper is None:
                continue
            document = document.unwrap_children(wrapper.key)
        return document

    def unwrap_children(self, key: str) -> Document:
        """Replace a block by its children."""
        entry = self._entry(key)
        block = entry.node
        if not isinstance(block, Block) or entry.parent_key is None:
            raise DocumentError(f"Node {key!r} is not a block")
        parent = self._index[entry.parent_key].node
        children = parent.nodes[:entry.position] + block.nodes + parent.nodes[entry.position + 1:]
        return self._with_children(entry.parent_key, children)

    def split_node(self, key: str, position: int, new_key: str | None = None) -> Document:
        """
        Split a block's children at position into two sibling blocks of the
        same type. The left block keeps the key.
        """
        entry = self._entry(key)
        block = entry.node
        if not isinstance(block, Block) or entry.parent_key is None:
            raise DocumentError(f"Node {key!r} is not a block")
        if position < 0 or position > len(block.nodes):
            raise DocumentError(f"Position {position} out of range for {key!r}")
        left = block.with_nodes(block.nodes[:position])
        right = Block.create(block.type, block.nodes[position:], data=block.data, key=new_key)
        parent = self._index[entry.parent_key].node
        children = parent.nodes[:entry.position] + (left, right) + parent.nodes[entry.position + 1:]
        return self._with_children(entry.parent_key, children)

    def split_text(self, key: str, offset: int, new_key: str | None = None) -> Document:
        """Split a text leaf in two at a character offset. No-op at the edges."""
        text = self.get_node(key)
        if not isinstance(text, Text):
            raise DocumentError(f"Node {key!r} is not a text leaf")
        if offset <= 0 or offset >= len(text):
            return self
        left, right = text.split(offset, new_key)
        entry = self._entry(key)
        parent = self._index[entry.parent_key].node
        children = parent.nodes[:entry.position] + (left, right) + parent.nodes[entry.position + 1:]
        return self._with_children(entry.parent_key, children)

    def split_block(self, key: str, offset: int, new_key: str | None = None) -> Document:
        """
        Split a text block at a block-relative character offset.

        The text leaf holding the offset is split; leaves after it move to a
        new block of the same type inserted right after. Either half left
        without text gets an empty text leaf.
        """
        block = self.get_block(key)
        if not block.is_leaf_block:
            raise DocumentError(f"Block {key!r} holds blocks, not text")
        length = len(block.text)
        if offset < 0 or offset > length:
            raise DocumentError(f"Offset {offset} out of range for {key!r}")
        document = self
        position = len(block.nodes)
        for span in self.text_spans(key):
            if span.start <= offset < span.end:
                document = document.split_text(span.text.key, offset - span.start)
                block = document.get_block(key)
                position = block.index_of(span.text.key) + (1 if offset > span.start else 0)
                break
        document = document.split_node(key, position, new_key)
        left = document.get_block(key)
        if not left.nodes:
            document = document.insert_node(key, 0, Text.create())
        right_key = document.get_parent(key).nodes[document.index_of(key) + 1].key
        if not document.get_block(right_key).nodes:
            document = document.insert_node(right_key, 0, Text.create())
        return document

    # =========================================================================
    # Serialization
    # =========================================================================

    def model_dump(self) -> dict[str, Any]:
        """Serialize to the persisted snapshot format."""
        from .serialization import dump_document
        return dump_document(self)

    @classmethod
    def model_load(cls, data: "dict[str, Any] | SnapshotModel") -> Document:
        """
        Build a document from a persisted snapshot.

        Raises:
            SnapshotError: if the data is not a structurally valid snapshot
        """
        from .serialization import load_document
        return load_document(data)

    # =========================================================================
    # pydantic support
    # =========================================================================

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                cls._serialize
            )
        )

    @staticmethod
    def _validate(v: Any) -> Any:
        if isinstance(v, Document):
            return v
        elif isinstance(v, dict):
            try:
                return Document.model_load(v)
            except SnapshotError as e:
                raise ValueError(str(e)) from e
        else:
            raise ValueError(f"Invalid document: {v}")

    @staticmethod
    def _serialize(v: Any) -> Any:
        if isinstance(v, Document):
            return v.model_dump()
        else:
            raise ValueError(f"Invalid document: {v}")

    # =========================================================================
    # Debug
    # =========================================================================

    def debug_tree(self) -> str:
        lines = [f"Document[{self.key}]"]

        def walk(nodes: tuple[Node, ...], depth: int) -> None:
            prefix = "  " * depth
            for node in nodes:
                if isinstance(node, Text):
                    marks = ",".join(sorted(node.mark_types))
                    lines.append(f"{prefix}Text[{node.key}]({node.text!r}{' ' + marks if marks else ''})")
                else:
                    src = f" src={node.data['src']!r}" if "src" in node.data else ""
                    lines.append(f"{prefix}{node.type}[{node.key}]{src}")
                    walk(node.nodes, depth + 1)

        walk(self.nodes, 1)
        return "\n".join(lines)
