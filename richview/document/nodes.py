"""
Nodes - Immutable building blocks of a document tree.

- Mark: formatting annotation attached to a text leaf
- Text: leaf node holding a character run and a set of marks
- Block: structural container (paragraph, heading, list, image, ...)

Nodes are frozen. Every edit creates new node values; untouched subtrees
are shared between document versions.

Usage:
    para = Block.create("paragraph", [Text.create("Hello", marks=["bold"])])
    image = Block.create("image", data={"src": "https://example.com/a.png"})
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Union
from uuid import uuid4


PARAGRAPH = "paragraph"
HEADING_ONE = "heading-one"
HEADING_TWO = "heading-two"
BLOCK_QUOTE = "block-quote"
BULLETED_LIST = "bulleted-list"
NUMBERED_LIST = "numbered-list"
LIST_ITEM = "list-item"
IMAGE = "image"

LIST_TYPES = (BULLETED_LIST, NUMBERED_LIST)

BOLD = "bold"
ITALIC = "italic"
UNDERLINED = "underlined"
CODE = "code"

MARK_TYPES = (BOLD, ITALIC, UNDERLINED, CODE)


def generate_key() -> str:
    """Generate a short unique key."""
    return uuid4().hex[:8]


@dataclass(frozen=True, order=True)
class Mark:
    type: str

    def __repr__(self) -> str:
        return f"Mark({self.type!r})"


def _to_marks(marks: Iterable[Mark | str] | None) -> frozenset[Mark]:
    if not marks:
        return frozenset()
    return frozenset(m if isinstance(m, Mark) else Mark(m) for m in marks)


@dataclass(frozen=True)
class Text:
    """
    Leaf node with literal character content.

    Attributes:
        key: Identifier, unique within the document
        text: Character run
        marks: Formatting annotations applied to the whole run
    """
    key: str
    text: str = ""
    marks: frozenset[Mark] = frozenset()

    @classmethod
    def create(cls, text: str = "", *, marks: Iterable[Mark | str] | None = None, key: str | None = None) -> Text:
        return cls(key=key or generate_key(), text=text, marks=_to_marks(marks))

    def __len__(self) -> int:
        return len(self.text)

    @property
    def mark_types(self) -> set[str]:
        return {m.type for m in self.marks}

    def has_mark(self, type: str) -> bool:
        return Mark(type) in self.marks

    def with_text(self, text: str) -> Text:
        return replace(self, text=text)

    def with_marks(self, marks: Iterable[Mark | str]) -> Text:
        return replace(self, marks=_to_marks(marks))

    def add_mark(self, type: str) -> Text:
        if self.has_mark(type):
            return self
        return replace(self, marks=self.marks | {Mark(type)})

    def remove_mark(self, type: str) -> Text:
        if not self.has_mark(type):
            return self
        return replace(self, marks=self.marks - {Mark(type)})

    def split(self, offset: int, new_key: str | None = None) -> tuple[Text, Text]:
        """Split at a character offset. The left part keeps the key."""
        if offset < 0 or offset > len(self.text):
            raise ValueError(f"offset {offset} out of range for text of length {len(self.text)}")
        left = replace(self, text=self.text[:offset])
        right = Text(key=new_key or generate_key(), text=self.text[offset:], marks=self.marks)
        return left, right

    def __repr__(self) -> str:
        marks = ",".join(sorted(self.mark_types))
        return f"Text({self.key}, {self.text!r}{', ' + marks if marks else ''})"


@dataclass(frozen=True)
class Block:
    """
    Structural container node.

    Attributes:
        key: Identifier, unique within the document
        type: Block type (paragraph, heading-one, list-item, image, ...)
        nodes: Ordered children, either all Blocks or all Texts
        data: Opaque attributes (e.g. image src), read-only
    """
    key: str
    type: str
    nodes: tuple[Node, ...] = ()
    data: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        # private read-only copy
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

    @classmethod
    def create(
        cls,
        type: str,
        nodes: Iterable[Node] | None = None,
        *,
        data: Mapping[str, Any] | None = None,
        key: str | None = None,
    ) -> Block:
        return cls(key=key or generate_key(), type=type, nodes=tuple(nodes or ()), data=data or {})

    @classmethod
    def create_text_block(cls, type: str, text: str = "", *, key: str | None = None) -> Block:
        """Create a block holding a single (possibly empty) text leaf."""
        return cls.create(type, [Text.create(text)], key=key)

    @property
    def is_leaf_block(self) -> bool:
        """True if no child is a Block (text blocks and void blocks)."""
        return not any(isinstance(n, Block) for n in self.nodes)

    @property
    def text(self) -> str:
        """Concatenated text of all descendant leaves."""
        return "".join(t.text for t in self.iter_texts())

    def iter_texts(self) -> Iterator[Text]:
        for node in self.nodes:
            if isinstance(node, Text):
                yield node
            else:
                yield from node.iter_texts()

    def with_nodes(self, nodes: Iterable[Node]) -> Block:
        return replace(self, nodes=tuple(nodes))

    def with_type(self, type: str) -> Block:
        if type == self.type:
            return self
        return replace(self, type=type)

    def with_data(self, data: Mapping[str, Any]) -> Block:
        return replace(self, data=data)

    def index_of(self, key: str) -> int:
        for i, node in enumerate(self.nodes):
            if node.key == key:
                return i
        raise ValueError(f"{key!r} is not a child of {self.key!r}")

    def __repr__(self) -> str:
        return f"Block({self.key}, {self.type!r}, {len(self.nodes)} nodes)"


Node = Union[Text, Block]
