"""
Rules - Structural constraints paired with their repair.

A rule inspects one node at a time. Block rules see every Block, document
rules see the root. A rule returns a Violation describing what is wrong and
later receives that violation back to produce a repaired document.

To add a constraint, subclass Rule and add an instance to a Schema; the
normalization walk does not change.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from ..document import Block, Document, Node, Text
from ..errors import SchemaError

if TYPE_CHECKING:
    from .schema import Schema


RuleScope = Literal["document", "block"]


@dataclass(frozen=True)
class Violation:
    """
    A broken constraint found on a node.

    Attributes:
        code: Identifier of the broken constraint
        rule: Rule that found it and knows how to repair it
        node: Offending node (Block or the Document)
        child: Offending child, when the rule points at one
        index: Position of the offending child
    """
    code: str
    rule: "Rule"
    node: "Block | Document"
    child: Node | None = None
    index: int | None = None


class Rule:
    code: str = ""
    scope: RuleScope = "block"

    def validate(self, schema: "Schema", document: Document, node: "Block | Document") -> Violation | None:
        raise NotImplementedError("Rule.validate is not implemented")

    def normalize(self, schema: "Schema", document: Document, violation: Violation) -> Document:
        raise NotImplementedError("Rule.normalize is not implemented")

    def violation(self, node: "Block | Document", child: Node | None = None, index: int | None = None) -> Violation:
        return Violation(code=self.code, rule=self, node=node, child=child, index=index)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.code!r})"


class VoidHasNoChildren(Rule):
    """A void block (image) holds no children. Not repairable at runtime."""
    code = "void_has_children"

    def validate(self, schema, document, node):
        if schema.is_void(node.type) and node.nodes:
            return self.violation(node)
        return None

    def normalize(self, schema, document, violation):
        raise SchemaError(f"Void block {violation.node.key!r} of type {violation.node.type!r} has children")


class BlockHasText(Rule):
    """A non-void block without children receives an empty text leaf."""
    code = "block_has_no_children"

    def validate(self, schema, document, node):
        if not node.nodes and not schema.is_void(node.type):
            return self.violation(node)
        return None

    def normalize(self, schema, document, violation):
        return document.insert_node(violation.node.key, 0, Text.create())


class NoMixedChildren(Rule):
    """
    A block holds either blocks or text leaves. The kind of the first child
    wins; children of the other kind are removed.
    """
    code = "child_kind_invalid"

    def validate(self, schema, document, node):
        if not node.nodes:
            return None
        kind = type(node.nodes[0])
        for i, child in enumerate(node.nodes):
            if type(child) is not kind:
                return self.violation(node, child, i)
        return None

    def normalize(self, schema, document, violation):
        return document.remove_node(violation.child.key)


class MergeAdjacentTexts(Rule):
    """
    Adjacent text leaves with the same marks are merged into the left one,
    and empty text leaves are dropped while the block has other text. One
    repair cleans the whole block.
    """
    code = "text_not_normalized"

    def validate(self, schema, document, node):
        texts = [n for n in node.nodes if isinstance(n, Text)]
        if len(texts) != len(node.nodes) or len(texts) < 2:
            return None
        for i, text in enumerate(texts):
            if not text.text:
                return self.violation(node, text, i)
        for i in range(len(texts) - 1):
            if texts[i].marks == texts[i + 1].marks:
                return self.violation(node, texts[i + 1], i + 1)
        return None

    def normalize(self, schema, document, violation):
        block = violation.node
        texts = [n for n in block.nodes if n.text] or [block.nodes[0]]
        merged = [texts[0]]
        for text in texts[1:]:
            left = merged[-1]
            if left.marks == text.marks:
                merged[-1] = left.with_text(left.text + text.text)
            else:
                merged.append(text)
        return document.replace_node(block.key, block.with_nodes(merged))


class LastChildIsParagraph(Rule):
    """The document ends with a paragraph so there is always room to type."""
    code = "last_child_type_invalid"
    scope = "document"

    def validate(self, schema, document, node):
        if not node.nodes or node.nodes[-1].type != schema.last_child_type:
            return self.violation(node, node.nodes[-1] if node.nodes else None)
        return None

    def normalize(self, schema, document, violation):
        block = Block.create_text_block(schema.last_child_type)
        return document.insert_node(document.key, len(document.nodes), block)


def default_rules() -> list[Rule]:
    return [
        VoidHasNoChildren(),
        BlockHasText(),
        NoMixedChildren(),
        MergeAdjacentTexts(),
        LastChildIsParagraph(),
    ]
