"""
Schema - Declarative structure of a valid document and its normalizer.

A Schema is a block table (which types are void) plus an ordered list of
rules. normalize() runs a fixpoint walk: visit blocks children-first, then
the root; the first violation found is repaired and the walk starts over
on the new document, until no rule reports anything.

Usage:
    schema = Schema()
    doc = schema.normalize(doc)
    assert schema.normalize(doc) is doc
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable, Iterator

from ..config import get_settings
from ..document import Block, Document, IMAGE, PARAGRAPH
from ..errors import RichViewError, SchemaError
from .rules import Rule, Violation, default_rules


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlockSpec:
    is_void: bool = False


DEFAULT_BLOCKS: dict[str, BlockSpec] = {
    IMAGE: BlockSpec(is_void=True),
}


class Schema:
    """
    Attributes:
        rules: Ordered rules, checked in order for each visited node
        blocks: Per-type block settings
        default_type: Type a block reverts to when its type is toggled off
        last_child_type: Type the document's last child must have
        max_iterations: Fixes allowed beyond two per node before normalization gives up
    """

    def __init__(
        self,
        rules: Iterable[Rule] | None = None,
        *,
        blocks: dict[str, BlockSpec] | None = None,
        default_type: str | None = None,
        last_child_type: str = PARAGRAPH,
        max_iterations: int | None = None,
    ):
        settings = get_settings()
        self.rules: list[Rule] = list(rules) if rules is not None else default_rules()
        self.blocks: dict[str, BlockSpec] = dict(DEFAULT_BLOCKS if blocks is None else blocks)
        self.default_type = default_type or settings.default_node
        self.last_child_type = last_child_type
        self.max_iterations = max_iterations or settings.max_normalize_iterations

    def is_void(self, type: str) -> bool:
        spec = self.blocks.get(type)
        return spec is not None and spec.is_void

    def add_rule(self, rule: Rule, index: int | None = None) -> None:
        if index is None:
            self.rules.append(rule)
        else:
            self.rules.insert(index, rule)

    def create_default_block(self) -> Block:
        return Block.create_text_block(self.default_type)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def _iter_post_order(self, document: Document) -> Iterator["Block | Document"]:
        def walk(block: Block) -> Iterator[Block]:
            for child in block.nodes:
                if isinstance(child, Block):
                    yield from walk(child)
            yield block

        for node in document.nodes:
            yield from walk(node)
        yield document

    def _rules_for(self, node: "Block | Document") -> Iterator[Rule]:
        scope = "document" if isinstance(node, Document) else "block"
        return (rule for rule in self.rules if rule.scope == scope)

    def _check(self, document: Document, node: "Block | Document") -> Violation | None:
        for rule in self._rules_for(node):
            violation = rule.validate(self, document, node)
            if violation is not None:
                return violation
        return None

    def find_violation(self, document: Document) -> Violation | None:
        """First violation in children-first order, or None."""
        for node in self._iter_post_order(document):
            violation = self._check(document, node)
            if violation is not None:
                return violation
        return None

    def validate(self, document: Document) -> list[Violation]:
        """All violations of the current tree, without repairing anything."""
        violations = []
        for node in self._iter_post_order(document):
            for rule in self._rules_for(node):
                violation = rule.validate(self, document, node)
                if violation is not None:
                    violations.append(violation)
        return violations

    def is_valid(self, document: Document) -> bool:
        return self.find_violation(document) is None

    # -------------------------------------------------------------------------
    # Normalization
    # -------------------------------------------------------------------------

    def normalize(self, document: Document) -> Document:
        """
        Repair violations until the document is clean.

        Returns the same object when nothing needed repair. The walk may
        apply two fixes per node plus max_iterations.

        Raises:
            SchemaError: if a rule cannot repair its violation or the walk
                does not converge. Both point at a defect in the rules.
        """
        limit = self.max_iterations + 2 * document.node_count
        for _ in range(limit):
            violation = self.find_violation(document)
            if violation is None:
                return document
            logger.debug("Normalizing %s on %r", violation.code, violation.node)
            try:
                document = violation.rule.normalize(self, document, violation)
            except SchemaError:
                raise
            except RichViewError as e:
                raise SchemaError(f"Rule {violation.rule!r} failed to repair {violation.code}: {e}") from e
        raise SchemaError(f"Normalization did not converge after {limit} fixes")


_default_schema: Schema | None = None


def get_default_schema() -> Schema:
    global _default_schema
    if _default_schema is None:
        _default_schema = Schema()
    return _default_schema
