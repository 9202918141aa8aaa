from .rules import (
    Rule,
    Violation,
    VoidHasNoChildren,
    BlockHasText,
    NoMixedChildren,
    MergeAdjacentTexts,
    LastChildIsParagraph,
    default_rules,
)
from .schema import Schema, BlockSpec, get_default_schema

__all__ = [
    "Schema",
    "BlockSpec",
    "Rule",
    "Violation",
    "VoidHasNoChildren",
    "BlockHasText",
    "NoMixedChildren",
    "MergeAdjacentTexts",
    "LastChildIsParagraph",
    "default_rules",
    "get_default_schema",
]
