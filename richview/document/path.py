"""
IndexPath - where a node sits in one document version.

(1, 0) is the first child of the root's second child; the root itself is
(). Paths order lexicographically, which is document order, so selection
points are sorted by (path, offset). A path is only meaningful for the
document version it was computed from.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, SupportsIndex


@dataclass(frozen=True, order=True, init=False)
class IndexPath:
    indices: tuple[int, ...]

    def __init__(self, indices: Iterable[int] = ()):
        object.__setattr__(self, "indices", tuple(indices))

    def __getitem__(self, index: SupportsIndex) -> int:
        return self.indices[index]

    def __len__(self) -> int:
        return len(self.indices)

    @property
    def depth(self) -> int:
        return len(self.indices)

    @property
    def is_root(self) -> bool:
        return not self.indices

    @property
    def last(self) -> int | None:
        """Position among the parent's children, None for the root."""
        return self.indices[-1] if self.indices else None

    @property
    def parent(self) -> IndexPath | None:
        if not self.indices:
            return None
        return IndexPath(self.indices[:-1])

    def is_ancestor_of(self, other: IndexPath) -> bool:
        """True if other is this path or lies below it."""
        return other.indices[:len(self.indices)] == self.indices

    def is_strict_ancestor_of(self, other: IndexPath) -> bool:
        return len(other.indices) > len(self.indices) and self.is_ancestor_of(other)

    def common_ancestor(self, other: IndexPath) -> IndexPath:
        shared = []
        for a, b in zip(self.indices, other.indices):
            if a != b:
                break
            shared.append(a)
        return IndexPath(shared)

    def __str__(self) -> str:
        return ".".join(map(str, self.indices))

    def __repr__(self) -> str:
        return f"IndexPath({list(self.indices)})"
