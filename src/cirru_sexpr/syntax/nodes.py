"""
Tokens, tree nodes and per-line records shared by the conversion pipeline.

All nodes are immutable: the tree is written once by the builder and only
read afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple, Union


class TokenKind(str, Enum):
    SYMBOL = "symbol"
    STRING = "string"
    OPEN = "open"
    CLOSE = "close"
    FOLD = "fold"


class LeafKind(str, Enum):
    SYMBOL = "symbol"
    STRING = "string"


class GroupKind(str, Enum):
    PAREN = "paren-explicit"
    INDENT = "indentation-implicit"
    FOLD = "fold-implicit"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    line: int
    column: int


@dataclass(frozen=True)
class Leaf:
    text: str
    kind: LeafKind = LeafKind.SYMBOL

    def shape(self) -> Tuple[str, str]:
        return (self.kind.value, self.text)

    def is_symbol(self, text: str) -> bool:
        return self.kind is LeafKind.SYMBOL and self.text == text


@dataclass(frozen=True)
class Group:
    children: Tuple["Node", ...] = ()
    kind: GroupKind = GroupKind.INDENT

    def shape(self) -> tuple:
        """Nested tuples of leaf (kind, text) pairs; group kinds are ignored."""
        return tuple(c.shape() for c in self.children)

    def head(self) -> "Node | None":
        return self.children[0] if self.children else None

    def __len__(self) -> int:
        return len(self.children)


Node = Union[Leaf, Group]


@dataclass(frozen=True)
class LineRecord:
    depth: int
    tokens: Tuple[Token, ...]
    line: int


@dataclass(frozen=True)
class Document:
    """Root of a parsed buffer: one Group per top-level logical line."""

    children: Tuple[Group, ...] = field(default_factory=tuple)

    def shape(self) -> tuple:
        return tuple(c.shape() for c in self.children)

    def __len__(self) -> int:
        return len(self.children)


def symbol(text: str) -> Leaf:
    return Leaf(text, LeafKind.SYMBOL)


def string(text: str) -> Leaf:
    return Leaf(text, LeafKind.STRING)


def group(*children: Node, kind: GroupKind = GroupKind.PAREN) -> Group:
    return Group(tuple(children), kind)
