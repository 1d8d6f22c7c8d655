"""
Tree builder: merges the resolver skeleton with each line's parsed items into
one Document. Lines are finished bottom-up with an explicit stack, so deep
indentation never recurses.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Sequence, Tuple

from cirru_sexpr.io.config import ConverterConfig
from cirru_sexpr.syntax.line_parser import is_unfold, parse_line
from cirru_sexpr.syntax.nodes import Document, Group, GroupKind, Node
from cirru_sexpr.syntax.resolver import LineNode

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = ConverterConfig()


def build(roots: Sequence[LineNode], config: Optional[ConverterConfig] = None) -> Document:
    cfg = config or DEFAULT_CONFIG
    top: List[Group] = []

    for root in roots:
        stack: List[Tuple[LineNode, Iterator[LineNode], List[Node]]] = [(root, iter(root.children), [])]
        while stack:
            line, pending, done = stack[-1]
            child = next(pending, None)
            if child is not None:
                stack.append((child, iter(child.children), []))
                continue
            stack.pop()
            items = parse_line(line.record.tokens, done)
            if stack:
                attach_line(stack[-1][2], items, cfg)
            else:
                top.append(top_level_node(items))

    logger.debug(f"Built {len(top)} top-level expression(s) from {len(roots)} root line(s)")
    return Document(tuple(top))


def attach_line(siblings: List[Node], items: List[Node], config: Optional[ConverterConfig] = None) -> None:
    """Add a nested line's node to its parent's children."""
    if is_unfold(items, config):
        siblings.extend(items[1:])
    elif len(items) == 1:
        siblings.append(items[0])
    else:
        siblings.append(Group(tuple(items), GroupKind.INDENT))


def top_level_node(items: List[Node]) -> Group:
    if len(items) == 1 and isinstance(items[0], Group):
        return items[0]
    return Group(tuple(items), GroupKind.INDENT)
