"""
Indentation resolver: turns the flat sequence of line records into a nesting
skeleton, using a stack of currently open depths.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from cirru_sexpr.syntax.errors import IndentError
from cirru_sexpr.syntax.nodes import LineRecord

logger = logging.getLogger(__name__)

ROOT_DEPTH = -1


@dataclass
class LineNode:
    record: LineRecord
    children: List["LineNode"] = field(default_factory=list)

    @property
    def depth(self) -> int:
        return self.record.depth

    @property
    def line(self) -> int:
        return self.record.line


def resolve(records: Iterable[LineRecord]) -> List[LineNode]:
    """
    Attach every line to the nearest preceding line of smaller depth.

    Depth may drop by any amount between lines but may rise by one level at
    most; a first line above depth 0 is an unexpected indent too. Records are
    consumed in order, so a lazy source stops at the first bad line.
    """
    roots: List[LineNode] = []
    stack: List[Tuple[int, List[LineNode]]] = [(ROOT_DEPTH, roots)]

    count = 0
    for rec in records:
        count += 1
        while stack[-1][0] >= rec.depth:
            stack.pop()
        open_depth, siblings = stack[-1]
        if rec.depth > open_depth + 1:
            raise IndentError(
                f"Unexpected indent (depth {rec.depth}, expected at most {open_depth + 1})",
                line=rec.line,
                column=1,
                context="indentation may increase by one level at a time",
            )
        node = LineNode(rec)
        siblings.append(node)
        stack.append((rec.depth, node.children))
    logger.debug(f"Resolved {count} line(s) into {len(roots)} root(s)")
    return roots
