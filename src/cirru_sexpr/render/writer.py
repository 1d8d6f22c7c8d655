"""
Cirru writer: lays a parsed tree back out as indented Cirru text.

Each expression becomes a head line holding its leading leaves and short
groups, with the remaining children on deeper lines:

    (defn fib (n) (if (<= n 2) 1 (+ (fib (dec n)) (fib (- n 2)))))

    defn fib (n)
      if (<= n 2) 1 $ +
        fib (dec n)
        fib (- n 2)

A trailing expression right after a leaf goes behind the fold operator, and
leaves that follow a nested expression are collected on a comma line. The
output parses back to the same tree shape.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from cirru_sexpr.io.config import ConverterConfig
from cirru_sexpr.render.printer import Printer
from cirru_sexpr.syntax.nodes import Document, Group, Leaf, LeafKind, Node

# how a child sits on a line
_LEAF = "leaf"  # leaf or empty group
_SIMPLE = "simple"  # group of leaves only
_EXPR = "expr"


def _kind(node: Node) -> str:
    if isinstance(node, Leaf) or not node.children:
        return _LEAF
    if all(isinstance(c, Leaf) for c in node.children):
        return _SIMPLE
    return _EXPR


class CirruWriter:
    def __init__(self, config: Optional[ConverterConfig] = None, *, use_inline: bool = False):
        self.cfg = config or ConverterConfig()
        self.use_inline = use_inline
        self.printer = Printer(self.cfg)

    def write_document(self, doc: Document) -> str:
        blocks = [self.write_statement(expr) for expr in doc.children]
        return "\n\n".join(blocks) + "\n" if blocks else ""

    def write_statement(self, expr: Group) -> str:
        """Write one top-level expression; lines are produced with an explicit stack."""
        if len(expr) < 2:
            only = expr.head()
            if isinstance(only, Leaf) and not self._opens_comment(only):
                return self.printer.render_leaf(only)
            return self.printer.render(expr)

        lines: List[str] = []
        stack: List[Tuple[int, Sequence[Node], bool]] = [(0, (expr,), False)]
        while stack:
            level, nodes, spliced = stack.pop()
            pad = " " * (self.cfg.indent_unit * level)
            if spliced:
                lines.append(pad + " ".join([self.cfg.unfold_operator, *map(self.printer.render, nodes)]))
                continue

            (node,) = nodes
            if isinstance(node, Leaf):
                if self._opens_comment(node):
                    raise ValueError(f"Cannot write {node.text!r} on a line of its own without an unfold operator")
                lines.append(pad + self.printer.render_leaf(node))
                continue
            if len(node) < 2:
                lines.append(pad + self.printer.render(node))
                continue

            parts, rest = self.layout_line(node.children)
            head = node.head()
            if isinstance(head, Leaf) and (self._opens_comment(head) or self._is_unfold(head)):
                # keep the line from reading as a comment or a comma line
                parts.insert(0, self.cfg.fold_operator)
            lines.append(pad + " ".join(parts))
            stack.extend(reversed(self._child_lines(rest, level + 1)))
        return "\n".join(lines)

    def layout_line(self, items: Sequence[Node]) -> Tuple[List[str], Sequence[Node]]:
        """
        Split an expression's children into the rendered parts of its head
        line and the children left for deeper lines.
        """
        parts: List[str] = []
        folded = False
        while True:
            n, prev = self._inline_count(items)
            parts.extend(self.printer.render(x) for x in items[:n])
            rest = items[n:]
            if not folded and prev == _LEAF and len(rest) == 1:
                parts.append(self.cfg.fold_operator)
                items = rest[0].children
                folded = True
                continue
            return parts, rest

    def _inline_count(self, items: Sequence[Node]) -> Tuple[int, Optional[str]]:
        prev: Optional[str] = None
        for n, child in enumerate(items):
            kind = _kind(child)
            if n > 0:
                if kind == _LEAF and prev not in (_LEAF, _SIMPLE):
                    return n, prev
                if kind == _SIMPLE and not (prev == _LEAF or (self.use_inline and prev == _SIMPLE)):
                    return n, prev
                if kind == _EXPR:
                    return n, prev
            prev = kind
        return len(items), prev

    def _child_lines(self, rest: Sequence[Node], level: int) -> List[Tuple[int, Sequence[Node], bool]]:
        out: List[Tuple[int, Sequence[Node], bool]] = []
        run: List[Node] = []
        for node in rest:
            if self.cfg.unfold_operator and _kind(node) == _LEAF:
                run.append(node)
                continue
            if run:
                out.append((level, tuple(run), True))
                run = []
            out.append((level, (node,), False))
        if run:
            out.append((level, tuple(run), True))
        return out

    def _opens_comment(self, leaf: Leaf) -> bool:
        marker = self.cfg.comment_marker
        return bool(marker) and leaf.kind is LeafKind.SYMBOL and leaf.text.startswith(marker)

    def _is_unfold(self, leaf: Leaf) -> bool:
        return bool(self.cfg.unfold_operator) and leaf.is_symbol(self.cfg.unfold_operator)


def format_cirru(doc: Document, config: Optional[ConverterConfig] = None, *, use_inline: bool = False) -> str:
    """Write a document as indented Cirru; `use_inline` keeps runs of short groups on one line."""
    return CirruWriter(config, use_inline=use_inline).write_document(doc)
