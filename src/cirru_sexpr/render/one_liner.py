"""
One-liner Cirru: a single expression written on one line, with the fold
operator standing in for a trailing nested expression.

    (defn main () (println "Hi"))  <->  defn main () $ println "Hi"
"""

from __future__ import annotations

from typing import List, Optional

from cirru_sexpr.io.config import ConverterConfig
from cirru_sexpr.render.printer import Printer
from cirru_sexpr.syntax.errors import ExprCountError
from cirru_sexpr.syntax.lexer import iter_records
from cirru_sexpr.syntax.line_parser import parse_line
from cirru_sexpr.syntax.nodes import Group, GroupKind, Leaf, LeafKind
from cirru_sexpr.syntax.resolver import resolve


def format_one_liner(expr: Group, config: Optional[ConverterConfig] = None) -> str:
    if not isinstance(expr, Group):
        raise ValueError(f"format_one_liner expects an expression group, got {expr!r}")
    cfg = config or ConverterConfig()
    printer = Printer(cfg)

    parts: List[str] = []
    items = expr.children
    while items:
        tail = items[-1] if len(items) > 1 and isinstance(items[-1], Group) else None
        for x in (items[:-1] if tail is not None else items):
            parts.append(printer.render(x))
        if tail is None:
            break
        parts.append(cfg.fold_operator)
        items = tail.children

    # a leading comment marker would turn the whole line into a comment
    head = expr.children[0] if expr.children else None
    if cfg.comment_marker and isinstance(head, Leaf) and head.kind is LeafKind.SYMBOL:
        if parts[0].startswith(cfg.comment_marker):
            parts[0] = printer.quote(head.text)
    return " ".join(parts)


def parse_one_liner(text: str, config: Optional[ConverterConfig] = None) -> Group:
    """Parse exactly one line of Cirru into an expression group."""
    cfg = config or ConverterConfig()
    records = iter_records(text, cfg)
    first = next(records, None)
    if first is None:
        raise ExprCountError("Expected 1 expression(s), but got 0", line=1, context="input is empty")
    extra = next(records, None)
    if extra is not None:
        raise ExprCountError(
            "Expected 1 expression(s), but got more",
            line=extra.line,
            context="one-liner input must hold a single line",
        )
    roots = resolve([first])
    return Group(tuple(parse_line(roots[0].record.tokens)), GroupKind.INDENT)
