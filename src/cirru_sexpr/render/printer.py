"""
Printer: serializes a parsed tree into canonical parenthesized text.

Every group kind renders with the same brackets, so printing then re-parsing
keeps leaf content and child order but not group kinds. The pretty layout
spreads nested groups over indented lines for reading; it is not meant to be
parsed back.
"""

from __future__ import annotations

from typing import List, Optional, Tuple, Union

from cirru_sexpr.io.config import ConverterConfig
from cirru_sexpr.syntax.nodes import Document, Group, Leaf, LeafKind, Node

_ESCAPED = {"\\": "\\\\", "\n": "\\n", "\t": "\\t"}
_UNSAFE = set(" \t\n()")


def _newline(indent: int) -> str:
    return "\n" + "  " * indent


def _is_nested(grp: Group) -> bool:
    return any(isinstance(c, Group) and c.children for c in grp.children)


class Printer:
    def __init__(self, config: Optional[ConverterConfig] = None):
        self.cfg = config or ConverterConfig()

    def render(self, node: Node) -> str:
        if isinstance(node, Leaf):
            return self.render_leaf(node)

        parts: List[str] = ["("]
        stack: List[Tuple[Group, int]] = [(node, 0)]
        while stack:
            grp, idx = stack.pop()
            if idx == len(grp.children):
                parts.append(")")
                continue
            if idx > 0:
                parts.append(" ")
            stack.append((grp, idx + 1))
            child = grp.children[idx]
            if isinstance(child, Group):
                parts.append("(")
                stack.append((child, 0))
            else:
                parts.append(self.render_leaf(child))
        return "".join(parts)

    def render_pretty(self, node: Node) -> str:
        """
        Multi-line layout: a child holding nested groups starts on a new line,
        indented one level deeper than its parent. A group headed by the
        comment marker becomes a `;;` comment line.
        """
        if isinstance(node, Leaf):
            return self.render_leaf(node)
        if self.is_comment(node):
            return self._comment_line(node, 0).strip()

        parts: List[str] = ["("]
        stack: List[Tuple[Group, int, int]] = [(node, 0, 0)]
        while stack:
            grp, idx, indent = stack.pop()
            if idx == len(grp.children):
                parts.append(")")
                continue
            stack.append((grp, idx + 1, indent))
            child = grp.children[idx]
            if isinstance(child, Group) and self.is_comment(child):
                parts[-1] = parts[-1].rstrip(" \n")
                parts.append(self._comment_line(child, indent + 1))
                continue
            if isinstance(child, Group) and _is_nested(child):
                parts[-1] = parts[-1].rstrip(" \n")
                parts.append(_newline(indent + 1))
            elif idx > 0 and not parts[-1].rstrip(" ").endswith("\n"):
                parts.append(" ")
            if isinstance(child, Group):
                parts.append("(")
                stack.append((child, 0, indent + 1))
            else:
                parts.append(self.render_leaf(child))
        return "".join(parts)

    def render_document(self, doc: Document, separator: Optional[str] = None, *, pretty: bool = False) -> str:
        sep = self.cfg.separator if separator is None else separator
        render = self.render_pretty if pretty else self.render
        return sep.join(render(g) for g in doc.children)

    def is_comment(self, grp: Group) -> bool:
        head = grp.head()
        marker = self.cfg.comment_marker
        return bool(marker) and isinstance(head, Leaf) and head.is_symbol(marker)

    def _comment_line(self, grp: Group, indent: int) -> str:
        text = " ".join([self.cfg.comment_marker, *map(self.render, grp.children[1:])])
        return _newline(indent) + text + _newline(indent)

    def render_leaf(self, leaf: Leaf) -> str:
        if leaf.kind is LeafKind.SYMBOL and self.is_plain_symbol(leaf.text):
            return leaf.text
        return self.quote(leaf.text)

    def is_plain_symbol(self, text: str) -> bool:
        """True when `text` lexes back as exactly this symbol."""
        if not text or text == self.cfg.fold_operator:
            return False
        return not any(ch in _UNSAFE or ch == self.cfg.quote_char for ch in text)

    def quote(self, text: str) -> str:
        q = self.cfg.quote_char
        body = "".join(_ESCAPED.get(ch, "\\" + q if ch == q else ch) for ch in text)
        return f"{q}{body}{q}"


def to_lisp(
    tree: Union[Document, Node],
    config: Optional[ConverterConfig] = None,
    separator: Optional[str] = None,
    *,
    pretty: bool = False,
) -> str:
    printer = Printer(config)
    if isinstance(tree, Document):
        return printer.render_document(tree, separator, pretty=pretty)
    return printer.render_pretty(tree) if pretty else printer.render(tree)
