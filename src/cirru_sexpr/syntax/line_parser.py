"""
Parser for a single logical line: explicit paren groups and the fold operator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from cirru_sexpr.io.config import ConverterConfig
from cirru_sexpr.syntax.errors import ParenImbalanceError
from cirru_sexpr.syntax.nodes import Group, GroupKind, Leaf, LeafKind, Node, Token, TokenKind

DEFAULT_CONFIG = ConverterConfig()


@dataclass
class _Frame:
    kind: GroupKind
    items: List[Node] = field(default_factory=list)
    opener: Optional[Token] = None


def parse_line(
    tokens: Sequence[Token],
    children: Sequence[Node] = (),
) -> List[Node]:
    """
    Parse one line's tokens into its items.

    `children` are the already-built nodes of the more deeply indented lines
    under this one; they are appended where the line ends, which is inside the
    innermost fold opened at line level.
    """
    stack: List[_Frame] = []
    cur = _Frame(GroupKind.INDENT)

    for tok in tokens:
        if tok.kind is TokenKind.OPEN:
            stack.append(cur)
            cur = _Frame(GroupKind.PAREN, opener=tok)
        elif tok.kind is TokenKind.FOLD:
            stack.append(cur)
            cur = _Frame(GroupKind.FOLD, opener=tok)
        elif tok.kind is TokenKind.CLOSE:
            # a ')' also ends every fold opened inside its group
            while cur.kind is GroupKind.FOLD and stack[-1].kind is not GroupKind.INDENT:
                cur = _close(cur, stack.pop())
            if cur.kind is not GroupKind.PAREN:
                raise ParenImbalanceError("Unexpected ')'", line=tok.line, column=tok.column)
            cur = _close(cur, stack.pop())
        elif tok.kind is TokenKind.STRING:
            cur.items.append(Leaf(tok.text, LeafKind.STRING))
        else:
            cur.items.append(Leaf(tok.text, LeafKind.SYMBOL))

    for frame in [cur, *reversed(stack)]:
        if frame.kind is GroupKind.PAREN:
            opener = frame.opener
            raise ParenImbalanceError(
                "Unclosed '('",
                line=opener.line if opener else 0,
                column=opener.column if opener else None,
            )

    cur.items.extend(children)
    while stack:
        cur = _close(cur, stack.pop())
    return cur.items


def _close(frame: _Frame, parent: _Frame) -> _Frame:
    parent.items.append(Group(tuple(frame.items), frame.kind))
    return parent


def is_unfold(items: Sequence[Node], config: Optional[ConverterConfig] = None) -> bool:
    """True when a nested line's items start with the unfold operator (`, b c`)."""
    cfg = config or DEFAULT_CONFIG
    if not cfg.unfold_operator or not items:
        return False
    head = items[0]
    return isinstance(head, Leaf) and head.is_symbol(cfg.unfold_operator)
