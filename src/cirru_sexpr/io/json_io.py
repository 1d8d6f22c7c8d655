"""
JSON interchange for parsed trees: leaves are strings, groups are arrays.

    ["defn", "f", ["x"], ["+", "x", "1"]]
"""

from __future__ import annotations

import json
from typing import Any, List, Optional, Tuple, Union

from cirru_sexpr.io.config import ConverterConfig
from cirru_sexpr.render.printer import Printer
from cirru_sexpr.syntax.nodes import Document, Group, GroupKind, Leaf, LeafKind, Node

JsonTree = Union[str, List["JsonTree"]]


def to_json_value(tree: Union[Document, Node]) -> JsonTree:
    if isinstance(tree, Leaf):
        return tree.text
    root: List[JsonTree] = []
    stack: List[Tuple[Tuple[Node, ...], List[JsonTree]]] = [(tree.children, root)]
    while stack:
        children, out = stack.pop()
        for c in children:
            if isinstance(c, Leaf):
                out.append(c.text)
            else:
                sub: List[JsonTree] = []
                out.append(sub)
                stack.append((c.children, sub))
    return root


def to_json_str(tree: Union[Document, Node], *, indent: Optional[int] = None) -> str:
    """
    Serialize with the same layout as `json.dumps(..., indent=indent)`, but
    without recursing once per nesting level.
    """
    if isinstance(tree, Leaf):
        return json.dumps(tree.text, ensure_ascii=False)
    pad = None if indent is None else " " * indent
    parts: List[str] = ["["]
    stack: List[Tuple[Tuple[Node, ...], int, int]] = [(tree.children, 0, 0)]
    while stack:
        children, idx, depth = stack.pop()
        if idx == len(children):
            if children and pad is not None:
                parts.append("\n" + pad * depth)
            parts.append("]")
            continue
        if idx > 0:
            parts.append(", " if pad is None else ",")
        if pad is not None:
            parts.append("\n" + pad * (depth + 1))
        stack.append((children, idx + 1, depth))
        child = children[idx]
        if isinstance(child, Leaf):
            parts.append(json.dumps(child.text, ensure_ascii=False))
        else:
            parts.append("[")
            stack.append((child.children, 0, depth + 1))
    return "".join(parts)


def from_json_value(value: Any, config: Optional[ConverterConfig] = None) -> Node:
    """Build a node from nested arrays of strings; other JSON types are rejected."""
    printer = Printer(config)
    return _from_json(value, printer, ())


def _from_json(value: Any, printer: Printer, path: Tuple[int, ...]) -> Node:
    if isinstance(value, str):
        kind = LeafKind.SYMBOL if printer.is_plain_symbol(value) else LeafKind.STRING
        return Leaf(value, kind)
    if isinstance(value, list):
        return Group(
            tuple(_from_json(v, printer, path + (i,)) for i, v in enumerate(value)),
            GroupKind.PAREN,
        )
    where = "/".join(str(i) for i in path) or "<root>"
    raise ValueError(f"Only arrays and strings are accepted, got {type(value).__name__} at {where}")


def from_json_str(text: str, config: Optional[ConverterConfig] = None) -> Node:
    try:
        value = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON: {exc}") from exc
    return from_json_value(value, config)


def document_from_json_str(text: str, config: Optional[ConverterConfig] = None) -> Document:
    """Load a whole document: a top-level array whose items are all arrays."""
    node = from_json_str(text, config)
    if not isinstance(node, Group) or not all(isinstance(c, Group) for c in node.children):
        raise ValueError("A document must be an array of arrays")
    return Document(tuple(c for c in node.children if isinstance(c, Group)))
