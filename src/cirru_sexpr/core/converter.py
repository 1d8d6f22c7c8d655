"""
Conversion entry point: Cirru text in, canonical parenthesized text out.

    lex -> resolve indentation -> parse lines / build tree -> print

Each call is a pure function of its input; nothing is shared between calls.
"""

from __future__ import annotations

import logging
from typing import Optional

from cirru_sexpr.io.config import ConverterConfig
from cirru_sexpr.render.printer import Printer
from cirru_sexpr.syntax.builder import build
from cirru_sexpr.syntax.lexer import iter_records
from cirru_sexpr.syntax.nodes import Document
from cirru_sexpr.syntax.resolver import resolve

logger = logging.getLogger(__name__)


def parse(text: str, config: Optional[ConverterConfig] = None) -> Document:
    """Parse Cirru text into a Document; raises CirruParseError on bad input."""
    cfg = config or ConverterConfig()
    # lexed lazily: no line after the first bad one is examined
    roots = resolve(iter_records(text, cfg))
    doc = build(roots, cfg)
    logger.debug(f"Parsed {len(doc)} expression(s)")
    return doc


def cirru_to_lisp(
    text: str,
    config: Optional[ConverterConfig] = None,
    *,
    separator: Optional[str] = None,
    pretty: bool = False,
) -> str:
    cfg = config or ConverterConfig()
    return Printer(cfg).render_document(parse(text, cfg), separator, pretty=pretty)
