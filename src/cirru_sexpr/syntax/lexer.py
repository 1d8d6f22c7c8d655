"""
Line lexer for Cirru text.

Each physical line becomes a LineRecord holding its indentation depth and the
flat token list (symbols, strings, parens, fold operators). Blank lines and
comment lines produce no record.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional

from cirru_sexpr.io.config import ConverterConfig
from cirru_sexpr.syntax.errors import (
    IndentError,
    InvalidEscapeError,
    ParenImbalanceError,
    UnexpectedEofError,
    UnterminatedStringError,
)
from cirru_sexpr.syntax.nodes import LineRecord, Token, TokenKind

logger = logging.getLogger(__name__)

_SPACES = (" ", "\t")
_ESCAPES = {"\\": "\\", "n": "\n", "t": "\t", "'": "'", '"': '"'}

DEFAULT_CONFIG = ConverterConfig()


def lex(source: str, config: Optional[ConverterConfig] = None) -> List[LineRecord]:
    """Lex a whole buffer into line records, in source order."""
    return list(iter_records(source, config))


def iter_records(source: str, config: Optional[ConverterConfig] = None) -> Iterator[LineRecord]:
    """
    Lex lazily, one line per step. A consumer that stops at a bad line never
    lexes the lines after it.
    """
    cfg = config or DEFAULT_CONFIG
    lines = source.split("\n")
    count = 0
    for idx, raw in enumerate(lines):
        rec = lex_line(raw, idx + 1, cfg, last=idx == len(lines) - 1)
        if rec is not None:
            count += 1
            yield rec
    logger.debug(f"Lexed {len(lines)} physical line(s) into {count} record(s)")


def lex_line(
    text: str,
    line_no: int,
    config: Optional[ConverterConfig] = None,
    *,
    last: bool = False,
) -> Optional[LineRecord]:
    """
    Lex one physical line. Returns None for blank and comment lines.

    `last` marks the final line of the input, where a dangling escape is an
    unexpected end of input rather than an unterminated string.
    """
    cfg = config or DEFAULT_CONFIG
    if text.endswith("\r"):
        text = text[:-1]

    content = text.lstrip(" \t")
    if not content:
        return None
    if cfg.comment_marker and content.startswith(cfg.comment_marker):
        return None

    indent = text[: len(text) - len(content)]
    if "\t" in indent:
        raise IndentError(
            "Tab character in indentation",
            line=line_no,
            column=indent.index("\t") + 1,
            context="indentation must use spaces",
        )
    if len(indent) % cfg.indent_unit:
        raise IndentError(
            f"Invalid indentation ({len(indent)} spaces is not a multiple of {cfg.indent_unit})",
            line=line_no,
            column=1,
        )

    tokens = _tokenize(text, len(indent), line_no, cfg, last)
    _check_balance(tokens, line_no)
    return LineRecord(depth=len(indent) // cfg.indent_unit, tokens=tuple(tokens), line=line_no)


def _tokenize(text: str, start: int, line_no: int, cfg: ConverterConfig, last: bool) -> List[Token]:
    tokens: List[Token] = []
    quote = cfg.quote_char
    n = len(text)
    i = start
    while i < n:
        c = text[i]
        if c in _SPACES:
            i += 1
            continue
        if c == "(":
            tokens.append(Token(TokenKind.OPEN, c, line_no, i + 1))
            i += 1
            continue
        if c == ")":
            tokens.append(Token(TokenKind.CLOSE, c, line_no, i + 1))
            i += 1
            continue
        if c == quote:
            value, end = _read_string(text, i, line_no, quote, last)
            tokens.append(Token(TokenKind.STRING, value, line_no, i + 1))
            i = end
            continue

        j = i
        while j < n and text[j] not in _SPACES and text[j] not in "()" and text[j] != quote:
            j += 1
        word = text[i:j]
        kind = TokenKind.FOLD if word == cfg.fold_operator else TokenKind.SYMBOL
        tokens.append(Token(kind, word, line_no, i + 1))
        i = j
    return tokens


def _read_string(text: str, start: int, line_no: int, quote: str, last: bool):
    """Read a quoted literal opening at `start`; returns (value, index after closing quote)."""
    buf: List[str] = []
    n = len(text)
    j = start + 1
    while j < n:
        ch = text[j]
        if ch == "\\":
            if j + 1 >= n:
                if last:
                    raise UnexpectedEofError(
                        "Unexpected end of input after escape character",
                        line=line_no,
                        column=j + 1,
                        context="in string",
                    )
                break
            esc = text[j + 1]
            if esc == quote:
                buf.append(quote)
            elif esc in _ESCAPES:
                buf.append(_ESCAPES[esc])
            else:
                raise InvalidEscapeError(
                    f"Invalid escape sequence '\\{esc}'",
                    line=line_no,
                    column=j + 1,
                    context="in string",
                )
            j += 2
            continue
        if ch == quote:
            return "".join(buf), j + 1
        buf.append(ch)
        j += 1
    raise UnterminatedStringError(
        "Unterminated string literal",
        line=line_no,
        column=start + 1,
        context="string must close on the same line",
    )


def _check_balance(tokens: List[Token], line_no: int) -> None:
    opened: List[Token] = []
    for tok in tokens:
        if tok.kind is TokenKind.OPEN:
            opened.append(tok)
        elif tok.kind is TokenKind.CLOSE:
            if not opened:
                raise ParenImbalanceError("Unexpected ')'", line=line_no, column=tok.column)
            opened.pop()
    if opened:
        raise ParenImbalanceError("Unclosed '('", line=line_no, column=opened[-1].column)
