"""
Parse errors raised by the Cirru pipeline.

Every error carries a 1-based line number (and column where known) plus a
category. A failure aborts the whole conversion; nothing is recovered.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional


class ErrorKind(str, Enum):
    INDENTATION = "indentation"
    UNTERMINATED_STRING = "unterminated-string"
    INVALID_ESCAPE = "invalid-escape"
    PAREN_IMBALANCE = "paren-imbalance"
    UNEXPECTED_EOF = "unexpected-eof"
    EXPR_COUNT = "expr-count"


class CirruParseError(ValueError):
    kind: ErrorKind = ErrorKind.INDENTATION

    def __init__(
        self,
        message: str,
        *,
        line: int,
        column: Optional[int] = None,
        context: str = "",
    ):
        self.message = message
        self.line = line
        self.column = column
        self.context = context
        super().__init__(str(self))

    def __str__(self) -> str:
        where = f"line {self.line}"
        if self.column is not None:
            where += f", column {self.column}"
        return f"{self.message} at {where}"

    def format_detailed(self, source: Optional[str] = None) -> str:
        out = [f"Error[{self.kind.value}]: {self}"]
        if self.context:
            out.append(f"  context: {self.context}")
        if source is not None:
            snippet = extract_snippet(source, self.line, self.column)
            if snippet:
                out.append("")
                out.append(snippet)
        return "\n".join(out)


class IndentError(CirruParseError):
    kind = ErrorKind.INDENTATION


class UnterminatedStringError(CirruParseError):
    kind = ErrorKind.UNTERMINATED_STRING


class InvalidEscapeError(CirruParseError):
    kind = ErrorKind.INVALID_ESCAPE


class ParenImbalanceError(CirruParseError):
    kind = ErrorKind.PAREN_IMBALANCE


class UnexpectedEofError(CirruParseError):
    kind = ErrorKind.UNEXPECTED_EOF


class ExprCountError(CirruParseError):
    kind = ErrorKind.EXPR_COUNT


def extract_snippet(source: str, line: int, column: Optional[int] = None) -> str:
    """Render the failing line with one line of context on each side."""
    lines = source.split("\n")
    if line < 1 or line > len(lines):
        return ""
    start = max(line - 2, 0)
    end = min(line + 1, len(lines))
    chunk: List[str] = []
    for idx in range(start, end):
        no = idx + 1
        chunk.append(f"{no:4} | {lines[idx].rstrip(chr(13))}")
        if no == line and column is not None:
            chunk.append(f"     | {' ' * max(column - 1, 0)}^")
    return "\n".join(chunk)
