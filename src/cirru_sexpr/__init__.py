from cirru_sexpr.core.converter import cirru_to_lisp, parse
from cirru_sexpr.io.config import ConverterConfig, load_config
from cirru_sexpr.io.json_io import from_json_str, to_json_str
from cirru_sexpr.render.one_liner import format_one_liner, parse_one_liner
from cirru_sexpr.render.printer import Printer, to_lisp
from cirru_sexpr.render.writer import CirruWriter, format_cirru
from cirru_sexpr.syntax.errors import (
    CirruParseError,
    ErrorKind,
    ExprCountError,
    IndentError,
    InvalidEscapeError,
    ParenImbalanceError,
    UnexpectedEofError,
    UnterminatedStringError,
)
from cirru_sexpr.syntax.nodes import Document, Group, GroupKind, Leaf, LeafKind

__all__ = [
    "cirru_to_lisp",
    "parse",
    "ConverterConfig",
    "load_config",
    "from_json_str",
    "to_json_str",
    "format_one_liner",
    "parse_one_liner",
    "Printer",
    "to_lisp",
    "CirruWriter",
    "format_cirru",
    "CirruParseError",
    "ErrorKind",
    "ExprCountError",
    "IndentError",
    "InvalidEscapeError",
    "ParenImbalanceError",
    "UnexpectedEofError",
    "UnterminatedStringError",
    "Document",
    "Group",
    "GroupKind",
    "Leaf",
    "LeafKind",
]
