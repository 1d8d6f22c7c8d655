# tests/test_resolver.py
import pytest

from cirru_sexpr.syntax.errors import IndentError
from cirru_sexpr.syntax.lexer import lex
from cirru_sexpr.syntax.resolver import resolve


def _outline(nodes):
    return [(n.record.tokens[0].text, _outline(n.children)) for n in nodes]


def test_siblings_at_same_depth():
    roots = resolve(lex("a\nb\nc"))
    assert _outline(roots) == [("a", []), ("b", []), ("c", [])]


def test_children_attach_to_nearest_shallower_line():
    roots = resolve(lex("a\n  b\n  c\nd"))
    assert _outline(roots) == [("a", [("b", []), ("c", [])]), ("d", [])]


def test_depth_may_drop_several_levels():
    roots = resolve(lex("a\n  b\n    c\n      d\ne"))
    assert _outline(roots) == [("a", [("b", [("c", [("d", [])])])]), ("e", [])]


def test_return_to_intermediate_depth():
    roots = resolve(lex("a\n  b\n    c\n  d"))
    assert _outline(roots) == [("a", [("b", [("c", [])]), ("d", [])])]


def test_skipping_a_level_is_an_error():
    with pytest.raises(IndentError) as ei:
        resolve(lex("a\n    b"))
    assert ei.value.line == 2
    assert "Unexpected indent" in str(ei.value)


def test_indented_first_line_is_an_error():
    with pytest.raises(IndentError) as ei:
        resolve(lex("  a"))
    assert ei.value.line == 1


def test_blank_lines_do_not_break_nesting():
    roots = resolve(lex("a\n\n  b\n\n  c"))
    assert _outline(roots) == [("a", [("b", []), ("c", [])])]
