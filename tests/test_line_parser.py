# tests/test_line_parser.py
import pytest

from cirru_sexpr.io.config import ConverterConfig
from cirru_sexpr.syntax.errors import ParenImbalanceError
from cirru_sexpr.syntax.lexer import lex_line
from cirru_sexpr.syntax.line_parser import parse_line
from cirru_sexpr.syntax.nodes import Group, GroupKind, Token, TokenKind, group, string, symbol


def _items(text, children=(), config=None):
    return parse_line(lex_line(text, 1, config).tokens, children)


def _shape(items):
    return tuple(i.shape() for i in items)


def test_flat_symbols():
    assert _items("a b c") == [symbol("a"), symbol("b"), symbol("c")]


def test_explicit_parens_build_paren_groups():
    items = _items("a (b c)")
    assert items[1] == Group((symbol("b"), symbol("c")), GroupKind.PAREN)


def test_nested_parens():
    items = _items("a (b (c d)) e")
    assert _shape(items) == _shape([symbol("a"), group(symbol("b"), group(symbol("c"), symbol("d"))), symbol("e")])


def test_empty_parens():
    assert _items("a ()") == [symbol("a"), Group((), GroupKind.PAREN)]


def test_fold_collects_rest_of_line():
    items = _items("a $ b c")
    assert items == [symbol("a"), Group((symbol("b"), symbol("c")), GroupKind.FOLD)]


def test_chained_folds_nest():
    items = _items("a $ b $ c")
    assert _shape(items) == _shape([symbol("a"), group(symbol("b"), group(symbol("c")))])


def test_children_land_in_innermost_fold():
    items = _items("a $ b $ c", children=[symbol("d")])
    assert _shape(items) == _shape([symbol("a"), group(symbol("b"), group(symbol("c"), symbol("d")))])


def test_children_without_fold_extend_the_line():
    child = group(symbol("x"), symbol("y"))
    assert _items("a b", children=[child]) == [symbol("a"), symbol("b"), child]


def test_lone_fold_only_folds_children():
    items = _items("$", children=[symbol("b"), symbol("c")])
    assert items == [Group((symbol("b"), symbol("c")), GroupKind.FOLD)]


def test_fold_inside_parens_stops_at_close():
    items = _items("(a $ b c) d")
    assert _shape(items) == _shape([group(symbol("a"), group(symbol("b"), symbol("c"))), symbol("d")])
    assert items[0].kind is GroupKind.PAREN
    assert items[0].children[1].kind is GroupKind.FOLD


def test_trailing_fold_gives_empty_group():
    assert _items("a b $") == [symbol("a"), symbol("b"), Group((), GroupKind.FOLD)]


def test_strings_become_string_leaves():
    assert _items('echo "a b"') == [symbol("echo"), string("a b")]


def test_comma_inside_parens_is_an_ordinary_symbol():
    items = _items("a (, b c) d")
    assert _shape(items) == _shape([symbol("a"), group(symbol(","), symbol("b"), symbol("c")), symbol("d")])


def test_custom_fold_operator_comes_from_the_lexer():
    cfg = ConverterConfig(fold_operator="~")
    assert _shape(_items("a ~ b $", config=cfg)) == _shape([symbol("a"), group(symbol("b"), symbol("$"))])


def test_stray_close_paren():
    toks = [Token(TokenKind.SYMBOL, "a", 1, 1), Token(TokenKind.CLOSE, ")", 1, 2)]
    with pytest.raises(ParenImbalanceError) as ei:
        parse_line(toks)
    assert ei.value.column == 2


def test_close_paren_cannot_end_a_line_level_fold():
    toks = [
        Token(TokenKind.SYMBOL, "a", 1, 1),
        Token(TokenKind.FOLD, "$", 1, 3),
        Token(TokenKind.SYMBOL, "b", 1, 5),
        Token(TokenKind.CLOSE, ")", 1, 6),
    ]
    with pytest.raises(ParenImbalanceError):
        parse_line(toks)


def test_unclosed_open_paren():
    toks = [Token(TokenKind.OPEN, "(", 3, 1), Token(TokenKind.SYMBOL, "a", 3, 2)]
    with pytest.raises(ParenImbalanceError) as ei:
        parse_line(toks)
    assert ei.value.line == 3
    assert ei.value.column == 1
