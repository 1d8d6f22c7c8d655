# tests/test_one_liner.py
import pytest

from cirru_sexpr.render.one_liner import format_one_liner, parse_one_liner
from cirru_sexpr.syntax.errors import ExprCountError
from cirru_sexpr.syntax.nodes import group, string, symbol


@pytest.mark.parametrize(
    "tree, text",
    [
        (
            group(symbol("defn"), symbol("main"), group(), group(symbol("println"), string("Hello, world!"))),
            'defn main () $ println "Hello, world!"',
        ),
        (
            group(symbol("a"), group(symbol("b"), group(symbol("c"))), symbol("d")),
            "a (b (c)) d",
        ),
        (
            group(symbol("if"), symbol("condition"), group(symbol("do"), group(symbol("action")))),
            "if condition $ do $ action",
        ),
        (
            group(symbol("a"), symbol("b"), group()),
            "a b $",
        ),
        (
            group(group(symbol("a"), symbol("b"))),
            "(a b)",
        ),
    ],
)
def test_format_and_parse_back(tree, text):
    assert format_one_liner(tree) == text
    assert parse_one_liner(text).shape() == tree.shape()


def test_leading_comment_marker_is_quoted():
    tree = group(symbol(";;x"), symbol("y"))
    text = format_one_liner(tree)
    assert text == '";;x" y'
    assert parse_one_liner(text).shape() == (("string", ";;x"), ("symbol", "y"))


def test_multiple_lines_are_rejected():
    with pytest.raises(ExprCountError) as ei:
        parse_one_liner("a\nb")
    assert ei.value.line == 2


def test_empty_input_is_rejected():
    with pytest.raises(ExprCountError):
        parse_one_liner("")


def test_format_requires_a_group():
    with pytest.raises(ValueError):
        format_one_liner(symbol("a"))
