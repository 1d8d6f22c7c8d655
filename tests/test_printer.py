# tests/test_printer.py
import pytest

from cirru_sexpr.io.config import ConverterConfig
from cirru_sexpr.render.printer import Printer, to_lisp
from cirru_sexpr.syntax.nodes import Document, Group, GroupKind, group, string, symbol


@pytest.fixture
def printer():
    return Printer()


def test_group_kinds_render_alike(printer):
    for kind in GroupKind:
        assert printer.render(Group((symbol("a"), symbol("b")), kind)) == "(a b)"


def test_nested_groups(printer):
    tree = group(symbol("a"), symbol("b"), group(symbol("c"), symbol("d"), group(symbol("e"), symbol("f"))))
    assert printer.render(tree) == "(a b (c d (e f)))"


def test_empty_group(printer):
    assert printer.render(group()) == "()"
    assert printer.render(group(group(), group())) == "(() ())"


@pytest.mark.parametrize(
    "leaf, expected",
    [
        (symbol("a"), "a"),
        (symbol("<=?!"), "<=?!"),
        (symbol("中文"), "中文"),
        (symbol("a b"), '"a b"'),
        (symbol("$"), '"$"'),
        (symbol(""), '""'),
        (symbol("(x"), '"(x"'),
        (string("a"), '"a"'),
        (string('say "hi"'), '"say \\"hi\\""'),
        (string("a\nb\tc"), '"a\\nb\\tc"'),
        (string("back\\slash"), '"back\\\\slash"'),
    ],
)
def test_leaf_rendering(printer, leaf, expected):
    assert printer.render(leaf) == expected


def test_document_uses_configured_separator():
    doc = Document((group(symbol("a")), group(symbol("b"))))
    assert Printer().render_document(doc) == "(a)\n(b)"
    assert Printer(ConverterConfig(separator=" ")).render_document(doc) == "(a) (b)"
    assert Printer().render_document(doc, separator="\n\n") == "(a)\n\n(b)"


def test_custom_quote_char():
    p = Printer(ConverterConfig(quote_char="'"))
    assert p.render(string("it's")) == "'it\\'s'"


def test_to_lisp_accepts_nodes_and_documents():
    tree = group(symbol("a"), string("b c"))
    assert to_lisp(tree) == '(a "b c")'
    assert to_lisp(Document((tree, tree)), separator=" ") == '(a "b c") (a "b c")'


def test_deep_tree_renders_without_recursion(printer):
    node = symbol("x")
    for _ in range(5000):
        node = group(node)
    out = printer.render(node)
    assert out == "(" * 5000 + "x" + ")" * 5000


def test_pretty_layout_breaks_before_nested_groups():
    tree = group(
        symbol("defn"), symbol("fib"), group(symbol("n")),
        group(
            symbol("if"), group(symbol("<="), symbol("n"), symbol("2")), symbol("1"),
            group(
                symbol("+"),
                group(symbol("fib"), group(symbol("dec"), symbol("n"))),
                group(symbol("fib"), group(symbol("-"), symbol("n"), symbol("2"))),
            ),
        ),
    )
    assert Printer().render_pretty(tree) == (
        "(defn fib (n)\n"
        "  (if (<= n 2) 1\n"
        "    (+\n"
        "      (fib (dec n))\n"
        "      (fib (- n 2)))))"
    )


def test_pretty_layout_keeps_flat_groups_on_one_line(printer):
    tree = group(symbol("a"), group(symbol("b")), group(), symbol("c"))
    assert printer.render_pretty(tree) == printer.render(tree) == "(a (b) () c)"


def test_pretty_layout_turns_comment_groups_into_lines(printer):
    tree = group(
        symbol("defn"), symbol("f"),
        group(symbol(";;"), symbol("note"), string("x y")),
        group(symbol("g"), symbol("x")),
    )
    assert printer.render_pretty(tree) == '(defn f\n  ;; note "x y"\n  (g x))'
    assert printer.render_pretty(group(symbol(";;"), symbol("top"))) == ";; top"


def test_pretty_document():
    doc = Document((group(symbol("a"), group(symbol("b"), group(symbol("c")))), group(symbol("d"))))
    assert to_lisp(doc, pretty=True) == "(a\n  (b (c)))\n(d)"
