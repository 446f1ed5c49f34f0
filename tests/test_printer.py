import io

import pytest
from hypothesis import given
from hypothesis import strategies as st

from tiny.tiny_ast import Node, make_leaf, make_node
from tiny.tiny_constants import NodeKind, TokenKind
from tiny.tiny_parser import Parser
from tiny.tiny_printer import ECHO_WIDTH, dump_ast, echo_ast, iter_ast_lines
from tiny.tiny_tokens import Token


def tok(kind: TokenKind, text: str = "") -> Token:
    return Token(kind, text, 1, 1)


def eoi() -> Token:
    return tok(TokenKind.End_of_input)


ASSIGN_X_42 = [
    tok(TokenKind.Identifier, "x"),
    tok(TokenKind.Op_assign),
    tok(TokenKind.Integer, "42"),
    tok(TokenKind.Semicolon),
    eoi(),
]

IF_PUTC = [
    tok(TokenKind.Keyword_if),
    tok(TokenKind.LeftParen),
    tok(TokenKind.Identifier, "x"),
    tok(TokenKind.RightParen),
    tok(TokenKind.Keyword_putc),
    tok(TokenKind.LeftParen),
    tok(TokenKind.Integer, "65"),
    tok(TokenKind.RightParen),
    tok(TokenKind.Semicolon),
    tok(TokenKind.Keyword_else),
    tok(TokenKind.Keyword_putc),
    tok(TokenKind.LeftParen),
    tok(TokenKind.Integer, "66"),
    tok(TokenKind.RightParen),
    tok(TokenKind.Semicolon),
    eoi(),
]


def test_dump_empty_tree() -> None:
    assert dump_ast(None) == ";\n"


def test_dump_leaf() -> None:
    assert dump_ast(make_leaf(NodeKind.String, '"hi there"')) == 'String "hi there"\n'


def test_dump_assignment_statement() -> None:
    stmt = Parser(ASSIGN_X_42).parse_statement()
    assert dump_ast(stmt) == "Assign\nIdentifier x\nInteger 42\n"


def test_dump_assignment_program() -> None:
    root = Parser(ASSIGN_X_42).parse()
    assert dump_ast(root) == "Sequence\n;\nAssign\nIdentifier x\nInteger 42\n"


def test_dump_if_putc() -> None:
    stmt = Parser(IF_PUTC).parse_statement()
    assert dump_ast(stmt).splitlines() == [
        "If",
        "Identifier x",
        "If",
        "Prtc",
        "Integer 65",
        ";",
        "Prtc",
        "Integer 66",
        ";",
    ]


def test_dump_if_without_else_ends_with_empty_branch() -> None:
    stmt = Parser(IF_PUTC[:9] + [eoi()]).parse_statement()
    assert dump_ast(stmt).splitlines()[-1] == ";"


def test_dump_is_pre_order_left_first() -> None:
    tree = make_node(
        NodeKind.Add,
        make_node(NodeKind.Multiply, make_leaf(NodeKind.Integer, "1"), make_leaf(NodeKind.Integer, "2")),
        make_node(NodeKind.Negate, make_leaf(NodeKind.Identifier, "y")),
    )
    assert list(iter_ast_lines(tree)) == [
        "Add",
        "Multiply",
        "Integer 1",
        "Integer 2",
        "Negate",
        "Identifier y",
        ";",
    ]


def test_every_line_is_newline_terminated() -> None:
    dump = dump_ast(Parser(IF_PUTC).parse())
    assert dump.endswith("\n")
    assert all(line for line in dump.split("\n")[:-1])


def test_dump_is_deterministic() -> None:
    root = Parser(IF_PUTC).parse()
    first = dump_ast(root)
    assert dump_ast(root) == first
    assert dump_ast(Parser(IF_PUTC).parse()) == first


@given(st.lists(st.sampled_from(["a", "b", "1", "22"]), min_size=1, max_size=30))  # type: ignore[misc]
def test_dump_of_print_list_is_stable(items: list[str]) -> None:
    tokens = [tok(TokenKind.Keyword_print), tok(TokenKind.LeftParen)]
    for i, item in enumerate(items):
        if i:
            tokens.append(tok(TokenKind.Comma))
        kind = TokenKind.Integer if item.isdigit() else TokenKind.Identifier
        tokens.append(tok(kind, item))
    tokens += [tok(TokenKind.RightParen), tok(TokenKind.Semicolon), eoi()]
    tree = Parser(tokens).parse()
    dump = dump_ast(tree)
    assert dump == dump_ast(tree)
    assert dump.count("Prti\n") == len(items)
    leaves = [line.split(" ", 1)[1] for line in dump.splitlines() if " " in line]
    assert leaves == items


def test_dump_long_sequence_chain() -> None:
    root: Node | None = None
    for i in range(5000):
        stmt = make_node(
            NodeKind.Assign,
            make_leaf(NodeKind.Identifier, "x"),
            make_leaf(NodeKind.Integer, str(i)),
        )
        root = make_node(NodeKind.Sequence, root, stmt)
    lines = dump_ast(root).splitlines()
    assert lines[:3] == ["Sequence", "Sequence", "Sequence"]
    assert lines[-1] == "Integer 4999"
    assert len(lines) == 5000 * 4 + 1


def test_iter_ast_lines_width_pads_kind_names() -> None:
    tree = make_node(NodeKind.Prtc, make_leaf(NodeKind.Integer, "65"))
    assert list(iter_ast_lines(tree, width=ECHO_WIDTH)) == [
        "Prtc",
        "Integer        65",
        ";",
    ]


@pytest.mark.parametrize("width", [0, 1, 5])  # type: ignore[misc]
def test_narrow_width_does_not_truncate(width: int) -> None:
    assert list(iter_ast_lines(make_leaf(NodeKind.Identifier, "abc"), width)) == [
        "Identifier abc"
    ]


def test_echo_ast_writes_aligned_trace() -> None:
    buf = io.StringIO()
    echo_ast(Parser(ASSIGN_X_42).parse_statement(), file=buf)
    assert buf.getvalue() == "Assign\nIdentifier     x\nInteger        42\n"


def test_echo_ast_defaults_to_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    echo_ast(None)
    assert capsys.readouterr().out == ";\n"
