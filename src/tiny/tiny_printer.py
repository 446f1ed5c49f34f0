"""
Serializes tiny ASTs to the flat pre-order text format.

Each node is written on its own line, parent before children, left child before
right child:

    - interior nodes write their kind name (e.g. `Sequence`, `If`, `Add`);
    - leaves write their kind name, a space, and their payload (`Integer 42`);
    - an absent child writes a single `;`.

Every line, including the last, ends with a newline. For `x = 42;` parsed as a
statement:

    Assign
    Identifier x
    Integer 42

Functions:
    iter_ast_lines(node, width=0) -> Iterator[str]
    dump_ast(node) -> str
    echo_ast(node, file=None) -> None

The walk keeps its own stack instead of recursing, so programs with many
statements (long left-deep Sequence chains) print without touching the
interpreter's recursion limit.
"""

import sys
from typing import Iterator, TextIO

from tiny.tiny_ast import Node

ECHO_WIDTH = 14
"""Column width of the kind name in the console trace."""


def iter_ast_lines(node: Node | None, width: int = 0) -> Iterator[str]:
    """Yields the pre-order lines for `node`, without newlines.

    Args:
        node: Root of the tree, or None for an empty tree.
        width: Minimum width of the kind-name column. 0 disables padding.
    """
    stack: list[Node | None] = [node]
    while stack:
        current = stack.pop()
        if current is None:
            yield ";"
            continue
        name = f"{current.kind!s:<{width}}"
        if current.is_leaf():
            yield f"{name} {current.value}"
        else:
            yield name.rstrip()
            stack.append(current.right)
            stack.append(current.left)


def dump_ast(node: Node | None) -> str:
    """Returns the canonical pre-order dump of `node`."""
    return "".join(f"{line}\n" for line in iter_ast_lines(node))


def echo_ast(node: Node | None, file: TextIO | None = None) -> None:
    """Prints the tree as a column-aligned trace (defaults to stdout)."""
    out = file if file is not None else sys.stdout
    for line in iter_ast_lines(node, width=ECHO_WIDTH):
        print(line, file=out)


__all__ = ["ECHO_WIDTH", "dump_ast", "echo_ast", "iter_ast_lines"]
