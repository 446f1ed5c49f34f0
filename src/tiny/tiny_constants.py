"""
Static vocabulary tables for the tiny language syntax analyzer.

This module holds every closed set the parser and its collaborators agree on:

Classes:
    TokenKind: The fixed token vocabulary produced by the external lexer.
    NodeKind: The AST node variants, valued by their printed names.
    OperatorInfo: Precedence, associativity, arity and target node kind of a token.

Tables:
    operator_table (Mapping[TokenKind, OperatorInfo]):
        Read-only metadata for every token kind. Non-operators carry precedence -1.
    token_hashmap (Mapping[str, TokenKind]):
        External token name (as written in `.lex` files) to TokenKind.
    LEAF_KINDS (frozenset[NodeKind]):
        The node kinds that carry a string payload instead of children.

The tables are built once at import time and exposed through `MappingProxyType`
so no caller can mutate them. A parser that needs different operator behavior
(for instance a right-associative operator in a test) builds its own mapping
and passes it to `Parser(..., operators=...)`.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, NamedTuple


class TokenKind(Enum):
    """Closed set of token kinds, named exactly as the external lexer spells them."""

    End_of_input = 0
    Op_multiply = 1
    Op_divide = 2
    Op_mod = 3
    Op_add = 4
    Op_subtract = 5
    Op_negate = 6
    Op_not = 7
    Op_less = 8
    Op_lessequal = 9
    Op_greater = 10
    Op_greaterequal = 11
    Op_equal = 12
    Op_notequal = 13
    Op_assign = 14
    Op_and = 15
    Op_or = 16
    Keyword_if = 17
    Keyword_else = 18
    Keyword_while = 19
    Keyword_print = 20
    Keyword_putc = 21
    LeftParen = 22
    RightParen = 23
    LeftBrace = 24
    RightBrace = 25
    Semicolon = 26
    Comma = 27
    Identifier = 28
    Integer = 29
    String = 30

    def __str__(self) -> str:
        return self.name


class NodeKind(Enum):
    """AST node variants. The value is the name written by the AST printer."""

    Identifier = "Identifier"
    String = "String"
    Integer = "Integer"
    Sequence = "Sequence"
    If = "If"
    Prtc = "Prtc"
    Prts = "Prts"
    Prti = "Prti"
    While = "While"
    Assign = "Assign"
    Negate = "Negate"
    Not = "Not"
    Multiply = "Multiply"
    Divide = "Divide"
    Mod = "Mod"
    Add = "Add"
    Subtract = "Subtract"
    Less = "Less"
    LessEqual = "LessEqual"
    Greater = "Greater"
    GreaterEqual = "GreaterEqual"
    Equal = "Equal"
    NotEqual = "NotEqual"
    And = "And"
    Or = "Or"

    def __str__(self) -> str:
        return self.value


LEAF_KINDS: frozenset[NodeKind] = frozenset(
    {NodeKind.Identifier, NodeKind.String, NodeKind.Integer}
)


class OperatorInfo(NamedTuple):
    """Parsing metadata attached to a token kind.

    Attributes:
        precedence (int): Binding strength, higher binds tighter. -1 for non-operators.
        right_assoc (bool): True if equal-precedence chains nest to the right.
        is_binary (bool): True if the token may appear between two operands.
        is_unary (bool): True if the token is a prefix operator.
        node_kind (NodeKind | None): Node produced for this token, if any.
    """

    precedence: int = -1
    right_assoc: bool = False
    is_binary: bool = False
    is_unary: bool = False
    node_kind: NodeKind | None = None


def _binary(precedence: int, node_kind: NodeKind) -> OperatorInfo:
    return OperatorInfo(precedence, False, True, False, node_kind)


def _unary(precedence: int, node_kind: NodeKind) -> OperatorInfo:
    return OperatorInfo(precedence, False, False, True, node_kind)


_OPERATORS: dict[TokenKind, OperatorInfo] = {
    TokenKind.Op_multiply: _binary(13, NodeKind.Multiply),
    TokenKind.Op_divide: _binary(13, NodeKind.Divide),
    TokenKind.Op_mod: _binary(13, NodeKind.Mod),
    TokenKind.Op_add: _binary(12, NodeKind.Add),
    TokenKind.Op_subtract: _binary(12, NodeKind.Subtract),
    TokenKind.Op_negate: _unary(14, NodeKind.Negate),
    TokenKind.Op_not: _unary(14, NodeKind.Not),
    TokenKind.Op_less: _binary(10, NodeKind.Less),
    TokenKind.Op_lessequal: _binary(10, NodeKind.LessEqual),
    TokenKind.Op_greater: _binary(10, NodeKind.Greater),
    TokenKind.Op_greaterequal: _binary(10, NodeKind.GreaterEqual),
    TokenKind.Op_equal: _binary(9, NodeKind.Equal),
    TokenKind.Op_notequal: _binary(9, NodeKind.NotEqual),
    TokenKind.Op_and: _binary(5, NodeKind.And),
    TokenKind.Op_or: _binary(4, NodeKind.Or),
    # Non-operators that still name the node they introduce
    TokenKind.Op_assign: OperatorInfo(node_kind=NodeKind.Assign),
    TokenKind.Keyword_if: OperatorInfo(node_kind=NodeKind.If),
    TokenKind.Keyword_while: OperatorInfo(node_kind=NodeKind.While),
    TokenKind.Identifier: OperatorInfo(node_kind=NodeKind.Identifier),
    TokenKind.Integer: OperatorInfo(node_kind=NodeKind.Integer),
    TokenKind.String: OperatorInfo(node_kind=NodeKind.String),
}

operator_table: Mapping[TokenKind, OperatorInfo] = MappingProxyType(
    {kind: _OPERATORS.get(kind, OperatorInfo()) for kind in TokenKind}
)

token_hashmap: Mapping[str, TokenKind] = MappingProxyType(
    {kind.name: kind for kind in TokenKind}
)


__all__ = [
    "LEAF_KINDS",
    "NodeKind",
    "OperatorInfo",
    "TokenKind",
    "operator_table",
    "token_hashmap",
]
