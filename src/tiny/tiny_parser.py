"""
tiny Language Parser

Parses a pre-tokenized tiny program into an abstract syntax tree (AST).

This module implements the two mutually recursive layers of the syntax analyzer:
a precedence-climbing expression parser and a recursive-descent statement parser.
Both operate on one `TokenStream` cursor owned by the `Parser` instance and use a
single token of lookahead; the grammar never backtracks.

Supported Constructs
--------------------
- Expressions:
    * Integer, identifier and string literals
    * Unary `-` (Negate), `not` (Not) and `+` (no node, the operand is returned as is)
    * Binary arithmetic, comparison and logical operators, ranked by the
      operator table in `tiny.tiny_constants`
    * Parenthesized expressions, with comma-separated items folded into Sequence

- Statements:
    * Assignment: `x = expr;`
    * Control flow: `if (cond) stmt [else stmt]`, `while (cond) stmt`
    * Output: `putc(expr);`, `print("text", expr, ...);`
    * Blocks: `{ stmt... }`
    * Empty statement: `;`

Tree Shape
----------
- Statement lists fold left-deep: `Sequence(Sequence(None, s1), s2)`.
- `if` produces `If(cond, If(then, else))`; a missing else is None.
- Operators of equal precedence chain left-deep unless flagged right-associative.

Entry Points
------------
- `parse()`: Parse a whole program into one root Node (None for an empty program).
- `parse_statement()`: Parse one statement (None for an empty statement).
- `parse_expression(min_precedence)`: Parse one expression.

Raises
------
ParseError
    A `SyntaxError` subclass raised on the first token that does not fit the
    grammar. There is no error recovery.

Nesting depth of the input maps directly onto Python call depth. Inputs nested
beyond the interpreter's recursion limit raise `RecursionError`.
"""

from __future__ import annotations

from typing import Callable, Iterable, Mapping

from tiny.tiny_ast import Node, make_leaf, make_node
from tiny.tiny_constants import NodeKind, OperatorInfo, TokenKind, operator_table
from tiny.tiny_tokens import Token, TokenStream

_NOT_AN_OPERATOR = OperatorInfo()

_LEAF_TOKENS: dict[TokenKind, NodeKind] = {
    TokenKind.Identifier: NodeKind.Identifier,
    TokenKind.Integer: NodeKind.Integer,
    TokenKind.String: NodeKind.String,
}


class ParseError(SyntaxError):
    """Raised when the current token cannot satisfy the grammar rule in force.

    Attributes:
        message (str): Description without position information.
        token (Token | None): The offending token.
        line (int): Source line of the offending token (0 if unknown).
        column (int): Source column of the offending token (0 if unknown).
    """

    def __init__(self, message: str, token: Token | None = None):
        self.message = message
        self.token = token
        self.line = token.line if token is not None else 0
        self.column = token.column if token is not None else 0
        super().__init__(message)
        self.lineno = self.line or None
        self.offset = self.column or None

    def __str__(self) -> str:
        if self.line > 0 and self.column > 0:
            return f"{self.message} in line {self.line}, pos {self.column}"
        return self.message


class Parser:
    """
    tiny Parser Class

    Turns a token sequence terminated by End_of_input into a tree of `Node`
    objects. One instance parses one token stream.

    Attributes
    ----------
    stream : TokenStream
        Cursor over the input tokens.
    operators : Mapping[TokenKind, OperatorInfo]
        Precedence, associativity and node-kind metadata consulted by the
        expression parser. Defaults to `operator_table`.

    Methods
    -------
    parse() -> Node | None
        Parse a complete program.
    parse_statement() -> Node | None
        Parse a single statement.
    parse_expression(min_precedence: int = 0) -> Node
        Parse an expression whose binary operators bind at least as tightly as
        `min_precedence`.
    parse_paren_expression() -> Node
        Parse `( expr {, expr} )`.
    """

    def __init__(
        self,
        tokens: Iterable[Token] | TokenStream,
        operators: Mapping[TokenKind, OperatorInfo] | None = None,
    ) -> None:
        self.stream: TokenStream = (
            tokens if isinstance(tokens, TokenStream) else TokenStream(tokens)
        )
        self.operators: Mapping[TokenKind, OperatorInfo] = (
            operator_table if operators is None else operators
        )

        # STATEMENT DISPATCH
        self.statement_parsers: dict[TokenKind, Callable[[], Node | None]] = {
            TokenKind.Keyword_if: self.parse_if,
            TokenKind.Keyword_while: self.parse_while,
            TokenKind.Keyword_putc: self.parse_putc,
            TokenKind.Keyword_print: self.parse_print,
            TokenKind.Identifier: self.parse_assignment,
            TokenKind.LeftBrace: self.parse_block,
            TokenKind.Semicolon: self.parse_empty,
        }

    def current(self) -> Token:
        return self.stream.current()

    def advance(self) -> Token:
        return self.stream.advance()

    def operator(self, kind: TokenKind) -> OperatorInfo:
        return self.operators.get(kind, _NOT_AN_OPERATOR)

    def error(self, message: str, token: Token | None = None) -> ParseError:
        return ParseError(message, token if token is not None else self.current())

    def expect(self, context: str, kind: TokenKind) -> Token:
        """Consumes the current token if it has the given kind.

        Raises:
            ParseError: ``"<context>: Expecting '<kind>', found: '<actual>'"``.
        """
        tok = self.current()
        if tok.kind is kind:
            self.advance()
            return tok
        raise self.error(f"{context}: Expecting '{kind}', found: '{tok.kind}'", tok)

    def parse(self) -> Node | None:
        """Parse a full program and return the root of its left-deep Sequence chain."""
        root: Node | None = None
        while not self.stream.at_end():
            stmt = self.parse_statement()
            if stmt is not None:
                root = make_node(NodeKind.Sequence, root, stmt)
        return root

    # EXPRESSIONS

    def parse_expression(self, min_precedence: int = 0) -> Node:
        """Parse an expression by precedence climbing.

        A right operand is parsed at the operator's precedence plus one, so equal
        precedence operators fold left-deep. Right-associative operators recurse
        at their own precedence instead and fold right-deep.
        """
        node = self.parse_primary()
        while True:
            info = self.operator(self.current().kind)
            if not info.is_binary or info.precedence < min_precedence:
                return node
            self.advance()
            assert info.node_kind is not None  # for mypy
            right = self.parse_expression(
                info.precedence + (0 if info.right_assoc else 1)
            )
            node = make_node(info.node_kind, node, right)

    def parse_primary(self) -> Node:
        """Parse a literal, identifier, unary operation or parenthesized expression."""
        tok = self.current()

        if tok.kind is TokenKind.LeftParen:
            return self.parse_paren_expression()

        if tok.kind in _LEAF_TOKENS:
            self.advance()
            return make_leaf(_LEAF_TOKENS[tok.kind], tok.text)

        if tok.kind in (TokenKind.Op_add, TokenKind.Op_subtract):
            # Unary minus and plus arrive as Op_subtract / Op_add.
            negate = self.operator(TokenKind.Op_negate)
            self.advance()
            operand = self.parse_expression(negate.precedence)
            if tok.kind is TokenKind.Op_add:
                return operand
            return make_node(NodeKind.Negate, operand)

        info = self.operator(tok.kind)
        if info.is_unary:
            self.advance()
            operand = self.parse_expression(info.precedence)
            assert info.node_kind is not None  # for mypy
            return make_node(info.node_kind, operand)

        raise self.error(f"Unexpected token: {tok.kind}", tok)

    def parse_paren_expression(self) -> Node:
        """Parse `( expr {, expr} )`, folding comma-separated items into Sequence."""
        self.expect("Expression", TokenKind.LeftParen)
        node = self.parse_expression(0)
        while self.current().kind is TokenKind.Comma:
            self.advance()
            node = make_node(NodeKind.Sequence, node, self.parse_expression(0))
        self.expect("Expression", TokenKind.RightParen)
        return node

    # STATEMENTS

    def parse_statement(self) -> Node | None:
        """Parse one statement. Returns None for `;` and at End_of_input."""
        tok = self.current()
        if tok.kind is TokenKind.End_of_input:
            return None
        handler = self.statement_parsers.get(tok.kind)
        if handler is None:
            raise self.error(
                f"Expecting start of statement, found: '{tok.kind}'", tok
            )
        return handler()

    def parse_empty(self) -> None:
        self.expect("Statement", TokenKind.Semicolon)

    def parse_if(self) -> Node:
        """Parse `if (cond) stmt [else stmt]` into If(cond, If(then, else))."""
        self.expect("If", TokenKind.Keyword_if)
        condition = self.parse_paren_expression()
        then_branch = self.parse_statement()
        else_branch = None
        if self.current().kind is TokenKind.Keyword_else:
            self.advance()
            else_branch = self.parse_statement()
        return make_node(
            NodeKind.If, condition, make_node(NodeKind.If, then_branch, else_branch)
        )

    def parse_while(self) -> Node:
        self.expect("While", TokenKind.Keyword_while)
        condition = self.parse_paren_expression()
        body = self.parse_statement()
        return make_node(NodeKind.While, condition, body)

    def parse_putc(self) -> Node:
        self.expect("Putc", TokenKind.Keyword_putc)
        node = make_node(NodeKind.Prtc, self.parse_paren_expression())
        self.expect("Putc", TokenKind.Semicolon)
        return node

    def parse_print(self) -> Node:
        """Parse `print(item, ...);`.

        String literals become Prts, anything else an expression wrapped in Prti.
        Items are folded into a left-deep Sequence starting from None.
        """
        self.expect("Print", TokenKind.Keyword_print)
        self.expect("Print", TokenKind.LeftParen)
        node: Node | None = None
        while True:
            tok = self.current()
            if tok.kind is TokenKind.String:
                self.advance()
                item = make_node(NodeKind.Prts, make_leaf(NodeKind.String, tok.text))
            else:
                item = make_node(NodeKind.Prti, self.parse_expression(0))
            node = make_node(NodeKind.Sequence, node, item)
            if self.current().kind is not TokenKind.Comma:
                break
            self.advance()
        self.expect("Print", TokenKind.RightParen)
        self.expect("Print", TokenKind.Semicolon)
        assert node is not None  # for mypy
        return node

    def parse_assignment(self) -> Node:
        target_tok = self.expect("Assign", TokenKind.Identifier)
        target = make_leaf(NodeKind.Identifier, target_tok.text)
        self.expect("Assign", TokenKind.Op_assign)
        value = self.parse_expression(0)
        self.expect("Assign", TokenKind.Semicolon)
        return make_node(NodeKind.Assign, target, value)

    def parse_block(self) -> Node | None:
        """Parse `{ stmt... }` into a left-deep Sequence. `{ }` yields None."""
        self.expect("Block", TokenKind.LeftBrace)
        node: Node | None = None
        while self.current().kind not in (TokenKind.RightBrace, TokenKind.End_of_input):
            stmt = self.parse_statement()
            if stmt is not None:
                node = make_node(NodeKind.Sequence, node, stmt)
        self.expect("Block", TokenKind.RightBrace)
        return node


__all__ = ["ParseError", "Parser"]
