"""
Token model and token-file reader for the tiny language parser.

The parser never sees raw source text. It consumes tokens that an external
lexer has already produced, one per line, in the `.lex` text format:

    <line> <column> <TokenName> [value]

for example

        1      1 Identifier      count
        1      7 Op_assign
        1      9 Integer         1
        2      1 End_of_input

Classes:
    Token: Immutable record of one token (kind, text, line, column).
    TokenStream: Forward-only cursor over a token list ending in End_of_input.
    TokenFileError: Raised for malformed token lines or files.
    TokenLookupError: Raised when a line names a token kind outside the vocabulary.

Functions:
    lookup_token_kind(name, lineno) -> TokenKind
    parse_token_line(text, lineno) -> Token
    load_tokens(lines) -> list[Token]
    read_tokens(path) -> list[Token]

Raises:
    TokenLookupError: On an unknown token name. Fatal, raised before parsing starts.
    TokenFileError: On missing fields, bad positions, or a missing End_of_input.
    OSError: Propagated unchanged from file access.
"""

from typing import Iterable, NamedTuple, Sequence

from tiny.tiny_constants import TokenKind, token_hashmap


class TokenFileError(Exception):
    """A token source could not be turned into a token list.

    Attributes:
        lineno (int): 1-based line of the token file, or 0 if not line specific.
    """

    def __init__(self, message: str, lineno: int = 0):
        super().__init__(message)
        self.lineno = lineno


class TokenLookupError(TokenFileError):
    """A token line names a kind that is not part of the fixed vocabulary.

    Attributes:
        name (str): The unrecognized token name.
        lineno (int): 1-based line of the token file where it appeared.
    """

    def __init__(self, name: str, lineno: int = 0):
        where = f" (token file line {lineno})" if lineno > 0 else ""
        super().__init__(f"Token not found: '{name}'{where}", lineno)
        self.name = name


class Token(NamedTuple):
    """A single lexical token.

    Attributes:
        kind (TokenKind): The token kind.
        text (str): The token's value text; empty for operators and punctuation.
        line (int): 1-based source line.
        column (int): 1-based source column.
    """

    kind: TokenKind
    text: str = ""
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        return f"{self.line:5d}  {self.column:5d} {self.kind.name:<15} {self.text}".rstrip()


class TokenStream:
    """Forward-only cursor over a token sequence.

    The sequence must end with an End_of_input token. The grammar never needs to
    look past that token, so moving beyond it is treated as a programming error.

    Attributes:
        tokens (tuple[Token, ...]): The tokens, in order.
        position (int): Index of the current token.
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self.tokens: tuple[Token, ...] = tuple(tokens)
        if not self.tokens or self.tokens[-1].kind is not TokenKind.End_of_input:
            raise ValueError("Token stream must end with an End_of_input token")
        self.position: int = 0

    def current(self) -> Token:
        return self.tokens[self.position]

    def advance(self) -> Token:
        """Moves to the next token and returns it.

        Raises:
            IndexError: If the cursor is already on End_of_input.
        """
        if self.position >= len(self.tokens) - 1:
            raise IndexError("Attempted to advance past End_of_input")
        self.position += 1
        return self.tokens[self.position]

    def at_end(self) -> bool:
        return self.current().kind is TokenKind.End_of_input

    def __len__(self) -> int:
        return len(self.tokens)

    def __repr__(self) -> str:
        return f"TokenStream(position={self.position}, current={self.current()!r})"


def lookup_token_kind(name: str, lineno: int = 0) -> TokenKind:
    """Resolves an external token name to its TokenKind.

    Raises:
        TokenLookupError: If the name is not part of the vocabulary.
    """
    try:
        return token_hashmap[name]
    except KeyError:
        raise TokenLookupError(name, lineno) from None


def parse_token_line(text: str, lineno: int = 0) -> Token:
    """Parses one `.lex` line into a Token.

    The value is everything after the token name, stripped at both ends; spacing
    inside it is kept so string literals come through intact.

    Args:
        text: The raw line.
        lineno: Line number within the token file, used in error messages.

    Raises:
        TokenFileError: If the line has fewer than three fields or bad positions.
        TokenLookupError: If the token name is unknown.
    """
    fields = text.strip().split(maxsplit=3)
    if len(fields) < 3:
        raise TokenFileError(
            f"Malformed token line {lineno}: expected '<line> <column> <token> [value]', "
            f"got {text.strip()!r}",
            lineno,
        )
    try:
        line, column = int(fields[0]), int(fields[1])
    except ValueError:
        raise TokenFileError(
            f"Malformed token line {lineno}: positions must be integers, "
            f"got {fields[0]!r} {fields[1]!r}",
            lineno,
        ) from None
    kind = lookup_token_kind(fields[2], lineno)
    value = fields[3].strip() if len(fields) == 4 else ""
    return Token(kind, value, line, column)


def load_tokens(lines: Iterable[str]) -> list[Token]:
    """Parses `.lex` lines into a token list. Blank lines are skipped.

    Raises:
        TokenFileError: If a line is malformed or the tokens do not end in End_of_input.
        TokenLookupError: If a line names an unknown token kind.
    """
    tokens: list[Token] = []
    for lineno, raw in enumerate(lines, start=1):
        if not raw.strip():
            continue
        tokens.append(parse_token_line(raw, lineno))
    _check_terminated(tokens)
    return tokens


def read_tokens(path: str) -> list[Token]:
    """Reads and parses a `.lex` token file."""
    with open(path, encoding="utf-8") as f:
        return load_tokens(f)


def _check_terminated(tokens: Sequence[Token]) -> None:
    if not tokens or tokens[-1].kind is not TokenKind.End_of_input:
        raise TokenFileError("Token source does not end with End_of_input")


__all__ = [
    "Token",
    "TokenFileError",
    "TokenLookupError",
    "TokenStream",
    "load_tokens",
    "lookup_token_kind",
    "parse_token_line",
    "read_tokens",
]
