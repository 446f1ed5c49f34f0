"""
tiny parser CLI entrypoint.

This module provides the command-line interface for the syntax analyzer. It reads
a `.lex` token file produced by an external lexer, parses it, and writes the
pre-order AST dump next to it (or to an explicit output path).

Features:
    - Read tokens from a `.lex` file.
    - Parse into an AST and serialize it to the `.par` text format.
    - Optionally echo a column-aligned trace of the tree to stdout.
    - Report every failure as a single `error: ...` line on stderr with exit status 1.

Example usage:
    tinyparse count.lex
    tinyparse count.lex -o count.par
    tinyparse count.lex --echo

Functions:
    default_output_path(source: str) -> str:
        The source path with its suffix replaced by `.par`.

    run_parser(source: str, out: str | None = None, echo: bool = False) -> str:
        Executes the pipeline (read tokens → parse → dump → write) and returns the dump.

    main(argv: list[str] | None = None) -> None:
        Parses CLI arguments and runs the pipeline.
"""

import argparse
import os
import sys
from typing import NoReturn

from tiny.tiny_parser import ParseError, Parser
from tiny.tiny_printer import dump_ast, echo_ast
from tiny.tiny_tokens import TokenFileError, read_tokens

TOKEN_SUFFIX = ".lex"
OUTPUT_SUFFIX = ".par"


def default_output_path(source: str) -> str:
    return os.path.splitext(source)[0] + OUTPUT_SUFFIX


def run_parser(source: str, out: str | None = None, echo: bool = False) -> str:
    """
    Run the syntax analyzer: read tokens, parse, dump, and write the dump to a file.

    Args:
        source (str): Path to a `.lex` token file.
        out (str | None): Destination of the AST dump. Defaults to `source` with a
            `.par` suffix.
        echo (bool): If True, prints the column-aligned AST trace before writing.

    Returns:
        str: The AST dump that was written.

    Raises:
        ValueError: If `source` does not end with `.lex`.
        TokenFileError: If the token file is malformed or names an unknown token.
        ParseError: If the tokens do not form a valid program.
        OSError: If the token file cannot be read or the dump cannot be written.

    Side Effects:
        - Writes the dump to the output path.
        - Prints a confirmation (and the optional trace) to stdout.
    """
    if not source.endswith(TOKEN_SUFFIX):
        raise ValueError(f"Only {TOKEN_SUFFIX} token files are supported.")

    # 1. Read tokens
    tokens = read_tokens(source)

    # 2. Parsing
    ast = Parser(tokens).parse()

    # 3. Serializing
    dump = dump_ast(ast)
    if echo:
        echo_ast(ast)

    # 4. Write to file
    out = out or default_output_path(source)
    with open(out, "w", encoding="utf-8") as f:
        f.write(dump)
    print(f"Successfully wrote to {out}")
    return dump


def fail(message: str) -> NoReturn:
    print(f"error: {message}", file=sys.stderr)
    sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    """
    Entry point for the `tinyparse` command.

    Supported flags:
        - `source`: The `.lex` token file to parse.
        - `-o`, `--out`: Write the AST dump to this path instead of `<source>.par`.
        - `-e`, `--echo`: Also print a column-aligned AST trace to stdout.

    Exits with status 1 and a one-line message on stderr on any token file,
    syntax, or I/O error.
    """
    parser = argparse.ArgumentParser(
        prog="tinyparse",
        description="Parse a tiny-language token file into a pre-order AST dump.",
    )
    parser.add_argument("source", help="Token file (.lex) produced by the lexer")
    parser.add_argument(
        "-o",
        "--out",
        metavar="OUTFILE",
        help="AST dump destination (default: SOURCE with a .par suffix)",
    )
    parser.add_argument(
        "-e", "--echo", action="store_true", help="Print the AST trace to stdout"
    )

    args = parser.parse_args(argv)

    try:
        run_parser(args.source, out=args.out, echo=args.echo)
    except (ParseError, TokenFileError, ValueError, OSError) as e:
        fail(str(e))
    except RecursionError:
        fail(f"input nested too deeply (recursion limit {sys.getrecursionlimit()})")


if __name__ == "__main__":
    main()
