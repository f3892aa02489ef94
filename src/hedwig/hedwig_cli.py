"""
hedwig CLI Entrypoint.

This module provides the command-line interface for inspecting JavaScript source
through the hedwig front end.

Features:
    - Read source from `.js`/`.mjs`/`.cjs` files or inline strings.
    - Dump the token stream (`--tokens`) or the parsed AST (default).
    - Emit plain text or JSON (`--json`).
    - Output to console or file.
    - Report recovered parse errors on stderr.

Example usage:
    hedwig app.js
    hedwig -s "let x = 10;" --tokens
    hedwig app.js --json -o app.ast.json
    hedwig app.js --verbose

Functions:
    run_hedwig(source: str, is_string: bool = False, tokens: bool = False, as_json: bool = False,
               out: Optional[str] = None) -> int:
        Executes the pipeline (read → lex → parse → render → output) and returns an exit code.

    main() -> None:
        Parses CLI arguments and invokes `run_hedwig`.
"""

import argparse
import json
import logging
import sys

from hedwig.hedwig_ast import Node, iter_child_nodes
from hedwig.hedwig_lexer import Lexer, Token
from hedwig.hedwig_parser import Parser

SOURCE_EXTENSIONS = (".js", ".mjs", ".cjs")


def format_tokens(tokens: list[Token]) -> str:
    return "\n".join(f"{tok.line}:{tok.column}\t{tok.type.value}\t{tok.value!r}" for tok in tokens)


def format_node(node: Node, indent: int = 0) -> str:
    """Render a node tree as an indented outline, one node per line."""
    pad = "  " * indent
    details = []
    for key, value in node.to_dict().items():
        if key in ("type", "start", "end", "loc") or isinstance(value, (dict, list)):
            continue
        details.append(f"{key}={value!r}")
    line = f"{pad}{node.type} [{node.start}:{node.end}]"
    if details:
        line += " " + " ".join(details)

    lines = [line]
    for child in iter_child_nodes(node):
        lines.append(format_node(child, indent + 1))
    return "\n".join(lines)


def run_hedwig(
    source: str,
    is_string: bool = False,
    tokens: bool = False,
    as_json: bool = False,
    out: str | None = None,
) -> int:
    """
    Run the hedwig front end: read, lex or parse, render, and print or write the result.

    Args:
        source (str): JavaScript source code or path to a source file.
        is_string (bool): If True, treats `source` as raw code instead of a file path. Defaults to False.
        tokens (bool): If True, output the token stream instead of the AST. Defaults to False.
        as_json (bool): If True, render as JSON instead of text. Defaults to False.
        out (str | None): Optional path to write the output. If None, prints to stdout.

    Returns:
        int: 0 on success, 1 if the parser recovered from any errors.

    Raises:
        ValueError: If `is_string` is False and the path has no JavaScript extension.
    """
    if not is_string and not source.endswith(SOURCE_EXTENSIONS):
        raise ValueError("Only .js, .mjs and .cjs files are supported.")
    # 1. Read source
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    # 2. Lex or parse, then render
    status = 0
    if tokens:
        token_list = Lexer().tokenize(source)
        if as_json:
            text = json.dumps([tok.to_dict() for tok in token_list], indent=2)
        else:
            text = format_tokens(token_list)
    else:
        parser = Parser()
        program = parser.parse(source)
        if parser.errors:
            status = 1
        if as_json:
            text = json.dumps(program.to_dict(), indent=2, allow_nan=False)
        else:
            text = format_node(program)

    # 3. Output result
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(text + "\n")
    else:
        print(text)

    return status


def main() -> None:
    """
    Entry point for the hedwig CLI.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `--tokens`: Dump the token stream instead of the AST.
        - `--json`: Emit JSON instead of text.
        - `-o`, `--out`: Write output to a file.
        - `-v`, `--verbose`: Enable debug logging.
    """
    parser = argparse.ArgumentParser(prog="hedwig")
    parser.add_argument("source", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "--tokens", action="store_true", help="Dump tokens instead of the AST"
    )
    parser.add_argument(
        "--json", dest="as_json", action="store_true", help="Emit JSON output"
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    status = run_hedwig(
        source=args.source,
        is_string=args.string,
        tokens=args.tokens,
        as_json=args.as_json,
        out=args.out,
    )
    sys.exit(status)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
