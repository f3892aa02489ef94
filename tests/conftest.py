import pytest

from hedwig.hedwig_lexer import Lexer
from hedwig.hedwig_parser import Parser


@pytest.fixture  # type: ignore[misc]
def lexer() -> Lexer:
    return Lexer()


@pytest.fixture  # type: ignore[misc]
def parser() -> Parser:
    return Parser()
