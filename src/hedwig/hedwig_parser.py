"""
JavaScript Parser

Parses JavaScript source text into an abstract syntax tree rooted at a `Program` node.

The parser runs the lexer once per call, drops COMMENT tokens from the grammar
stream (they are kept on `Program.comments`), and walks the remaining tokens with
recursive descent. Each expression precedence level is its own method, built on
the next tighter level.

Supported Constructs
--------------------
- Statements:
    * Declarations: `var`/`let`/`const`, `function` (optionally `async` and `*`),
      `class` with optional `extends` and method definitions
    * Control flow: `if`/`else`, C-style `for`, `while`, `return`
    * Blocks and `;`-terminated expression statements

- Expressions, loosest to tightest:
    * assignment (right-assoc) → conditional `?:` (right-assoc) → `||` → `&&`
      → equality → comparison → additive → multiplicative → unary/`await`
      → update (`++`/`--`) → call/member/`new` chain → primary
    * Primary: `this`, identifiers, literals, template strings (opaque),
      parenthesized expressions, array and object literals, function expressions

Parser Behavior
---------------
- A `ParseError` raised anywhere inside a top-level statement unwinds to the
  statement loop, which records it in `Parser.errors`, logs it, and skips ahead
  to the next `;` or statement keyword. `parse()` itself never raises it.
- Node `start`/`end` are 0-based source offsets spanning the node's first to
  last token; `loc` holds the matching 1-based line/column positions.

Entry Points
------------
- `Parser().parse(source)`: parse a full program.
- `parse(source)`: module-level shortcut using a fresh parser.
"""

from __future__ import annotations

import dataclasses
import logging
import sys
from collections.abc import Callable
from typing import Any

from hedwig.hedwig_ast import (
    ArrayExpression,
    ArrayPattern,
    AssignmentExpression,
    AwaitExpression,
    BinaryExpression,
    BlockStatement,
    CallExpression,
    ClassBody,
    ClassDeclaration,
    Comment,
    ConditionalExpression,
    Expression,
    ExpressionStatement,
    ForStatement,
    FunctionDeclaration,
    FunctionExpression,
    Identifier,
    IfStatement,
    Literal,
    LogicalExpression,
    MemberExpression,
    MethodDefinition,
    NewExpression,
    Node,
    ObjectExpression,
    ObjectPattern,
    Pattern,
    Position,
    Program,
    Property,
    ReturnStatement,
    SourceLocation,
    Statement,
    TemplateElement,
    TemplateLiteral,
    ThisExpression,
    UnaryExpression,
    UpdateExpression,
    VariableDeclaration,
    VariableDeclarator,
    WhileStatement,
)
from hedwig.hedwig_constants import (
    ADDITIVE_OPERATORS,
    ASSIGNMENT_OPERATORS,
    COMPARISON_OPERATORS,
    EQUALITY_OPERATORS,
    MULTIPLICATIVE_OPERATORS,
    STATEMENT_KEYWORDS,
    UNARY_KEYWORDS,
    UNARY_OPERATORS,
    UPDATE_OPERATORS,
    TokenType,
)
from hedwig.hedwig_lexer import Lexer, Token

logger = logging.getLogger(__name__)

# Python frame budget while parsing; each nesting level of an expression costs a dozen frames
RECURSION_LIMIT = 5000

# Keywords that name values rather than start syntax
IDENTIFIER_KEYWORDS = frozenset({"undefined", "NaN", "Infinity"})

PROPERTY_NAME_TYPES = (TokenType.IDENTIFIER, TokenType.KEYWORD, TokenType.BOOLEAN, TokenType.NULL)


class ParseError(SyntaxError):
    """Raised when the token stream does not match the grammar.

    Attributes:
        message (str): Human-readable description of the expectation that failed.
        token (Token): The offending token.
        line (int): Line of the offending token.
        column (int): Column of the offending token.
    """

    def __init__(self, message: str, token: Token):
        self.message = message
        self.token = token
        self.line = token.line
        self.column = token.column
        super().__init__(f"{message} at line {token.line}, column {token.column}")


def end_position(token: Token) -> Position:
    """Returns the line/column just past the last character of `token`."""
    newlines = token.value.count("\n")
    if not newlines:
        return Position(token.line, token.column + len(token.value))
    tail = token.value.rsplit("\n", 1)[1]
    return Position(token.line + newlines, len(tail) + 1)


def number_value(raw: str) -> int | float:
    """Converts a NUMBER lexeme to its value, ignoring a dangling exponent marker."""
    text = raw.rstrip("eE+-") or "0"
    if text.isdigit():
        return int(text)
    return float(text)


def string_value(raw: str) -> str:
    """Strips the delimiters of a STRING or TEMPLATE_STRING lexeme; escapes are kept as written."""
    quote, body = raw[0], raw[1:]
    index = 0
    while index < len(body):
        if body[index] == "\\":
            index += 2
        elif body[index] == quote:
            return body[:index]
        else:
            index += 1
    return body


class Parser:
    """
    JavaScript Parser Class

    Transforms source text into a `Program` AST by recursive descent over the
    token list produced by `Lexer`. The cursor state (`tokens`, `position`,
    `errors`) is reset at the start of every `parse` call, so one instance can
    parse many sources, one at a time.

    Attributes
    ----------
    tokens : list[Token]
        Grammar tokens of the current source (comments removed, EOF last).
    position : int
        Index of the current token; only ever moves forward.
    errors : list[ParseError]
        Errors recovered from during the last `parse` call.
    """

    def __init__(self) -> None:
        self.lexer = Lexer()
        self.tokens: list[Token] = [Token(TokenType.EOF, "", 1, 1)]
        self.position: int = 0
        self.errors: list[ParseError] = []

    # TOKEN CURSOR

    def peek(self, offset: int = 0) -> Token:
        index = self.position + offset
        return self.tokens[index] if index < len(self.tokens) else self.tokens[-1]

    def previous(self) -> Token:
        return self.tokens[max(self.position - 1, 0)]

    def is_at_end(self) -> bool:
        return self.peek().type == TokenType.EOF

    def advance(self) -> Token:
        if not self.is_at_end():
            self.position += 1
        return self.previous()

    def check(self, type_: TokenType, *values: str) -> bool:
        if self.is_at_end():
            return False
        tok = self.peek()
        return tok.type == type_ and (not values or tok.value in values)

    def check_keyword(self, *keywords: str) -> bool:
        return self.check(TokenType.KEYWORD, *keywords)

    def check_punctuation(self, value: str) -> bool:
        return self.check(TokenType.PUNCTUATION, value)

    def match(self, *types: TokenType) -> bool:
        for type_ in types:
            if self.check(type_):
                self.advance()
                return True
        return False

    def match_value(self, type_: TokenType, *values: str) -> bool:
        if self.check(type_, *values):
            self.advance()
            return True
        return False

    def match_keyword(self, *keywords: str) -> bool:
        return self.match_value(TokenType.KEYWORD, *keywords)

    def match_punctuation(self, value: str) -> bool:
        return self.match_value(TokenType.PUNCTUATION, value)

    def consume(self, type_: TokenType, message: str, value: str | None = None) -> Token:
        values = () if value is None else (value,)
        if self.check(type_, *values):
            return self.advance()
        raise ParseError(message, self.peek())

    def consume_keyword(self, keyword: str, message: str) -> Token:
        return self.consume(TokenType.KEYWORD, message, keyword)

    def consume_punctuation(self, value: str, message: str) -> Token:
        return self.consume(TokenType.PUNCTUATION, message, value)

    def span(self, first: Token | Node) -> dict[str, Any]:
        """Builds `start`/`end`/`loc` from `first` up to the last consumed token."""
        if isinstance(first, Token):
            start, start_position = first.offset, Position(first.line, first.column)
        else:
            start = first.start
            start_position = first.loc.start if first.loc else Position(1, 1)
        last = self.previous()
        return {
            "start": start,
            "end": max(last.end_offset, start),
            "loc": SourceLocation(start_position, end_position(last)),
        }

    # PROGRAM

    def parse(self, source: str) -> Program:
        """Parse a full JavaScript program; malformed statements are skipped and recorded in `errors`."""
        tokens = self.lexer.tokenize(source)
        comments = [self.make_comment(tok) for tok in tokens if tok.type == TokenType.COMMENT]
        self.tokens = [tok for tok in tokens if tok.type != TokenType.COMMENT]
        self.position = 0
        self.errors = []

        body: list[Statement] = []
        previous_limit = sys.getrecursionlimit()
        sys.setrecursionlimit(max(previous_limit, RECURSION_LIMIT))
        try:
            while not self.is_at_end():
                try:
                    body.append(self.parse_statement())
                except RecursionError:
                    self.recover(ParseError("Maximum nesting depth exceeded", self.peek()))
                except ParseError as e:
                    self.recover(e)
        finally:
            sys.setrecursionlimit(previous_limit)

        eof = self.peek()
        logger.debug("Parsed %d statements with %d errors", len(body), len(self.errors))
        return Program(
            body,
            comments,
            start=0,
            end=len(source),
            loc=SourceLocation(Position(1, 1), Position(eof.line, eof.column)),
        )

    def recover(self, error: ParseError) -> None:
        self.errors.append(error)
        logger.warning("Parse error: %s", error)
        self.synchronize()

    def synchronize(self) -> None:
        """Discard tokens until just after a `;` or just before a statement keyword."""
        self.advance()
        while not self.is_at_end():
            prev = self.previous()
            if prev.type == TokenType.PUNCTUATION and prev.value == ";":
                return
            if self.check_keyword(*STATEMENT_KEYWORDS):
                return
            self.advance()

    def make_comment(self, tok: Token) -> Comment:
        if tok.value.startswith("//"):
            kind, text = "Line", tok.value[2:]
        else:
            kind, text = "Block", tok.value[2:]
            if text.endswith("*/"):
                text = text[:-2]
        return Comment(
            kind,
            text,
            start=tok.offset,
            end=tok.end_offset,
            loc=SourceLocation(Position(tok.line, tok.column), end_position(tok)),
        )

    # STATEMENTS

    def parse_statement(self) -> Statement:
        if self.check_keyword("var", "let", "const"):
            return self.parse_variable_declaration()
        if self.check_keyword("function") or (
            self.check_keyword("async")
            and self.peek(1).type == TokenType.KEYWORD
            and self.peek(1).value == "function"
        ):
            return self.parse_function_declaration()
        if self.check_keyword("class"):
            return self.parse_class_declaration()
        if self.check_keyword("if"):
            return self.parse_if_statement()
        if self.check_keyword("for"):
            return self.parse_for_statement()
        if self.check_keyword("while"):
            return self.parse_while_statement()
        if self.check_keyword("return"):
            return self.parse_return_statement()
        if self.check_punctuation("{"):
            return self.parse_block_statement()
        return self.parse_expression_statement()

    def parse_variable_declaration(self) -> VariableDeclaration:
        """Parse `var|let|const` declarators separated by `,` and terminated by `;`."""
        kind_tok = self.advance()
        declarations = [self.parse_variable_declarator()]
        while self.match_punctuation(","):
            declarations.append(self.parse_variable_declarator())
        self.consume_punctuation(";", "Expected ';' after variable declaration")
        return VariableDeclaration(kind_tok.value, declarations, **self.span(kind_tok))  # type: ignore[arg-type]

    def parse_variable_declarator(self) -> VariableDeclarator:
        id_ = self.parse_identifier("Expected variable name")
        init = None
        if self.match_value(TokenType.OPERATOR, "="):
            init = self.parse_assignment()
        return VariableDeclarator(id_, init, **self.span(id_))

    def parse_function_declaration(self) -> FunctionDeclaration:
        first = self.peek()
        is_async = self.match_keyword("async")
        self.consume_keyword("function", "Expected 'function' after 'async'")
        generator = self.match_value(TokenType.OPERATOR, "*")

        id_ = None
        if not self.check_punctuation("("):
            id_ = self.parse_identifier("Expected function name")

        params = self.parse_parameters()
        body = self.parse_block_statement()
        return FunctionDeclaration(id_, params, body, is_async, generator, **self.span(first))

    def parse_function_expression(self) -> FunctionExpression:
        first = self.peek()
        is_async = self.match_keyword("async")
        self.consume_keyword("function", "Expected 'function'")
        generator = self.match_value(TokenType.OPERATOR, "*")

        id_ = None
        if self.check(TokenType.IDENTIFIER):
            id_ = self.parse_identifier("Expected function name")

        params = self.parse_parameters()
        body = self.parse_block_statement()
        return FunctionExpression(id_, params, body, is_async, generator, **self.span(first))

    def parse_parameters(self) -> list[Identifier]:
        """Parse a parenthesized, comma-separated list of plain identifiers."""
        self.consume_punctuation("(", "Expected '(' after function name")
        params: list[Identifier] = []
        if not self.check_punctuation(")"):
            params.append(self.parse_identifier("Expected parameter name"))
            while self.match_punctuation(","):
                params.append(self.parse_identifier("Expected parameter name"))
        self.consume_punctuation(")", "Expected ')' after parameters")
        return params

    def parse_class_declaration(self) -> ClassDeclaration:
        first = self.consume_keyword("class", "Expected 'class'")
        id_ = self.parse_identifier("Expected class name")
        super_class = None
        if self.match_keyword("extends"):
            super_class = self.parse_expression()
        body = self.parse_class_body()
        return ClassDeclaration(id_, super_class, body, **self.span(first))

    def parse_class_body(self) -> ClassBody:
        first = self.consume_punctuation("{", "Expected '{' before class body")
        methods: list[MethodDefinition] = []
        while not self.check_punctuation("}") and not self.is_at_end():
            if self.match_punctuation(";"):
                continue
            methods.append(self.parse_method_definition())
        self.consume_punctuation("}", "Expected '}' after class body")
        return ClassBody(methods, **self.span(first))

    def parse_method_definition(self) -> MethodDefinition:
        """Parse `[static] [async] [*] [get|set] name(params) { body }` inside a class body."""
        first = self.peek()
        static = self.check_keyword("static") and not self.next_is_punctuation("(")
        if static:
            self.advance()

        is_async = self.check_keyword("async") and not self.next_is_punctuation("(")
        if is_async:
            self.advance()
        generator = self.match_value(TokenType.OPERATOR, "*")

        kind = "method"
        if (
            self.check(TokenType.IDENTIFIER, "get", "set")
            and not self.next_is_punctuation("(")
            and not is_async
            and not generator
        ):
            kind = self.advance().value

        key = self.parse_property_key("Expected method name")
        if kind == "method" and isinstance(key, Identifier) and key.name == "constructor" and not static:
            kind = "constructor"

        value_first = self.peek()
        params = self.parse_parameters()
        body = self.parse_block_statement()
        value = FunctionExpression(None, params, body, is_async, generator, **self.span(value_first))
        return MethodDefinition(key, value, kind, static, **self.span(first))  # type: ignore[arg-type]

    def next_is_punctuation(self, value: str) -> bool:
        tok = self.peek(1)
        return tok.type == TokenType.PUNCTUATION and tok.value == value

    def parse_if_statement(self) -> IfStatement:
        first = self.consume_keyword("if", "Expected 'if'")
        self.consume_punctuation("(", "Expected '(' after 'if'")
        test = self.parse_expression()
        self.consume_punctuation(")", "Expected ')' after if condition")

        consequent = self.parse_statement()
        alternate = None
        if self.match_keyword("else"):
            alternate = self.parse_statement()
        return IfStatement(test, consequent, alternate, **self.span(first))

    def parse_for_statement(self) -> ForStatement:
        """Parse a C-style `for (init; test; update) body`; every clause is optional."""
        first = self.consume_keyword("for", "Expected 'for'")
        self.consume_punctuation("(", "Expected '(' after 'for'")

        init: VariableDeclaration | Expression | None = None
        if self.match_punctuation(";"):
            pass
        elif self.check_keyword("var", "let", "const"):
            init = self.parse_variable_declaration()
        else:
            init = self.parse_expression()
            self.consume_punctuation(";", "Expected ';' after for loop initializer")

        test = None
        if not self.match_punctuation(";"):
            test = self.parse_expression()
            self.consume_punctuation(";", "Expected ';' after for loop condition")

        update = None
        if not self.check_punctuation(")"):
            update = self.parse_expression()
        self.consume_punctuation(")", "Expected ')' after for loop clauses")

        body = self.parse_statement()
        return ForStatement(init, test, update, body, **self.span(first))

    def parse_while_statement(self) -> WhileStatement:
        first = self.consume_keyword("while", "Expected 'while'")
        self.consume_punctuation("(", "Expected '(' after 'while'")
        test = self.parse_expression()
        self.consume_punctuation(")", "Expected ')' after while condition")
        body = self.parse_statement()
        return WhileStatement(test, body, **self.span(first))

    def parse_return_statement(self) -> ReturnStatement:
        first = self.consume_keyword("return", "Expected 'return'")
        argument = None
        if not self.check_punctuation(";"):
            argument = self.parse_expression()
        self.consume_punctuation(";", "Expected ';' after return statement")
        return ReturnStatement(argument, **self.span(first))

    def parse_block_statement(self) -> BlockStatement:
        first = self.consume_punctuation("{", "Expected '{' before block")
        body: list[Statement] = []
        while not self.check_punctuation("}") and not self.is_at_end():
            body.append(self.parse_statement())
        self.consume_punctuation("}", "Expected '}' after block")
        return BlockStatement(body, **self.span(first))

    def parse_expression_statement(self) -> ExpressionStatement:
        expression = self.parse_expression()
        self.consume_punctuation(";", "Expected ';' after expression")
        return ExpressionStatement(expression, **self.span(expression))

    # EXPRESSIONS

    def parse_expression(self) -> Expression:
        return self.parse_assignment()

    def parse_assignment(self) -> Expression:
        expression = self.parse_conditional()

        if self.check(TokenType.OPERATOR, *ASSIGNMENT_OPERATORS):
            operator_tok = self.advance()
            target = self.to_assignment_target(expression, operator_tok)
            right = self.parse_assignment()
            return AssignmentExpression(operator_tok.value, target, right, **self.span(expression))

        return expression

    def to_assignment_target(self, node: Expression, operator_tok: Token) -> Pattern:
        """Convert the left side of an assignment into a pattern, or raise ParseError."""
        location = {"start": node.start, "end": node.end, "loc": node.loc}
        if isinstance(node, (Identifier, MemberExpression)):
            return node
        if operator_tok.value == "=" and isinstance(node, ArrayExpression):
            elements: list[Pattern | None] = [
                None if element is None else self.to_assignment_target(element, operator_tok)
                for element in node.elements
            ]
            return ArrayPattern(elements, **location)
        if operator_tok.value == "=" and isinstance(node, ObjectExpression):
            properties = []
            for prop in node.properties:
                if prop.method:
                    break
                target = self.to_assignment_target(prop.value, operator_tok)
                properties.append(dataclasses.replace(prop, value=target))
            else:
                return ObjectPattern(properties, **location)
        raise ParseError("Invalid assignment target", operator_tok)

    def parse_conditional(self) -> Expression:
        test = self.parse_logical_or()

        if self.match_value(TokenType.OPERATOR, "?"):
            consequent = self.parse_assignment()
            self.consume_punctuation(":", "Expected ':' in conditional expression")
            alternate = self.parse_assignment()
            return ConditionalExpression(test, consequent, alternate, **self.span(test))

        return test

    def parse_binary_level(
        self,
        operand: Callable[[], Expression],
        operators: frozenset[str],
        node_class: type[BinaryExpression] | type[LogicalExpression],
    ) -> Expression:
        """Left-fold `operand (op operand)*` for one precedence level."""
        expression = operand()
        while self.check(TokenType.OPERATOR, *operators):
            operator = self.advance().value
            right = operand()
            expression = node_class(operator, expression, right, **self.span(expression))
        return expression

    def parse_logical_or(self) -> Expression:
        return self.parse_binary_level(self.parse_logical_and, frozenset({"||"}), LogicalExpression)

    def parse_logical_and(self) -> Expression:
        return self.parse_binary_level(self.parse_equality, frozenset({"&&"}), LogicalExpression)

    def parse_equality(self) -> Expression:
        return self.parse_binary_level(self.parse_comparison, EQUALITY_OPERATORS, BinaryExpression)

    def parse_comparison(self) -> Expression:
        return self.parse_binary_level(self.parse_additive, COMPARISON_OPERATORS, BinaryExpression)

    def parse_additive(self) -> Expression:
        return self.parse_binary_level(self.parse_multiplicative, ADDITIVE_OPERATORS, BinaryExpression)

    def parse_multiplicative(self) -> Expression:
        return self.parse_binary_level(self.parse_unary, MULTIPLICATIVE_OPERATORS, BinaryExpression)

    def parse_unary(self) -> Expression:
        if self.check(TokenType.OPERATOR, *UNARY_OPERATORS) or self.check_keyword(*UNARY_KEYWORDS):
            operator_tok = self.advance()
            argument = self.parse_unary()
            return UnaryExpression(operator_tok.value, True, argument, **self.span(operator_tok))

        if self.check_keyword("await"):
            await_tok = self.advance()
            argument = self.parse_unary()
            return AwaitExpression(argument, **self.span(await_tok))

        return self.parse_update()

    def parse_update(self) -> Expression:
        if self.check(TokenType.OPERATOR, *UPDATE_OPERATORS):
            operator_tok = self.advance()
            argument = self.parse_update()
            return UpdateExpression(operator_tok.value, True, argument, **self.span(operator_tok))

        expression = self.parse_call()

        if self.check(TokenType.OPERATOR, *UPDATE_OPERATORS):
            operator = self.advance().value
            return UpdateExpression(operator, False, expression, **self.span(expression))

        return expression

    def parse_call(self) -> Expression:
        """Parse a primary followed by any sequence of calls, member accesses and `new` suffixes."""
        if self.check_keyword("new"):
            expression = self.parse_new_prefix()
        else:
            expression = self.parse_primary()

        while True:
            if self.match_punctuation("("):
                arguments = self.parse_arguments("Expected ')' after arguments")
                expression = CallExpression(expression, arguments, **self.span(expression))
            elif self.match_punctuation("["):
                expression = self.parse_member_expression(expression, computed=True)
            elif self.match_punctuation("."):
                expression = self.parse_member_expression(expression, computed=False)
            elif self.match_keyword("new"):
                self.consume_punctuation("(", "Expected '(' after new expression")
                arguments = self.parse_arguments("Expected ')' after new arguments")
                expression = NewExpression(expression, arguments, **self.span(expression))
            else:
                break

        return expression

    def parse_new_prefix(self) -> NewExpression:
        """Parse `new Callee(args)`; the callee is a member chain and the arguments are optional."""
        first = self.consume_keyword("new", "Expected 'new'")
        if self.check_keyword("new"):
            callee: Expression = self.parse_new_prefix()
        else:
            callee = self.parse_primary()
        while True:
            if self.match_punctuation("["):
                callee = self.parse_member_expression(callee, computed=True)
            elif self.match_punctuation("."):
                callee = self.parse_member_expression(callee, computed=False)
            else:
                break

        arguments: list[Expression] = []
        if self.match_punctuation("("):
            arguments = self.parse_arguments("Expected ')' after new arguments")
        return NewExpression(callee, arguments, **self.span(first))

    def parse_arguments(self, message: str) -> list[Expression]:
        """Parse comma-separated arguments after an already consumed `(`."""
        arguments: list[Expression] = []
        if not self.check_punctuation(")"):
            arguments.append(self.parse_assignment())
            while self.match_punctuation(","):
                arguments.append(self.parse_assignment())
        self.consume_punctuation(")", message)
        return arguments

    def parse_member_expression(self, obj: Expression, computed: bool) -> MemberExpression:
        property_: Expression
        if computed:
            property_ = self.parse_expression()
            self.consume_punctuation("]", "Expected ']' after computed property")
        else:
            if not any(self.check(type_) for type_ in PROPERTY_NAME_TYPES):
                raise ParseError("Expected property name after '.'", self.peek())
            name_tok = self.advance()
            property_ = Identifier(name_tok.value, **self.span(name_tok))
        return MemberExpression(obj, property_, computed, **self.span(obj))

    def parse_primary(self) -> Expression:
        tok = self.peek()

        if self.match_keyword("this"):
            return ThisExpression(**self.span(tok))

        if self.match(TokenType.IDENTIFIER) or self.match_keyword(*IDENTIFIER_KEYWORDS):
            return Identifier(tok.value, **self.span(tok))

        if self.match(TokenType.NUMBER, TokenType.STRING, TokenType.BOOLEAN, TokenType.NULL):
            return self.make_literal(tok)

        if self.match(TokenType.TEMPLATE_STRING):
            return self.make_template_literal(tok)

        if self.check_keyword("function") or (
            self.check_keyword("async")
            and self.peek(1).type == TokenType.KEYWORD
            and self.peek(1).value == "function"
        ):
            return self.parse_function_expression()

        if self.match_punctuation("("):
            expression = self.parse_expression()
            self.consume_punctuation(")", "Expected ')' after expression")
            return dataclasses.replace(expression, **self.span(tok))

        if self.match_punctuation("["):
            return self.parse_array_expression(tok)

        if self.match_punctuation("{"):
            return self.parse_object_expression(tok)

        raise ParseError("Expected expression", tok)

    def parse_identifier(self, message: str) -> Identifier:
        tok = self.consume(TokenType.IDENTIFIER, message)
        return Identifier(tok.value, **self.span(tok))

    def make_literal(self, tok: Token) -> Literal:
        value: str | int | float | bool | None
        if tok.type == TokenType.NUMBER:
            value = number_value(tok.value)
        elif tok.type == TokenType.STRING:
            value = string_value(tok.value)
        elif tok.type == TokenType.BOOLEAN:
            value = tok.value == "true"
        else:
            value = None
        return Literal(value, tok.value, **self.span(tok))

    def make_template_literal(self, tok: Token) -> TemplateLiteral:
        """Wrap a template string token as one tail quasi; `${...}` stays part of the text."""
        location = self.span(tok)
        quasi = TemplateElement(string_value(tok.value), tok.value, True, **location)
        return TemplateLiteral([quasi], [], **location)

    def parse_array_expression(self, first: Token) -> ArrayExpression:
        """Parse array elements after `[`; a missing element between commas is None."""
        elements: list[Expression | None] = []
        while not self.check_punctuation("]") and not self.is_at_end():
            if self.match_punctuation(","):
                elements.append(None)
                continue
            elements.append(self.parse_assignment())
            if not self.check_punctuation("]"):
                self.consume_punctuation(",", "Expected ',' or ']' in array literal")
        self.consume_punctuation("]", "Expected ']' after array literal")
        return ArrayExpression(elements, **self.span(first))

    def parse_object_expression(self, first: Token) -> ObjectExpression:
        properties: list[Property] = []
        while not self.check_punctuation("}") and not self.is_at_end():
            properties.append(self.parse_property())
            if not self.check_punctuation("}"):
                self.consume_punctuation(",", "Expected ',' or '}' in object literal")
        self.consume_punctuation("}", "Expected '}' after object literal")
        return ObjectExpression(properties, **self.span(first))

    def parse_property_key(self, message: str) -> Identifier | Literal:
        tok = self.peek()
        if any(self.check(type_) for type_ in PROPERTY_NAME_TYPES):
            self.advance()
            return Identifier(tok.value, **self.span(tok))
        if self.match(TokenType.STRING, TokenType.NUMBER):
            return self.make_literal(tok)
        raise ParseError(message, tok)

    def parse_property(self) -> Property:
        """Parse `key: value`, method shorthand `key(params) { ... }`, or shorthand `{key}`."""
        first = self.peek()
        computed = self.match_punctuation("[")
        key: Expression
        if computed:
            key = self.parse_assignment()
            self.consume_punctuation("]", "Expected ']' after computed property key")
        else:
            key = self.parse_property_key("Expected property name")

        if self.match_punctuation(":"):
            value: Expression = self.parse_assignment()
            return Property(key, value, "init", computed=computed, **self.span(first))

        if self.check_punctuation("("):
            value_first = self.peek()
            params = self.parse_parameters()
            body = self.parse_block_statement()
            value = FunctionExpression(None, params, body, **self.span(value_first))
            return Property(key, value, "init", method=True, computed=computed, **self.span(first))

        if computed or not isinstance(key, Identifier) or first.type != TokenType.IDENTIFIER:
            raise ParseError("Expected ':' after property key", self.peek())
        return Property(key, dataclasses.replace(key), "init", shorthand=True, **self.span(first))


def parse(source: str) -> Program:
    """Parses `source` with a fresh Parser."""
    return Parser().parse(source)


__all__ = ["ParseError", "Parser", "end_position", "parse"]
