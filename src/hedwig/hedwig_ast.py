"""
Defines the abstract syntax tree (AST) node classes for parsed JavaScript.

Every node is an immutable dataclass. The set of node classes is closed: the
parser only ever produces the variants defined here, and the generic consumers
(`iter_child_nodes`, `walk`, `Node.to_dict`) derive their behavior from the
dataclass fields so every variant is covered.

Classes:
    Position, SourceLocation: 1-based line/column bounds of a node.
    Node: Base class; carries `start`/`end` character offsets and `loc`.
    Program, Comment: The root node and the comments collected beside it.
    Declarations: VariableDeclaration, VariableDeclarator, FunctionDeclaration,
        ClassDeclaration.
    Statements: ExpressionStatement, BlockStatement, IfStatement, ForStatement,
        WhileStatement, ReturnStatement.
    Expressions: Identifier, Literal, BinaryExpression, LogicalExpression,
        UnaryExpression, UpdateExpression, CallExpression, MemberExpression,
        AssignmentExpression, ArrayExpression, ObjectExpression, TemplateLiteral,
        ThisExpression, NewExpression, ConditionalExpression, AwaitExpression,
        FunctionExpression.
    Supporting shapes: ClassBody, MethodDefinition, Property, TemplateElement,
        ArrayPattern, ObjectPattern.

Serialization:
    `Node.to_dict()` returns ESTree-shaped plain dicts (for example the
    `is_async` field is written as `async`), suitable for JSON output.

Example:
    >>> node = Identifier("x", start=4, end=5)
    >>> node.type
    'Identifier'
    >>> node.to_dict()["name"]
    'x'
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass, field, fields
from typing import Any, Literal as TypingLiteral, Union


@dataclass(frozen=True, slots=True)
class Position:
    line: int
    column: int

    def to_dict(self) -> dict[str, int]:
        return {"line": self.line, "column": self.column}


@dataclass(frozen=True, slots=True)
class SourceLocation:
    start: Position
    end: Position

    def to_dict(self) -> dict[str, dict[str, int]]:
        return {"start": self.start.to_dict(), "end": self.end.to_dict()}


# Python-safe field names that are spelled differently in ESTree output
ESTREE_FIELD_NAMES = {
    "is_async": "async",
    "super_class": "superClass",
}


@dataclass(frozen=True, slots=True, kw_only=True)
class Node:
    """Base class for all AST nodes.

    Attributes:
        start (int): 0-based offset of the node's first character.
        end (int): 0-based offset just past the node's last character.
        loc (SourceLocation | None): 1-based line/column of both ends.
    """

    start: int = 0
    end: int = 0
    loc: SourceLocation | None = None

    @property
    def type(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"type": self.type}
        for f in fields(self):
            if f.name in ("start", "end", "loc"):
                continue
            result[ESTREE_FIELD_NAMES.get(f.name, f.name)] = _serialize(getattr(self, f.name))
        result["start"] = self.start
        result["end"] = self.end
        if self.loc is not None:
            result["loc"] = self.loc.to_dict()
        return result


def _serialize(value: Any) -> Any:
    if isinstance(value, Node):
        return value.to_dict()
    if isinstance(value, list):
        return [_serialize(item) for item in value]
    return value


# PROGRAM


@dataclass(frozen=True, slots=True)
class Comment(Node):
    """A `//` (Line) or `/* */` (Block) comment; `value` excludes the delimiters."""

    kind: TypingLiteral["Line", "Block"]
    value: str


@dataclass(frozen=True, slots=True)
class Program(Node):
    body: list[Statement]
    comments: list[Comment] = field(default_factory=list)


# DECLARATIONS


@dataclass(frozen=True, slots=True)
class VariableDeclarator(Node):
    id: Identifier
    init: Expression | None = None


@dataclass(frozen=True, slots=True)
class VariableDeclaration(Node):
    kind: TypingLiteral["var", "let", "const"]
    declarations: list[VariableDeclarator]


@dataclass(frozen=True, slots=True)
class FunctionDeclaration(Node):
    id: Identifier | None
    params: list[Identifier]
    body: BlockStatement
    is_async: bool = False
    generator: bool = False


@dataclass(frozen=True, slots=True)
class FunctionExpression(Node):
    id: Identifier | None
    params: list[Identifier]
    body: BlockStatement
    is_async: bool = False
    generator: bool = False


@dataclass(frozen=True, slots=True)
class MethodDefinition(Node):
    key: Identifier | Literal
    value: FunctionExpression
    kind: TypingLiteral["method", "constructor", "get", "set"] = "method"
    static: bool = False


@dataclass(frozen=True, slots=True)
class ClassBody(Node):
    body: list[MethodDefinition]


@dataclass(frozen=True, slots=True)
class ClassDeclaration(Node):
    id: Identifier
    super_class: Expression | None
    body: ClassBody


# STATEMENTS


@dataclass(frozen=True, slots=True)
class ExpressionStatement(Node):
    expression: Expression


@dataclass(frozen=True, slots=True)
class BlockStatement(Node):
    body: list[Statement]


@dataclass(frozen=True, slots=True)
class IfStatement(Node):
    test: Expression
    consequent: Statement
    alternate: Statement | None = None


@dataclass(frozen=True, slots=True)
class ForStatement(Node):
    init: VariableDeclaration | Expression | None
    test: Expression | None
    update: Expression | None
    body: Statement


@dataclass(frozen=True, slots=True)
class WhileStatement(Node):
    test: Expression
    body: Statement


@dataclass(frozen=True, slots=True)
class ReturnStatement(Node):
    argument: Expression | None = None


# EXPRESSIONS


@dataclass(frozen=True, slots=True)
class Identifier(Node):
    name: str


@dataclass(frozen=True, slots=True)
class Literal(Node):
    """A number, string, boolean or null literal. `raw` is the source lexeme."""

    value: str | int | float | bool | None
    raw: str

    def to_dict(self) -> dict[str, Any]:
        result = Node.to_dict(self)
        # Overflowing numbers serialize as null, like JSON.stringify; `raw` keeps the lexeme
        if isinstance(self.value, float) and not math.isfinite(self.value):
            result["value"] = None
        return result


@dataclass(frozen=True, slots=True)
class ThisExpression(Node):
    pass


@dataclass(frozen=True, slots=True)
class BinaryExpression(Node):
    operator: str
    left: Expression
    right: Expression


@dataclass(frozen=True, slots=True)
class LogicalExpression(Node):
    operator: str
    left: Expression
    right: Expression


@dataclass(frozen=True, slots=True)
class UnaryExpression(Node):
    operator: str
    prefix: bool
    argument: Expression


@dataclass(frozen=True, slots=True)
class UpdateExpression(Node):
    operator: str
    prefix: bool
    argument: Expression


@dataclass(frozen=True, slots=True)
class AwaitExpression(Node):
    argument: Expression


@dataclass(frozen=True, slots=True)
class AssignmentExpression(Node):
    operator: str
    left: Pattern
    right: Expression


@dataclass(frozen=True, slots=True)
class ConditionalExpression(Node):
    test: Expression
    consequent: Expression
    alternate: Expression


@dataclass(frozen=True, slots=True)
class CallExpression(Node):
    callee: Expression
    arguments: list[Expression]


@dataclass(frozen=True, slots=True)
class NewExpression(Node):
    callee: Expression
    arguments: list[Expression]


@dataclass(frozen=True, slots=True)
class MemberExpression(Node):
    object: Expression
    property: Expression
    computed: bool = False


@dataclass(frozen=True, slots=True)
class ArrayExpression(Node):
    """Array literal; elisions (`[a, , b]`) are stored as None."""

    elements: list[Expression | None]


@dataclass(frozen=True, slots=True)
class Property(Node):
    key: Expression
    value: Expression
    kind: TypingLiteral["init", "get", "set"] = "init"
    method: bool = False
    shorthand: bool = False
    computed: bool = False


@dataclass(frozen=True, slots=True)
class ObjectExpression(Node):
    properties: list[Property]


@dataclass(frozen=True, slots=True)
class TemplateElement(Node):
    cooked: str
    raw: str
    tail: bool = True

    def to_dict(self) -> dict[str, Any]:
        result = Node.to_dict(self)
        result["value"] = {"cooked": result.pop("cooked"), "raw": result.pop("raw")}
        return result


@dataclass(frozen=True, slots=True)
class TemplateLiteral(Node):
    """Template string kept as a single quasi; `${...}` substitutions are not parsed,
    so `expressions` is always empty."""

    quasis: list[TemplateElement]
    expressions: list[Expression] = field(default_factory=list)


# PATTERNS


@dataclass(frozen=True, slots=True)
class ArrayPattern(Node):
    elements: list[Pattern | None]


@dataclass(frozen=True, slots=True)
class ObjectPattern(Node):
    properties: list[Property]


Statement = Union[
    VariableDeclaration,
    FunctionDeclaration,
    ClassDeclaration,
    ExpressionStatement,
    BlockStatement,
    IfStatement,
    ForStatement,
    WhileStatement,
    ReturnStatement,
]

Expression = Union[
    Identifier,
    Literal,
    BinaryExpression,
    LogicalExpression,
    UnaryExpression,
    UpdateExpression,
    CallExpression,
    MemberExpression,
    AssignmentExpression,
    ArrayExpression,
    ObjectExpression,
    TemplateLiteral,
    ThisExpression,
    NewExpression,
    ConditionalExpression,
    AwaitExpression,
    FunctionExpression,
]

Pattern = Union[Identifier, MemberExpression, ArrayPattern, ObjectPattern]


def iter_child_nodes(node: Node) -> Iterator[Node]:
    """Yields the direct children of `node` in field order, skipping None and elisions."""
    for f in fields(node):
        value = getattr(node, f.name)
        if isinstance(value, Node):
            yield value
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, Node):
                    yield item


def walk(node: Node) -> Iterator[Node]:
    """Yields `node` and all of its descendants, depth first, parents before children."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(iter_child_nodes(current))))


__all__ = [
    "ArrayExpression",
    "ArrayPattern",
    "AssignmentExpression",
    "AwaitExpression",
    "BinaryExpression",
    "BlockStatement",
    "CallExpression",
    "ClassBody",
    "ClassDeclaration",
    "Comment",
    "ConditionalExpression",
    "Expression",
    "ExpressionStatement",
    "ForStatement",
    "FunctionDeclaration",
    "FunctionExpression",
    "Identifier",
    "IfStatement",
    "Literal",
    "LogicalExpression",
    "MemberExpression",
    "MethodDefinition",
    "NewExpression",
    "Node",
    "ObjectExpression",
    "ObjectPattern",
    "Pattern",
    "Position",
    "Program",
    "Property",
    "ReturnStatement",
    "SourceLocation",
    "Statement",
    "TemplateElement",
    "TemplateLiteral",
    "ThisExpression",
    "UnaryExpression",
    "UpdateExpression",
    "VariableDeclaration",
    "VariableDeclarator",
    "WhileStatement",
    "iter_child_nodes",
    "walk",
]
