import json
from typing import Any

import hypothesis.strategies as st
from hypothesis import given

from hedwig.hedwig_ast import (
    BinaryExpression,
    FunctionDeclaration,
    Identifier,
    Literal,
    Position,
    Program,
    SourceLocation,
    TemplateElement,
    iter_child_nodes,
    walk,
)
from hedwig.hedwig_parser import parse


def test_node_type_is_class_name() -> None:
    assert Identifier("x").type == "Identifier"
    assert Program([]).type == "Program"


def test_node_eq() -> None:
    assert Identifier("x", start=0, end=1) == Identifier("x", start=0, end=1)
    assert Identifier("x") != Identifier("y")
    assert Identifier("x", start=0, end=1) != Identifier("x", start=2, end=3)


def test_identifier_to_dict() -> None:
    loc = SourceLocation(Position(1, 1), Position(1, 2))
    assert Identifier("x", start=0, end=1, loc=loc).to_dict() == {
        "type": "Identifier",
        "name": "x",
        "start": 0,
        "end": 1,
        "loc": {"start": {"line": 1, "column": 1}, "end": {"line": 1, "column": 2}},
    }


def test_to_dict_omits_missing_loc() -> None:
    assert "loc" not in Literal(1, "1").to_dict()


def test_to_dict_uses_estree_names() -> None:
    body = parse("async function f() {}").body[0]
    d = body.to_dict()
    assert d["async"] is True
    assert "is_async" not in d
    assert d["generator"] is False
    assert d["body"]["type"] == "BlockStatement"

    cls = parse("class A extends B {}").body[0].to_dict()
    assert cls["superClass"]["name"] == "B"


def test_template_element_value_shape() -> None:
    element = TemplateElement("a", "`a`")
    d = element.to_dict()
    assert d["value"] == {"cooked": "a", "raw": "`a`"}
    assert d["tail"] is True
    assert "cooked" not in d


def test_program_to_dict_is_json_serializable() -> None:
    program = parse("let a = [1, , 'x', null, true]; a.b = { c };")
    text = json.dumps(program.to_dict())
    data = json.loads(text)
    assert data["type"] == "Program"
    assert data["body"][0]["declarations"][0]["init"]["elements"][1] is None


def test_iter_child_nodes_order() -> None:
    node = BinaryExpression("+", Identifier("a"), Identifier("b"))
    assert [child.name for child in iter_child_nodes(node)] == ["a", "b"]  # type: ignore[attr-defined]


def test_walk_visits_every_node_parent_first() -> None:
    fn = parse("function f(a) { return a; }").body[0]
    assert isinstance(fn, FunctionDeclaration)
    kinds = [node.type for node in walk(fn)]
    assert kinds == [
        "FunctionDeclaration",
        "Identifier",
        "Identifier",
        "BlockStatement",
        "ReturnStatement",
        "Identifier",
    ]


@given(st.text(min_size=1), st.integers(min_value=0, max_value=1000))  # type: ignore[misc]
def test_identifier_eq_same_name(name: str, start: int) -> None:
    assert Identifier(name, start=start, end=start) == Identifier(name, start=start, end=start)


@given(st.text(min_size=1))  # type: ignore[misc]
def test_identifier_to_dict_roundtrips_name(name: str) -> None:
    d: dict[str, Any] = Identifier(name).to_dict()
    assert d["name"] == name
    assert d["type"] == "Identifier"


def test_overflowing_number_serializes_as_null() -> None:
    literal = parse("1e999;").body[0].expression  # type: ignore[attr-defined]
    assert literal.value == float("inf")
    d = literal.to_dict()
    assert d["value"] is None
    assert d["raw"] == "1e999"
    json.dumps(d, allow_nan=False)
