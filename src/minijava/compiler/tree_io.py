"""
JSON interchange for MiniJava program trees.

MiniJava has no surface parser; trees built elsewhere can be handed over as
JSON, one object per node with a ``kind`` key:

    {"kind": "sequence", "statements": [
        {"kind": "declaration", "type": "int", "name": "i",
         "value": {"kind": "int", "value": 5}},
        {"kind": "print", "prefix": "i: ", "expression": {"kind": "var", "name": "i"}}
    ]}
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from minijava.compiler.ast_nodes import (
    ASTNode,
    Assignment,
    Declaration,
    Expression,
    FloatLiteral,
    IntLiteral,
    Operator,
    OperatorExpression,
    PrintStatement,
    Sequence,
    Statement,
    Type,
    Var,
    WhileLoop,
)
from minijava.utils.errors import TreeFormatError

STATEMENT_KINDS = ("sequence", "declaration", "print", "while", "assignment")
EXPRESSION_KINDS = ("int", "float", "var", "operator", "assignment")

_TYPES_BY_NAME: dict[str, Type] = {t.type_name: t for t in Type}


# =============================================================================
# Encoding
# =============================================================================


def program_to_dict(node: ASTNode) -> dict[str, Any]:
    """Encode a node and its subtree as plain JSON-compatible data."""
    if isinstance(node, Sequence):
        return {"kind": "sequence", "statements": [program_to_dict(s) for s in node.statements]}
    if isinstance(node, Declaration):
        data: dict[str, Any] = {
            "kind": "declaration",
            "type": node.type.type_name,
            "name": node.variable.name,
        }
        if node.value is not None:
            data["value"] = program_to_dict(node.value)
        return data
    if isinstance(node, PrintStatement):
        data = {"kind": "print", "prefix": node.prefix}
        if node.expression is not None:
            data["expression"] = program_to_dict(node.expression)
        return data
    if isinstance(node, WhileLoop):
        return {
            "kind": "while",
            "condition": program_to_dict(node.condition),
            "body": program_to_dict(node.body),
        }
    if isinstance(node, Assignment):
        return {
            "kind": "assignment",
            "name": node.variable.name,
            "value": program_to_dict(node.value),
        }
    if isinstance(node, IntLiteral):
        return {"kind": "int", "value": node.value}
    if isinstance(node, FloatLiteral):
        return {"kind": "float", "value": node.value}
    if isinstance(node, Var):
        return {"kind": "var", "name": node.name}
    if isinstance(node, OperatorExpression):
        return {
            "kind": "operator",
            "operator": node.operator.name,
            "operands": [program_to_dict(o) for o in node.operands],
        }
    raise TreeFormatError(f"Cannot encode node of type {type(node).__name__}")


def dump_program(program: Statement, path: Optional[str | Path] = None) -> str:
    """
    Encode a program as JSON text.

    Args:
        program: The root statement
        path: If given, the JSON is also written to this file

    Returns:
        The JSON text
    """
    text = json.dumps(program_to_dict(program), indent=2) + "\n"
    if path is not None:
        Path(path).write_text(text, encoding="utf-8")
    return text


# =============================================================================
# Decoding
# =============================================================================


class _Decoder:
    """Decodes node dictionaries, tracking the JSON path for error messages."""

    def __init__(self, source: Optional[str] = None) -> None:
        self.source = source

    def _fail(self, message: str, where: str) -> TreeFormatError:
        return TreeFormatError(f"{message} (at {where})", self.source)

    def _field(self, data: dict[str, Any], key: str, where: str) -> Any:
        if key not in data:
            raise self._fail(f"Missing field '{key}' for {data.get('kind')!r} node", where)
        return data[key]

    def _kind(self, data: Any, allowed: tuple[str, ...], where: str) -> str:
        if not isinstance(data, dict):
            raise self._fail(f"Expected a node object, got {type(data).__name__}", where)
        kind = data.get("kind")
        if kind not in allowed:
            raise self._fail(f"Unexpected node kind {kind!r}; expected one of {allowed}", where)
        return kind

    def _name(self, data: dict[str, Any], where: str) -> Var:
        name = self._field(data, "name", where)
        if not isinstance(name, str) or not name:
            raise self._fail("Variable name must be a non-empty string", where)
        return Var(name)

    def statement(self, data: Any, where: str = "$") -> Statement:
        kind = self._kind(data, STATEMENT_KINDS, where)

        if kind == "sequence":
            statements = self._field(data, "statements", where)
            if not isinstance(statements, list):
                raise self._fail("'statements' must be a list", where)
            return Sequence(
                tuple(
                    self.statement(s, f"{where}.statements[{i}]")
                    for i, s in enumerate(statements)
                )
            )

        if kind == "declaration":
            type_name = self._field(data, "type", where)
            if type_name not in _TYPES_BY_NAME:
                raise self._fail(f"Unknown type {type_name!r}", where)
            value = data.get("value")
            return Declaration(
                _TYPES_BY_NAME[type_name],
                self._name(data, where),
                self.expression(value, f"{where}.value") if value is not None else None,
            )

        if kind == "print":
            prefix = self._field(data, "prefix", where)
            if not isinstance(prefix, str):
                raise self._fail("'prefix' must be a string", where)
            expression = data.get("expression")
            return PrintStatement(
                prefix,
                self.expression(expression, f"{where}.expression")
                if expression is not None
                else None,
            )

        if kind == "while":
            return WhileLoop(
                self.expression(self._field(data, "condition", where), f"{where}.condition"),
                self.statement(self._field(data, "body", where), f"{where}.body"),
            )

        return self._assignment(data, where)

    def expression(self, data: Any, where: str = "$") -> Expression:
        kind = self._kind(data, EXPRESSION_KINDS, where)

        if kind == "int":
            value = self._field(data, "value", where)
            if isinstance(value, bool) or not isinstance(value, int):
                raise self._fail("'int' value must be an integer", where)
            try:
                return IntLiteral(value)
            except ValueError as e:
                raise self._fail(str(e), where) from e

        if kind == "float":
            value = self._field(data, "value", where)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise self._fail("'float' value must be a number", where)
            return FloatLiteral(float(value))

        if kind == "var":
            return self._name(data, where)

        if kind == "operator":
            name = self._field(data, "operator", where)
            try:
                operator = Operator[name]
            except (KeyError, TypeError):
                raise self._fail(f"Unknown operator {name!r}", where) from None
            operands = self._field(data, "operands", where)
            if not isinstance(operands, list):
                raise self._fail("'operands' must be a list", where)
            return OperatorExpression(
                operator,
                tuple(
                    self.expression(o, f"{where}.operands[{i}]") for i, o in enumerate(operands)
                ),
            )

        return self._assignment(data, where)

    def _assignment(self, data: dict[str, Any], where: str) -> Assignment:
        return Assignment(
            self._name(data, where),
            self.expression(self._field(data, "value", where), f"{where}.value"),
        )


def program_from_dict(data: Any, source: Optional[str] = None) -> Statement:
    """
    Decode a program tree from plain data.

    Args:
        data: The decoded JSON object for the root statement
        source: Optional file name used in error messages

    Raises:
        TreeFormatError: If the data does not describe a valid tree
    """
    return _Decoder(source).statement(data)


def load_program(path: str | Path) -> Statement:
    """
    Load a program tree from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        TreeFormatError: If the file is not valid JSON or not a valid tree
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise TreeFormatError(f"Invalid JSON: {e}", str(path)) from e
    return program_from_dict(data, str(path))


__all__ = [
    "program_to_dict",
    "program_from_dict",
    "dump_program",
    "load_program",
]
