"""
Shortcut constructors for building MiniJava trees by hand.

    program = seq(
        declare(INT, "i", lit(5)),
        while_loop(var("i"), seq(
            println("i: ", var("i")),
            assign("i", op(MINUS2, var("i"), lit(1))),
        )),
    )
"""

from __future__ import annotations

from typing import Optional, Union

from minijava.compiler.ast_nodes import (
    Assignment,
    Declaration,
    Expression,
    FloatLiteral,
    IntLiteral,
    Literal,
    Operator,
    OperatorExpression,
    PrintStatement,
    Sequence,
    Statement,
    Type,
    Var,
    WhileLoop,
)

INT = Type.INT
FLOAT = Type.FLOAT

PLUS1 = Operator.PLUS1
MINUS1 = Operator.MINUS1
PLUS2 = Operator.PLUS2
MINUS2 = Operator.MINUS2
MULT = Operator.MULT
DIV = Operator.DIV
MOD = Operator.MOD

VarLike = Union[Var, str]


def _as_var(variable: VarLike) -> Var:
    return variable if isinstance(variable, Var) else Var(variable)


def seq(*statements: Statement) -> Sequence:
    """Build a statement sequence."""
    return Sequence(statements)


def var(name: str) -> Var:
    """Build a variable reference."""
    return Var(name)


def lit(value: Union[int, float]) -> Literal:
    """Build an IntLiteral for an int and a FloatLiteral for a float."""
    if isinstance(value, bool):
        raise TypeError("MiniJava has no boolean literals")
    if isinstance(value, int):
        return IntLiteral(value)
    return FloatLiteral(float(value))


def op(operator: Operator, *operands: Expression) -> OperatorExpression:
    """Apply an operator to operands."""
    return OperatorExpression(operator, operands)


def declare(type_: Type, variable: VarLike, value: Optional[Expression] = None) -> Declaration:
    """Declare a variable with an optional initializer."""
    return Declaration(type_, _as_var(variable), value)


def assign(variable: VarLike, value: Expression) -> Assignment:
    """Assign a value to a variable."""
    return Assignment(_as_var(variable), value)


def println(prefix: str, expression: Optional[Expression] = None) -> PrintStatement:
    """Print a prefix followed by an expression's value."""
    return PrintStatement(prefix, expression)


def while_loop(condition: Expression, body: Statement) -> WhileLoop:
    """Loop over the body while the condition is non-negative."""
    return WhileLoop(condition, body)


__all__ = [
    "INT",
    "FLOAT",
    "PLUS1",
    "MINUS1",
    "PLUS2",
    "MINUS2",
    "MULT",
    "DIV",
    "MOD",
    "seq",
    "var",
    "lit",
    "op",
    "declare",
    "assign",
    "println",
    "while_loop",
]
