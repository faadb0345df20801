"""
MiniJava Serializer.

Turns a program tree back into Java-like source text with the fewest
parentheses needed to keep the tree's grouping under the usual precedence
and associativity rules:

    int i = 2 + 3 * 4;
    int j = ( 2 + 3 ) * 4;
    while ( i >= 0 ) {
      i = i - 1;
    }
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from minijava.compiler.ast_nodes import (
    Assignment,
    Associativity,
    Declaration,
    Expression,
    FloatLiteral,
    IntLiteral,
    Literal,
    Operator,
    OperatorExpression,
    PrintStatement,
    ProgramVisitor,
    Sequence,
    Statement,
    Var,
    WhileLoop,
)

# =============================================================================
# Serializer Configuration
# =============================================================================


@dataclass
class SerializerConfig:
    """Configuration for the serializer."""

    indent: str = "  "
    statement_terminator: str = ";"
    line_separator: str = "\n"


LEFT = 0
RIGHT = 1


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def _format_float(value: float) -> str:
    return f"{float(value)!r}f"


# =============================================================================
# Serializer
# =============================================================================


class Serializer(ProgramVisitor):
    """
    Renders a program tree as source text.

    Statements inside a sequence go one per line, each followed by the
    statement terminator, except loops, which close with their own brace.
    """

    def __init__(self, config: SerializerConfig | None = None) -> None:
        self.config = config or SerializerConfig()
        self._indent_level = 0

    def serialize(self, program: Statement) -> str:
        """Serialize a complete program."""
        self._indent_level = 0
        return self.visit(program)

    def _indent(self) -> str:
        return self.config.indent * self._indent_level

    def _line(self, statement: Statement) -> str:
        """Render a statement as a full line inside a block."""
        terminator = "" if isinstance(statement, WhileLoop) else self.config.statement_terminator
        return self._indent() + self.visit(statement) + terminator + self.config.line_separator

    # -------------------------------------------------------------------------
    # Statements
    # -------------------------------------------------------------------------

    def visit_sequence(self, node: Sequence) -> str:
        return "".join(self._line(statement) for statement in node.statements)

    def visit_declaration(self, node: Declaration) -> str:
        text = f"{node.type.type_name} {node.variable.name}"
        if node.value is not None:
            text += f" = {self.visit(node.value)}"
        return text

    def visit_print_statement(self, node: PrintStatement) -> str:
        text = f"System.out.println({_quote(node.prefix)}"
        if node.expression is not None:
            text += f" + {self.visit(node.expression)}"
        return text + ")"

    def visit_while_loop(self, node: WhileLoop) -> str:
        header = f"while ( {self.visit(node.condition)} >= 0 ) {{" + self.config.line_separator

        self._indent_level += 1
        if isinstance(node.body, Sequence):
            body = self.visit(node.body)
        else:
            body = self._line(node.body)
        self._indent_level -= 1

        return header + body + self._indent() + "}"

    def visit_assignment(self, node: Assignment) -> str:
        return f"{node.variable.name} = {self.visit(node.value)}"

    # -------------------------------------------------------------------------
    # Expressions
    # -------------------------------------------------------------------------

    def visit_literal(self, node: Literal) -> str:
        if isinstance(node, IntLiteral):
            return str(node.value)
        if isinstance(node, FloatLiteral):
            return _format_float(node.value)
        return f"<unknown: {type(node).__name__}>"

    def visit_var(self, node: Var) -> str:
        return node.name

    def visit_operator_expression(self, node: OperatorExpression) -> str:
        operator = node.operator
        operands = node.operands

        if len(operands) == 0:
            return f"{operator.symbol}()"
        if len(operands) == 1:
            return f"{operator.symbol} {self._operand(operator, operands[0], RIGHT)}"
        if len(operands) == 2:
            left = self._operand(operator, operands[0], LEFT)
            right = self._operand(operator, operands[1], RIGHT)
            return f"{left} {operator.symbol} {right}"

        arguments = ", ".join(self.visit(operand) for operand in operands)
        return f"{operator.symbol}({arguments})"

    def _operand(self, operator: Operator, expression: Expression, side: int) -> str:
        """Render an operand, parenthesized unless its grouping is implied."""
        text = self.visit(expression)
        if isinstance(expression, OperatorExpression):
            if not _needs_parentheses(operator, expression.operator, side):
                return text
        elif not isinstance(expression, Assignment):
            return text
        return f"( {text} )"


def _needs_parentheses(outer: Operator, inner: Operator, side: int) -> bool:
    if inner.precedence > outer.precedence:
        return False
    if inner.precedence == outer.precedence:
        if outer.associativity is Associativity.LTR and side == LEFT:
            return False
        if outer.associativity is Associativity.RTL and side == RIGHT:
            return False
    return True


# =============================================================================
# Public API
# =============================================================================


def serialize(program: Statement, config: Optional[SerializerConfig] = None) -> str:
    """
    Serialize a MiniJava program to source text.

    Args:
        program: The root statement
        config: Optional serializer configuration

    Returns:
        The program as Java-like source
    """
    return Serializer(config).serialize(program)


__all__ = [
    "Serializer",
    "SerializerConfig",
    "serialize",
]
