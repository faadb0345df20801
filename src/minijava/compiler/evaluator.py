"""
Tree-walking evaluator for MiniJava.

The evaluator executes a program whose types were resolved by the type
checker. It never infers types itself: the operator function for each
operator expression is chosen from the type recorded for that node.

Values are stored per node (identity) and per variable (name). A node inside
a loop body is re-evaluated on every iteration, so the store always holds the
most recent value.

Faults (missing operator function, missing operand value, integer division
by zero) raise immediately and abort the run.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Optional, TextIO, Union

import numpy as np

from minijava.compiler.ast_nodes import (
    Assignment,
    Declaration,
    Expression,
    FloatLiteral,
    IntLiteral,
    Literal,
    OperatorExpression,
    PrintStatement,
    ProgramVisitor,
    Sequence,
    Statement,
    Type,
    Var,
    WhileLoop,
)
from minijava.compiler.operators import Number, get_operator_function, to_runtime_value
from minijava.compiler.type_checker import TypeChecker, TypeCheckResult
from minijava.utils.errors import EvaluationError

logger = logging.getLogger(__name__)

TypeSource = Union[TypeCheckResult, TypeChecker, Mapping[Expression, Type]]


def _format_float(value: np.float32) -> str:
    """Render a float like Java's Float.toString (1.5, 1.0E8, 1.0E-5)."""
    if np.isnan(value):
        return "NaN"
    if np.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "-0.0" if np.signbit(value) else "0.0"
    if 1e-3 <= abs(value) < 1e7:
        return np.format_float_positional(value, unique=True, trim="0")

    mantissa, exponent = np.format_float_scientific(value, unique=True, trim="0").split("e")
    return f"{mantissa}E{int(exponent)}"


def format_value(value: Optional[Number]) -> str:
    """Render a runtime value the way a print statement shows it."""
    if value is None:
        return "null"
    if isinstance(value, (float, np.floating)):
        return _format_float(np.float32(value))
    return str(value)


@dataclass
class EvaluationResult:
    """
    Outcome of an evaluation pass.

    Attributes:
        values: Most recent value per expression node and per variable
        output: Printed lines in execution order
    """

    values: dict[Expression, Number] = field(default_factory=dict)
    output: list[str] = field(default_factory=list)

    def value_of(self, name: str) -> Optional[Number]:
        """Get the current value of a variable by name."""
        return self.values.get(Var(name))


class Evaluator(ProgramVisitor):
    """
    Executes a type-checked MiniJava program.

    Usage:
        result = TypeChecker().check(program)
        evaluator = Evaluator(result)
        outcome = evaluator.run(program)
        print(outcome.value_of("i"))

    Args:
        types: A type-check result, a type checker (its mapping is read when
            evaluation starts), or a plain expression-to-type mapping
        stream: Optional text stream receiving each printed line
    """

    def __init__(self, types: TypeSource, stream: Optional[TextIO] = None) -> None:
        if types is None:
            raise EvaluationError("Evaluation requires the result of a type check")
        self._types = types
        self.stream = stream
        self.values: dict[Expression, Number] = {}
        self.output: list[str] = []

    @property
    def type_mapping(self) -> Mapping[Expression, Type]:
        if isinstance(self._types, (TypeCheckResult, TypeChecker)):
            return self._types.type_mapping
        return self._types

    def run(self, program: Statement) -> EvaluationResult:
        """
        Evaluate a program.

        Args:
            program: The root statement, already type checked

        Returns:
            The value store and printed output

        Raises:
            EvaluationError: If evaluation cannot continue
            ArithmeticFault: On integer division or modulo by zero
        """
        self.values = {}
        self.output = []

        logger.debug("Evaluating %s", type(program).__name__)
        self.visit(program)
        logger.debug("Evaluation finished, %d line(s) printed", len(self.output))
        return EvaluationResult(values=self.values, output=self.output)

    def _emit(self, line: str) -> None:
        self.output.append(line)
        if self.stream is not None:
            self.stream.write(line + "\n")

    # -------------------------------------------------------------------------
    # Statements
    # -------------------------------------------------------------------------

    def visit_sequence(self, node: Sequence) -> None:
        for statement in node.statements:
            self.visit(statement)

    def visit_declaration(self, node: Declaration) -> None:
        if node.value is not None:
            self.visit(node.value)
            self.values[node.variable] = self.values.get(node.value)

    def visit_print_statement(self, node: PrintStatement) -> None:
        if node.expression is None:
            self._emit(node.prefix)
            return
        self.visit(node.expression)
        self._emit(node.prefix + format_value(self.values.get(node.expression)))

    def visit_while_loop(self, node: WhileLoop) -> None:
        iterations = 0
        self.visit(node.condition)
        value = self.values.get(node.condition)

        while value is not None and value >= 0:
            self.visit(node.body)
            iterations += 1
            self.visit(node.condition)
            value = self.values.get(node.condition)

        logger.debug("Loop finished after %d iteration(s)", iterations)

    def visit_assignment(self, node: Assignment) -> None:
        self.visit(node.value)
        result = self.values.get(node.value)
        self.values[node] = result
        self.values[node.variable] = result

    # -------------------------------------------------------------------------
    # Expressions
    # -------------------------------------------------------------------------

    def visit_literal(self, node: Literal) -> None:
        if isinstance(node, IntLiteral):
            self.values[node] = to_runtime_value(Type.INT, node.value)
        elif isinstance(node, FloatLiteral):
            self.values[node] = to_runtime_value(Type.FLOAT, node.value)

    def visit_var(self, node: Var) -> None:
        # A variable's value was stored by the declaration or assignment that set it.
        pass

    def visit_operator_expression(self, node: OperatorExpression) -> None:
        type_ = self.type_mapping.get(node)
        function = get_operator_function(node.operator, type_)
        if function is None:
            raise EvaluationError(
                f"No function of this type available: operator {node.operator.name}, "
                f"type {type_ if type_ is not None else 'undefined'}",
                node,
            )

        args: list[Number] = []
        for operand in node.operands:
            self.visit(operand)
            arg = self.values.get(operand)
            if arg is None:
                raise EvaluationError("Value of subexpression does not exist", operand)
            args.append(arg)

        try:
            self.values[node] = function(args)
        except EvaluationError as e:
            if e.node is not None:
                raise
            raise type(e)(e.message, node) from e


# =============================================================================
# Utility Functions
# =============================================================================


def evaluate(
    program: Statement,
    types: TypeSource,
    stream: Optional[TextIO] = None,
) -> EvaluationResult:
    """
    Convenience function to evaluate a type-checked program.

    Args:
        program: The root statement
        types: The type-check result (or its type mapping) for the same tree
        stream: Optional text stream receiving printed lines

    Returns:
        The value store and printed output
    """
    return Evaluator(types, stream).run(program)


__all__ = [
    "Evaluator",
    "EvaluationResult",
    "evaluate",
    "format_value",
]
