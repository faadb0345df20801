"""
Type Checking Module for MiniJava.

A single depth-first pass over a program that:
1. Resolves a type for every expression that has one (``type_mapping``)
2. Tracks declared variables (``variables``)
3. Collects problems instead of raising, so one run reports all of them

Typing is simple: all operands of an operator and its result
share one type, and there are no implicit conversions between int and float.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

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
from minijava.compiler.operators import is_supported, supported_types
from minijava.utils.diagnostics import (
    Diagnostic,
    DiagnosticEmitter,
    ErrorCode,
    create_type_mismatch_diagnostic,
    create_undefined_variable_diagnostic,
)

logger = logging.getLogger(__name__)


def _type_name(type_: Optional[Type]) -> str:
    return type_.type_name if type_ is not None else "undefined"


@dataclass
class TypeCheckResult:
    """
    Outcome of a type-check pass.

    Attributes:
        type_mapping: Resolved type per expression (identity keys, name keys for Var)
        variables: Declared variables
        problems: Problem messages in the order they were found
        emitter: Collected coded diagnostics, one per problem
    """

    type_mapping: dict[Expression, Type] = field(default_factory=dict)
    variables: set[Var] = field(default_factory=set)
    problems: list[str] = field(default_factory=list)
    emitter: DiagnosticEmitter = field(default_factory=DiagnosticEmitter)

    @property
    def ok(self) -> bool:
        """True when no problems were found."""
        return not self.problems

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self.emitter.diagnostics


class TypeChecker(ProgramVisitor):
    """
    Checks declarations, assignments, operators and loop conditions.

    Usage:
        checker = TypeChecker()
        result = checker.check(program)
        for problem in result.problems:
            print(problem)

    ``visit`` can also be called directly; state then accumulates across
    calls, while ``check`` starts from a clean slate.
    """

    def __init__(self) -> None:
        self.type_mapping: dict[Expression, Type] = {}
        self.variables: set[Var] = set()
        self.problems: list[str] = []
        self._emitter = DiagnosticEmitter()

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self._emitter.diagnostics

    # -------------------------------------------------------------------------
    # Public Interface
    # -------------------------------------------------------------------------

    def check(self, program: Statement) -> TypeCheckResult:
        """
        Type check a whole program.

        Args:
            program: The root statement

        Returns:
            The type mapping, declared variables and problems found
        """
        self.type_mapping = {}
        self.variables = set()
        self.problems = []
        self._emitter = DiagnosticEmitter()

        logger.debug("Type checking %s", type(program).__name__)
        self.visit(program)
        logger.debug("Type check finished with %d problem(s)", len(self.problems))

        return self.result()

    def result(self) -> TypeCheckResult:
        """Snapshot the current state as a TypeCheckResult."""
        return TypeCheckResult(
            type_mapping=self.type_mapping,
            variables=self.variables,
            problems=self.problems,
            emitter=self._emitter,
        )

    def _declared_names(self) -> list[str]:
        return sorted(v.name for v in self.variables)

    # -------------------------------------------------------------------------
    # Statements
    # -------------------------------------------------------------------------

    def visit_sequence(self, node: Sequence) -> None:
        for statement in node.statements:
            self.visit(statement)

    def visit_declaration(self, node: Declaration) -> None:
        if node.value is not None:
            self.visit(node.value)

        variable = node.variable
        if variable in self.variables:
            self.problems.append(f"Variable {variable.name} declared more than once.")
            first_type = self.type_mapping.get(variable)
            self._emitter.error(
                ErrorCode.E0112, f"variable '{variable.name}' is declared more than once"
            ).note(
                f"the first declaration as '{_type_name(first_type)}' stays in effect"
            ).emit()
            return

        self.variables.add(variable)
        self.type_mapping[variable] = node.type

        if node.value is not None:
            value_type = self.type_mapping.get(node.value)
            if value_type != node.type:
                self.problems.append(
                    f"Type mismatch for declaration of {node.type.type_name} {variable.name}: "
                    f"expression is type {_type_name(value_type)}."
                )
                create_type_mismatch_diagnostic(
                    self._emitter,
                    node.type.type_name,
                    value_type.type_name if value_type else None,
                    f"in declaration of '{variable.name}'",
                )

    def visit_print_statement(self, node: PrintStatement) -> None:
        if node.expression is not None:
            self.visit(node.expression)

    def visit_while_loop(self, node: WhileLoop) -> None:
        self.visit(node.condition)
        condition_type = self.type_mapping.get(node.condition)
        if condition_type is not Type.INT:
            self.problems.append(f"Not an int: {_type_name(condition_type)}")
            self._emitter.error(
                ErrorCode.E0115,
                f"loop condition must be 'int', found '{_type_name(condition_type)}'",
            ).help("the loop runs while the condition value is >= 0").emit()

        self.visit(node.body)

    def visit_assignment(self, node: Assignment) -> None:
        self.visit(node.value)

        variable = node.variable
        if variable not in self.variables:
            self.problems.append(f"Variable {variable.name} not defined.")
            create_undefined_variable_diagnostic(
                self._emitter, variable.name, self._declared_names()
            )
            return

        variable_type = self.type_mapping.get(variable)
        value_type = self.type_mapping.get(node.value)
        if variable_type != value_type:
            self.problems.append(
                f"Type mismatch for assignment to variable {variable.name} "
                f"of type {_type_name(variable_type)}."
            )
            create_type_mismatch_diagnostic(
                self._emitter,
                _type_name(variable_type),
                value_type.type_name if value_type else None,
                f"in assignment to '{variable.name}'",
            )
        else:
            self.type_mapping[node] = variable_type

    # -------------------------------------------------------------------------
    # Expressions
    # -------------------------------------------------------------------------

    def visit_literal(self, node: Literal) -> None:
        if isinstance(node, IntLiteral):
            self.type_mapping[node] = Type.INT
        elif isinstance(node, FloatLiteral):
            self.type_mapping[node] = Type.FLOAT

    def visit_var(self, node: Var) -> None:
        if node not in self.variables:
            self.problems.append(f"Variable not defined {node.name}")
            create_undefined_variable_diagnostic(
                self._emitter, node.name, self._declared_names()
            )
        elif self.type_mapping.get(node) is None:
            self.problems.append(f"Variable {node.name} does not have a type.")
            self._emitter.error(
                ErrorCode.E0113, f"variable '{node.name}' does not have a type"
            ).emit()

    def visit_operator_expression(self, node: OperatorExpression) -> None:
        operator = node.operator
        operand_type: Optional[Type] = None
        consistent = True

        for operand in node.operands:
            self.visit(operand)
            current = self.type_mapping.get(operand)
            if current is None:
                consistent = False
                self.problems.append(
                    f"A subexpression of {operator.symbol} does not have a type."
                )
                self._emitter.error(
                    ErrorCode.E0113, f"an operand of '{operator.symbol}' does not have a type"
                ).emit()
            elif operand_type is None:
                operand_type = current
            elif current != operand_type:
                consistent = False
                self.problems.append(
                    f"Subexpressions of operator do not match for {operator.symbol}."
                )
                self._emitter.error(
                    ErrorCode.E0105,
                    f"operands of '{operator.symbol}' mix '{operand_type}' and '{current}'",
                ).help("all operands of an operator must have the same type").emit()

        if operand_type is None:
            self.problems.append(
                f"Subexpression(s) of operand do not have a type: Operator {operator.name}"
            )
            self._emitter.error(
                ErrorCode.E0113, f"'{operator.symbol}' has no typed operands"
            ).emit()
        elif is_supported(operator, operand_type):
            # Mixed or partly untyped operands are already reported; the node stays untyped.
            if consistent:
                self.type_mapping[node] = operand_type
        else:
            self.problems.append(
                "Operator does not support the type of its operands. "
                f"Operator is {operator.name} and operand type is {operand_type}"
            )
            allowed = ", ".join(f"'{t}'" for t in supported_types(operator))
            self._emitter.error(
                ErrorCode.E0114,
                f"operator {operator.name} does not support operands of type '{operand_type}'",
            ).note(f"{operator.name} supports {allowed}").emit()


# =============================================================================
# Utility Functions
# =============================================================================


def type_check(program: Statement) -> TypeCheckResult:
    """
    Convenience function to type check a program.

    Args:
        program: The root statement

    Returns:
        The completed TypeCheckResult
    """
    return TypeChecker().check(program)


__all__ = [
    "TypeChecker",
    "TypeCheckResult",
    "type_check",
]
