"""
MiniJava Compiler Package.

This package contains the semantic pipeline:
- AST: Node definitions, types and operators
- TypeChecker: Resolves expression types and collects problems
- Operators: Executable semantics per (operator, type)
- Evaluator: Runs a type-checked tree
- Serializer: Regenerates source text from a tree
- Tree I/O: JSON interchange for trees built elsewhere

Entry points:
    result = typecheck(program)
    outcome = evaluate(program, result)
    text = serialize(program)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, TextIO

from minijava.compiler.ast_nodes import (
    Assignment,
    Associativity,
    ASTNode,
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
    Type,
    Var,
    WhileLoop,
)
from minijava.compiler.evaluator import EvaluationResult, Evaluator, evaluate
from minijava.compiler.operators import OPERATOR_FUNCTIONS, get_operator_function
from minijava.compiler.serializer import Serializer, SerializerConfig, serialize
from minijava.compiler.tree_io import dump_program, load_program, program_from_dict
from minijava.compiler.type_checker import TypeChecker, TypeCheckResult, type_check
from minijava.utils.errors import TypeCheckError

logger = logging.getLogger(__name__)


def typecheck(program: Statement) -> TypeCheckResult:
    """
    Type check a program.

    Args:
        program: The root statement

    Returns:
        The type mapping, declared variables and problems
    """
    return type_check(program)


@dataclass
class ProgramResult:
    """Combined outcome of type checking and evaluating one program."""

    types: TypeCheckResult
    evaluation: EvaluationResult

    @property
    def output(self) -> list[str]:
        return self.evaluation.output


def run_program(
    program: Statement,
    strict: bool = False,
    stream: Optional[TextIO] = None,
) -> ProgramResult:
    """
    Type check and then evaluate a program.

    Problems found by the type checker do not stop evaluation unless
    ``strict`` is set.

    Args:
        program: The root statement
        strict: Raise TypeCheckError instead of evaluating when problems exist
        stream: Optional text stream receiving printed lines

    Returns:
        The type-check result and the evaluation result

    Raises:
        TypeCheckError: In strict mode, if the type checker found problems
        EvaluationError: If evaluation faults
    """
    types = typecheck(program)
    if types.problems:
        logger.info("Type check found %d problem(s)", len(types.problems))
        if strict:
            raise TypeCheckError(types.problems)

    evaluation = evaluate(program, types, stream)
    return ProgramResult(types=types, evaluation=evaluation)


__all__ = [
    # AST
    "ASTNode",
    "ProgramVisitor",
    "Statement",
    "Expression",
    "Sequence",
    "Declaration",
    "PrintStatement",
    "WhileLoop",
    "Assignment",
    "Literal",
    "IntLiteral",
    "FloatLiteral",
    "Var",
    "OperatorExpression",
    "Type",
    "Operator",
    "Associativity",
    # Passes
    "TypeChecker",
    "TypeCheckResult",
    "Evaluator",
    "EvaluationResult",
    "Serializer",
    "SerializerConfig",
    "OPERATOR_FUNCTIONS",
    "get_operator_function",
    # Pipeline
    "typecheck",
    "evaluate",
    "serialize",
    "run_program",
    "ProgramResult",
    # Tree I/O
    "load_program",
    "dump_program",
    "program_from_dict",
]
