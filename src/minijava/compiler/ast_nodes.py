"""
Abstract Syntax Tree (AST) node definitions for MiniJava.

Nodes are immutable and carry no derived facts: types and values computed by
the semantic passes live in side tables owned by each pass. Expression nodes
hash by object identity, so every occurrence in the tree is its own key;
``Var`` is the exception and hashes by name, since all occurrences of a name
denote the same variable.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Optional

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class ASTNode(ABC):
    """Base class for all AST nodes."""

    @abstractmethod
    def accept(self, visitor: "ProgramVisitor") -> Any:
        """Accept a visitor for tree traversal."""
        pass


class ProgramVisitor(ABC):
    """
    Visitor base class for MiniJava passes.

    Every pass (type checking, evaluation, serialization) implements one
    ``visit_*`` method per node kind; ``visit`` routes a node to the right
    one through ``node.accept``.
    """

    def visit(self, node: ASTNode) -> Any:
        """Dispatch to the appropriate visit method."""
        return node.accept(self)

    @abstractmethod
    def visit_sequence(self, node: "Sequence") -> Any:
        """Visit a sequence of statements."""

    @abstractmethod
    def visit_declaration(self, node: "Declaration") -> Any:
        """Visit a variable declaration."""

    @abstractmethod
    def visit_print_statement(self, node: "PrintStatement") -> Any:
        """Visit a print statement."""

    @abstractmethod
    def visit_while_loop(self, node: "WhileLoop") -> Any:
        """Visit a while loop."""

    @abstractmethod
    def visit_assignment(self, node: "Assignment") -> Any:
        """Visit an assignment (statement or expression)."""

    @abstractmethod
    def visit_literal(self, node: "Literal") -> Any:
        """Visit an int or float literal."""

    @abstractmethod
    def visit_var(self, node: "Var") -> Any:
        """Visit a variable reference."""

    @abstractmethod
    def visit_operator_expression(self, node: "OperatorExpression") -> Any:
        """Visit an operator application."""


# -----------------------------------------------------------------------------
# Types and Operators
# -----------------------------------------------------------------------------


class Type(Enum):
    """Primitive MiniJava types."""

    INT = "int"
    FLOAT = "float"

    @property
    def type_name(self) -> str:
        """The type's name as written in source."""
        return self.value

    def __str__(self) -> str:
        return self.value


class Associativity(Enum):
    """Operator associativity."""

    LTR = auto()  # left to right
    RTL = auto()  # right to left


@dataclass(frozen=True)
class OperatorInfo:
    """
    Syntactic metadata for an operator.

    Attributes:
        symbol: The operator as written in source (e.g., "+")
        precedence: Binding strength; higher binds tighter
        associativity: Grouping direction among equal precedence
        arity: Number of operands the operator takes
    """

    symbol: str
    precedence: int
    associativity: Associativity
    arity: int


class Operator(Enum):
    """MiniJava operators. PLUS1/MINUS1 are unary, the rest binary."""

    PLUS1 = auto()
    MINUS1 = auto()
    PLUS2 = auto()
    MINUS2 = auto()
    MULT = auto()
    DIV = auto()
    MOD = auto()

    @property
    def info(self) -> OperatorInfo:
        return OPERATOR_INFO[self]

    @property
    def symbol(self) -> str:
        return OPERATOR_INFO[self].symbol

    @property
    def precedence(self) -> int:
        return OPERATOR_INFO[self].precedence

    @property
    def associativity(self) -> Associativity:
        return OPERATOR_INFO[self].associativity

    @property
    def arity(self) -> int:
        return OPERATOR_INFO[self].arity


OPERATOR_INFO: dict[Operator, OperatorInfo] = {
    Operator.PLUS1: OperatorInfo("+", 3, Associativity.RTL, 1),
    Operator.MINUS1: OperatorInfo("-", 3, Associativity.RTL, 1),
    Operator.MULT: OperatorInfo("*", 2, Associativity.LTR, 2),
    Operator.DIV: OperatorInfo("/", 2, Associativity.LTR, 2),
    Operator.MOD: OperatorInfo("%", 2, Associativity.LTR, 2),
    Operator.PLUS2: OperatorInfo("+", 1, Associativity.LTR, 2),
    Operator.MINUS2: OperatorInfo("-", 1, Associativity.LTR, 2),
}


# -----------------------------------------------------------------------------
# Base Classes
# -----------------------------------------------------------------------------


class Statement(ASTNode):
    """Base class for all statements."""

    pass


class Expression(ASTNode):
    """Base class for all expressions."""

    pass


# -----------------------------------------------------------------------------
# Expressions
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Var(Expression):
    """
    A variable reference.

    Equality and hashing use the name only: ``Var("i") == Var("i")``.
    """

    name: str

    def accept(self, visitor: ProgramVisitor) -> Any:
        return visitor.visit_var(self)

    def __str__(self) -> str:
        return self.name


class Literal(Expression):
    """Base class for numeric literals."""

    value: Any

    def accept(self, visitor: ProgramVisitor) -> Any:
        return visitor.visit_literal(self)


@dataclass(frozen=True, slots=True, eq=False)
class IntLiteral(Literal):
    """A 32-bit integer literal."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not INT32_MIN <= self.value <= INT32_MAX:
            raise ValueError(f"Integer literal out of 32-bit range: {self.value!r}")


@dataclass(frozen=True, slots=True, eq=False)
class FloatLiteral(Literal):
    """A single-precision floating-point literal."""

    value: float


@dataclass(frozen=True, slots=True, eq=False)
class OperatorExpression(Expression):
    """
    An operator applied to an ordered list of operands.

    Example:
        a + b, - x
    """

    operator: Operator
    operands: tuple[Expression, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "operands", tuple(self.operands))

    def accept(self, visitor: ProgramVisitor) -> Any:
        return visitor.visit_operator_expression(self)


# -----------------------------------------------------------------------------
# Statements
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True, eq=False)
class Sequence(Statement):
    """An ordered list of statements."""

    statements: tuple[Statement, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "statements", tuple(self.statements))

    def accept(self, visitor: ProgramVisitor) -> Any:
        return visitor.visit_sequence(self)


@dataclass(frozen=True, slots=True, eq=False)
class Declaration(Statement):
    """
    A variable declaration with an optional initializer.

    Example:
        int i = 5
        float x
    """

    type: Type
    variable: Var
    value: Optional[Expression] = None

    def accept(self, visitor: ProgramVisitor) -> Any:
        return visitor.visit_declaration(self)


@dataclass(frozen=True, slots=True, eq=False)
class PrintStatement(Statement):
    """
    Prints a prefix followed by the value of an optional expression.

    Example:
        System.out.println("i: " + i)
    """

    prefix: str
    expression: Optional[Expression] = None

    def accept(self, visitor: ProgramVisitor) -> Any:
        return visitor.visit_print_statement(self)


@dataclass(frozen=True, slots=True, eq=False)
class WhileLoop(Statement):
    """
    A loop running its body while the condition is non-negative.

    Example:
        while ( i >= 0 ) { ... }
    """

    condition: Expression
    body: Statement

    def accept(self, visitor: ProgramVisitor) -> Any:
        return visitor.visit_while_loop(self)


@dataclass(frozen=True, slots=True, eq=False)
class Assignment(Statement, Expression):
    """
    An assignment, usable both as a statement and as an expression.

    As an expression it produces the assigned value.

    Example:
        j = i = 2 + (i = 3)
    """

    variable: Var
    value: Expression

    def accept(self, visitor: ProgramVisitor) -> Any:
        return visitor.visit_assignment(self)
