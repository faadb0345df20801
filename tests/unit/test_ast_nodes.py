"""
Unit tests for MiniJava AST nodes, operator metadata and tree builders.
"""

import pytest

from minijava.compiler.ast_nodes import (
    INT32_MAX,
    INT32_MIN,
    Assignment,
    Associativity,
    Declaration,
    Expression,
    FloatLiteral,
    IntLiteral,
    Operator,
    OperatorExpression,
    Sequence,
    Statement,
    Type,
    Var,
)
from minijava.compiler.builders import (
    INT,
    MINUS2,
    PLUS1,
    assign,
    declare,
    lit,
    op,
    println,
    seq,
    var,
    while_loop,
)


class TestOperatorInfo:
    """Tests for operator symbols, precedence, associativity and arity."""

    @pytest.mark.parametrize(
        "operator,symbol,precedence,associativity,arity",
        [
            (Operator.PLUS1, "+", 3, Associativity.RTL, 1),
            (Operator.MINUS1, "-", 3, Associativity.RTL, 1),
            (Operator.MULT, "*", 2, Associativity.LTR, 2),
            (Operator.DIV, "/", 2, Associativity.LTR, 2),
            (Operator.MOD, "%", 2, Associativity.LTR, 2),
            (Operator.PLUS2, "+", 1, Associativity.LTR, 2),
            (Operator.MINUS2, "-", 1, Associativity.LTR, 2),
        ],
    )
    def test_operator_table(self, operator, symbol, precedence, associativity, arity):
        """Each operator carries its fixed syntactic metadata."""
        assert operator.symbol == symbol
        assert operator.precedence == precedence
        assert operator.associativity is associativity
        assert operator.arity == arity

    def test_info_matches_properties(self):
        """The info record and the shortcut properties agree."""
        info = Operator.DIV.info
        assert (info.symbol, info.precedence, info.arity) == ("/", 2, 2)


class TestType:
    """Tests for the primitive type enum."""

    def test_type_names(self):
        """Types render as their source names."""
        assert Type.INT.type_name == "int"
        assert str(Type.FLOAT) == "float"


class TestNodeIdentity:
    """Tests for node equality and hashing."""

    def test_var_equal_by_name(self):
        """Two Var nodes with the same name are the same variable."""
        assert Var("i") == Var("i")
        assert hash(Var("i")) == hash(Var("i"))
        assert Var("i") != Var("j")

    def test_literals_are_distinct_keys(self):
        """Equal-valued literals are separate nodes."""
        a, b = IntLiteral(1), IntLiteral(1)
        assert a != b
        assert len({a, b}) == 2

    def test_operator_expressions_are_distinct_keys(self):
        """Structurally equal operator expressions are separate nodes."""
        a = op(MINUS2, var("i"), lit(1))
        b = op(MINUS2, var("i"), lit(1))
        assert a != b
        assert a == a

    def test_nodes_are_immutable(self):
        """Nodes cannot be modified after construction."""
        node = IntLiteral(3)
        with pytest.raises(AttributeError):
            node.value = 4


class TestNodeConstruction:
    """Tests for node constructors and builders."""

    def test_int_literal_range(self):
        """Int literals must fit in 32 bits."""
        assert IntLiteral(INT32_MAX).value == INT32_MAX
        assert IntLiteral(INT32_MIN).value == INT32_MIN
        with pytest.raises(ValueError):
            IntLiteral(INT32_MAX + 1)
        with pytest.raises(ValueError):
            IntLiteral(INT32_MIN - 1)

    def test_operands_become_tuple(self):
        """Operand lists are stored as tuples."""
        node = OperatorExpression(Operator.PLUS2, [lit(1), lit(2)])
        assert isinstance(node.operands, tuple)
        assert len(node.operands) == 2

    def test_sequence_statements_become_tuple(self):
        """Statement lists are stored as tuples."""
        node = Sequence([declare(INT, "i")])
        assert isinstance(node.statements, tuple)

    def test_assignment_is_statement_and_expression(self):
        """An assignment may stand in either position."""
        node = assign("i", lit(1))
        assert isinstance(node, Statement)
        assert isinstance(node, Expression)
        assert isinstance(node, Assignment)

    def test_lit_picks_literal_type(self):
        """lit() builds an int or float literal from the Python type."""
        assert isinstance(lit(1), IntLiteral)
        assert isinstance(lit(1.0), FloatLiteral)

    def test_lit_rejects_bool(self):
        """Booleans are not MiniJava literals."""
        with pytest.raises(TypeError):
            lit(True)

    def test_builders_accept_names(self):
        """declare() and assign() accept a plain name for the variable."""
        declaration = declare(INT, "i", lit(1))
        assert isinstance(declaration, Declaration)
        assert declaration.variable == Var("i")
        assert assign(var("j"), lit(2)).variable == Var("j")

    def test_builders_compose(self):
        """Builders nest into a complete program."""
        program = seq(
            declare(INT, "i", lit(2)),
            while_loop(var("i"), seq(println("i: ", op(PLUS1, var("i"))))),
        )
        assert len(program.statements) == 2
        assert program.statements[1].body.statements[0].prefix == "i: "
