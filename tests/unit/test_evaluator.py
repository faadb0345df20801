"""
Unit tests for the MiniJava evaluator.
"""

import io

import numpy as np
import pytest

from minijava.compiler.ast_nodes import Type, Var
from minijava.compiler.builders import (
    DIV,
    FLOAT,
    INT,
    MINUS2,
    MOD,
    MULT,
    PLUS2,
    assign,
    declare,
    lit,
    op,
    println,
    seq,
    var,
    while_loop,
)
from minijava.compiler.evaluator import Evaluator, evaluate, format_value
from minijava.compiler.type_checker import TypeChecker
from minijava.utils.errors import ArithmeticFault, EvaluationError


class TestStatements:
    """Tests for statement execution."""

    def test_declaration_stores_value(self, run):
        """An initialized declaration stores the value."""
        result = run(seq(declare(INT, "i", lit(5))))
        assert result.value_of("i") == 5
        assert isinstance(result.value_of("i"), np.int32)

    def test_declaration_without_value(self, run):
        """An uninitialized variable has no value."""
        result = run(seq(declare(INT, "i")))
        assert result.value_of("i") is None

    def test_assignment_expression_value(self, run):
        """An assignment yields the assigned value."""
        outer = assign("i", op(PLUS2, lit(2), assign("i", lit(3))))
        result = run(seq(declare(INT, "i"), declare(INT, "j", outer)))
        assert result.values[outer] == 5
        assert result.value_of("i") == 5
        assert result.value_of("j") == 5

    def test_print_with_expression(self, run):
        """Print concatenates the prefix and the value."""
        result = run(seq(declare(INT, "i", lit(7)), println("i: ", var("i"))))
        assert result.output == ["i: 7"]

    def test_print_without_expression(self, run):
        """Print without an expression prints the prefix only."""
        result = run(seq(println("hello")))
        assert result.output == ["hello"]

    def test_print_missing_value(self, run):
        """A variable without a value prints as null."""
        result = run(seq(declare(INT, "i"), println("i: ", var("i"))))
        assert result.output == ["i: null"]

    def test_print_float(self, run):
        """Floats print through their float32 value."""
        result = run(seq(println("", op(DIV, lit(36.0), lit(7.0)))))
        assert result.output == ["5.142857"]

    def test_runs_are_independent(self):
        """Running the same evaluator twice gives two separate results."""
        program = seq(println("a"))
        evaluator = Evaluator(TypeChecker().check(program))
        first = evaluator.run(program)
        second = evaluator.run(program)
        assert first.output == ["a"]
        assert second.output == ["a"]
        assert first.values is not second.values

    def test_stream_receives_lines(self):
        """Printed lines also go to the given stream."""
        program = seq(println("a"), println("b"))
        stream = io.StringIO()
        evaluate(program, TypeChecker().check(program), stream)
        assert stream.getvalue() == "a\nb\n"


class TestWhileLoops:
    """Tests for loop execution."""

    @pytest.mark.parametrize("start", [0, 1, 4])
    def test_countdown_iterations(self, run, start):
        """A countdown from n runs n + 1 times, stopping at -1."""
        program = seq(
            declare(INT, "i", lit(start)),
            declare(INT, "n", lit(0)),
            while_loop(
                var("i"),
                seq(
                    assign("n", op(PLUS2, var("n"), lit(1))),
                    assign("i", op(MINUS2, var("i"), lit(1))),
                ),
            ),
        )
        result = run(program)
        assert result.value_of("n") == start + 1
        assert result.value_of("i") == -1

    def test_negative_condition_skips_body(self, run):
        """A negative condition never enters the body."""
        result = run(seq(declare(INT, "i", lit(-1)), while_loop(var("i"), seq(println("x")))))
        assert result.output == []

    def test_condition_expression_reevaluated(self, run):
        """A computed condition is evaluated before every iteration."""
        program = seq(
            declare(INT, "i", lit(3)),
            while_loop(
                op(MINUS2, var("i"), lit(1)),
                seq(assign("i", op(MINUS2, var("i"), lit(1)))),
            ),
        )
        result = run(program)
        assert result.value_of("i") == 0


class TestFaults:
    """Tests for evaluation faults."""

    def test_division_by_zero(self, run):
        """Integer division by zero aborts evaluation."""
        with pytest.raises(ArithmeticFault) as excinfo:
            run(seq(declare(INT, "i", op(DIV, lit(5), lit(0)))))
        assert "/ by zero" in str(excinfo.value)
        assert excinfo.value.node is not None

    def test_modulo_by_zero(self, run):
        """Integer remainder by zero aborts evaluation."""
        with pytest.raises(ArithmeticFault):
            run(seq(declare(INT, "i", op(MOD, lit(5), lit(0)))))

    def test_untyped_operator(self, run):
        """An operator the checker left untyped cannot execute."""
        with pytest.raises(EvaluationError, match="No function of this type available"):
            run(seq(declare(INT, "i", op(PLUS2, lit(1), lit(2.0)))))

    def test_missing_operand_value(self, run):
        """An operand without a value aborts evaluation."""
        with pytest.raises(EvaluationError, match="Value of subexpression does not exist"):
            run(seq(declare(INT, "i"), declare(INT, "j", op(PLUS2, var("i"), lit(1)))))

    def test_requires_types(self):
        """An evaluator cannot be built without type information."""
        with pytest.raises(EvaluationError):
            Evaluator(None)

    def test_stale_values_do_not_leak_between_runs(self):
        """A second run starts without the first run's variable values."""
        seeded = seq(declare(INT, "i", lit(1)))
        reader = seq(declare(INT, "i"), declare(INT, "j", op(PLUS2, var("i"), lit(1))))
        evaluator = Evaluator(TypeChecker().check(reader))
        evaluator.run(seeded)
        with pytest.raises(EvaluationError, match="Value of subexpression does not exist"):
            evaluator.run(reader)

    def test_output_before_fault_is_kept(self):
        """Lines printed before a fault stay in the evaluator's output."""
        program = seq(println("before"), declare(INT, "i", op(DIV, lit(1), lit(0))))
        evaluator = Evaluator(TypeChecker().check(program))
        with pytest.raises(ArithmeticFault):
            evaluator.run(program)
        assert evaluator.output == ["before"]


class TestTypeSources:
    """Tests for the accepted forms of type information."""

    def test_plain_mapping(self):
        """A plain expression-to-type mapping works."""
        node = op(PLUS2, lit(1), lit(2))
        program = seq(declare(INT, "i", node))
        result = Evaluator({node: Type.INT}).run(program)
        assert result.value_of("i") == 3

    def test_checker_instance(self):
        """A checker's mapping is read when evaluation runs."""
        program = seq(declare(FLOAT, "x", op(PLUS2, lit(1.5), lit(1.0))))
        checker = TypeChecker()
        evaluator = Evaluator(checker)
        checker.check(program)
        assert evaluator.run(program).value_of("x") == np.float32(2.5)

    def test_values_keyed_by_var_name(self, run):
        """Variable values are found by any Var with the same name."""
        result = run(seq(declare(INT, "i", lit(1))))
        assert result.values[Var("i")] == 1


class TestFormatValue:
    """Tests for value formatting."""

    def test_null(self):
        """None formats as null."""
        assert format_value(None) == "null"

    def test_int(self):
        """Ints format as decimal."""
        assert format_value(np.int32(-3)) == "-3"

    @pytest.mark.parametrize(
        "value,expected",
        [
            (7.0, "7.0"),
            (7.5, "7.5"),
            (-1.5, "-1.5"),
            (0.001, "0.001"),
            (1234567.0, "1234567.0"),
            (1e8, "1.0E8"),
            (1e-5, "1.0E-5"),
            (-2.5e10, "-2.5E10"),
            (0.0, "0.0"),
            (-0.0, "-0.0"),
        ],
    )
    def test_float_matches_java(self, value, expected):
        """Floats print like Java string concatenation."""
        assert format_value(np.float32(value)) == expected

    def test_float_specials(self):
        """Infinities and NaN use Java's spelling."""
        assert format_value(np.float32("inf")) == "Infinity"
        assert format_value(np.float32("-inf")) == "-Infinity"
        assert format_value(np.float32("nan")) == "NaN"

    def test_large_float_in_print(self, run):
        """Printed large and small floats use E notation."""
        program = seq(
            println("x=", op(MULT, lit(10000.0), lit(10000.0))),
            println("y=", op(DIV, lit(1.0), lit(100000.0))),
        )
        assert run(program).output == ["x=1.0E8", "y=1.0E-5"]
