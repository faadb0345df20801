"""
Sample MiniJava programs.

Each sample is a factory returning a fresh tree, so callers never share
nodes between runs. The Java source each tree stands for is shown above it.
"""

from __future__ import annotations

from collections.abc import Callable

from minijava.compiler.ast_nodes import Statement
from minijava.compiler.builders import (
    DIV,
    FLOAT,
    INT,
    MINUS1,
    MINUS2,
    MOD,
    MULT,
    PLUS1,
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


def chained_ints() -> Statement:
    # int i;
    # int j = i = 2 + (i = 3);
    return seq(
        declare(INT, "i"),
        declare(INT, "j", assign("i", op(PLUS2, lit(2), assign("i", lit(3))))),
    )


def chained_floats() -> Statement:
    # float i;
    # float j = i = 2.75f - (i = 3.21f);
    return seq(
        declare(FLOAT, "i"),
        declare(FLOAT, "j", assign("i", op(MINUS2, lit(2.75), assign("i", lit(3.21))))),
    )


def nested_loops() -> Statement:
    # int i = 5; int sum = 0;
    # while (i >= 0) { int j = i; while (j >= 0) { sum = sum + j; j = j - 1; ... } i = i - 1; }
    return seq(
        declare(INT, "i", lit(5)),
        declare(INT, "sum", lit(0)),
        while_loop(
            var("i"),
            seq(
                declare(INT, "j", var("i")),
                while_loop(
                    var("j"),
                    seq(
                        assign("sum", op(PLUS2, var("sum"), var("j"))),
                        assign("j", op(MINUS2, var("j"), lit(1))),
                        println(" i: ", var("i")),
                        println(" j: ", var("j")),
                    ),
                ),
                assign("i", op(MINUS2, var("i"), lit(1))),
            ),
        ),
    )


def operators() -> Statement:
    # int i = - + -1 + 7 - 1;       float x = - + -1.5f + 7.0f - 1.0f;
    # int j = 36 % 7;  int k = 36 / 7;  float y = 36.0f / 7.0f;
    return seq(
        declare(INT, "i", op(MINUS2, op(PLUS2, op(MINUS1, op(PLUS1, lit(-1))), lit(7)), lit(1))),
        println(" - + -1 + 7 - 1: ", var("i")),
        declare(
            FLOAT,
            "x",
            op(MINUS2, op(PLUS2, op(MINUS1, op(PLUS1, lit(-1.5))), lit(7.0)), lit(1.0)),
        ),
        println(" - + -1.5f + 7.0f - 1.0f: ", var("x")),
        declare(INT, "j", op(MOD, lit(36), lit(7))),
        println("36 % 7: ", var("j")),
        declare(INT, "k", op(DIV, lit(36), lit(7))),
        println("36 / 7: ", var("k")),
        declare(FLOAT, "y", op(DIV, lit(36.0), lit(7.0))),
        println("36.0f / 7.0f: ", var("y")),
    )


def multiplication() -> Statement:
    # int i = 3 * 5;  float x = 3.5f * 2.0f;
    return seq(
        declare(INT, "i", op(MULT, lit(3), lit(5))),
        declare(FLOAT, "x", op(MULT, lit(3.5), lit(2.0))),
        println("3 * 5 = ", var("i")),
        println("3.5f * 2.0f = ", var("x")),
    )


def division_by_zero() -> Statement:
    # int i = 5 / 0;
    return seq(declare(INT, "i", op(DIV, lit(5), lit(0))))


def mistyped() -> Statement:
    # float i; int j; float j = i = 2.75f - (i = 3.21f); i = k; k = 3;
    return seq(
        declare(FLOAT, "i"),
        declare(INT, "j"),
        declare(FLOAT, "j", assign("i", op(MINUS2, lit(2.75), assign("i", lit(3.21))))),
        assign("i", var("k")),
        assign("k", lit(3)),
    )


SAMPLES: dict[str, Callable[[], Statement]] = {
    "chained-ints": chained_ints,
    "chained-floats": chained_floats,
    "nested-loops": nested_loops,
    "operators": operators,
    "multiplication": multiplication,
    "division-by-zero": division_by_zero,
    "mistyped": mistyped,
}


def get_sample(name: str) -> Statement:
    """
    Build a fresh tree for a named sample.

    Raises:
        KeyError: If there is no sample with that name
    """
    return SAMPLES[name]()
