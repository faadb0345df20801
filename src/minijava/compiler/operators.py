"""
Operator semantics for MiniJava.

This module maps each (operator, type) pair to the function that executes it.
Each function takes the ordered operand values and returns the result:

- Int arithmetic is 32-bit two's complement with wraparound (``numpy.int32``)
- Float arithmetic is IEEE single precision (``numpy.float32``)
- Int division and remainder truncate toward zero; a zero divisor raises
  ArithmeticFault
- Float division follows IEEE rules (x / 0.0 is inf or nan)

A pair that is absent from OPERATOR_FUNCTIONS cannot be executed; the
evaluator checks for that explicitly.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Optional, Union

import numpy as np

from minijava.compiler.ast_nodes import INT32_MIN, Operator, Type
from minijava.utils.errors import ArithmeticFault, EvaluationError

Number = Union[int, float, np.int32, np.float32]
OperatorFunction = Callable[[Sequence[Number]], Number]

_INT32_RANGE = 2**32

# Storage type of each MiniJava type at runtime
RUNTIME_TYPES: dict[Type, type] = {
    Type.INT: np.int32,
    Type.FLOAT: np.float32,
}


def to_runtime_value(type_: Type, value: Number) -> Number:
    """Convert a Python number to the runtime representation of a type."""
    if type_ is Type.INT:
        return _wrap_int32(int(value))
    return RUNTIME_TYPES[type_](value)


def _wrap_int32(value: int) -> np.int32:
    return np.int32((value - INT32_MIN) % _INT32_RANGE + INT32_MIN)


def _check_arity(operator: Operator, args: Sequence[Number]) -> None:
    if len(args) != operator.arity:
        raise EvaluationError(
            f"Operator {operator.name} expects {operator.arity} operand(s), got {len(args)}"
        )


def _int_operation(operator: Operator, compute: Callable[..., int]) -> OperatorFunction:
    """Lift an exact integer computation to 32-bit wraparound semantics."""

    def apply(args: Sequence[Number]) -> np.int32:
        _check_arity(operator, args)
        return _wrap_int32(compute(*(int(arg) for arg in args)))

    return apply


def _float_operation(
    operator: Operator, compute: Callable[..., np.float32]
) -> OperatorFunction:
    """Run a computation on float32 operands without numpy warnings."""

    def apply(args: Sequence[Number]) -> np.float32:
        _check_arity(operator, args)
        with np.errstate(all="ignore"):
            return np.float32(compute(*(np.float32(arg) for arg in args)))

    return apply


def _truncating_div(a: int, b: int) -> int:
    if b == 0:
        raise ArithmeticFault("/ by zero")
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _truncating_mod(a: int, b: int) -> int:
    if b == 0:
        raise ArithmeticFault("% by zero")
    return a - b * _truncating_div(a, b)


# Operand types each operator accepts. All operands and the result share the type.
SUPPORTED_TYPES: dict[Operator, tuple[Type, ...]] = {
    Operator.PLUS1: (Type.INT, Type.FLOAT),
    Operator.MINUS1: (Type.INT, Type.FLOAT),
    Operator.PLUS2: (Type.INT, Type.FLOAT),
    Operator.MINUS2: (Type.INT, Type.FLOAT),
    Operator.MULT: (Type.INT, Type.FLOAT),
    Operator.DIV: (Type.INT, Type.FLOAT),
    Operator.MOD: (Type.INT,),
}


OPERATOR_FUNCTIONS: dict[Operator, dict[Type, OperatorFunction]] = {
    Operator.PLUS1: {
        Type.INT: _int_operation(Operator.PLUS1, lambda a: a),
        Type.FLOAT: _float_operation(Operator.PLUS1, lambda a: +a),
    },
    Operator.MINUS1: {
        Type.INT: _int_operation(Operator.MINUS1, lambda a: -a),
        Type.FLOAT: _float_operation(Operator.MINUS1, lambda a: -a),
    },
    Operator.PLUS2: {
        Type.INT: _int_operation(Operator.PLUS2, lambda a, b: a + b),
        Type.FLOAT: _float_operation(Operator.PLUS2, lambda a, b: a + b),
    },
    Operator.MINUS2: {
        Type.INT: _int_operation(Operator.MINUS2, lambda a, b: a - b),
        Type.FLOAT: _float_operation(Operator.MINUS2, lambda a, b: a - b),
    },
    Operator.MULT: {
        Type.INT: _int_operation(Operator.MULT, lambda a, b: a * b),
        Type.FLOAT: _float_operation(Operator.MULT, lambda a, b: a * b),
    },
    Operator.DIV: {
        Type.INT: _int_operation(Operator.DIV, _truncating_div),
        Type.FLOAT: _float_operation(Operator.DIV, lambda a, b: a / b),
    },
    Operator.MOD: {
        Type.INT: _int_operation(Operator.MOD, _truncating_mod),
    },
}


def get_operator_function(operator: Operator, type_: Optional[Type]) -> Optional[OperatorFunction]:
    """Get the function executing an operator on a type, or None if there is none."""
    if type_ is None:
        return None
    return OPERATOR_FUNCTIONS.get(operator, {}).get(type_)


def supported_types(operator: Operator) -> tuple[Type, ...]:
    """Get the operand types an operator accepts."""
    return SUPPORTED_TYPES.get(operator, ())


def is_supported(operator: Operator, type_: Type) -> bool:
    """Check whether an operator accepts operands of the given type."""
    return type_ in SUPPORTED_TYPES.get(operator, ())
