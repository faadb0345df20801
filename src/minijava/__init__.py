"""
MiniJava - type checking, evaluation and serialization for a small
statically-typed expression language.

Programs are trees of statements and expressions built in Python (see
``minijava.compiler.builders``) or loaded from JSON. The semantic pipeline
type checks a tree, evaluates it, and can print it back as source text.
"""

from minijava.compiler import run_program, serialize, typecheck
from minijava.compiler.evaluator import evaluate
from minijava.compiler.tree_io import load_program

__version__ = "0.1.0"
__all__ = [
    "typecheck",
    "evaluate",
    "serialize",
    "run_program",
    "load_program",
]
