"""
Pytest configuration and shared fixtures for MiniJava tests.
"""

from dataclasses import dataclass, field

import pytest

from minijava.compiler.ast_nodes import Statement
from minijava.compiler.evaluator import EvaluationResult, Evaluator
from minijava.compiler.samples import get_sample
from minijava.compiler.serializer import Serializer, SerializerConfig
from minijava.compiler.type_checker import TypeChecker, TypeCheckResult


@pytest.fixture
def checker():
    """A fresh type checker."""
    return TypeChecker()


@pytest.fixture
def check():
    """Fixture to type check a program."""

    def _check(program: Statement) -> TypeCheckResult:
        return TypeChecker().check(program)

    return _check


@pytest.fixture
def run(check):
    """Fixture to type check and evaluate a program."""

    def _run(program: Statement) -> EvaluationResult:
        return Evaluator(check(program)).run(program)

    return _run


@pytest.fixture
def render():
    """Fixture to serialize a program, optionally with a custom config."""

    def _render(program: Statement, config: SerializerConfig | None = None) -> str:
        return Serializer(config).serialize(program)

    return _render


@pytest.fixture
def sample():
    """Fixture building a fresh bundled sample by name."""
    return get_sample


# =============================================================================
# Full Pipeline Fixture
# =============================================================================


@dataclass
class PipelineResult:
    """
    Complete result of running one program through every pass.

    Evaluation is skipped (``evaluation`` stays None) when it faults; the
    exception is kept in ``error``.
    """

    program: Statement
    types: TypeCheckResult
    source: str
    evaluation: EvaluationResult | None = None
    error: Exception | None = None
    output: list[str] = field(default_factory=list)

    def value(self, name: str):
        assert self.evaluation is not None, f"evaluation failed: {self.error}"
        return self.evaluation.value_of(name)


@pytest.fixture
def pipeline():
    """Fixture that type checks, serializes and evaluates a program."""
    from minijava.utils.errors import EvaluationError

    def _pipeline(program: Statement) -> PipelineResult:
        types = TypeChecker().check(program)
        result = PipelineResult(
            program=program,
            types=types,
            source=Serializer().serialize(program),
        )
        try:
            result.evaluation = Evaluator(types).run(program)
            result.output = result.evaluation.output
        except EvaluationError as e:
            result.error = e
        return result

    return _pipeline
