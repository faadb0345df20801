"""
Unit tests for MiniJava diagnostics and error types.
"""

from minijava.compiler.ast_nodes import IntLiteral
from minijava.utils.diagnostics import (
    DiagnosticEmitter,
    DiagnosticLevel,
    ErrorCode,
    create_type_mismatch_diagnostic,
    create_undefined_variable_diagnostic,
    levenshtein_distance,
    suggest_similar,
)
from minijava.utils.errors import (
    ArithmeticFault,
    EvaluationError,
    MiniJavaError,
    TreeFormatError,
    TypeCheckError,
)


class TestLevenshtein:
    """Tests for edit distance."""

    def test_identical(self):
        assert levenshtein_distance("count", "count") == 0

    def test_edits(self):
        assert levenshtein_distance("kitten", "sitting") == 3
        assert levenshtein_distance("", "abc") == 3


class TestSuggestions:
    """Tests for name suggestions."""

    def test_closest_first(self):
        """Suggestions are ordered by distance."""
        assert suggest_similar("sun", ["sum", "i", "summary"]) == ["sum"]

    def test_exact_match_skipped(self):
        """A name is never suggested for itself."""
        assert suggest_similar("i", ["i"]) == []

    def test_undefined_variable_help(self):
        """The helper suggests close names or a declaration."""
        emitter = DiagnosticEmitter()
        close = create_undefined_variable_diagnostic(emitter, "sun", ["sum"])
        far = create_undefined_variable_diagnostic(emitter, "k", ["total"])
        assert close.helps == ["did you mean 'sum'?"]
        assert far.helps == ["declare 'k' before using it"]
        assert emitter.error_count() == 2


class TestDiagnosticRendering:
    """Tests for diagnostic output."""

    def test_render_plain(self):
        """Plain rendering shows code, message and help lines."""
        emitter = DiagnosticEmitter()
        diagnostic = (
            emitter.error(ErrorCode.E0102, "undefined variable 'kount'")
            .help("did you mean 'count'?")
            .emit()
        )
        assert diagnostic.render(use_color=False) == (
            "error[E0102]: undefined variable 'kount'\n"
            "   = help: did you mean 'count'?"
        )

    def test_render_color(self):
        """Colored rendering adds ANSI escapes."""
        diagnostic = DiagnosticEmitter().error(ErrorCode.E0115, "bad loop").build()
        assert "\033[" in diagnostic.render(use_color=True)

    def test_simple_message(self):
        diagnostic = DiagnosticEmitter().error(ErrorCode.E0113, "no type").build()
        assert diagnostic.to_simple_message() == "[E0113] no type"

    def test_type_mismatch_note(self):
        """An untyped value gets a note instead of a help line."""
        emitter = DiagnosticEmitter()
        diagnostic = create_type_mismatch_diagnostic(emitter, "int", None, "in declaration of 'i'")
        assert diagnostic.message == "expected type 'int', found 'undefined' in declaration of 'i'"
        assert diagnostic.notes and not diagnostic.helps


class TestEmitter:
    """Tests for the diagnostic emitter."""

    def test_error_count(self):
        emitter = DiagnosticEmitter()
        assert emitter.error_count() == 0
        emitter.error(ErrorCode.E0113, "no type").emit()
        assert emitter.error_count() == 1
        assert emitter.diagnostics[0].level is DiagnosticLevel.ERROR

    def test_render_all_separates_diagnostics(self):
        """Rendered diagnostics are separated by one blank line."""
        emitter = DiagnosticEmitter()
        emitter.error(ErrorCode.E0101, "one").emit()
        emitter.error(ErrorCode.E0102, "two").emit()
        assert emitter.render_all(use_color=False) == (
            "error[E0101]: one\n\nerror[E0102]: two"
        )


class TestErrors:
    """Tests for the exception hierarchy."""

    def test_hierarchy(self):
        """All pipeline errors share one base."""
        assert issubclass(ArithmeticFault, EvaluationError)
        assert issubclass(EvaluationError, MiniJavaError)
        assert issubclass(TypeCheckError, MiniJavaError)
        assert issubclass(TreeFormatError, MiniJavaError)

    def test_node_in_message(self):
        """The failing node's kind is shown."""
        error = ArithmeticFault("/ by zero", IntLiteral(0))
        assert str(error) == "/ by zero [at IntLiteral]"
        assert error.message == "/ by zero"

    def test_type_check_error_lists_problems(self):
        error = TypeCheckError(["Variable k not defined.", "Not an int: float"])
        assert error.problems == ["Variable k not defined.", "Not an int: float"]
        assert str(error) == (
            "Type check failed with 2 problems\n"
            "  - Variable k not defined.\n"
            "  - Not an int: float"
        )

    def test_tree_format_error_path(self):
        assert str(TreeFormatError("bad", "prog.json")) == "prog.json: bad"
