"""
Structured diagnostics for MiniJava type checking.

The type checker keeps its plain ``problems`` list of messages; alongside it,
every problem is emitted as a Diagnostic carrying an error code and optional
help/note lines.

Example output:
    error[E0102]: undefined variable 'kount'
       = help: did you mean 'count'?
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


# =============================================================================
# Error Codes Catalog
# =============================================================================


class ErrorCode:
    """
    Centralized catalog of error codes for MiniJava diagnostics.

    - E01xx: Type errors
    """

    E0101 = "E0101"  # type mismatch
    E0102 = "E0102"  # undefined variable
    E0105 = "E0105"  # operand types do not match
    E0112 = "E0112"  # variable redefinition
    E0113 = "E0113"  # expression has no type
    E0114 = "E0114"  # operator does not support operand type
    E0115 = "E0115"  # loop condition is not int


ERROR_DESCRIPTIONS: dict[str, str] = {
    ErrorCode.E0101: "type mismatch",
    ErrorCode.E0102: "undefined variable",
    ErrorCode.E0105: "operand types do not match",
    ErrorCode.E0112: "variable redefinition",
    ErrorCode.E0113: "expression has no type",
    ErrorCode.E0114: "operator does not support operand type",
    ErrorCode.E0115: "loop condition is not int",
}


# =============================================================================
# Diagnostic Types
# =============================================================================


class DiagnosticLevel(Enum):
    """Severity level of a diagnostic message."""

    ERROR = "error"
    NOTE = "note"
    HELP = "help"

    def color_code(self) -> str:
        """Get ANSI color code for this level."""
        colors = {
            DiagnosticLevel.ERROR: "\033[91m",  # Red
            DiagnosticLevel.NOTE: "\033[96m",  # Cyan
            DiagnosticLevel.HELP: "\033[92m",  # Green
        }
        return colors.get(self, "")


@dataclass
class Diagnostic:
    """
    A diagnostic message with an error code and follow-up hints.

    Attributes:
        code: Error code (e.g., "E0102")
        level: Severity level
        message: The main diagnostic message
        notes: Additional notes to display
        helps: Help messages with suggestions
    """

    code: str
    level: DiagnosticLevel
    message: str
    notes: list[str] = field(default_factory=list)
    helps: list[str] = field(default_factory=list)

    def render(self, use_color: bool = True) -> str:
        """
        Render this diagnostic as a formatted string.

        Args:
            use_color: Whether to use ANSI color codes

        Returns:
            A formatted multi-line string representation
        """
        lines: list[str] = []

        reset = "\033[0m" if use_color else ""
        bold = "\033[1m" if use_color else ""
        blue = "\033[94m" if use_color else ""
        green = "\033[92m" if use_color else ""
        level_color = self.level.color_code() if use_color else ""

        level_str = self.level.value
        if self.code in ERROR_DESCRIPTIONS:
            header = (
                f"{level_color}{bold}{level_str}[{self.code}]{reset}: {bold}{self.message}{reset}"
            )
        else:
            header = f"{level_color}{bold}{level_str}{reset}: {bold}{self.message}{reset}"
        lines.append(header)

        for note in self.notes:
            lines.append(f"   {blue}={reset} {bold}note:{reset} {note}")

        for help_msg in self.helps:
            lines.append(f"   {blue}={reset} {green}help:{reset} {help_msg}")

        return "\n".join(lines)

    def to_simple_message(self) -> str:
        """Get a simple one-line error message."""
        return f"[{self.code}] {self.message}"


# =============================================================================
# Diagnostic Builder (Fluent API)
# =============================================================================


class DiagnosticBuilder:
    """
    Fluent builder for constructing Diagnostic objects.

        emitter.error(ErrorCode.E0102, "undefined variable 'x'")
            .help("did you mean 'y'?")
            .emit()
    """

    def __init__(
        self,
        emitter: "DiagnosticEmitter",
        code: str,
        level: DiagnosticLevel,
        message: str,
    ) -> None:
        self._emitter = emitter
        self._code = code
        self._level = level
        self._message = message
        self._notes: list[str] = []
        self._helps: list[str] = []

    def note(self, message: str) -> "DiagnosticBuilder":
        """Add a note."""
        self._notes.append(message)
        return self

    def help(self, message: str) -> "DiagnosticBuilder":
        """Add a help message."""
        self._helps.append(message)
        return self

    def build(self) -> Diagnostic:
        """Build the diagnostic without emitting."""
        return Diagnostic(
            code=self._code,
            level=self._level,
            message=self._message,
            notes=list(self._notes),
            helps=list(self._helps),
        )

    def emit(self) -> Diagnostic:
        """Build and emit the diagnostic to the emitter."""
        diagnostic = self.build()
        self._emitter.add_diagnostic(diagnostic)
        return diagnostic


# =============================================================================
# Diagnostic Emitter
# =============================================================================


class DiagnosticEmitter:
    """
    Collects and renders diagnostics for one program.

    Usage:
        emitter = DiagnosticEmitter()
        emitter.error(ErrorCode.E0102, "undefined variable 'x'").emit()
        print(emitter.render_all(use_color=False))
    """

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def add_diagnostic(self, diagnostic: Diagnostic) -> None:
        """Add a diagnostic to the collection."""
        self.diagnostics.append(diagnostic)

    def error(self, code: str, message: str) -> DiagnosticBuilder:
        """Create an error diagnostic builder."""
        return DiagnosticBuilder(self, code, DiagnosticLevel.ERROR, message)

    def error_count(self) -> int:
        """Count the number of error diagnostics."""
        return sum(1 for d in self.diagnostics if d.level == DiagnosticLevel.ERROR)

    def render_all(self, use_color: bool = True) -> str:
        """Render all diagnostics, separated by blank lines."""
        return "\n\n".join(d.render(use_color) for d in self.diagnostics)


# =============================================================================
# String Similarity (Levenshtein Distance)
# =============================================================================


def levenshtein_distance(s1: str, s2: str) -> int:
    """
    Calculate the Levenshtein (edit) distance between two strings.

    Args:
        s1: First string
        s2: Second string

    Returns:
        The minimum number of single-character insertions, deletions or
        substitutions turning one string into the other
    """
    if len(s1) < len(s2):
        return levenshtein_distance(s2, s1)

    if len(s2) == 0:
        return len(s1)

    previous_row = list(range(len(s2) + 1))

    for i, c1 in enumerate(s1):
        current_row = [i + 1]
        for j, c2 in enumerate(s2):
            insertions = previous_row[j + 1] + 1
            deletions = current_row[j] + 1
            substitutions = previous_row[j] + (c1 != c2)
            current_row.append(min(insertions, deletions, substitutions))
        previous_row = current_row

    return previous_row[-1]


def suggest_similar(
    name: str,
    candidates: list[str],
    max_distance: int = 2,
    max_suggestions: int = 3,
) -> list[str]:
    """
    Find similar names from a list of candidates, closest first.

    Args:
        name: The name to find suggestions for
        candidates: Valid names to compare against
        max_distance: Maximum edit distance to consider
        max_suggestions: Maximum number of suggestions to return
    """
    scored = []
    for candidate in candidates:
        if candidate == name or abs(len(candidate) - len(name)) > max_distance:
            continue
        distance = levenshtein_distance(name.lower(), candidate.lower())
        if distance <= max_distance:
            scored.append((candidate, distance))

    scored.sort(key=lambda x: (x[1], x[0]))
    return [candidate for candidate, _ in scored[:max_suggestions]]


# =============================================================================
# Common Diagnostic Helpers
# =============================================================================


def create_undefined_variable_diagnostic(
    emitter: DiagnosticEmitter,
    name: str,
    candidates: list[str],
) -> Diagnostic:
    """
    Create a diagnostic for a use of an undeclared variable.

    Args:
        emitter: The diagnostic emitter
        name: The undefined variable name
        candidates: Names declared so far, used for suggestions
    """
    builder = emitter.error(ErrorCode.E0102, f"undefined variable '{name}'")

    similar = suggest_similar(name, candidates)
    if len(similar) == 1:
        builder.help(f"did you mean '{similar[0]}'?")
    elif similar:
        suggestions_str = ", ".join(f"'{s}'" for s in similar)
        builder.help(f"did you mean one of: {suggestions_str}?")
    else:
        builder.help(f"declare '{name}' before using it")

    return builder.emit()


def create_type_mismatch_diagnostic(
    emitter: DiagnosticEmitter,
    expected: str,
    actual: Optional[str],
    context: str = "",
) -> Diagnostic:
    """
    Create a diagnostic for a declaration or assignment type mismatch.

    Args:
        emitter: The diagnostic emitter
        expected: The declared type name
        actual: The type name of the value, or None if it has no type
        context: Optional context (e.g., "in assignment to 'x'")
    """
    message = f"expected type '{expected}', found '{actual or 'undefined'}'"
    if context:
        message = f"{message} {context}"

    builder = emitter.error(ErrorCode.E0101, message)
    if actual is None:
        builder.note("the value expression could not be typed; see the earlier errors")
    else:
        builder.help("MiniJava has no implicit conversions between int and float")

    return builder.emit()
