"""
Error types for the MiniJava semantic pipeline.

Type checking never raises; it collects problems. The exceptions here cover
the fatal channel (evaluation faults) and misuse of the pipeline API.
"""

from typing import Optional


class MiniJavaError(Exception):
    """Base exception for all MiniJava errors."""

    def __init__(self, message: str, node: Optional[object] = None) -> None:
        self.message = message
        self.node = node
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.node is not None:
            return f"{self.message} [at {type(self.node).__name__}]"
        return self.message


class TypeCheckError(MiniJavaError):
    """Raised when a strict pipeline run finds type-check problems."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = list(problems)
        count = len(self.problems)
        super().__init__(f"Type check failed with {count} problem{'s' if count != 1 else ''}")

    def _format_message(self) -> str:
        lines = [self.message]
        for problem in self.problems:
            lines.append(f"\n  - {problem}")
        return "".join(lines)


class EvaluationError(MiniJavaError):
    """Raised when evaluation cannot continue (missing function, operand or value)."""

    pass


class ArithmeticFault(EvaluationError):
    """Raised on integer division or modulo by zero."""

    pass


class TreeFormatError(MiniJavaError):
    """Raised when a serialized program tree is malformed."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        self.path = path
        super().__init__(message)

    def _format_message(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message
