"""
MiniJava Utilities Package.

Common utilities for error handling and diagnostics.
"""

from minijava.utils.diagnostics import (
    ERROR_DESCRIPTIONS,
    Diagnostic,
    DiagnosticBuilder,
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

__all__ = [
    # Errors
    "MiniJavaError",
    "TypeCheckError",
    "EvaluationError",
    "ArithmeticFault",
    "TreeFormatError",
    # Error codes
    "ErrorCode",
    "ERROR_DESCRIPTIONS",
    # Diagnostics
    "DiagnosticLevel",
    "Diagnostic",
    "DiagnosticBuilder",
    "DiagnosticEmitter",
    "levenshtein_distance",
    "suggest_similar",
    "create_undefined_variable_diagnostic",
    "create_type_mismatch_diagnostic",
]
