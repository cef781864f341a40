"""Проверка входных данных раскладки."""

from glazing_layout.io.validator import (
    ValidationIssue,
    ValidationReport,
    ValidationSeverity,
    validate_layout_input,
)

__all__ = [
    "ValidationIssue",
    "ValidationReport",
    "ValidationSeverity",
    "validate_layout_input",
]
