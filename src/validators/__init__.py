"""Structural checks for rendered timeline documents."""

from .report import ValidationIssue, ValidationReport
from .validate import validate_timeline_svg

__all__ = ["ValidationIssue", "ValidationReport", "validate_timeline_svg"]
