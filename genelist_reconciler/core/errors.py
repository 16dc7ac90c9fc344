"""
Reconciliation errors with actionable diagnostics.

These error classes carry structured information about what went wrong,
what was expected, and how to fix it. Error codes enable programmatic handling.

Error Codes:
    E100_CONFIGURATION: generic configuration problem
    E101_GENE_SIZE_CONTROL_SPECIES: gene size control requested for a non-human gene list
    E102_UNKNOWN_SPECIES: species label or species reference table not available
    E103_UNKNOWN_METHOD: ortholog mapping method has no table
    E104_MISSING_COLLABORATOR: request needs a collaborator that was not provided
    E201_TOO_FEW_HITS: fewer hit genes survive filtering than the minimum
    E301_NOT_IN_BACKGROUND: genes remain outside the background after filtering
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class ReconciliationError(ValueError):
    """Base class for reconciliation errors.

    Attributes
    ----------
    message : str
        Human-readable error description
    error_code : str
        Machine-readable error code for programmatic handling
    expected : Any
        What the reconciler expected to find
    found : Any
        What was actually found
    suggestion : str
        Actionable suggestion for fixing the error
    context : Dict[str, Any]
        Additional context for debugging
    """

    error_code: str = "E000_UNKNOWN"

    def __init__(
        self,
        message: str,
        *,
        error_code: Optional[str] = None,
        expected: Any = None,
        found: Any = None,
        suggestion: str = "",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        if error_code is not None:
            self.error_code = error_code
        self.expected = expected
        self.found = found
        self.suggestion = suggestion
        self.context = context or {}

    def __str__(self) -> str:
        """Format error as human-readable multi-line string."""
        parts = [f"[{self.error_code}] {self.message}"]
        if self.expected is not None:
            parts.append(f"  Expected: {self.expected}")
        if self.found is not None:
            parts.append(f"  Found: {self.found}")
        if self.suggestion:
            parts.append(f"  Suggestion: {self.suggestion}")
        return "\n".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "error_code": self.error_code,
            "error_type": type(self).__name__,
            "message": self.message,
            "expected": str(self.expected) if self.expected is not None else None,
            "found": str(self.found) if self.found is not None else None,
            "suggestion": self.suggestion,
            "context": self.context,
        }


class ConfigurationError(ReconciliationError):
    """Request parameters are mutually inconsistent or reference unknown data."""

    error_code = "E100_CONFIGURATION"


class InsufficientDataError(ReconciliationError):
    """Too few hit genes survive filtering to run an enrichment test."""

    error_code = "E201_TOO_FEW_HITS"

    def __init__(self, message: str, **kwargs: Any):
        kwargs.setdefault(
            "suggestion",
            "Supply a longer gene list, a broader background, "
            "or a reference dataset covering more genes.",
        )
        super().__init__(message, **kwargs)


class InvariantViolation(ReconciliationError):
    """A post-filter membership check failed.

    Raised when genes remain outside the background right after the step that
    restricts them to it. Unreachable with the current step order.
    """

    error_code = "E301_NOT_IN_BACKGROUND"
