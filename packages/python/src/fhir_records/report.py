"""Diagnostics collected while decoding a FHIR document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from fhir_records.errors import FhirRecordsError


# Warning codes
UNKNOWN_CODE = "unknown-code"
UNMODELED_FIELD = "unmodeled-field"
EMPTY_ARRAY = "empty-array"


@dataclass
class DecodeWarning:
    path: str
    code: str
    message: str
    value: Any = None


@dataclass
class DecodeIssue:
    """A recovered error: the failing resource was skipped, its siblings kept."""

    path: str
    error: FhirRecordsError

    @property
    def kind(self):
        return self.error.kind


@dataclass
class DecodeReport:
    """Report from a decode call.

    Attributes:
        resource_type: Type of the top-level resource, once known.
        warnings:      Non-fatal findings (unknown codes, unmodeled
                       fields, empty arrays).
        errors:        Errors isolated to a Bundle entry; the rest of
                       the document decoded normally.
    """

    resource_type: Optional[str] = None
    warnings: list[DecodeWarning] = field(default_factory=list)
    errors: list[DecodeIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when no entry had to be skipped."""
        return not self.errors

    def warn(self, path: str, code: str, message: str, value: Any = None) -> None:
        self.warnings.append(DecodeWarning(path, code, message, value))

    def codes(self) -> list[str]:
        """Warning codes in the order they were reported."""
        return [w.code for w in self.warnings]

    def warnings_with(self, code: str) -> list[DecodeWarning]:
        return [w for w in self.warnings if w.code == code]

    def to_operation_outcome(self):
        """Summarise errors and warnings as one ``OperationOutcome``."""
        from fhir_records.resources.operation_outcome import OperationOutcome

        issues: list[dict[str, Any]] = [i.error.to_issue() for i in self.errors]
        for w in self.warnings:
            issues.append({
                "severity": "information" if w.code == UNMODELED_FIELD else "warning",
                "code": "code-invalid" if w.code == UNKNOWN_CODE else "informational",
                "diagnostics": w.message,
                "expression": [w.path],
            })
        if not issues:
            issues.append({
                "severity": "information",
                "code": "informational",
                "diagnostics": "decoded without findings",
            })
        return OperationOutcome.from_issues(issues)
