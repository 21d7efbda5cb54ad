"""
Error kinds raised while decoding or encoding FHIR R4 JSON.

Every exception derives from :class:`FhirRecordsError`, itself a
``ValueError``, so callers that only care about "bad input" can catch the
builtin.  Each error carries an :class:`ErrorKind`, the FHIRPath-like
location of the offending element, and can render itself as an
``OperationOutcome`` for reporting alongside a Bundle entry.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Structural failure categories."""

    CHOICE_CONFLICT = "ChoiceConflict"
    UNKNOWN_RESOURCE_TYPE = "UnknownResourceType"
    MISSING_REQUIRED_FIELD = "MissingRequiredField"
    TYPE_MISMATCH = "TypeMismatch"
    MALFORMED_JSON = "MalformedJSON"
    INVALID_CODE = "InvalidCode"
    LIMIT_EXCEEDED = "LimitExceeded"


# OperationOutcome.issue.code (http://hl7.org/fhir/issue-type) per kind.
ISSUE_TYPE_BY_KIND: dict[ErrorKind, str] = {
    ErrorKind.CHOICE_CONFLICT: "structure",
    ErrorKind.UNKNOWN_RESOURCE_TYPE: "not-supported",
    ErrorKind.MISSING_REQUIRED_FIELD: "required",
    ErrorKind.TYPE_MISMATCH: "value",
    ErrorKind.MALFORMED_JSON: "structure",
    ErrorKind.INVALID_CODE: "code-invalid",
    ErrorKind.LIMIT_EXCEEDED: "too-costly",
}


class FhirRecordsError(ValueError):
    """Base class for all codec errors."""

    kind: ErrorKind

    def __init__(self, message: str, *, path: Optional[str] = None) -> None:
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)

    @property
    def recoverable(self) -> bool:
        """Whether a caller may skip the failing resource and go on."""
        return self.kind not in (ErrorKind.MALFORMED_JSON, ErrorKind.LIMIT_EXCEEDED)

    def to_issue(self, severity: str = "error") -> dict[str, Any]:
        """Render as a single ``OperationOutcome.issue`` JSON object."""
        issue: dict[str, Any] = {
            "severity": severity,
            "code": ISSUE_TYPE_BY_KIND[self.kind],
            "details": {"text": self.kind.value},
            "diagnostics": self.message,
        }
        if self.path:
            issue["expression"] = [self.path]
        return issue

    def to_operation_outcome(self):
        """Build an ``OperationOutcome`` resource describing this error."""
        # Imported here: the resource model itself raises these errors.
        from fhir_records.resources.operation_outcome import OperationOutcome

        return OperationOutcome.from_issues([self.to_issue()])


class ChoiceConflictError(FhirRecordsError):
    """More than one ``[x]`` variant of one choice group is populated."""

    kind = ErrorKind.CHOICE_CONFLICT

    def __init__(self, prefix: str, keys: list[str], *, path: Optional[str] = None) -> None:
        self.prefix = prefix
        self.keys = sorted(keys)
        super().__init__(
            f"choice '{prefix}[x]' has {len(keys)} populated variants: "
            f"{', '.join(self.keys)}",
            path=path,
        )


class UnknownResourceTypeError(FhirRecordsError):
    """A polymorphic slot names a missing or unregistered resourceType."""

    kind = ErrorKind.UNKNOWN_RESOURCE_TYPE

    def __init__(self, resource_type: Optional[str], *, path: Optional[str] = None) -> None:
        self.resource_type = resource_type
        if resource_type is None:
            message = "resource has no 'resourceType'"
        else:
            message = f"unknown resourceType '{resource_type}'"
        super().__init__(message, path=path)


class MissingRequiredFieldError(FhirRecordsError):
    """A field with minimum cardinality 1 is absent."""

    kind = ErrorKind.MISSING_REQUIRED_FIELD

    def __init__(self, field_name: str, *, path: Optional[str] = None) -> None:
        self.field_name = field_name
        super().__init__(f"required field '{field_name}' is missing", path=path)


class TypeMismatchError(FhirRecordsError, TypeError):
    """A JSON value does not have the shape its declared type needs."""

    kind = ErrorKind.TYPE_MISMATCH

    def __init__(
        self,
        expected: str,
        value: Any,
        *,
        path: Optional[str] = None,
        detail: Optional[str] = None,
    ) -> None:
        self.expected = expected
        self.value = value
        message = f"expected {expected}, got {_describe(value)}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message, path=path)


class MalformedJSONError(FhirRecordsError):
    """The document is not parseable JSON."""

    kind = ErrorKind.MALFORMED_JSON


class InvalidCodeError(FhirRecordsError):
    """A bound code is outside its value set (strict mode only)."""

    kind = ErrorKind.INVALID_CODE

    def __init__(self, code: str, value_set: str, *, path: Optional[str] = None) -> None:
        self.code = code
        self.value_set = value_set
        super().__init__(f"code '{code}' is not in value set '{value_set}'", path=path)


class LimitExceededError(FhirRecordsError):
    """The document is larger or deeper than the configured limits allow."""

    kind = ErrorKind.LIMIT_EXCEEDED


def _describe(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return f"boolean {str(value).lower()}"
    if isinstance(value, (int, float)):
        return f"number {value!r}"
    if isinstance(value, str):
        shown = value if len(value) <= 40 else value[:37] + "..."
        return f"string {shown!r}"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__
