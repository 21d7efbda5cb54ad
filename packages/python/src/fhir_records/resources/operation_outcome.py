"""OperationOutcome: errors, warnings and information about an action."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Iterable, Optional

from fhir_records.datatypes import CodeableConcept
from fhir_records.elements import BackboneElement
from fhir_records.resource import DomainResource
from fhir_records.schema import datatype, fhir_field
from fhir_records.valuesets import ISSUE_SEVERITY, ISSUE_TYPE


@datatype
@dataclass(frozen=True)
class OperationOutcomeIssue(BackboneElement):
    severity: Optional[str] = fhir_field("code", required=True, binding=ISSUE_SEVERITY)
    code: Optional[str] = fhir_field("code", required=True, binding=ISSUE_TYPE)
    details: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    diagnostics: Optional[str] = fhir_field("string")
    location: list[str] = fhir_field("string", many=True)
    expression: list[str] = fhir_field("string", many=True)


@datatype
@dataclass(frozen=True)
class OperationOutcome(DomainResource):
    resource_type: ClassVar[str] = "OperationOutcome"

    issue: list[OperationOutcomeIssue] = fhir_field(OperationOutcomeIssue, many=True, required=True)

    @classmethod
    def from_issues(cls, issues: Iterable[dict[str, Any]]) -> "OperationOutcome":
        """Build from ``{severity, code, details.text, diagnostics, expression}`` dicts."""
        built = []
        for issue in issues:
            details = issue.get("details") or {}
            built.append(OperationOutcomeIssue(
                severity=issue["severity"],
                code=issue["code"],
                details=CodeableConcept(text=details["text"]) if details.get("text") else None,
                diagnostics=issue.get("diagnostics"),
                expression=list(issue.get("expression", [])),
            ))
        return cls(issue=built)

    def has_errors(self) -> bool:
        return any(i.severity in ("fatal", "error") for i in self.issue)
