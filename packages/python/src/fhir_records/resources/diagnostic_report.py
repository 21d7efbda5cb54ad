"""DiagnosticReport: findings and interpretation of diagnostic tests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from fhir_records.choice import ChoiceValue
from fhir_records.datatypes import (
    Attachment,
    CodeableConcept,
    Identifier,
    Period,
    Reference,
)
from fhir_records.elements import BackboneElement
from fhir_records.resource import DomainResource
from fhir_records.schema import choice_field, datatype, fhir_field
from fhir_records.valuesets import DIAGNOSTIC_REPORT_STATUS


@datatype
@dataclass(frozen=True)
class DiagnosticReportMedia(BackboneElement):
    comment: Optional[str] = fhir_field("string")
    link: Optional[Reference] = fhir_field(Reference, required=True)


@datatype
@dataclass(frozen=True)
class DiagnosticReport(DomainResource):
    resource_type: ClassVar[str] = "DiagnosticReport"

    identifier: list[Identifier] = fhir_field(Identifier, many=True)
    based_on: list[Reference] = fhir_field(Reference, many=True)
    status: Optional[str] = fhir_field("code", required=True, binding=DIAGNOSTIC_REPORT_STATUS)
    category: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    code: Optional[CodeableConcept] = fhir_field(CodeableConcept, required=True)
    subject: Optional[Reference] = fhir_field(Reference)
    encounter: Optional[Reference] = fhir_field(Reference)
    effective: Optional[ChoiceValue] = choice_field("dateTime", Period)
    issued: Optional[str] = fhir_field("instant")
    performer: list[Reference] = fhir_field(Reference, many=True)
    results_interpreter: list[Reference] = fhir_field(Reference, many=True)
    specimen: list[Reference] = fhir_field(Reference, many=True)
    result: list[Reference] = fhir_field(Reference, many=True)
    imaging_study: list[Reference] = fhir_field(Reference, many=True)
    media: list[DiagnosticReportMedia] = fhir_field(DiagnosticReportMedia, many=True)
    conclusion: Optional[str] = fhir_field("string")
    conclusion_code: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    presented_form: list[Attachment] = fhir_field(Attachment, many=True)
