"""Procedure: an action performed on or for a patient."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from fhir_records.choice import ChoiceValue
from fhir_records.datatypes import (
    Age,
    Annotation,
    CodeableConcept,
    Identifier,
    Period,
    Range,
    Reference,
)
from fhir_records.elements import BackboneElement
from fhir_records.resource import DomainResource
from fhir_records.schema import choice_field, datatype, fhir_field
from fhir_records.valuesets import EVENT_STATUS


@datatype
@dataclass(frozen=True)
class ProcedurePerformer(BackboneElement):
    function: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    actor: Optional[Reference] = fhir_field(Reference, required=True)
    on_behalf_of: Optional[Reference] = fhir_field(Reference)


@datatype
@dataclass(frozen=True)
class ProcedureFocalDevice(BackboneElement):
    action: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    manipulated: Optional[Reference] = fhir_field(Reference, required=True)


@datatype
@dataclass(frozen=True)
class Procedure(DomainResource):
    resource_type: ClassVar[str] = "Procedure"

    identifier: list[Identifier] = fhir_field(Identifier, many=True)
    instantiates_canonical: list[str] = fhir_field("canonical", many=True)
    instantiates_uri: list[str] = fhir_field("uri", many=True)
    based_on: list[Reference] = fhir_field(Reference, many=True)
    part_of: list[Reference] = fhir_field(Reference, many=True)
    status: Optional[str] = fhir_field("code", required=True, binding=EVENT_STATUS)
    status_reason: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    category: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    code: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    subject: Optional[Reference] = fhir_field(Reference, required=True)
    encounter: Optional[Reference] = fhir_field(Reference)
    performed: Optional[ChoiceValue] = choice_field("dateTime", Period, "string", Age, Range)
    recorder: Optional[Reference] = fhir_field(Reference)
    asserter: Optional[Reference] = fhir_field(Reference)
    performer: list[ProcedurePerformer] = fhir_field(ProcedurePerformer, many=True)
    location: Optional[Reference] = fhir_field(Reference)
    reason_code: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    reason_reference: list[Reference] = fhir_field(Reference, many=True)
    body_site: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    outcome: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    report: list[Reference] = fhir_field(Reference, many=True)
    complication: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    complication_detail: list[Reference] = fhir_field(Reference, many=True)
    follow_up: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    note: list[Annotation] = fhir_field(Annotation, many=True)
    focal_device: list[ProcedureFocalDevice] = fhir_field(ProcedureFocalDevice, many=True)
    used_reference: list[Reference] = fhir_field(Reference, many=True)
    used_code: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
