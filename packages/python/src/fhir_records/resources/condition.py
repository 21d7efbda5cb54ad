"""Condition: a clinical condition, problem, diagnosis or other concern."""

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


# onset[x] and abatement[x] share one branch list.
CONDITION_TIME_TYPES = ("dateTime", Age, Period, Range, "string")


@datatype
@dataclass(frozen=True)
class ConditionStage(BackboneElement):
    summary: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    assessment: list[Reference] = fhir_field(Reference, many=True)
    type: Optional[CodeableConcept] = fhir_field(CodeableConcept)


@datatype
@dataclass(frozen=True)
class ConditionEvidence(BackboneElement):
    code: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    detail: list[Reference] = fhir_field(Reference, many=True)


@datatype
@dataclass(frozen=True)
class Condition(DomainResource):
    resource_type: ClassVar[str] = "Condition"

    identifier: list[Identifier] = fhir_field(Identifier, many=True)
    clinical_status: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    verification_status: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    category: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    severity: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    code: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    body_site: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    subject: Optional[Reference] = fhir_field(Reference, required=True)
    encounter: Optional[Reference] = fhir_field(Reference)
    onset: Optional[ChoiceValue] = choice_field(*CONDITION_TIME_TYPES)
    abatement: Optional[ChoiceValue] = choice_field(*CONDITION_TIME_TYPES)
    recorded_date: Optional[str] = fhir_field("dateTime")
    recorder: Optional[Reference] = fhir_field(Reference)
    asserter: Optional[Reference] = fhir_field(Reference)
    stage: list[ConditionStage] = fhir_field(ConditionStage, many=True)
    evidence: list[ConditionEvidence] = fhir_field(ConditionEvidence, many=True)
    note: list[Annotation] = fhir_field(Annotation, many=True)
