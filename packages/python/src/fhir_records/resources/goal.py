"""Goal: an intended objective for a patient, group or organization."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from fhir_records.choice import ChoiceValue
from fhir_records.datatypes import (
    Annotation,
    CodeableConcept,
    Duration,
    Identifier,
    Quantity,
    Range,
    Ratio,
    Reference,
)
from fhir_records.elements import BackboneElement
from fhir_records.resource import DomainResource
from fhir_records.schema import choice_field, datatype, fhir_field
from fhir_records.valuesets import GOAL_LIFECYCLE_STATUS


@datatype
@dataclass(frozen=True)
class GoalTarget(BackboneElement):
    measure: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    detail: Optional[ChoiceValue] = choice_field(
        Quantity, Range, CodeableConcept, "string", "boolean", "integer", Ratio,
    )
    due: Optional[ChoiceValue] = choice_field("date", Duration)


@datatype
@dataclass(frozen=True)
class Goal(DomainResource):
    resource_type: ClassVar[str] = "Goal"

    identifier: list[Identifier] = fhir_field(Identifier, many=True)
    lifecycle_status: Optional[str] = fhir_field("code", required=True, binding=GOAL_LIFECYCLE_STATUS)
    achievement_status: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    category: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    priority: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    description: Optional[CodeableConcept] = fhir_field(CodeableConcept, required=True)
    subject: Optional[Reference] = fhir_field(Reference, required=True)
    start: Optional[ChoiceValue] = choice_field("date", CodeableConcept)
    target: list[GoalTarget] = fhir_field(GoalTarget, many=True)
    status_date: Optional[str] = fhir_field("date")
    status_reason: Optional[str] = fhir_field("string")
    expressed_by: Optional[Reference] = fhir_field(Reference)
    addresses: list[Reference] = fhir_field(Reference, many=True)
    note: list[Annotation] = fhir_field(Annotation, many=True)
    outcome_code: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    outcome_reference: list[Reference] = fhir_field(Reference, many=True)
