"""AllergyIntolerance: risk of a harmful reaction to a substance."""

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
from fhir_records.valuesets import (
    ALLERGY_INTOLERANCE_CATEGORY,
    ALLERGY_INTOLERANCE_CRITICALITY,
    ALLERGY_INTOLERANCE_TYPE,
    REACTION_EVENT_SEVERITY,
)


@datatype
@dataclass(frozen=True)
class AllergyIntoleranceReaction(BackboneElement):
    substance: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    manifestation: list[CodeableConcept] = fhir_field(CodeableConcept, many=True, required=True)
    description: Optional[str] = fhir_field("string")
    onset: Optional[str] = fhir_field("dateTime")
    severity: Optional[str] = fhir_field("code", binding=REACTION_EVENT_SEVERITY)
    exposure_route: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    note: list[Annotation] = fhir_field(Annotation, many=True)


@datatype
@dataclass(frozen=True)
class AllergyIntolerance(DomainResource):
    resource_type: ClassVar[str] = "AllergyIntolerance"

    identifier: list[Identifier] = fhir_field(Identifier, many=True)
    clinical_status: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    verification_status: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    type: Optional[str] = fhir_field("code", binding=ALLERGY_INTOLERANCE_TYPE)
    category: list[str] = fhir_field("code", many=True, binding=ALLERGY_INTOLERANCE_CATEGORY)
    criticality: Optional[str] = fhir_field("code", binding=ALLERGY_INTOLERANCE_CRITICALITY)
    code: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    patient: Optional[Reference] = fhir_field(Reference, required=True)
    encounter: Optional[Reference] = fhir_field(Reference)
    onset: Optional[ChoiceValue] = choice_field("dateTime", Age, Period, Range, "string")
    recorded_date: Optional[str] = fhir_field("dateTime")
    recorder: Optional[Reference] = fhir_field(Reference)
    asserter: Optional[Reference] = fhir_field(Reference)
    last_occurrence: Optional[str] = fhir_field("dateTime")
    note: list[Annotation] = fhir_field(Annotation, many=True)
    reaction: list[AllergyIntoleranceReaction] = fhir_field(AllergyIntoleranceReaction, many=True)
