"""
Observation: measurements and simple assertions about a subject.

``effective[x]`` and ``value[x]`` are choice groups; the component list
repeats the ``value[x]`` group per component.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from fhir_records.choice import ChoiceValue
from fhir_records.datatypes import (
    Annotation,
    CodeableConcept,
    Identifier,
    Period,
    Quantity,
    Range,
    Ratio,
    Reference,
    SimpleQuantity,
    Timing,
)
from fhir_records.elements import BackboneElement
from fhir_records.resource import DomainResource
from fhir_records.schema import choice_field, datatype, fhir_field
from fhir_records.valuesets import OBSERVATION_STATUS


# R4 Observation.value[x]; SampledData is not modelled.
OBSERVATION_VALUE_TYPES = (
    Quantity, CodeableConcept, "string", "boolean", "integer", Range, Ratio,
    "time", "dateTime", Period,
)


@datatype
@dataclass(frozen=True)
class ObservationReferenceRange(BackboneElement):
    low: Optional[SimpleQuantity] = fhir_field(SimpleQuantity)
    high: Optional[SimpleQuantity] = fhir_field(SimpleQuantity)
    type: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    applies_to: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    age: Optional[Range] = fhir_field(Range)
    text: Optional[str] = fhir_field("string")


@datatype
@dataclass(frozen=True)
class ObservationComponent(BackboneElement):
    code: Optional[CodeableConcept] = fhir_field(CodeableConcept, required=True)
    value: Optional[ChoiceValue] = choice_field(*OBSERVATION_VALUE_TYPES)
    data_absent_reason: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    interpretation: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    reference_range: list[ObservationReferenceRange] = fhir_field(ObservationReferenceRange, many=True)


@datatype
@dataclass(frozen=True)
class Observation(DomainResource):
    resource_type: ClassVar[str] = "Observation"

    identifier: list[Identifier] = fhir_field(Identifier, many=True)
    based_on: list[Reference] = fhir_field(Reference, many=True)
    part_of: list[Reference] = fhir_field(Reference, many=True)
    status: Optional[str] = fhir_field("code", required=True, binding=OBSERVATION_STATUS)
    category: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    code: Optional[CodeableConcept] = fhir_field(CodeableConcept, required=True)
    subject: Optional[Reference] = fhir_field(Reference)
    focus: list[Reference] = fhir_field(Reference, many=True)
    encounter: Optional[Reference] = fhir_field(Reference)
    effective: Optional[ChoiceValue] = choice_field("dateTime", Period, Timing, "instant")
    issued: Optional[str] = fhir_field("instant")
    performer: list[Reference] = fhir_field(Reference, many=True)
    value: Optional[ChoiceValue] = choice_field(*OBSERVATION_VALUE_TYPES)
    data_absent_reason: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    interpretation: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    note: list[Annotation] = fhir_field(Annotation, many=True)
    body_site: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    method: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    specimen: Optional[Reference] = fhir_field(Reference)
    device: Optional[Reference] = fhir_field(Reference)
    reference_range: list[ObservationReferenceRange] = fhir_field(ObservationReferenceRange, many=True)
    has_member: list[Reference] = fhir_field(Reference, many=True)
    derived_from: list[Reference] = fhir_field(Reference, many=True)
    component: list[ObservationComponent] = fhir_field(ObservationComponent, many=True)
