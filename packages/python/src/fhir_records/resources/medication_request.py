"""MedicationRequest: an order or request for a medication."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from fhir_records.choice import ChoiceValue
from fhir_records.datatypes import (
    Annotation,
    CodeableConcept,
    Dosage,
    Duration,
    Identifier,
    Period,
    Reference,
    SimpleQuantity,
)
from fhir_records.elements import BackboneElement
from fhir_records.resource import DomainResource
from fhir_records.schema import choice_field, datatype, fhir_field
from fhir_records.valuesets import (
    MEDICATION_REQUEST_INTENT,
    MEDICATION_REQUEST_STATUS,
    REQUEST_PRIORITY,
)


@datatype
@dataclass(frozen=True)
class MedicationRequestInitialFill(BackboneElement):
    quantity: Optional[SimpleQuantity] = fhir_field(SimpleQuantity)
    duration: Optional[Duration] = fhir_field(Duration)


@datatype
@dataclass(frozen=True)
class MedicationRequestDispenseRequest(BackboneElement):
    initial_fill: Optional[MedicationRequestInitialFill] = fhir_field(MedicationRequestInitialFill)
    dispense_interval: Optional[Duration] = fhir_field(Duration)
    validity_period: Optional[Period] = fhir_field(Period)
    number_of_repeats_allowed: Optional[int] = fhir_field("unsignedInt")
    quantity: Optional[SimpleQuantity] = fhir_field(SimpleQuantity)
    expected_supply_duration: Optional[Duration] = fhir_field(Duration)
    performer: Optional[Reference] = fhir_field(Reference)


@datatype
@dataclass(frozen=True)
class MedicationRequestSubstitution(BackboneElement):
    allowed: Optional[ChoiceValue] = choice_field("boolean", CodeableConcept, required=True)
    reason: Optional[CodeableConcept] = fhir_field(CodeableConcept)


@datatype
@dataclass(frozen=True)
class MedicationRequest(DomainResource):
    resource_type: ClassVar[str] = "MedicationRequest"

    identifier: list[Identifier] = fhir_field(Identifier, many=True)
    status: Optional[str] = fhir_field("code", required=True, binding=MEDICATION_REQUEST_STATUS)
    status_reason: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    intent: Optional[str] = fhir_field("code", required=True, binding=MEDICATION_REQUEST_INTENT)
    category: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    priority: Optional[str] = fhir_field("code", binding=REQUEST_PRIORITY)
    do_not_perform: Optional[bool] = fhir_field("boolean")
    reported: Optional[ChoiceValue] = choice_field("boolean", Reference)
    medication: Optional[ChoiceValue] = choice_field(CodeableConcept, Reference, required=True)
    subject: Optional[Reference] = fhir_field(Reference, required=True)
    encounter: Optional[Reference] = fhir_field(Reference)
    supporting_information: list[Reference] = fhir_field(Reference, many=True)
    authored_on: Optional[str] = fhir_field("dateTime")
    requester: Optional[Reference] = fhir_field(Reference)
    performer: Optional[Reference] = fhir_field(Reference)
    performer_type: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    recorder: Optional[Reference] = fhir_field(Reference)
    reason_code: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    reason_reference: list[Reference] = fhir_field(Reference, many=True)
    instantiates_canonical: list[str] = fhir_field("canonical", many=True)
    instantiates_uri: list[str] = fhir_field("uri", many=True)
    based_on: list[Reference] = fhir_field(Reference, many=True)
    group_identifier: Optional[Identifier] = fhir_field(Identifier)
    course_of_therapy_type: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    insurance: list[Reference] = fhir_field(Reference, many=True)
    note: list[Annotation] = fhir_field(Annotation, many=True)
    dosage_instruction: list[Dosage] = fhir_field(Dosage, many=True)
    dispense_request: Optional[MedicationRequestDispenseRequest] = fhir_field(MedicationRequestDispenseRequest)
    substitution: Optional[MedicationRequestSubstitution] = fhir_field(MedicationRequestSubstitution)
    prior_prescription: Optional[Reference] = fhir_field(Reference)
    detected_issue: list[Reference] = fhir_field(Reference, many=True)
    event_history: list[Reference] = fhir_field(Reference, many=True)
