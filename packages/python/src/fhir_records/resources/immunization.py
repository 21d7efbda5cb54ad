"""Immunization: administration of a vaccine to a patient."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from fhir_records.choice import ChoiceValue
from fhir_records.datatypes import (
    Annotation,
    CodeableConcept,
    Identifier,
    Reference,
    SimpleQuantity,
)
from fhir_records.elements import BackboneElement
from fhir_records.resource import DomainResource
from fhir_records.schema import choice_field, datatype, fhir_field
from fhir_records.valuesets import IMMUNIZATION_STATUS


@datatype
@dataclass(frozen=True)
class ImmunizationPerformer(BackboneElement):
    function: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    actor: Optional[Reference] = fhir_field(Reference, required=True)


@datatype
@dataclass(frozen=True)
class ImmunizationEducation(BackboneElement):
    document_type: Optional[str] = fhir_field("string")
    reference: Optional[str] = fhir_field("uri")
    publication_date: Optional[str] = fhir_field("dateTime")
    presentation_date: Optional[str] = fhir_field("dateTime")


@datatype
@dataclass(frozen=True)
class ImmunizationReaction(BackboneElement):
    date: Optional[str] = fhir_field("dateTime")
    detail: Optional[Reference] = fhir_field(Reference)
    reported: Optional[bool] = fhir_field("boolean")


@datatype
@dataclass(frozen=True)
class ImmunizationProtocolApplied(BackboneElement):
    series: Optional[str] = fhir_field("string")
    authority: Optional[Reference] = fhir_field(Reference)
    target_disease: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    dose_number: Optional[ChoiceValue] = choice_field("positiveInt", "string", required=True)
    series_doses: Optional[ChoiceValue] = choice_field("positiveInt", "string")


@datatype
@dataclass(frozen=True)
class Immunization(DomainResource):
    resource_type: ClassVar[str] = "Immunization"

    identifier: list[Identifier] = fhir_field(Identifier, many=True)
    status: Optional[str] = fhir_field("code", required=True, binding=IMMUNIZATION_STATUS)
    status_reason: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    vaccine_code: Optional[CodeableConcept] = fhir_field(CodeableConcept, required=True)
    patient: Optional[Reference] = fhir_field(Reference, required=True)
    encounter: Optional[Reference] = fhir_field(Reference)
    occurrence: Optional[ChoiceValue] = choice_field("dateTime", "string", required=True)
    recorded: Optional[str] = fhir_field("dateTime")
    primary_source: Optional[bool] = fhir_field("boolean")
    report_origin: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    location: Optional[Reference] = fhir_field(Reference)
    manufacturer: Optional[Reference] = fhir_field(Reference)
    lot_number: Optional[str] = fhir_field("string")
    expiration_date: Optional[str] = fhir_field("date")
    site: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    route: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    dose_quantity: Optional[SimpleQuantity] = fhir_field(SimpleQuantity)
    performer: list[ImmunizationPerformer] = fhir_field(ImmunizationPerformer, many=True)
    note: list[Annotation] = fhir_field(Annotation, many=True)
    reason_code: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    reason_reference: list[Reference] = fhir_field(Reference, many=True)
    is_subpotent: Optional[bool] = fhir_field("boolean")
    subpotent_reason: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    education: list[ImmunizationEducation] = fhir_field(ImmunizationEducation, many=True)
    program_eligibility: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    funding_source: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    reaction: list[ImmunizationReaction] = fhir_field(ImmunizationReaction, many=True)
    protocol_applied: list[ImmunizationProtocolApplied] = fhir_field(ImmunizationProtocolApplied, many=True)
