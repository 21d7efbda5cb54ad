"""MedicationAdministration: a medication given to, or taken by, a patient."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from fhir_records.choice import ChoiceValue
from fhir_records.datatypes import (
    Annotation,
    CodeableConcept,
    Identifier,
    Period,
    Ratio,
    Reference,
    SimpleQuantity,
)
from fhir_records.elements import BackboneElement
from fhir_records.resource import DomainResource
from fhir_records.schema import choice_field, datatype, fhir_field
from fhir_records.valuesets import MEDICATION_ADMIN_STATUS


@datatype
@dataclass(frozen=True)
class MedicationAdministrationPerformer(BackboneElement):
    function: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    actor: Optional[Reference] = fhir_field(Reference, required=True)


@datatype
@dataclass(frozen=True)
class MedicationAdministrationDosage(BackboneElement):
    text: Optional[str] = fhir_field("string")
    site: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    route: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    method: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    dose: Optional[SimpleQuantity] = fhir_field(SimpleQuantity)
    rate: Optional[ChoiceValue] = choice_field(Ratio, SimpleQuantity)


@datatype
@dataclass(frozen=True)
class MedicationAdministration(DomainResource):
    resource_type: ClassVar[str] = "MedicationAdministration"

    identifier: list[Identifier] = fhir_field(Identifier, many=True)
    instantiates: list[str] = fhir_field("uri", many=True)
    part_of: list[Reference] = fhir_field(Reference, many=True)
    status: Optional[str] = fhir_field("code", required=True, binding=MEDICATION_ADMIN_STATUS)
    status_reason: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    category: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    medication: Optional[ChoiceValue] = choice_field(CodeableConcept, Reference, required=True)
    subject: Optional[Reference] = fhir_field(Reference, required=True)
    context: Optional[Reference] = fhir_field(Reference)
    supporting_information: list[Reference] = fhir_field(Reference, many=True)
    effective: Optional[ChoiceValue] = choice_field("dateTime", Period, required=True)
    performer: list[MedicationAdministrationPerformer] = fhir_field(
        MedicationAdministrationPerformer, many=True,
    )
    reason_code: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    reason_reference: list[Reference] = fhir_field(Reference, many=True)
    request: Optional[Reference] = fhir_field(Reference)
    device: list[Reference] = fhir_field(Reference, many=True)
    note: list[Annotation] = fhir_field(Annotation, many=True)
    dosage: Optional[MedicationAdministrationDosage] = fhir_field(MedicationAdministrationDosage)
    event_history: list[Reference] = fhir_field(Reference, many=True)
