"""Medication: a drug product as ordered, dispensed or administered."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from fhir_records.choice import ChoiceValue
from fhir_records.datatypes import CodeableConcept, Identifier, Ratio, Reference
from fhir_records.elements import BackboneElement
from fhir_records.resource import DomainResource
from fhir_records.schema import choice_field, datatype, fhir_field
from fhir_records.valuesets import MEDICATION_STATUS


@datatype
@dataclass(frozen=True)
class MedicationIngredient(BackboneElement):
    item: Optional[ChoiceValue] = choice_field(CodeableConcept, Reference, required=True)
    is_active: Optional[bool] = fhir_field("boolean")
    strength: Optional[Ratio] = fhir_field(Ratio)


@datatype
@dataclass(frozen=True)
class MedicationBatch(BackboneElement):
    lot_number: Optional[str] = fhir_field("string")
    expiration_date: Optional[str] = fhir_field("dateTime")


@datatype
@dataclass(frozen=True)
class Medication(DomainResource):
    resource_type: ClassVar[str] = "Medication"

    identifier: list[Identifier] = fhir_field(Identifier, many=True)
    code: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    status: Optional[str] = fhir_field("code", binding=MEDICATION_STATUS)
    manufacturer: Optional[Reference] = fhir_field(Reference)
    form: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    amount: Optional[Ratio] = fhir_field(Ratio)
    ingredient: list[MedicationIngredient] = fhir_field(MedicationIngredient, many=True)
    batch: Optional[MedicationBatch] = fhir_field(MedicationBatch)
