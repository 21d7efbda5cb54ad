"""Practitioner: a person directly or indirectly involved in care."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from fhir_records.datatypes import (
    Address,
    Attachment,
    CodeableConcept,
    ContactPoint,
    HumanName,
    Identifier,
    Period,
    Reference,
)
from fhir_records.elements import BackboneElement
from fhir_records.resource import DomainResource
from fhir_records.schema import datatype, fhir_field
from fhir_records.valuesets import ADMINISTRATIVE_GENDER


@datatype
@dataclass(frozen=True)
class PractitionerQualification(BackboneElement):
    identifier: list[Identifier] = fhir_field(Identifier, many=True)
    code: Optional[CodeableConcept] = fhir_field(CodeableConcept, required=True)
    period: Optional[Period] = fhir_field(Period)
    issuer: Optional[Reference] = fhir_field(Reference)


@datatype
@dataclass(frozen=True)
class Practitioner(DomainResource):
    resource_type: ClassVar[str] = "Practitioner"

    identifier: list[Identifier] = fhir_field(Identifier, many=True)
    active: Optional[bool] = fhir_field("boolean")
    name: list[HumanName] = fhir_field(HumanName, many=True)
    telecom: list[ContactPoint] = fhir_field(ContactPoint, many=True)
    address: list[Address] = fhir_field(Address, many=True)
    gender: Optional[str] = fhir_field("code", binding=ADMINISTRATIVE_GENDER)
    birth_date: Optional[str] = fhir_field("date")
    photo: list[Attachment] = fhir_field(Attachment, many=True)
    qualification: list[PractitionerQualification] = fhir_field(PractitionerQualification, many=True)
    communication: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
