"""Patient: demographics of a person receiving care."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from fhir_records.choice import ChoiceValue
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
from fhir_records.schema import choice_field, datatype, fhir_field
from fhir_records.valuesets import ADMINISTRATIVE_GENDER, LINK_TYPE


@datatype
@dataclass(frozen=True)
class PatientContact(BackboneElement):
    relationship: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    name: Optional[HumanName] = fhir_field(HumanName)
    telecom: list[ContactPoint] = fhir_field(ContactPoint, many=True)
    address: Optional[Address] = fhir_field(Address)
    gender: Optional[str] = fhir_field("code", binding=ADMINISTRATIVE_GENDER)
    organization: Optional[Reference] = fhir_field(Reference)
    period: Optional[Period] = fhir_field(Period)


@datatype
@dataclass(frozen=True)
class PatientCommunication(BackboneElement):
    language: Optional[CodeableConcept] = fhir_field(CodeableConcept, required=True)
    preferred: Optional[bool] = fhir_field("boolean")


@datatype
@dataclass(frozen=True)
class PatientLink(BackboneElement):
    other: Optional[Reference] = fhir_field(Reference, required=True)
    type: Optional[str] = fhir_field("code", required=True, binding=LINK_TYPE)


@datatype
@dataclass(frozen=True)
class Patient(DomainResource):
    resource_type: ClassVar[str] = "Patient"

    identifier: list[Identifier] = fhir_field(Identifier, many=True)
    active: Optional[bool] = fhir_field("boolean")
    name: list[HumanName] = fhir_field(HumanName, many=True)
    telecom: list[ContactPoint] = fhir_field(ContactPoint, many=True)
    gender: Optional[str] = fhir_field("code", binding=ADMINISTRATIVE_GENDER)
    birth_date: Optional[str] = fhir_field("date")
    deceased: Optional[ChoiceValue] = choice_field("boolean", "dateTime")
    address: list[Address] = fhir_field(Address, many=True)
    marital_status: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    multiple_birth: Optional[ChoiceValue] = choice_field("boolean", "integer")
    photo: list[Attachment] = fhir_field(Attachment, many=True)
    contact: list[PatientContact] = fhir_field(PatientContact, many=True)
    communication: list[PatientCommunication] = fhir_field(PatientCommunication, many=True)
    general_practitioner: list[Reference] = fhir_field(Reference, many=True)
    managing_organization: Optional[Reference] = fhir_field(Reference)
    link: list[PatientLink] = fhir_field(PatientLink, many=True)

    @property
    def is_deceased(self) -> bool:
        """True for ``deceasedBoolean: true`` or any ``deceasedDateTime``."""
        if self.deceased is None:
            return False
        if self.deceased.kind == "Boolean":
            return bool(self.deceased.value)
        return True

    def official_name(self) -> Optional[HumanName]:
        """The ``official`` name, else the first name, else None."""
        for name in self.name:
            if name.use == "official":
                return name
        return self.name[0] if self.name else None
