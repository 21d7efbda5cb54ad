"""Organization: a formally recognised grouping of people or organisations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from fhir_records.datatypes import (
    Address,
    CodeableConcept,
    ContactPoint,
    HumanName,
    Identifier,
    Reference,
)
from fhir_records.elements import BackboneElement
from fhir_records.resource import DomainResource
from fhir_records.schema import datatype, fhir_field


@datatype
@dataclass(frozen=True)
class OrganizationContact(BackboneElement):
    purpose: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    name: Optional[HumanName] = fhir_field(HumanName)
    telecom: list[ContactPoint] = fhir_field(ContactPoint, many=True)
    address: Optional[Address] = fhir_field(Address)


@datatype
@dataclass(frozen=True)
class Organization(DomainResource):
    resource_type: ClassVar[str] = "Organization"

    identifier: list[Identifier] = fhir_field(Identifier, many=True)
    active: Optional[bool] = fhir_field("boolean")
    type: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    name: Optional[str] = fhir_field("string")
    alias: list[str] = fhir_field("string", many=True)
    telecom: list[ContactPoint] = fhir_field(ContactPoint, many=True)
    address: list[Address] = fhir_field(Address, many=True)
    part_of: Optional[Reference] = fhir_field(Reference)
    contact: list[OrganizationContact] = fhir_field(OrganizationContact, many=True)
    endpoint: list[Reference] = fhir_field(Reference, many=True)
