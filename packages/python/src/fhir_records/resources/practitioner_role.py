"""PractitionerRole: what a practitioner may do for an organization."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from fhir_records.datatypes import (
    CodeableConcept,
    ContactPoint,
    Identifier,
    Period,
    Reference,
)
from fhir_records.elements import BackboneElement
from fhir_records.resource import DomainResource
from fhir_records.schema import datatype, fhir_field
from fhir_records.valuesets import DAYS_OF_WEEK


@datatype
@dataclass(frozen=True)
class PractitionerRoleAvailableTime(BackboneElement):
    days_of_week: list[str] = fhir_field("code", many=True, binding=DAYS_OF_WEEK)
    all_day: Optional[bool] = fhir_field("boolean")
    available_start_time: Optional[str] = fhir_field("time")
    available_end_time: Optional[str] = fhir_field("time")


@datatype
@dataclass(frozen=True)
class PractitionerRoleNotAvailable(BackboneElement):
    description: Optional[str] = fhir_field("string", required=True)
    during: Optional[Period] = fhir_field(Period)


@datatype
@dataclass(frozen=True)
class PractitionerRole(DomainResource):
    resource_type: ClassVar[str] = "PractitionerRole"

    identifier: list[Identifier] = fhir_field(Identifier, many=True)
    active: Optional[bool] = fhir_field("boolean")
    period: Optional[Period] = fhir_field(Period)
    practitioner: Optional[Reference] = fhir_field(Reference)
    organization: Optional[Reference] = fhir_field(Reference)
    code: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    specialty: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    location: list[Reference] = fhir_field(Reference, many=True)
    healthcare_service: list[Reference] = fhir_field(Reference, many=True)
    telecom: list[ContactPoint] = fhir_field(ContactPoint, many=True)
    available_time: list[PractitionerRoleAvailableTime] = fhir_field(
        PractitionerRoleAvailableTime, many=True,
    )
    not_available: list[PractitionerRoleNotAvailable] = fhir_field(
        PractitionerRoleNotAvailable, many=True,
    )
    availability_exceptions: Optional[str] = fhir_field("string")
    endpoint: list[Reference] = fhir_field(Reference, many=True)
