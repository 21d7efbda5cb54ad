"""Location: a physical place where services are provided."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from fhir_records.datatypes import (
    Address,
    CodeableConcept,
    Coding,
    ContactPoint,
    Identifier,
    Reference,
)
from fhir_records.elements import BackboneElement
from fhir_records.resource import DomainResource
from fhir_records.schema import datatype, fhir_field
from fhir_records.valuesets import DAYS_OF_WEEK, LOCATION_MODE, LOCATION_STATUS


@datatype
@dataclass(frozen=True)
class LocationPosition(BackboneElement):
    """WGS84 coordinates."""

    longitude: Optional[float] = fhir_field("decimal", required=True)
    latitude: Optional[float] = fhir_field("decimal", required=True)
    altitude: Optional[float] = fhir_field("decimal")


@datatype
@dataclass(frozen=True)
class LocationHoursOfOperation(BackboneElement):
    days_of_week: list[str] = fhir_field("code", many=True, binding=DAYS_OF_WEEK)
    all_day: Optional[bool] = fhir_field("boolean")
    opening_time: Optional[str] = fhir_field("time")
    closing_time: Optional[str] = fhir_field("time")


@datatype
@dataclass(frozen=True)
class Location(DomainResource):
    resource_type: ClassVar[str] = "Location"

    identifier: list[Identifier] = fhir_field(Identifier, many=True)
    status: Optional[str] = fhir_field("code", binding=LOCATION_STATUS)
    operational_status: Optional[Coding] = fhir_field(Coding)
    name: Optional[str] = fhir_field("string")
    alias: list[str] = fhir_field("string", many=True)
    description: Optional[str] = fhir_field("string")
    mode: Optional[str] = fhir_field("code", binding=LOCATION_MODE)
    type: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    telecom: list[ContactPoint] = fhir_field(ContactPoint, many=True)
    address: Optional[Address] = fhir_field(Address)
    physical_type: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    position: Optional[LocationPosition] = fhir_field(LocationPosition)
    managing_organization: Optional[Reference] = fhir_field(Reference)
    part_of: Optional[Reference] = fhir_field(Reference)
    hours_of_operation: list[LocationHoursOfOperation] = fhir_field(LocationHoursOfOperation, many=True)
    availability_exceptions: Optional[str] = fhir_field("string")
    endpoint: list[Reference] = fhir_field(Reference, many=True)
