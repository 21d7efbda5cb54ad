"""Device: a manufactured item used in the provision of care."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from fhir_records.datatypes import (
    Annotation,
    CodeableConcept,
    ContactPoint,
    Identifier,
    Quantity,
    Reference,
)
from fhir_records.elements import BackboneElement
from fhir_records.resource import DomainResource
from fhir_records.schema import datatype, fhir_field
from fhir_records.valuesets import DEVICE_NAME_TYPE, DEVICE_STATUS, UDI_ENTRY_TYPE


@datatype
@dataclass(frozen=True)
class DeviceUdiCarrier(BackboneElement):
    device_identifier: Optional[str] = fhir_field("string")
    issuer: Optional[str] = fhir_field("uri")
    jurisdiction: Optional[str] = fhir_field("uri")
    carrier_aidc: Optional[str] = fhir_field("base64Binary", json_name="carrierAIDC")
    carrier_hrf: Optional[str] = fhir_field("string", json_name="carrierHRF")
    entry_type: Optional[str] = fhir_field("code", binding=UDI_ENTRY_TYPE)


@datatype
@dataclass(frozen=True)
class DeviceDeviceName(BackboneElement):
    name: Optional[str] = fhir_field("string", required=True)
    type: Optional[str] = fhir_field("code", required=True, binding=DEVICE_NAME_TYPE)


@datatype
@dataclass(frozen=True)
class DeviceSpecialization(BackboneElement):
    system_type: Optional[CodeableConcept] = fhir_field(CodeableConcept, required=True)
    version: Optional[str] = fhir_field("string")


@datatype
@dataclass(frozen=True)
class DeviceVersion(BackboneElement):
    type: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    component: Optional[Identifier] = fhir_field(Identifier)
    value: Optional[str] = fhir_field("string", required=True)


@datatype
@dataclass(frozen=True)
class DeviceProperty(BackboneElement):
    type: Optional[CodeableConcept] = fhir_field(CodeableConcept, required=True)
    value_quantity: list[Quantity] = fhir_field(Quantity, many=True)
    value_code: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)


@datatype
@dataclass(frozen=True)
class Device(DomainResource):
    resource_type: ClassVar[str] = "Device"

    identifier: list[Identifier] = fhir_field(Identifier, many=True)
    definition: Optional[Reference] = fhir_field(Reference)
    udi_carrier: list[DeviceUdiCarrier] = fhir_field(DeviceUdiCarrier, many=True)
    status: Optional[str] = fhir_field("code", binding=DEVICE_STATUS)
    status_reason: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    distinct_identifier: Optional[str] = fhir_field("string")
    manufacturer: Optional[str] = fhir_field("string")
    manufacture_date: Optional[str] = fhir_field("dateTime")
    expiration_date: Optional[str] = fhir_field("dateTime")
    lot_number: Optional[str] = fhir_field("string")
    serial_number: Optional[str] = fhir_field("string")
    device_name: list[DeviceDeviceName] = fhir_field(DeviceDeviceName, many=True)
    model_number: Optional[str] = fhir_field("string")
    part_number: Optional[str] = fhir_field("string")
    type: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    specialization: list[DeviceSpecialization] = fhir_field(DeviceSpecialization, many=True)
    version: list[DeviceVersion] = fhir_field(DeviceVersion, many=True)
    property: list[DeviceProperty] = fhir_field(DeviceProperty, many=True)
    patient: Optional[Reference] = fhir_field(Reference)
    owner: Optional[Reference] = fhir_field(Reference)
    contact: list[ContactPoint] = fhir_field(ContactPoint, many=True)
    location: Optional[Reference] = fhir_field(Reference)
    url: Optional[str] = fhir_field("uri")
    note: list[Annotation] = fhir_field(Annotation, many=True)
    safety: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    parent: Optional[Reference] = fhir_field(Reference)
