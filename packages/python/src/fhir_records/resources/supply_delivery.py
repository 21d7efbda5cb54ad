"""SupplyDelivery: a record of a supply handed over to a recipient."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from fhir_records.choice import ChoiceValue
from fhir_records.datatypes import (
    CodeableConcept,
    Identifier,
    Period,
    Reference,
    SimpleQuantity,
    Timing,
)
from fhir_records.elements import BackboneElement
from fhir_records.resource import DomainResource
from fhir_records.schema import choice_field, datatype, fhir_field
from fhir_records.valuesets import SUPPLY_DELIVERY_STATUS


@datatype
@dataclass(frozen=True)
class SupplyDeliverySuppliedItem(BackboneElement):
    quantity: Optional[SimpleQuantity] = fhir_field(SimpleQuantity)
    item: Optional[ChoiceValue] = choice_field(CodeableConcept, Reference)


@datatype
@dataclass(frozen=True)
class SupplyDelivery(DomainResource):
    resource_type: ClassVar[str] = "SupplyDelivery"

    identifier: list[Identifier] = fhir_field(Identifier, many=True)
    based_on: list[Reference] = fhir_field(Reference, many=True)
    part_of: list[Reference] = fhir_field(Reference, many=True)
    status: Optional[str] = fhir_field("code", binding=SUPPLY_DELIVERY_STATUS)
    patient: Optional[Reference] = fhir_field(Reference)
    type: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    supplied_item: Optional[SupplyDeliverySuppliedItem] = fhir_field(SupplyDeliverySuppliedItem)
    occurrence: Optional[ChoiceValue] = choice_field("dateTime", Period, Timing)
    supplier: Optional[Reference] = fhir_field(Reference)
    destination: Optional[Reference] = fhir_field(Reference)
    receiver: list[Reference] = fhir_field(Reference, many=True)
