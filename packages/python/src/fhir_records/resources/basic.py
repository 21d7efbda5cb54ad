"""Basic: a resource for concepts with no dedicated resource type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from fhir_records.datatypes import CodeableConcept, Identifier, Reference
from fhir_records.resource import DomainResource
from fhir_records.schema import datatype, fhir_field


@datatype
@dataclass(frozen=True)
class Basic(DomainResource):
    resource_type: ClassVar[str] = "Basic"

    identifier: list[Identifier] = fhir_field(Identifier, many=True)
    code: Optional[CodeableConcept] = fhir_field(CodeableConcept, required=True)
    subject: Optional[Reference] = fhir_field(Reference)
    created: Optional[str] = fhir_field("date")
    author: Optional[Reference] = fhir_field(Reference)
