"""Provenance: who and what was involved in producing a resource."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from fhir_records.choice import ChoiceValue
from fhir_records.datatypes import CodeableConcept, Period, Reference, Signature
from fhir_records.elements import BackboneElement
from fhir_records.resource import DomainResource
from fhir_records.schema import choice_field, datatype, fhir_field
from fhir_records.valuesets import PROVENANCE_ENTITY_ROLE


@datatype
@dataclass(frozen=True)
class ProvenanceAgent(BackboneElement):
    type: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    role: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    who: Optional[Reference] = fhir_field(Reference, required=True)
    on_behalf_of: Optional[Reference] = fhir_field(Reference)


@datatype
@dataclass(frozen=True)
class ProvenanceEntity(BackboneElement):
    role: Optional[str] = fhir_field("code", required=True, binding=PROVENANCE_ENTITY_ROLE)
    what: Optional[Reference] = fhir_field(Reference, required=True)
    agent: list[ProvenanceAgent] = fhir_field(ProvenanceAgent, many=True)


@datatype
@dataclass(frozen=True)
class Provenance(DomainResource):
    resource_type: ClassVar[str] = "Provenance"

    target: list[Reference] = fhir_field(Reference, many=True, required=True)
    occurred: Optional[ChoiceValue] = choice_field(Period, "dateTime")
    recorded: Optional[str] = fhir_field("instant", required=True)
    policy: list[str] = fhir_field("uri", many=True)
    location: Optional[Reference] = fhir_field(Reference)
    reason: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    activity: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    agent: list[ProvenanceAgent] = fhir_field(ProvenanceAgent, many=True, required=True)
    entity: list[ProvenanceEntity] = fhir_field(ProvenanceEntity, many=True)
    signature: list[Signature] = fhir_field(Signature, many=True)
