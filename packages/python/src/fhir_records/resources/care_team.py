"""CareTeam: the people and organizations who plan and deliver care."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from fhir_records.datatypes import (
    Annotation,
    CodeableConcept,
    ContactPoint,
    Identifier,
    Period,
    Reference,
)
from fhir_records.elements import BackboneElement
from fhir_records.resource import DomainResource
from fhir_records.schema import datatype, fhir_field
from fhir_records.valuesets import CARE_TEAM_STATUS


@datatype
@dataclass(frozen=True)
class CareTeamParticipant(BackboneElement):
    role: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    member: Optional[Reference] = fhir_field(Reference)
    on_behalf_of: Optional[Reference] = fhir_field(Reference)
    period: Optional[Period] = fhir_field(Period)


@datatype
@dataclass(frozen=True)
class CareTeam(DomainResource):
    resource_type: ClassVar[str] = "CareTeam"

    identifier: list[Identifier] = fhir_field(Identifier, many=True)
    status: Optional[str] = fhir_field("code", binding=CARE_TEAM_STATUS)
    category: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    name: Optional[str] = fhir_field("string")
    subject: Optional[Reference] = fhir_field(Reference)
    encounter: Optional[Reference] = fhir_field(Reference)
    period: Optional[Period] = fhir_field(Period)
    participant: list[CareTeamParticipant] = fhir_field(CareTeamParticipant, many=True)
    reason_code: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    reason_reference: list[Reference] = fhir_field(Reference, many=True)
    managing_organization: list[Reference] = fhir_field(Reference, many=True)
    telecom: list[ContactPoint] = fhir_field(ContactPoint, many=True)
    note: list[Annotation] = fhir_field(Annotation, many=True)

    def members(self) -> list[Reference]:
        return [p.member for p in self.participant if p.member is not None]
