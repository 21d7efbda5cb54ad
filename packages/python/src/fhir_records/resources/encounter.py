"""Encounter: an interaction between a patient and healthcare providers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from fhir_records.datatypes import (
    CodeableConcept,
    Coding,
    Duration,
    Identifier,
    Period,
    Reference,
)
from fhir_records.elements import BackboneElement
from fhir_records.resource import DomainResource
from fhir_records.schema import datatype, fhir_field
from fhir_records.valuesets import ENCOUNTER_LOCATION_STATUS, ENCOUNTER_STATUS


@datatype
@dataclass(frozen=True)
class EncounterStatusHistory(BackboneElement):
    status: Optional[str] = fhir_field("code", required=True, binding=ENCOUNTER_STATUS)
    period: Optional[Period] = fhir_field(Period, required=True)


@datatype
@dataclass(frozen=True)
class EncounterClassHistory(BackboneElement):
    class_: Optional[Coding] = fhir_field(Coding, required=True)
    period: Optional[Period] = fhir_field(Period, required=True)


@datatype
@dataclass(frozen=True)
class EncounterParticipant(BackboneElement):
    type: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    period: Optional[Period] = fhir_field(Period)
    individual: Optional[Reference] = fhir_field(Reference)


@datatype
@dataclass(frozen=True)
class EncounterDiagnosis(BackboneElement):
    condition: Optional[Reference] = fhir_field(Reference, required=True)
    use: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    rank: Optional[int] = fhir_field("positiveInt")


@datatype
@dataclass(frozen=True)
class EncounterHospitalization(BackboneElement):
    pre_admission_identifier: Optional[Identifier] = fhir_field(Identifier)
    origin: Optional[Reference] = fhir_field(Reference)
    admit_source: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    re_admission: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    diet_preference: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    special_courtesy: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    special_arrangement: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    destination: Optional[Reference] = fhir_field(Reference)
    discharge_disposition: Optional[CodeableConcept] = fhir_field(CodeableConcept)


@datatype
@dataclass(frozen=True)
class EncounterLocation(BackboneElement):
    location: Optional[Reference] = fhir_field(Reference, required=True)
    status: Optional[str] = fhir_field("code", binding=ENCOUNTER_LOCATION_STATUS)
    physical_type: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    period: Optional[Period] = fhir_field(Period)


@datatype
@dataclass(frozen=True)
class Encounter(DomainResource):
    resource_type: ClassVar[str] = "Encounter"

    identifier: list[Identifier] = fhir_field(Identifier, many=True)
    status: Optional[str] = fhir_field("code", required=True, binding=ENCOUNTER_STATUS)
    status_history: list[EncounterStatusHistory] = fhir_field(EncounterStatusHistory, many=True)
    class_: Optional[Coding] = fhir_field(Coding, required=True)
    class_history: list[EncounterClassHistory] = fhir_field(EncounterClassHistory, many=True)
    type: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    service_type: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    priority: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    subject: Optional[Reference] = fhir_field(Reference)
    episode_of_care: list[Reference] = fhir_field(Reference, many=True)
    based_on: list[Reference] = fhir_field(Reference, many=True)
    participant: list[EncounterParticipant] = fhir_field(EncounterParticipant, many=True)
    appointment: list[Reference] = fhir_field(Reference, many=True)
    period: Optional[Period] = fhir_field(Period)
    length: Optional[Duration] = fhir_field(Duration)
    reason_code: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    reason_reference: list[Reference] = fhir_field(Reference, many=True)
    diagnosis: list[EncounterDiagnosis] = fhir_field(EncounterDiagnosis, many=True)
    account: list[Reference] = fhir_field(Reference, many=True)
    hospitalization: Optional[EncounterHospitalization] = fhir_field(EncounterHospitalization)
    location: list[EncounterLocation] = fhir_field(EncounterLocation, many=True)
    service_provider: Optional[Reference] = fhir_field(Reference)
    part_of: Optional[Reference] = fhir_field(Reference)
