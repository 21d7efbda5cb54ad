"""ImagingStudy: a DICOM study, its series and their instances."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from fhir_records.datatypes import (
    Annotation,
    CodeableConcept,
    Coding,
    Identifier,
    Reference,
)
from fhir_records.elements import BackboneElement
from fhir_records.resource import DomainResource
from fhir_records.schema import datatype, fhir_field
from fhir_records.valuesets import IMAGING_STUDY_STATUS


@datatype
@dataclass(frozen=True)
class ImagingStudySeriesPerformer(BackboneElement):
    function: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    actor: Optional[Reference] = fhir_field(Reference, required=True)


@datatype
@dataclass(frozen=True)
class ImagingStudySeriesInstance(BackboneElement):
    uid: Optional[str] = fhir_field("id", required=True)
    sop_class: Optional[Coding] = fhir_field(Coding, required=True)
    number: Optional[int] = fhir_field("unsignedInt")
    title: Optional[str] = fhir_field("string")


@datatype
@dataclass(frozen=True)
class ImagingStudySeries(BackboneElement):
    uid: Optional[str] = fhir_field("id", required=True)
    number: Optional[int] = fhir_field("unsignedInt")
    modality: Optional[Coding] = fhir_field(Coding, required=True)
    description: Optional[str] = fhir_field("string")
    number_of_instances: Optional[int] = fhir_field("unsignedInt")
    endpoint: list[Reference] = fhir_field(Reference, many=True)
    body_site: Optional[Coding] = fhir_field(Coding)
    laterality: Optional[Coding] = fhir_field(Coding)
    specimen: list[Reference] = fhir_field(Reference, many=True)
    started: Optional[str] = fhir_field("dateTime")
    performer: list[ImagingStudySeriesPerformer] = fhir_field(ImagingStudySeriesPerformer, many=True)
    instance: list[ImagingStudySeriesInstance] = fhir_field(ImagingStudySeriesInstance, many=True)


@datatype
@dataclass(frozen=True)
class ImagingStudy(DomainResource):
    resource_type: ClassVar[str] = "ImagingStudy"

    identifier: list[Identifier] = fhir_field(Identifier, many=True)
    status: Optional[str] = fhir_field("code", required=True, binding=IMAGING_STUDY_STATUS)
    modality: list[Coding] = fhir_field(Coding, many=True)
    subject: Optional[Reference] = fhir_field(Reference, required=True)
    encounter: Optional[Reference] = fhir_field(Reference)
    started: Optional[str] = fhir_field("dateTime")
    based_on: list[Reference] = fhir_field(Reference, many=True)
    referrer: Optional[Reference] = fhir_field(Reference)
    interpreter: list[Reference] = fhir_field(Reference, many=True)
    endpoint: list[Reference] = fhir_field(Reference, many=True)
    number_of_series: Optional[int] = fhir_field("unsignedInt")
    number_of_instances: Optional[int] = fhir_field("unsignedInt")
    procedure_reference: Optional[Reference] = fhir_field(Reference)
    procedure_code: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    location: Optional[Reference] = fhir_field(Reference)
    reason_code: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    reason_reference: list[Reference] = fhir_field(Reference, many=True)
    note: list[Annotation] = fhir_field(Annotation, many=True)
    description: Optional[str] = fhir_field("string")
    series: list[ImagingStudySeries] = fhir_field(ImagingStudySeries, many=True)
