"""DocumentReference: a reference to a document of any kind."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from fhir_records.datatypes import (
    Attachment,
    CodeableConcept,
    Coding,
    Identifier,
    Period,
    Reference,
)
from fhir_records.elements import BackboneElement
from fhir_records.resource import DomainResource
from fhir_records.schema import datatype, fhir_field
from fhir_records.valuesets import (
    COMPOSITION_STATUS,
    DOCUMENT_REFERENCE_STATUS,
    DOCUMENT_RELATIONSHIP_TYPE,
)


@datatype
@dataclass(frozen=True)
class DocumentReferenceRelatesTo(BackboneElement):
    code: Optional[str] = fhir_field("code", required=True, binding=DOCUMENT_RELATIONSHIP_TYPE)
    target: Optional[Reference] = fhir_field(Reference, required=True)


@datatype
@dataclass(frozen=True)
class DocumentReferenceContent(BackboneElement):
    attachment: Optional[Attachment] = fhir_field(Attachment, required=True)
    format: Optional[Coding] = fhir_field(Coding)


@datatype
@dataclass(frozen=True)
class DocumentReferenceContext(BackboneElement):
    encounter: list[Reference] = fhir_field(Reference, many=True)
    event: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    period: Optional[Period] = fhir_field(Period)
    facility_type: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    practice_setting: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    source_patient_info: Optional[Reference] = fhir_field(Reference)
    related: list[Reference] = fhir_field(Reference, many=True)


@datatype
@dataclass(frozen=True)
class DocumentReference(DomainResource):
    resource_type: ClassVar[str] = "DocumentReference"

    master_identifier: Optional[Identifier] = fhir_field(Identifier)
    identifier: list[Identifier] = fhir_field(Identifier, many=True)
    status: Optional[str] = fhir_field("code", required=True, binding=DOCUMENT_REFERENCE_STATUS)
    doc_status: Optional[str] = fhir_field("code", binding=COMPOSITION_STATUS)
    type: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    category: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    subject: Optional[Reference] = fhir_field(Reference)
    date: Optional[str] = fhir_field("instant")
    author: list[Reference] = fhir_field(Reference, many=True)
    authenticator: Optional[Reference] = fhir_field(Reference)
    custodian: Optional[Reference] = fhir_field(Reference)
    relates_to: list[DocumentReferenceRelatesTo] = fhir_field(DocumentReferenceRelatesTo, many=True)
    description: Optional[str] = fhir_field("string")
    security_label: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    content: list[DocumentReferenceContent] = fhir_field(DocumentReferenceContent, many=True, required=True)
    context: Optional[DocumentReferenceContext] = fhir_field(DocumentReferenceContext)

    def attachments(self) -> list[Attachment]:
        return [c.attachment for c in self.content if c.attachment is not None]
