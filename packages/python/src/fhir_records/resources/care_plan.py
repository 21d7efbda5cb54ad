"""
CarePlan: how one or more practitioners intend to deliver care.

``activity.detail`` describes a planned activity inline; ``activity.reference``
points at a request resource instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from fhir_records.choice import ChoiceValue
from fhir_records.datatypes import (
    Annotation,
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
from fhir_records.valuesets import CARE_PLAN_ACTIVITY_STATUS, CARE_PLAN_INTENT, REQUEST_STATUS


@datatype
@dataclass(frozen=True)
class CarePlanActivityDetail(BackboneElement):
    kind: Optional[str] = fhir_field("code")
    instantiates_canonical: list[str] = fhir_field("canonical", many=True)
    instantiates_uri: list[str] = fhir_field("uri", many=True)
    code: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    reason_code: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    reason_reference: list[Reference] = fhir_field(Reference, many=True)
    goal: list[Reference] = fhir_field(Reference, many=True)
    status: Optional[str] = fhir_field("code", required=True, binding=CARE_PLAN_ACTIVITY_STATUS)
    status_reason: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    do_not_perform: Optional[bool] = fhir_field("boolean")
    scheduled: Optional[ChoiceValue] = choice_field(Timing, Period, "string")
    location: Optional[Reference] = fhir_field(Reference)
    performer: list[Reference] = fhir_field(Reference, many=True)
    product: Optional[ChoiceValue] = choice_field(CodeableConcept, Reference)
    daily_amount: Optional[SimpleQuantity] = fhir_field(SimpleQuantity)
    quantity: Optional[SimpleQuantity] = fhir_field(SimpleQuantity)
    description: Optional[str] = fhir_field("string")


@datatype
@dataclass(frozen=True)
class CarePlanActivity(BackboneElement):
    outcome_codeable_concept: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    outcome_reference: list[Reference] = fhir_field(Reference, many=True)
    progress: list[Annotation] = fhir_field(Annotation, many=True)
    reference: Optional[Reference] = fhir_field(Reference)
    detail: Optional[CarePlanActivityDetail] = fhir_field(CarePlanActivityDetail)


@datatype
@dataclass(frozen=True)
class CarePlan(DomainResource):
    resource_type: ClassVar[str] = "CarePlan"

    identifier: list[Identifier] = fhir_field(Identifier, many=True)
    instantiates_canonical: list[str] = fhir_field("canonical", many=True)
    instantiates_uri: list[str] = fhir_field("uri", many=True)
    based_on: list[Reference] = fhir_field(Reference, many=True)
    replaces: list[Reference] = fhir_field(Reference, many=True)
    part_of: list[Reference] = fhir_field(Reference, many=True)
    status: Optional[str] = fhir_field("code", required=True, binding=REQUEST_STATUS)
    intent: Optional[str] = fhir_field("code", required=True, binding=CARE_PLAN_INTENT)
    category: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    title: Optional[str] = fhir_field("string")
    description: Optional[str] = fhir_field("string")
    subject: Optional[Reference] = fhir_field(Reference, required=True)
    encounter: Optional[Reference] = fhir_field(Reference)
    period: Optional[Period] = fhir_field(Period)
    created: Optional[str] = fhir_field("dateTime")
    author: Optional[Reference] = fhir_field(Reference)
    contributor: list[Reference] = fhir_field(Reference, many=True)
    care_team: list[Reference] = fhir_field(Reference, many=True)
    addresses: list[Reference] = fhir_field(Reference, many=True)
    supporting_info: list[Reference] = fhir_field(Reference, many=True)
    goal: list[Reference] = fhir_field(Reference, many=True)
    activity: list[CarePlanActivity] = fhir_field(CarePlanActivity, many=True)
    note: list[Annotation] = fhir_field(Annotation, many=True)
