"""
Claim: a provider's request for payment or pre-authorisation.

The deepest resource in the built-in set; ``item.detail.subDetail``
nests three backbone levels.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from fhir_records.choice import ChoiceValue
from fhir_records.datatypes import (
    Address,
    Attachment,
    CodeableConcept,
    Identifier,
    Money,
    Period,
    Quantity,
    Reference,
    SimpleQuantity,
)
from fhir_records.elements import BackboneElement
from fhir_records.resource import DomainResource
from fhir_records.schema import choice_field, datatype, fhir_field
from fhir_records.valuesets import CLAIM_USE, FM_STATUS


@datatype
@dataclass(frozen=True)
class ClaimRelated(BackboneElement):
    claim: Optional[Reference] = fhir_field(Reference)
    relationship: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    reference: Optional[Identifier] = fhir_field(Identifier)


@datatype
@dataclass(frozen=True)
class ClaimPayee(BackboneElement):
    type: Optional[CodeableConcept] = fhir_field(CodeableConcept, required=True)
    party: Optional[Reference] = fhir_field(Reference)


@datatype
@dataclass(frozen=True)
class ClaimCareTeam(BackboneElement):
    sequence: Optional[int] = fhir_field("positiveInt", required=True)
    provider: Optional[Reference] = fhir_field(Reference, required=True)
    responsible: Optional[bool] = fhir_field("boolean")
    role: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    qualification: Optional[CodeableConcept] = fhir_field(CodeableConcept)


@datatype
@dataclass(frozen=True)
class ClaimSupportingInfo(BackboneElement):
    sequence: Optional[int] = fhir_field("positiveInt", required=True)
    category: Optional[CodeableConcept] = fhir_field(CodeableConcept, required=True)
    code: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    timing: Optional[ChoiceValue] = choice_field("date", Period)
    value: Optional[ChoiceValue] = choice_field("boolean", "string", Quantity, Attachment, Reference)
    reason: Optional[CodeableConcept] = fhir_field(CodeableConcept)


@datatype
@dataclass(frozen=True)
class ClaimDiagnosis(BackboneElement):
    sequence: Optional[int] = fhir_field("positiveInt", required=True)
    diagnosis: Optional[ChoiceValue] = choice_field(CodeableConcept, Reference, required=True)
    type: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    on_admission: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    package_code: Optional[CodeableConcept] = fhir_field(CodeableConcept)


@datatype
@dataclass(frozen=True)
class ClaimProcedure(BackboneElement):
    sequence: Optional[int] = fhir_field("positiveInt", required=True)
    type: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    date: Optional[str] = fhir_field("dateTime")
    procedure: Optional[ChoiceValue] = choice_field(CodeableConcept, Reference, required=True)
    udi: list[Reference] = fhir_field(Reference, many=True)


@datatype
@dataclass(frozen=True)
class ClaimInsurance(BackboneElement):
    sequence: Optional[int] = fhir_field("positiveInt", required=True)
    focal: Optional[bool] = fhir_field("boolean", required=True)
    identifier: Optional[Identifier] = fhir_field(Identifier)
    coverage: Optional[Reference] = fhir_field(Reference, required=True)
    business_arrangement: Optional[str] = fhir_field("string")
    pre_auth_ref: list[str] = fhir_field("string", many=True)
    claim_response: Optional[Reference] = fhir_field(Reference)


@datatype
@dataclass(frozen=True)
class ClaimAccident(BackboneElement):
    date: Optional[str] = fhir_field("date", required=True)
    type: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    location: Optional[ChoiceValue] = choice_field(Address, Reference)


@datatype
@dataclass(frozen=True)
class ClaimItemDetailSubDetail(BackboneElement):
    sequence: Optional[int] = fhir_field("positiveInt", required=True)
    revenue: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    category: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    product_or_service: Optional[CodeableConcept] = fhir_field(CodeableConcept, required=True)
    modifier: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    program_code: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    quantity: Optional[SimpleQuantity] = fhir_field(SimpleQuantity)
    unit_price: Optional[Money] = fhir_field(Money)
    factor: Optional[float] = fhir_field("decimal")
    net: Optional[Money] = fhir_field(Money)
    udi: list[Reference] = fhir_field(Reference, many=True)


@datatype
@dataclass(frozen=True)
class ClaimItemDetail(BackboneElement):
    sequence: Optional[int] = fhir_field("positiveInt", required=True)
    revenue: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    category: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    product_or_service: Optional[CodeableConcept] = fhir_field(CodeableConcept, required=True)
    modifier: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    program_code: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    quantity: Optional[SimpleQuantity] = fhir_field(SimpleQuantity)
    unit_price: Optional[Money] = fhir_field(Money)
    factor: Optional[float] = fhir_field("decimal")
    net: Optional[Money] = fhir_field(Money)
    udi: list[Reference] = fhir_field(Reference, many=True)
    sub_detail: list[ClaimItemDetailSubDetail] = fhir_field(ClaimItemDetailSubDetail, many=True)


@datatype
@dataclass(frozen=True)
class ClaimItem(BackboneElement):
    sequence: Optional[int] = fhir_field("positiveInt", required=True)
    care_team_sequence: list[int] = fhir_field("positiveInt", many=True)
    diagnosis_sequence: list[int] = fhir_field("positiveInt", many=True)
    procedure_sequence: list[int] = fhir_field("positiveInt", many=True)
    information_sequence: list[int] = fhir_field("positiveInt", many=True)
    revenue: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    category: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    product_or_service: Optional[CodeableConcept] = fhir_field(CodeableConcept, required=True)
    modifier: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    program_code: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    serviced: Optional[ChoiceValue] = choice_field("date", Period)
    location: Optional[ChoiceValue] = choice_field(CodeableConcept, Address, Reference)
    quantity: Optional[SimpleQuantity] = fhir_field(SimpleQuantity)
    unit_price: Optional[Money] = fhir_field(Money)
    factor: Optional[float] = fhir_field("decimal")
    net: Optional[Money] = fhir_field(Money)
    udi: list[Reference] = fhir_field(Reference, many=True)
    body_site: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    sub_site: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    encounter: list[Reference] = fhir_field(Reference, many=True)
    detail: list[ClaimItemDetail] = fhir_field(ClaimItemDetail, many=True)


@datatype
@dataclass(frozen=True)
class Claim(DomainResource):
    resource_type: ClassVar[str] = "Claim"

    identifier: list[Identifier] = fhir_field(Identifier, many=True)
    status: Optional[str] = fhir_field("code", required=True, binding=FM_STATUS)
    type: Optional[CodeableConcept] = fhir_field(CodeableConcept, required=True)
    sub_type: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    use: Optional[str] = fhir_field("code", required=True, binding=CLAIM_USE)
    patient: Optional[Reference] = fhir_field(Reference, required=True)
    billable_period: Optional[Period] = fhir_field(Period)
    created: Optional[str] = fhir_field("dateTime", required=True)
    enterer: Optional[Reference] = fhir_field(Reference)
    insurer: Optional[Reference] = fhir_field(Reference)
    provider: Optional[Reference] = fhir_field(Reference, required=True)
    priority: Optional[CodeableConcept] = fhir_field(CodeableConcept, required=True)
    funds_reserve: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    related: list[ClaimRelated] = fhir_field(ClaimRelated, many=True)
    prescription: Optional[Reference] = fhir_field(Reference)
    original_prescription: Optional[Reference] = fhir_field(Reference)
    payee: Optional[ClaimPayee] = fhir_field(ClaimPayee)
    referral: Optional[Reference] = fhir_field(Reference)
    facility: Optional[Reference] = fhir_field(Reference)
    care_team: list[ClaimCareTeam] = fhir_field(ClaimCareTeam, many=True)
    supporting_info: list[ClaimSupportingInfo] = fhir_field(ClaimSupportingInfo, many=True)
    diagnosis: list[ClaimDiagnosis] = fhir_field(ClaimDiagnosis, many=True)
    procedure: list[ClaimProcedure] = fhir_field(ClaimProcedure, many=True)
    insurance: list[ClaimInsurance] = fhir_field(ClaimInsurance, many=True, required=True)
    accident: Optional[ClaimAccident] = fhir_field(ClaimAccident)
    item: list[ClaimItem] = fhir_field(ClaimItem, many=True)
    total: Optional[Money] = fhir_field(Money)
