"""
ExplanationOfBenefit: the adjudicated outcome of a claim, as sent to the
patient.

Related, payee, care team, diagnosis and procedure entries share the
shape of their Claim counterparts and reuse those classes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from fhir_records.choice import ChoiceValue
from fhir_records.datatypes import (
    Address,
    Attachment,
    CodeableConcept,
    Coding,
    Identifier,
    Money,
    Period,
    Quantity,
    Reference,
    SimpleQuantity,
)
from fhir_records.elements import BackboneElement
from fhir_records.resource import DomainResource
from fhir_records.resources.claim import (
    ClaimCareTeam,
    ClaimDiagnosis,
    ClaimPayee,
    ClaimProcedure,
    ClaimRelated,
)
from fhir_records.schema import choice_field, datatype, fhir_field
from fhir_records.valuesets import (
    CLAIM_USE,
    EXPLANATION_OF_BENEFIT_STATUS,
    NOTE_TYPE,
    REMITTANCE_OUTCOME,
)


@datatype
@dataclass(frozen=True)
class ExplanationOfBenefitSupportingInfo(BackboneElement):
    sequence: Optional[int] = fhir_field("positiveInt", required=True)
    category: Optional[CodeableConcept] = fhir_field(CodeableConcept, required=True)
    code: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    timing: Optional[ChoiceValue] = choice_field("date", Period)
    value: Optional[ChoiceValue] = choice_field("boolean", "string", Quantity, Attachment, Reference)
    reason: Optional[Coding] = fhir_field(Coding)


@datatype
@dataclass(frozen=True)
class ExplanationOfBenefitInsurance(BackboneElement):
    focal: Optional[bool] = fhir_field("boolean", required=True)
    coverage: Optional[Reference] = fhir_field(Reference, required=True)
    pre_auth_ref: list[str] = fhir_field("string", many=True)


@datatype
@dataclass(frozen=True)
class ExplanationOfBenefitAccident(BackboneElement):
    date: Optional[str] = fhir_field("date")
    type: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    location: Optional[ChoiceValue] = choice_field(Address, Reference)


@datatype
@dataclass(frozen=True)
class ExplanationOfBenefitAdjudication(BackboneElement):
    category: Optional[CodeableConcept] = fhir_field(CodeableConcept, required=True)
    reason: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    amount: Optional[Money] = fhir_field(Money)
    value: Optional[float] = fhir_field("decimal")


# ── Items ─────────────────────────────────────────────────────────


@datatype
@dataclass(frozen=True)
class ExplanationOfBenefitItemDetailSubDetail(BackboneElement):
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
    note_number: list[int] = fhir_field("positiveInt", many=True)
    adjudication: list[ExplanationOfBenefitAdjudication] = fhir_field(ExplanationOfBenefitAdjudication, many=True)


@datatype
@dataclass(frozen=True)
class ExplanationOfBenefitItemDetail(BackboneElement):
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
    note_number: list[int] = fhir_field("positiveInt", many=True)
    adjudication: list[ExplanationOfBenefitAdjudication] = fhir_field(ExplanationOfBenefitAdjudication, many=True)
    sub_detail: list[ExplanationOfBenefitItemDetailSubDetail] = fhir_field(
        ExplanationOfBenefitItemDetailSubDetail, many=True,
    )


@datatype
@dataclass(frozen=True)
class ExplanationOfBenefitItem(BackboneElement):
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
    note_number: list[int] = fhir_field("positiveInt", many=True)
    adjudication: list[ExplanationOfBenefitAdjudication] = fhir_field(ExplanationOfBenefitAdjudication, many=True)
    detail: list[ExplanationOfBenefitItemDetail] = fhir_field(ExplanationOfBenefitItemDetail, many=True)


@datatype
@dataclass(frozen=True)
class ExplanationOfBenefitAddItemDetailSubDetail(BackboneElement):
    product_or_service: Optional[CodeableConcept] = fhir_field(CodeableConcept, required=True)
    modifier: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    quantity: Optional[SimpleQuantity] = fhir_field(SimpleQuantity)
    unit_price: Optional[Money] = fhir_field(Money)
    factor: Optional[float] = fhir_field("decimal")
    net: Optional[Money] = fhir_field(Money)
    note_number: list[int] = fhir_field("positiveInt", many=True)
    adjudication: list[ExplanationOfBenefitAdjudication] = fhir_field(ExplanationOfBenefitAdjudication, many=True)


@datatype
@dataclass(frozen=True)
class ExplanationOfBenefitAddItemDetail(BackboneElement):
    product_or_service: Optional[CodeableConcept] = fhir_field(CodeableConcept, required=True)
    modifier: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    quantity: Optional[SimpleQuantity] = fhir_field(SimpleQuantity)
    unit_price: Optional[Money] = fhir_field(Money)
    factor: Optional[float] = fhir_field("decimal")
    net: Optional[Money] = fhir_field(Money)
    note_number: list[int] = fhir_field("positiveInt", many=True)
    adjudication: list[ExplanationOfBenefitAdjudication] = fhir_field(ExplanationOfBenefitAdjudication, many=True)
    sub_detail: list[ExplanationOfBenefitAddItemDetailSubDetail] = fhir_field(
        ExplanationOfBenefitAddItemDetailSubDetail, many=True,
    )


@datatype
@dataclass(frozen=True)
class ExplanationOfBenefitAddItem(BackboneElement):
    item_sequence: list[int] = fhir_field("positiveInt", many=True)
    detail_sequence: list[int] = fhir_field("positiveInt", many=True)
    sub_detail_sequence: list[int] = fhir_field("positiveInt", many=True)
    provider: list[Reference] = fhir_field(Reference, many=True)
    product_or_service: Optional[CodeableConcept] = fhir_field(CodeableConcept, required=True)
    modifier: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    program_code: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    serviced: Optional[ChoiceValue] = choice_field("date", Period)
    location: Optional[ChoiceValue] = choice_field(CodeableConcept, Address, Reference)
    quantity: Optional[SimpleQuantity] = fhir_field(SimpleQuantity)
    unit_price: Optional[Money] = fhir_field(Money)
    factor: Optional[float] = fhir_field("decimal")
    net: Optional[Money] = fhir_field(Money)
    body_site: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    sub_site: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    note_number: list[int] = fhir_field("positiveInt", many=True)
    adjudication: list[ExplanationOfBenefitAdjudication] = fhir_field(ExplanationOfBenefitAdjudication, many=True)
    detail: list[ExplanationOfBenefitAddItemDetail] = fhir_field(ExplanationOfBenefitAddItemDetail, many=True)


# ── Totals & balances ─────────────────────────────────────────────


@datatype
@dataclass(frozen=True)
class ExplanationOfBenefitTotal(BackboneElement):
    category: Optional[CodeableConcept] = fhir_field(CodeableConcept, required=True)
    amount: Optional[Money] = fhir_field(Money, required=True)


@datatype
@dataclass(frozen=True)
class ExplanationOfBenefitPayment(BackboneElement):
    type: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    adjustment: Optional[Money] = fhir_field(Money)
    adjustment_reason: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    date: Optional[str] = fhir_field("date")
    amount: Optional[Money] = fhir_field(Money)
    identifier: Optional[Identifier] = fhir_field(Identifier)


@datatype
@dataclass(frozen=True)
class ExplanationOfBenefitProcessNote(BackboneElement):
    number: Optional[int] = fhir_field("positiveInt")
    type: Optional[str] = fhir_field("code", binding=NOTE_TYPE)
    text: Optional[str] = fhir_field("string")
    language: Optional[CodeableConcept] = fhir_field(CodeableConcept)


@datatype
@dataclass(frozen=True)
class ExplanationOfBenefitBenefitBalanceFinancial(BackboneElement):
    type: Optional[CodeableConcept] = fhir_field(CodeableConcept, required=True)
    allowed: Optional[ChoiceValue] = choice_field("unsignedInt", "string", Money)
    used: Optional[ChoiceValue] = choice_field("unsignedInt", Money)


@datatype
@dataclass(frozen=True)
class ExplanationOfBenefitBenefitBalance(BackboneElement):
    category: Optional[CodeableConcept] = fhir_field(CodeableConcept, required=True)
    excluded: Optional[bool] = fhir_field("boolean")
    name: Optional[str] = fhir_field("string")
    description: Optional[str] = fhir_field("string")
    network: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    unit: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    term: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    financial: list[ExplanationOfBenefitBenefitBalanceFinancial] = fhir_field(
        ExplanationOfBenefitBenefitBalanceFinancial, many=True,
    )


@datatype
@dataclass(frozen=True)
class ExplanationOfBenefit(DomainResource):
    resource_type: ClassVar[str] = "ExplanationOfBenefit"

    identifier: list[Identifier] = fhir_field(Identifier, many=True)
    status: Optional[str] = fhir_field("code", required=True, binding=EXPLANATION_OF_BENEFIT_STATUS)
    type: Optional[CodeableConcept] = fhir_field(CodeableConcept, required=True)
    sub_type: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    use: Optional[str] = fhir_field("code", required=True, binding=CLAIM_USE)
    patient: Optional[Reference] = fhir_field(Reference, required=True)
    billable_period: Optional[Period] = fhir_field(Period)
    created: Optional[str] = fhir_field("dateTime", required=True)
    enterer: Optional[Reference] = fhir_field(Reference)
    insurer: Optional[Reference] = fhir_field(Reference, required=True)
    provider: Optional[Reference] = fhir_field(Reference, required=True)
    priority: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    funds_reserve_requested: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    funds_reserve: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    related: list[ClaimRelated] = fhir_field(ClaimRelated, many=True)
    prescription: Optional[Reference] = fhir_field(Reference)
    original_prescription: Optional[Reference] = fhir_field(Reference)
    payee: Optional[ClaimPayee] = fhir_field(ClaimPayee)
    referral: Optional[Reference] = fhir_field(Reference)
    facility: Optional[Reference] = fhir_field(Reference)
    claim: Optional[Reference] = fhir_field(Reference)
    claim_response: Optional[Reference] = fhir_field(Reference)
    outcome: Optional[str] = fhir_field("code", required=True, binding=REMITTANCE_OUTCOME)
    disposition: Optional[str] = fhir_field("string")
    pre_auth_ref: list[str] = fhir_field("string", many=True)
    pre_auth_ref_period: list[Period] = fhir_field(Period, many=True)
    care_team: list[ClaimCareTeam] = fhir_field(ClaimCareTeam, many=True)
    supporting_info: list[ExplanationOfBenefitSupportingInfo] = fhir_field(
        ExplanationOfBenefitSupportingInfo, many=True,
    )
    diagnosis: list[ClaimDiagnosis] = fhir_field(ClaimDiagnosis, many=True)
    procedure: list[ClaimProcedure] = fhir_field(ClaimProcedure, many=True)
    precedence: Optional[int] = fhir_field("positiveInt")
    insurance: list[ExplanationOfBenefitInsurance] = fhir_field(
        ExplanationOfBenefitInsurance, many=True, required=True,
    )
    accident: Optional[ExplanationOfBenefitAccident] = fhir_field(ExplanationOfBenefitAccident)
    item: list[ExplanationOfBenefitItem] = fhir_field(ExplanationOfBenefitItem, many=True)
    add_item: list[ExplanationOfBenefitAddItem] = fhir_field(ExplanationOfBenefitAddItem, many=True)
    adjudication: list[ExplanationOfBenefitAdjudication] = fhir_field(ExplanationOfBenefitAdjudication, many=True)
    total: list[ExplanationOfBenefitTotal] = fhir_field(ExplanationOfBenefitTotal, many=True)
    payment: Optional[ExplanationOfBenefitPayment] = fhir_field(ExplanationOfBenefitPayment)
    form_code: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    form: Optional[Attachment] = fhir_field(Attachment)
    process_note: list[ExplanationOfBenefitProcessNote] = fhir_field(ExplanationOfBenefitProcessNote, many=True)
    benefit_period: Optional[Period] = fhir_field(Period)
    benefit_balance: list[ExplanationOfBenefitBenefitBalance] = fhir_field(
        ExplanationOfBenefitBenefitBalance, many=True,
    )

    def total_for(self, category_code: str) -> Optional[Money]:
        """Amount of the ``total`` whose category carries *category_code*."""
        for t in self.total:
            if t.category is not None and t.category.has_code(None, category_code):
                return t.amount
        return None
