"""
FHIR R4 general-purpose datatypes.

Field sets follow the R4 (4.0.1) definitions.  Attribute names are the
snake_case form of the JSON names.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from fhir_records.choice import ChoiceValue
from fhir_records.elements import BackboneElement, Element
from fhir_records.schema import choice_field, datatype, fhir_field
from fhir_records.valuesets import (
    ADDRESS_TYPE,
    ADDRESS_USE,
    CONTACT_POINT_SYSTEM,
    CONTACT_POINT_USE,
    DAYS_OF_WEEK,
    IDENTIFIER_USE,
    NAME_USE,
    NARRATIVE_STATUS,
    QUANTITY_COMPARATOR,
    UNITS_OF_TIME,
)


# ── Codes & identity ──────────────────────────────────────────────


@datatype
@dataclass(frozen=True)
class Coding(Element):
    system: Optional[str] = fhir_field("uri")
    version: Optional[str] = fhir_field("string")
    code: Optional[str] = fhir_field("code")
    display: Optional[str] = fhir_field("string")
    user_selected: Optional[bool] = fhir_field("boolean")


@datatype
@dataclass(frozen=True)
class CodeableConcept(Element):
    coding: list[Coding] = fhir_field(Coding, many=True)
    text: Optional[str] = fhir_field("string")

    def has_code(self, system: Optional[str], code: str) -> bool:
        """True if any coding matches *code* (and *system*, unless None)."""
        return any(
            c.code == code and (system is None or c.system == system)
            for c in self.coding
        )


@datatype
@dataclass(frozen=True)
class Identifier(Element):
    use: Optional[str] = fhir_field("code", binding=IDENTIFIER_USE)
    type: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    system: Optional[str] = fhir_field("uri")
    value: Optional[str] = fhir_field("string")
    period: Optional["Period"] = fhir_field("Period")
    assigner: Optional["Reference"] = fhir_field("Reference")


@datatype
@dataclass(frozen=True)
class Reference(Element):
    """A non-owning pointer to another resource.

    The target may be contained in the same resource (``"#id"``), in the
    same Bundle, or nowhere this process can see.
    """

    reference: Optional[str] = fhir_field("string")
    type: Optional[str] = fhir_field("uri")
    identifier: Optional[Identifier] = fhir_field(Identifier)
    display: Optional[str] = fhir_field("string")

    @property
    def is_contained(self) -> bool:
        return bool(self.reference) and self.reference.startswith("#")

    def target_type(self) -> Optional[str]:
        """Resource type named by ``type`` or by a relative ``Type/id`` URL."""
        if self.type:
            return self.type
        if self.reference and not self.is_contained:
            parts = self.reference.rstrip("/").split("/")
            # [base/]Type/id[/_history/vid]
            if "_history" in parts:
                parts = parts[: parts.index("_history")]
            if len(parts) >= 2 and parts[-2][:1].isupper():
                return parts[-2]
        return None


@datatype
@dataclass(frozen=True)
class Period(Element):
    start: Optional[str] = fhir_field("dateTime")
    end: Optional[str] = fhir_field("dateTime")


# ── Quantities ────────────────────────────────────────────────────


@datatype
@dataclass(frozen=True)
class Quantity(Element):
    value: Optional[float] = fhir_field("decimal")
    comparator: Optional[str] = fhir_field("code", binding=QUANTITY_COMPARATOR)
    unit: Optional[str] = fhir_field("string")
    system: Optional[str] = fhir_field("uri")
    code: Optional[str] = fhir_field("code")


@datatype
@dataclass(frozen=True)
class SimpleQuantity(Quantity):
    """Quantity without a comparator; serialised under the Quantity suffix."""

    fhir_type: ClassVar[Optional[str]] = "Quantity"


@datatype
@dataclass(frozen=True)
class Age(Quantity):
    pass


@datatype
@dataclass(frozen=True)
class Count(Quantity):
    pass


@datatype
@dataclass(frozen=True)
class Distance(Quantity):
    pass


@datatype
@dataclass(frozen=True)
class Duration(Quantity):
    pass


@datatype
@dataclass(frozen=True)
class Money(Element):
    value: Optional[float] = fhir_field("decimal")
    currency: Optional[str] = fhir_field("code")


@datatype
@dataclass(frozen=True)
class Range(Element):
    low: Optional[SimpleQuantity] = fhir_field(SimpleQuantity)
    high: Optional[SimpleQuantity] = fhir_field(SimpleQuantity)


@datatype
@dataclass(frozen=True)
class Ratio(Element):
    numerator: Optional[Quantity] = fhir_field(Quantity)
    denominator: Optional[Quantity] = fhir_field(Quantity)


# ── People & places ───────────────────────────────────────────────


@datatype
@dataclass(frozen=True)
class HumanName(Element):
    use: Optional[str] = fhir_field("code", binding=NAME_USE)
    text: Optional[str] = fhir_field("string")
    family: Optional[str] = fhir_field("string")
    given: list[Optional[str]] = fhir_field("string", many=True)
    prefix: list[Optional[str]] = fhir_field("string", many=True)
    suffix: list[Optional[str]] = fhir_field("string", many=True)
    period: Optional[Period] = fhir_field(Period)


@datatype
@dataclass(frozen=True)
class Address(Element):
    use: Optional[str] = fhir_field("code", binding=ADDRESS_USE)
    type: Optional[str] = fhir_field("code", binding=ADDRESS_TYPE)
    text: Optional[str] = fhir_field("string")
    line: list[Optional[str]] = fhir_field("string", many=True)
    city: Optional[str] = fhir_field("string")
    district: Optional[str] = fhir_field("string")
    state: Optional[str] = fhir_field("string")
    postal_code: Optional[str] = fhir_field("string")
    country: Optional[str] = fhir_field("string")
    period: Optional[Period] = fhir_field(Period)


@datatype
@dataclass(frozen=True)
class ContactPoint(Element):
    system: Optional[str] = fhir_field("code", binding=CONTACT_POINT_SYSTEM)
    value: Optional[str] = fhir_field("string")
    use: Optional[str] = fhir_field("code", binding=CONTACT_POINT_USE)
    rank: Optional[int] = fhir_field("positiveInt")
    period: Optional[Period] = fhir_field(Period)


@datatype
@dataclass(frozen=True)
class ContactDetail(Element):
    name: Optional[str] = fhir_field("string")
    telecom: list[ContactPoint] = fhir_field(ContactPoint, many=True)


# ── Content ───────────────────────────────────────────────────────


@datatype
@dataclass(frozen=True)
class Attachment(Element):
    content_type: Optional[str] = fhir_field("code")
    language: Optional[str] = fhir_field("code")
    data: Optional[str] = fhir_field("base64Binary")
    url: Optional[str] = fhir_field("url")
    size: Optional[int] = fhir_field("unsignedInt")
    hash: Optional[str] = fhir_field("base64Binary")
    title: Optional[str] = fhir_field("string")
    creation: Optional[str] = fhir_field("dateTime")


@datatype
@dataclass(frozen=True)
class Annotation(Element):
    author: Optional[ChoiceValue] = choice_field(Reference, "string")
    time: Optional[str] = fhir_field("dateTime")
    text: Optional[str] = fhir_field("markdown", required=True)


@datatype
@dataclass(frozen=True)
class Narrative(Element):
    status: Optional[str] = fhir_field("code", required=True, binding=NARRATIVE_STATUS)
    div: Optional[str] = fhir_field("xhtml", required=True)


@datatype
@dataclass(frozen=True)
class Meta(Element):
    version_id: Optional[str] = fhir_field("id")
    last_updated: Optional[str] = fhir_field("instant")
    source: Optional[str] = fhir_field("uri")
    profile: list[str] = fhir_field("canonical", many=True)
    security: list[Coding] = fhir_field(Coding, many=True)
    tag: list[Coding] = fhir_field(Coding, many=True)


@datatype
@dataclass(frozen=True)
class Signature(Element):
    type: list[Coding] = fhir_field(Coding, many=True, required=True)
    when: Optional[str] = fhir_field("instant", required=True)
    who: Optional[Reference] = fhir_field(Reference, required=True)
    on_behalf_of: Optional[Reference] = fhir_field(Reference)
    target_format: Optional[str] = fhir_field("code")
    sig_format: Optional[str] = fhir_field("code")
    data: Optional[str] = fhir_field("base64Binary")


# ── Timing & dosage ───────────────────────────────────────────────


@datatype
@dataclass(frozen=True)
class TimingRepeat(Element):
    bounds: Optional[ChoiceValue] = choice_field(Duration, Range, Period)
    count: Optional[int] = fhir_field("positiveInt")
    count_max: Optional[int] = fhir_field("positiveInt")
    duration: Optional[float] = fhir_field("decimal")
    duration_max: Optional[float] = fhir_field("decimal")
    duration_unit: Optional[str] = fhir_field("code", binding=UNITS_OF_TIME)
    frequency: Optional[int] = fhir_field("positiveInt")
    frequency_max: Optional[int] = fhir_field("positiveInt")
    period: Optional[float] = fhir_field("decimal")
    period_max: Optional[float] = fhir_field("decimal")
    period_unit: Optional[str] = fhir_field("code", binding=UNITS_OF_TIME)
    day_of_week: list[str] = fhir_field("code", many=True, binding=DAYS_OF_WEEK)
    time_of_day: list[str] = fhir_field("time", many=True)
    when: list[str] = fhir_field("code", many=True)
    offset: Optional[int] = fhir_field("unsignedInt")


@datatype
@dataclass(frozen=True)
class Timing(BackboneElement):
    event: list[str] = fhir_field("dateTime", many=True)
    repeat: Optional[TimingRepeat] = fhir_field(TimingRepeat)
    code: Optional[CodeableConcept] = fhir_field(CodeableConcept)


@datatype
@dataclass(frozen=True)
class DosageDoseAndRate(Element):
    type: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    dose: Optional[ChoiceValue] = choice_field(Range, SimpleQuantity)
    rate: Optional[ChoiceValue] = choice_field(Ratio, Range, SimpleQuantity)


@datatype
@dataclass(frozen=True)
class Dosage(BackboneElement):
    sequence: Optional[int] = fhir_field("integer")
    text: Optional[str] = fhir_field("string")
    additional_instruction: list[CodeableConcept] = fhir_field(CodeableConcept, many=True)
    patient_instruction: Optional[str] = fhir_field("string")
    timing: Optional[Timing] = fhir_field(Timing)
    as_needed: Optional[ChoiceValue] = choice_field("boolean", CodeableConcept)
    site: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    route: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    method: Optional[CodeableConcept] = fhir_field(CodeableConcept)
    dose_and_rate: list[DosageDoseAndRate] = fhir_field(DosageDoseAndRate, many=True)
    max_dose_per_period: Optional[Ratio] = fhir_field(Ratio)
    max_dose_per_administration: Optional[SimpleQuantity] = fhir_field(SimpleQuantity)
    max_dose_per_lifetime: Optional[SimpleQuantity] = fhir_field(SimpleQuantity)
