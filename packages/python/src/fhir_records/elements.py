"""
Element spine shared by every FHIR datatype and backbone structure.

All model classes are frozen dataclasses.  :class:`Base` carries the two
pieces of state that are not FHIR fields themselves: the extension bag
(``unknown_fields``) and the ``_name`` primitive-extension side channel
(``primitive_extensions``).  Both take part in equality so that a decode
→ encode → decode cycle compares equal only when nothing was lost.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional

from fhir_records.choice import ChoiceValue
from fhir_records.schema import choice_field, datatype, fhir_field


# Every type an Extension.value[x] may carry in R4 that this package models.
EXTENSION_VALUE_TYPES = (
    "base64Binary", "boolean", "canonical", "code", "date", "dateTime",
    "decimal", "id", "instant", "integer", "markdown", "oid", "positiveInt",
    "string", "time", "unsignedInt", "uri", "url", "uuid",
    "Address", "Age", "Annotation", "Attachment", "CodeableConcept",
    "Coding", "ContactPoint", "Count", "Distance", "Duration", "HumanName",
    "Identifier", "Money", "Period", "Quantity", "Range", "Ratio",
    "Reference", "Signature", "Timing", "ContactDetail", "Dosage", "Meta",
)


@dataclass(frozen=True)
class Base:
    """Non-wire state common to every model object."""

    unknown_fields: dict[str, Any] = field(
        default_factory=dict, repr=False, kw_only=True,
    )
    primitive_extensions: dict[str, Any] = field(
        default_factory=dict, repr=False, kw_only=True,
    )

    fhir_type: ClassVar[Optional[str]] = None

    def primitive_extension(self, json_name: str) -> Any:
        """The ``_json_name`` companion of a primitive field, if any.

        A :class:`PrimitiveExtension` for single-valued fields, a list
        aligned with the values (``None`` holes) for repeating ones.
        """
        return self.primitive_extensions.get(json_name)


@datatype
@dataclass(frozen=True)
class Element(Base):
    id: Optional[str] = fhir_field("string")
    extension: list["Extension"] = fhir_field("Extension", many=True)

    def extensions_with_url(self, url: str) -> list["Extension"]:
        return [e for e in self.extension if e.url == url]


@datatype
@dataclass(frozen=True)
class BackboneElement(Element):
    """Element that may also carry modifier extensions."""

    modifier_extension: list["Extension"] = fhir_field("Extension", many=True)

    def has_modifier_extensions(self) -> bool:
        return bool(self.modifier_extension)

    def modifier_extension_urls(self) -> list[str]:
        return [e.url for e in self.modifier_extension]


@datatype
@dataclass(frozen=True)
class Extension(Element):
    url: Optional[str] = fhir_field("uri", required=True)
    value: Optional[ChoiceValue] = choice_field(*EXTENSION_VALUE_TYPES)


@datatype
@dataclass(frozen=True)
class PrimitiveExtension(Element):
    """The ``{id, extension}`` object held by a ``_name`` key."""

    fhir_type: ClassVar[Optional[str]] = "Element"
